from __future__ import annotations


class PipelineError(Exception):
    """A stage failure that ends an artifact's pipeline in ``error``."""

    kind = "internal"


class UploadFailure(PipelineError):
    kind = "upload"


class ExtractionFailure(PipelineError):
    kind = "extraction"


class TranscriptionFailure(PipelineError):
    kind = "transcription"


class AnalysisFailure(PipelineError):
    kind = "analysis"


class AnalysisSchemaFailure(AnalysisFailure):
    kind = "analysis_schema"


class GenerationFailure(PipelineError):
    kind = "generation"


class ArtifactNotFound(LookupError):
    def __init__(self, artifact_id: str):
        super().__init__(f"artifact not found: {artifact_id}")
        self.artifact_id = artifact_id


class CaseStudyUnavailable(RuntimeError):
    def __init__(self, artifact_id: str, status: str):
        super().__init__(f"artifact {artifact_id} is {status}, case study needs an analyzed artifact")
        self.artifact_id = artifact_id
        self.status = status


class AuthenticationRequired(PermissionError):
    pass
