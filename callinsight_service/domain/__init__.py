from .entities import Analysis, Artifact, ErrorLog, RawFile
from .errors import (
    AnalysisFailure,
    AnalysisSchemaFailure,
    ArtifactNotFound,
    AuthenticationRequired,
    CaseStudyUnavailable,
    ExtractionFailure,
    GenerationFailure,
    PipelineError,
    TranscriptionFailure,
    UploadFailure,
)
from .ports import (
    AuthPort,
    CaseStudyWriterPort,
    ErrorMonitorPort,
    StoragePort,
    StructuredGeneratorPort,
    TextExtractorPort,
    TextGeneratorPort,
    TranscriberPort,
)

__all__ = [
    "Analysis",
    "AnalysisFailure",
    "AnalysisSchemaFailure",
    "Artifact",
    "ArtifactNotFound",
    "AuthPort",
    "AuthenticationRequired",
    "CaseStudyUnavailable",
    "CaseStudyWriterPort",
    "ErrorLog",
    "ErrorMonitorPort",
    "ExtractionFailure",
    "GenerationFailure",
    "PipelineError",
    "RawFile",
    "StoragePort",
    "StructuredGeneratorPort",
    "TextExtractorPort",
    "TextGeneratorPort",
    "TranscriberPort",
    "TranscriptionFailure",
    "UploadFailure",
]
