from .generate_case_study import CaseStudyDocument, GenerateCaseStudyUseCase
from .ingest_artifact import IngestArtifactUseCase

__all__ = [
    "CaseStudyDocument",
    "GenerateCaseStudyUseCase",
    "IngestArtifactUseCase",
]
