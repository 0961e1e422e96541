from .auth_port import AuthListener, AuthPort, AuthState, Identity
from .case_study_writer_port import CaseStudyWriterPort
from .error_monitor_port import ErrorMonitorPort
from .extractor_port import TextExtractorPort
from .generator_port import GeneratedText, StructuredGeneratorPort, TextGeneratorPort
from .storage_port import StoragePort, StoredObject
from .transcriber_port import TranscriberPort, TranscriptionResult

__all__ = [
    "AuthListener",
    "AuthPort",
    "AuthState",
    "CaseStudyWriterPort",
    "ErrorMonitorPort",
    "GeneratedText",
    "Identity",
    "StoragePort",
    "StoredObject",
    "StructuredGeneratorPort",
    "TextExtractorPort",
    "TextGeneratorPort",
    "TranscriberPort",
    "TranscriptionResult",
]
