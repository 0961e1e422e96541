from .analysis import Analysis, AnalysisPayload, KeyInsights, Metric, Participants, Sentiment
from .artifact import TERMINAL_STATUSES, Artifact, ArtifactStatus, ArtifactTimestamps, RawFile, Track
from .error_log import ErrorLog

__all__ = [
    "Analysis",
    "AnalysisPayload",
    "Artifact",
    "ArtifactStatus",
    "ArtifactTimestamps",
    "ErrorLog",
    "KeyInsights",
    "Metric",
    "Participants",
    "RawFile",
    "Sentiment",
    "TERMINAL_STATUSES",
    "Track",
]
