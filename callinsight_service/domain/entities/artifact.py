from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .analysis import Analysis

Track = Literal["audio", "transcript"]

ArtifactStatus = Literal[
    "uploading",
    "transcribing",
    "extracting",
    "analyzing",
    "analyzed",
    "completed",
    "error",
]

TERMINAL_STATUSES = frozenset({"analyzed", "completed", "error"})


@dataclass
class RawFile:
    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[1].lower()


class ArtifactTimestamps(BaseModel):
    created_at: str
    updated_at: str
    finished_at: Optional[str] = None


class Artifact(BaseModel):
    id: str
    name: str
    size_bytes: int
    track: Track
    progress: int = Field(default=0, ge=0, le=100)
    status: ArtifactStatus = "uploading"
    storage_ref: Optional[str] = None
    analysis: Optional[Analysis] = None
    case_study_path: Optional[str] = None
    last_error_kind: Optional[str] = None
    errors: List[str] = Field(default_factory=list)
    timestamps: ArtifactTimestamps

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
