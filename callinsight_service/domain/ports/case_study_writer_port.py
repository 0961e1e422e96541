from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class CaseStudyWriterPort(ABC):
    extension: str = "txt"
    media_type: str = "text/plain"

    @abstractmethod
    def write(self, path: Path, *, title: str, body: str) -> Path:
        raise NotImplementedError
