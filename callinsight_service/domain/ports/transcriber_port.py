from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class TranscriptionResult:
    text: str
    language: str
    duration_sec: int = 0


class TranscriberPort(ABC):
    @abstractmethod
    async def transcribe(self, audio: bytes, *, language: str) -> TranscriptionResult:
        raise NotImplementedError
