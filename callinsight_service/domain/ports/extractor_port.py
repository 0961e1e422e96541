from __future__ import annotations

from abc import ABC, abstractmethod

from ..entities.artifact import RawFile


class TextExtractorPort(ABC):
    @abstractmethod
    async def extract_text(self, raw_file: RawFile) -> str:
        raise NotImplementedError
