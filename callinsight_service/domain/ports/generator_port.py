from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class GeneratedText:
    text: str


class StructuredGeneratorPort(ABC):
    @abstractmethod
    async def generate_structured(self, prompt: str, schema: dict) -> dict:
        raise NotImplementedError


class TextGeneratorPort(ABC):
    @abstractmethod
    async def generate_text(self, prompt: str, *, max_output_tokens: int) -> GeneratedText:
        raise NotImplementedError
