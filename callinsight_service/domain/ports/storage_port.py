from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..entities.artifact import RawFile


@dataclass
class StoredObject:
    public_url: str
    path: str


class StoragePort(ABC):
    @abstractmethod
    async def upload(self, raw_file: RawFile, destination_path: str, *, upsert: bool) -> StoredObject:
        raise NotImplementedError
