from __future__ import annotations

from pathlib import Path, PurePosixPath

import aiofiles

from ...domain.entities.artifact import RawFile
from ...domain.ports.storage_port import StoragePort, StoredObject


class LocalStorageAdapter(StoragePort):
    """Blob store on the local filesystem, addressed by a relative POSIX path."""

    def __init__(self, root: Path, *, public_base_url: str):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def _target(self, destination_path: str) -> Path:
        rel = PurePosixPath(destination_path)
        if rel.is_absolute() or ".." in rel.parts:
            raise ValueError(f"invalid destination path: {destination_path}")
        return self.root.joinpath(*rel.parts)

    async def upload(self, raw_file: RawFile, destination_path: str, *, upsert: bool) -> StoredObject:
        target = self._target(destination_path)
        if target.exists() and not upsert:
            raise FileExistsError(f"object already exists: {destination_path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(target, "wb") as f:
            await f.write(raw_file.data)
        return StoredObject(public_url=f"{self.public_base_url}/{destination_path}", path=str(target))
