from __future__ import annotations

import threading
from typing import Iterable, Optional

from ..domain.entities.artifact import TERMINAL_STATUSES, Artifact
from .utils import now_iso

_IMMUTABLE_FIELDS = frozenset({"id", "name", "size_bytes", "track", "timestamps"})


class ArtifactRegistry:
    """In-memory, ordered owner of every Artifact record.

    Callers only ever receive copies. Each method holds the registry lock for
    its whole read-merge-write, so concurrent updates never tear a record.
    """

    def __init__(self) -> None:
        self._records: dict[str, Artifact] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, artifact_id: object) -> bool:
        with self._lock:
            return artifact_id in self._records

    def append(self, records: Iterable[Artifact]) -> None:
        records = list(records)
        with self._lock:
            seen = set(self._records)
            for record in records:
                if record.id in seen:
                    raise ValueError(f"duplicate artifact id: {record.id}")
                seen.add(record.id)
            for record in records:
                self._records[record.id] = record.model_copy(deep=True)

    def get(self, artifact_id: str) -> Optional[Artifact]:
        with self._lock:
            record = self._records.get(artifact_id)
            return record.model_copy(deep=True) if record else None

    def snapshot(self) -> list[Artifact]:
        with self._lock:
            return [record.model_copy(deep=True) for record in self._records.values()]

    def _merge(self, current: Artifact, updates: dict) -> Artifact:
        data = current.model_dump()
        for key, value in updates.items():
            if key in data and key not in _IMMUTABLE_FIELDS:
                data[key] = value

        if "progress" in updates and not current.is_terminal:
            data["progress"] = max(int(current.progress), int(data["progress"]))

        data["timestamps"]["updated_at"] = now_iso()
        if data["status"] in TERMINAL_STATUSES and not data["timestamps"].get("finished_at"):
            data["timestamps"]["finished_at"] = now_iso()

        return Artifact.model_validate(data)

    def update(self, artifact_id: str, **updates) -> Optional[Artifact]:
        with self._lock:
            current = self._records.get(artifact_id)
            if current is None:
                # Removed while its pipeline was still running.
                return None
            record = self._merge(current, updates)
            self._records[artifact_id] = record
            return record.model_copy(deep=True)

    def mark_failed(self, artifact_id: str, message: str, *, kind: str) -> Optional[Artifact]:
        with self._lock:
            current = self._records.get(artifact_id)
            if current is None:
                return None
            if current.status in TERMINAL_STATUSES:
                # A finished artifact keeps its outcome.
                return current.model_copy(deep=True)
            record = self._merge(
                current,
                {"status": "error", "last_error_kind": kind, "errors": [*current.errors, message]},
            )
            self._records[artifact_id] = record
            return record.model_copy(deep=True)

    def remove(self, artifact_id: str) -> bool:
        with self._lock:
            return self._records.pop(artifact_id, None) is not None
