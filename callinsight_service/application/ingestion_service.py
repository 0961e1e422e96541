from __future__ import annotations

import asyncio
from typing import Iterable
from uuid import uuid4

from ..domain.entities.artifact import Artifact, ArtifactTimestamps, RawFile, Track
from ..jobs.registry import ArtifactRegistry
from ..jobs.utils import now_iso
from ..processing.classifier import classify
from .auth_gate import AuthGate
from .use_cases.generate_case_study import CaseStudyDocument, GenerateCaseStudyUseCase
from .use_cases.ingest_artifact import IngestArtifactUseCase


class IngestionService:
    def __init__(
        self,
        registry: ArtifactRegistry,
        gate: AuthGate,
        ingest: IngestArtifactUseCase,
        case_study: GenerateCaseStudyUseCase,
    ):
        self.registry = registry
        self.gate = gate
        self.ingest = ingest
        self.case_study = case_study
        self._tasks: set[asyncio.Task] = set()

    def submit(self, files: Iterable[RawFile], track: Track) -> list[Artifact]:
        """Classify, register and start one pipeline per accepted file.

        Must be called from a running event loop. Returns the new records in
        their initial ``uploading`` state.
        """
        self.gate.require_user()
        accepted = classify(files, track)

        ts = now_iso()
        records = [
            Artifact(
                id=uuid4().hex,
                name=raw.name,
                size_bytes=raw.size,
                track=track,
                progress=0,
                status="uploading",
                timestamps=ArtifactTimestamps(created_at=ts, updated_at=ts),
            )
            for raw in accepted
        ]
        self.registry.append(records)

        for record, raw in zip(records, accepted):
            task = asyncio.create_task(self.ingest.execute(record.id, raw), name=f"ingest-{record.id}")
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        return records

    def remove(self, artifact_id: str) -> bool:
        # A running pipeline is left alone; its later updates are dropped.
        self.gate.require_user()
        return self.registry.remove(artifact_id)

    def snapshot(self) -> list[Artifact]:
        self.gate.require_user()
        return self.registry.snapshot()

    def get(self, artifact_id: str) -> Artifact | None:
        self.gate.require_user()
        return self.registry.get(artifact_id)

    async def generate_case_study(self, artifact_id: str) -> CaseStudyDocument:
        self.gate.require_user()
        return await self.case_study.execute(artifact_id)

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def wait_idle(self) -> None:
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)
