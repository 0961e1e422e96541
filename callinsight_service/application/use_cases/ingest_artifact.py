from __future__ import annotations

import traceback

from ...domain.entities.artifact import RawFile
from ...domain.entities.error_log import ErrorLog
from ...domain.errors import (
    AnalysisFailure,
    AnalysisSchemaFailure,
    ExtractionFailure,
    PipelineError,
    TranscriptionFailure,
    UploadFailure,
)
from ...domain.ports.error_monitor_port import ErrorMonitorPort
from ...domain.ports.extractor_port import TextExtractorPort
from ...domain.ports.generator_port import StructuredGeneratorPort
from ...domain.ports.storage_port import StoragePort
from ...domain.ports.transcriber_port import TranscriberPort
from ...jobs.logger import ArtifactLogs
from ...jobs.paths import StoragePathFactory
from ...jobs.registry import ArtifactRegistry
from ...processing.analysis_contract import ANALYSIS_SCHEMA, build_analysis_prompt, parse_analysis

PROGRESS_UPLOAD_STARTED = 20
PROGRESS_UPLOADED = 50
PROGRESS_EXTRACTING = 60
PROGRESS_ANALYZING = 80
PROGRESS_DONE = 100


class IngestArtifactUseCase:
    """Drives one artifact from upload to analysis.

    One call to :meth:`execute` per artifact; calls for different artifacts
    run side by side and only meet in the registry. Every stage writes its
    registry update before the next stage starts, and any failure ends the
    artifact in ``error`` without retrying or touching the stored blob.
    """

    def __init__(
        self,
        registry: ArtifactRegistry,
        storage: StoragePort,
        transcriber: TranscriberPort,
        extractor: TextExtractorPort,
        generator: StructuredGeneratorPort,
        monitor: ErrorMonitorPort,
        logs: ArtifactLogs,
        paths: StoragePathFactory,
        *,
        language: str = "en",
        analysis_enabled: bool = True,
    ):
        self.registry = registry
        self.storage = storage
        self.transcriber = transcriber
        self.extractor = extractor
        self.generator = generator
        self.monitor = monitor
        self.logs = logs
        self.paths = paths
        self.language = language
        self.analysis_enabled = analysis_enabled

    async def _upload(self, artifact_id: str, raw: RawFile) -> str:
        self.registry.update(artifact_id, status="uploading", progress=PROGRESS_UPLOAD_STARTED)
        destination = self.paths.destination(raw.name)
        try:
            stored = await self.storage.upload(raw, destination, upsert=True)
        except Exception as exc:
            raise UploadFailure(f"upload to {destination} failed: {exc}") from exc
        self.registry.update(artifact_id, storage_ref=stored.public_url, progress=PROGRESS_UPLOADED)
        return stored.public_url

    async def _recover_text(self, artifact_id: str, raw: RawFile, track: str) -> str:
        if track == "audio":
            self.registry.update(artifact_id, status="transcribing", progress=PROGRESS_EXTRACTING)
            try:
                result = await self.transcriber.transcribe(raw.data, language=self.language)
            except Exception as exc:
                raise TranscriptionFailure(f"transcription failed: {exc}") from exc
            if not (result.text or "").strip():
                raise TranscriptionFailure("transcription returned no text")
            return result.text

        self.registry.update(artifact_id, status="extracting", progress=PROGRESS_EXTRACTING)
        try:
            text = await self.extractor.extract_text(raw)
        except Exception as exc:
            raise ExtractionFailure(f"text extraction failed: {exc}") from exc
        if not (text or "").strip():
            raise ExtractionFailure("extraction returned no text")
        return text

    async def _analyze(self, artifact_id: str, text: str) -> None:
        self.registry.update(artifact_id, status="analyzing", progress=PROGRESS_ANALYZING)
        try:
            payload = await self.generator.generate_structured(build_analysis_prompt(text), ANALYSIS_SCHEMA)
        except AnalysisSchemaFailure:
            raise
        except Exception as exc:
            raise AnalysisFailure(f"analysis request failed: {exc}") from exc

        analysis = parse_analysis(payload, text)
        self.registry.update(artifact_id, analysis=analysis, status="analyzed", progress=PROGRESS_DONE)

    async def execute(self, artifact_id: str, raw: RawFile) -> None:
        logger = self.logs.for_artifact(artifact_id)
        record = self.registry.get(artifact_id)
        if record is None:
            logger.write("artifact removed before the pipeline started")
            return
        track = record.track

        try:
            logger.write(f"upload started: {raw.name} ({raw.size} bytes, {track})")
            storage_ref = await self._upload(artifact_id, raw)
            logger.write(f"upload completed: {storage_ref}")

            if not self.analysis_enabled:
                self.registry.update(artifact_id, status="completed", progress=PROGRESS_DONE)
            else:
                text = await self._recover_text(artifact_id, raw, track)
                logger.write(f"text recovered: {len(text)} chars")
                await self._analyze(artifact_id, text)

        except Exception as exc:
            kind = exc.kind if isinstance(exc, PipelineError) else "internal"
            self.registry.mark_failed(artifact_id, str(exc), kind=kind)
            logger.write(f"{kind} failure: {exc}")
            logger.write(traceback.format_exc())
            await self.monitor.log_error(
                ErrorLog(
                    kind=kind,
                    message=str(exc),
                    stack_trace=traceback.format_exc(),
                    context_data={"artifact_id": artifact_id, "name": raw.name, "track": track},
                )
            )
            return

        logger.write("analysis attached" if self.analysis_enabled else "analysis disabled, artifact completed")
