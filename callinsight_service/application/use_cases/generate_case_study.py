from __future__ import annotations

import asyncio
import traceback
from dataclasses import dataclass
from pathlib import Path

from ...domain.entities.error_log import ErrorLog
from ...domain.errors import ArtifactNotFound, CaseStudyUnavailable, GenerationFailure
from ...domain.ports.case_study_writer_port import CaseStudyWriterPort
from ...domain.ports.error_monitor_port import ErrorMonitorPort
from ...domain.ports.generator_port import TextGeneratorPort
from ...jobs.paths import CaseStudyPaths
from ...jobs.registry import ArtifactRegistry
from ...processing.case_study_prompt import build_case_study_prompt, case_study_filename


@dataclass
class CaseStudyDocument:
    artifact_id: str
    filename: str
    path: Path
    media_type: str
    text: str


class GenerateCaseStudyUseCase:
    def __init__(
        self,
        registry: ArtifactRegistry,
        generator: TextGeneratorPort,
        writer: CaseStudyWriterPort,
        monitor: ErrorMonitorPort,
        output_root: Path,
        *,
        max_output_tokens: int = 1500,
    ):
        self.registry = registry
        self.generator = generator
        self.writer = writer
        self.monitor = monitor
        self.output_root = Path(output_root)
        self.max_output_tokens = max_output_tokens

    async def _report(self, artifact_id: str, exc: Exception) -> None:
        await self.monitor.log_error(
            ErrorLog(
                kind=GenerationFailure.kind,
                message=str(exc),
                stack_trace=traceback.format_exc(),
                context_data={"artifact_id": artifact_id},
            )
        )

    async def execute(self, artifact_id: str) -> CaseStudyDocument:
        # Read the registry now rather than trusting an analysis held by the caller.
        artifact = self.registry.get(artifact_id)
        if artifact is None:
            raise ArtifactNotFound(artifact_id)
        if artifact.status != "analyzed" or artifact.analysis is None:
            raise CaseStudyUnavailable(artifact_id, artifact.status)

        analysis = artifact.analysis
        try:
            generated = await self.generator.generate_text(
                build_case_study_prompt(analysis),
                max_output_tokens=self.max_output_tokens,
            )
        except Exception as exc:
            await self._report(artifact_id, exc)
            raise GenerationFailure(f"case study generation failed: {exc}") from exc

        filename = case_study_filename(analysis, self.writer.extension)
        target = CaseStudyPaths(self.output_root, artifact_id).document(filename)
        title = f"Case Study: {analysis.participants.customer or artifact.name}"
        try:
            path = await asyncio.to_thread(self.writer.write, target, title=title, body=generated.text)
        except Exception as exc:
            await self._report(artifact_id, exc)
            raise GenerationFailure(f"case study could not be written: {exc}") from exc

        self.registry.update(artifact_id, case_study_path=str(path))
        return CaseStudyDocument(
            artifact_id=artifact_id,
            filename=filename,
            path=path,
            media_type=self.writer.media_type,
            text=generated.text,
        )
