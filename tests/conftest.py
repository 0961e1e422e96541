import asyncio
import copy
from pathlib import Path

import pytest

from callinsight_service.application.auth_gate import AuthGate
from callinsight_service.application.ingestion_service import IngestionService
from callinsight_service.application.use_cases.generate_case_study import GenerateCaseStudyUseCase
from callinsight_service.application.use_cases.ingest_artifact import IngestArtifactUseCase
from callinsight_service.domain.ports.auth_port import Identity
from callinsight_service.domain.ports.generator_port import GeneratedText
from callinsight_service.domain.ports.storage_port import StoredObject
from callinsight_service.domain.ports.transcriber_port import TranscriptionResult
from callinsight_service.infrastructure.auth.token_auth_adapter import StaticTokenAuthAdapter
from callinsight_service.infrastructure.text.plain_text_writer import PlainTextCaseStudyWriter
from callinsight_service.jobs.logger import ArtifactLogs
from callinsight_service.jobs.paths import StoragePathFactory
from callinsight_service.jobs.registry import ArtifactRegistry

VALID_PAYLOAD = {
    "sentiment": {"overall": "positive", "score": 0.85, "confidence": 0.92},
    "keyInsights": {
        "painPoints": ["Manual reporting took two days a week"],
        "solutions": ["Automated dashboard rollout"],
        "outcomes": ["Reporting now takes an hour"],
        "metrics": [{"metric": "Time saved", "value": "40%", "improvement": "positive"}],
    },
    "participants": {"customer": "Acme  Corp", "representative": "Dana"},
    "summary": "Acme adopted the dashboards and cut reporting time.",
    "caseStudyPotential": "high",
}


class DummyStorage:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads = []

    async def upload(self, raw_file, destination_path, *, upsert):
        self.uploads.append((raw_file.name, destination_path, upsert))
        if self.fail:
            raise OSError("bucket unavailable")
        return StoredObject(public_url=f"memory://{destination_path}", path=destination_path)


class DummyTranscriber:
    def __init__(self, text="Hi, this is Dana from support.", fail=False, gate=None):
        self.text = text
        self.fail = fail
        self.gate = gate
        self.calls = []

    async def transcribe(self, audio, *, language):
        self.calls.append((len(audio), language))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise RuntimeError("decoder crashed")
        return TranscriptionResult(text=self.text, language=language, duration_sec=12)


class DummyExtractor:
    def __init__(self, text="Customer: our reports take forever.", fail=False):
        self.text = text
        self.fail = fail
        self.calls = []

    async def extract_text(self, raw_file):
        self.calls.append(raw_file.name)
        if self.fail:
            raise ValueError("unreadable document")
        return self.text


class DummyGenerator:
    def __init__(self, payload=None, text="Executive Summary\nAcme saved time.", fail_structured=False, fail_text=False):
        self.payload = copy.deepcopy(VALID_PAYLOAD) if payload is None else payload
        self.text = text
        self.fail_structured = fail_structured
        self.fail_text = fail_text
        self.structured_calls = []
        self.text_calls = []

    async def generate_structured(self, prompt, schema):
        self.structured_calls.append((prompt, schema))
        if self.fail_structured:
            raise RuntimeError("model overloaded")
        return copy.deepcopy(self.payload)

    async def generate_text(self, prompt, *, max_output_tokens):
        self.text_calls.append((prompt, max_output_tokens))
        if self.fail_text:
            raise RuntimeError("quota exceeded")
        return GeneratedText(text=self.text)


class DummyMonitor:
    def __init__(self):
        self.errors = []

    async def log_error(self, error):
        self.errors.append(error)


class FlakyLogs:
    """Artifact logger whose writes fail, always or on a matching message."""

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.lines = []

    def for_artifact(self, artifact_id):
        return self

    def write(self, msg):
        if self.fail_on is None or self.fail_on in msg:
            raise OSError("disk full")
        self.lines.append(msg)


class FailingWriter:
    extension = "txt"
    media_type = "text/plain"

    def write(self, path, *, title, body):
        raise OSError("read-only file system")


class RecordingRegistry(ArtifactRegistry):
    """Keeps every accepted update so tests can inspect the sequence."""

    def __init__(self):
        super().__init__()
        self.history = []

    def update(self, artifact_id, **updates):
        record = super().update(artifact_id, **updates)
        if record is not None:
            self.history.append((artifact_id, record.status, record.progress))
        return record


class Harness:
    def __init__(self, tmp_path: Path, **overrides):
        self.registry = overrides.pop("registry", None) or RecordingRegistry()
        self.storage = overrides.pop("storage", None) or DummyStorage()
        self.transcriber = overrides.pop("transcriber", None) or DummyTranscriber()
        self.extractor = overrides.pop("extractor", None) or DummyExtractor()
        self.generator = overrides.pop("generator", None) or DummyGenerator()
        self.monitor = DummyMonitor()
        self.auth = StaticTokenAuthAdapter({"secret": Identity(user_id="dana")})
        self.gate = AuthGate(self.auth)
        self.ingest = IngestArtifactUseCase(
            self.registry,
            self.storage,
            self.transcriber,
            self.extractor,
            self.generator,
            self.monitor,
            overrides.pop("logs", None) or ArtifactLogs(tmp_path / "logs"),
            StoragePathFactory("call-analysis"),
            language="en",
            analysis_enabled=overrides.pop("analysis_enabled", True),
        )
        self.case_study = GenerateCaseStudyUseCase(
            self.registry,
            self.generator,
            overrides.pop("writer", None) or PlainTextCaseStudyWriter(),
            self.monitor,
            tmp_path / "case_studies",
            max_output_tokens=1500,
        )
        self.service = IngestionService(self.registry, self.gate, self.ingest, self.case_study)

    async def login(self):
        await self.auth.login("secret")


async def wait_until(predicate, timeout: float = 2.0) -> None:
    async def _poll():
        while not predicate():
            await asyncio.sleep(0)

    await asyncio.wait_for(_poll(), timeout)


@pytest.fixture
def make_harness(tmp_path):
    def _make(**overrides):
        return Harness(tmp_path, **overrides)

    return _make
