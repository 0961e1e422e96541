import asyncio
import copy

import pytest

from callinsight_service.domain.entities.analysis import Analysis
from callinsight_service.domain.entities.artifact import RawFile
from callinsight_service.domain.errors import ArtifactNotFound, CaseStudyUnavailable, GenerationFailure
from callinsight_service.processing.case_study_prompt import (
    build_case_study_prompt,
    case_study_filename,
    customer_slug,
)

from conftest import VALID_PAYLOAD, DummyGenerator, DummyTranscriber, FailingWriter, wait_until


async def _analyzed(h):
    await h.login()
    created = h.service.submit([RawFile(name="call.mp3", content_type="audio/mpeg", data=b"abc")], "audio")[0]
    await h.service.wait_idle()
    return created.id


@pytest.mark.parametrize(
    "customer, slug",
    [
        ("Acme  Corp", "acme-corp"),
        ("Big\tData\nInc", "big-data-inc"),
        ("ACME", "acme"),
        ("", "unknown"),
        ("   ", "unknown"),
        ("株式会社 ソニー", "株式会社-ソニー"),
        ("Café Ltd", "café-ltd"),
        ("../etc/passwd", "etcpasswd"),
        ("///", "unknown"),
    ],
)
def test_customer_slug(customer, slug):
    assert customer_slug(customer) == slug


def test_prompt_lists_insights():
    analysis = Analysis.model_validate({**VALID_PAYLOAD, "transcriptText": "t"})
    prompt = build_case_study_prompt(analysis)
    assert "CUSTOMER: Acme  Corp" in prompt
    assert "• Manual reporting took two days a week" in prompt
    assert "• Time saved: 40% (positive)" in prompt
    assert "1. Executive Summary" in prompt
    assert case_study_filename(analysis, "txt") == "case-study-acme-corp.txt"


@pytest.mark.asyncio
async def test_generates_downloadable_document(make_harness, tmp_path):
    h = make_harness()
    artifact_id = await _analyzed(h)

    doc = await h.service.generate_case_study(artifact_id)

    assert doc.filename == "case-study-acme-corp.txt"
    assert doc.path.read_text(encoding="utf-8") == "Executive Summary\nAcme saved time."
    assert doc.path.parent == tmp_path / "case_studies" / artifact_id
    assert h.generator.text_calls[0][1] == 1500
    assert h.registry.get(artifact_id).case_study_path == str(doc.path)


@pytest.mark.asyncio
async def test_regenerating_overwrites_and_calls_again(make_harness):
    h = make_harness()
    artifact_id = await _analyzed(h)

    first = await h.service.generate_case_study(artifact_id)
    h.generator.text = "Second draft"
    second = await h.service.generate_case_study(artifact_id)

    assert first.path == second.path
    assert second.path.read_text(encoding="utf-8") == "Second draft"
    assert len(h.generator.text_calls) == 2


@pytest.mark.asyncio
async def test_generation_failure_keeps_analyzed_status(make_harness):
    h = make_harness(generator=DummyGenerator(fail_text=True))
    artifact_id = await _analyzed(h)

    with pytest.raises(GenerationFailure):
        await h.service.generate_case_study(artifact_id)

    artifact = h.registry.get(artifact_id)
    assert artifact.status == "analyzed"
    assert artifact.analysis is not None
    assert artifact.case_study_path is None
    assert [e.kind for e in h.monitor.errors] == ["generation"]


@pytest.mark.asyncio
async def test_unknown_artifact(make_harness):
    h = make_harness()
    await h.login()
    with pytest.raises(ArtifactNotFound):
        await h.service.generate_case_study("missing")


@pytest.mark.asyncio
async def test_needs_an_analyzed_artifact(make_harness):
    release = asyncio.Event()
    h = make_harness(transcriber=DummyTranscriber(gate=release))
    await h.login()
    created = h.service.submit([RawFile(name="call.mp3", content_type="audio/mpeg", data=b"abc")], "audio")[0]
    await wait_until(lambda: h.registry.get(created.id).status == "transcribing")

    with pytest.raises(CaseStudyUnavailable) as exc_info:
        await h.service.generate_case_study(created.id)
    assert exc_info.value.status == "transcribing"
    assert h.generator.text_calls == []

    release.set()
    await h.service.wait_idle()


@pytest.mark.asyncio
async def test_reads_current_registry_state(make_harness):
    payload = copy.deepcopy(VALID_PAYLOAD)
    payload["participants"]["customer"] = "Globex"
    h = make_harness()
    artifact_id = await _analyzed(h)

    replacement = Analysis.model_validate({**payload, "transcriptText": "t"})
    h.registry.update(artifact_id, analysis=replacement)

    doc = await h.service.generate_case_study(artifact_id)
    assert doc.filename == "case-study-globex.txt"
    assert "CUSTOMER: Globex" in h.generator.text_calls[0][0]


@pytest.mark.asyncio
async def test_non_ascii_customer_keeps_its_name(make_harness, tmp_path):
    payload = copy.deepcopy(VALID_PAYLOAD)
    payload["participants"]["customer"] = "株式会社 ソニー"
    h = make_harness(generator=DummyGenerator(payload=payload))
    artifact_id = await _analyzed(h)

    doc = await h.service.generate_case_study(artifact_id)

    assert doc.filename == "case-study-株式会社-ソニー.txt"
    assert doc.path == tmp_path / "case_studies" / artifact_id / doc.filename
    assert doc.path.exists()


@pytest.mark.asyncio
async def test_write_failure_is_reported_and_keeps_analyzed_status(make_harness):
    h = make_harness(writer=FailingWriter())
    artifact_id = await _analyzed(h)

    with pytest.raises(GenerationFailure):
        await h.service.generate_case_study(artifact_id)

    artifact = h.registry.get(artifact_id)
    assert artifact.status == "analyzed"
    assert artifact.case_study_path is None
    assert [e.kind for e in h.monitor.errors] == ["generation"]
    assert "read-only file system" in h.monitor.errors[0].message
