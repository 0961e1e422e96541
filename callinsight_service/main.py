from __future__ import annotations

from pathlib import Path
from typing import List, Literal

import uvicorn
from fastapi import Depends, FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import FileResponse
from pydantic import BaseModel

from .settings import settings
from .application.auth_gate import AuthGate
from .application.ingestion_service import IngestionService
from .application.use_cases.generate_case_study import GenerateCaseStudyUseCase
from .application.use_cases.ingest_artifact import IngestArtifactUseCase
from .domain.entities.artifact import RawFile
from .domain.errors import ArtifactNotFound, AuthenticationRequired, CaseStudyUnavailable, GenerationFailure
from .infrastructure.auth.token_auth_adapter import StaticTokenAuthAdapter, parse_tokens
from .infrastructure.extractor.document_extractor_adapter import DocumentTextExtractorAdapter
from .infrastructure.generation.gemini_adapter import GeminiGenerationAdapter
from .infrastructure.monitoring.json_monitor_adapter import JsonErrorMonitorAdapter
from .infrastructure.pdf.reportlab_adapter import ReportLabCaseStudyWriter
from .infrastructure.storage.local_storage_adapter import LocalStorageAdapter
from .infrastructure.text.plain_text_writer import PlainTextCaseStudyWriter
from .infrastructure.transcriber.faster_whisper_adapter import FasterWhisperTranscriberAdapter
from .jobs.logger import ArtifactLogs
from .jobs.paths import StoragePathFactory
from .jobs.registry import ArtifactRegistry
from .jobs.utils import case_study_root, logs_root, storage_root
from .processing.classifier import accept_types

app = FastAPI(title="CallInsight Ingestion Service")


def build_service() -> IngestionService:
    registry = ArtifactRegistry()
    monitor = JsonErrorMonitorAdapter(str(logs_root() / "errors.json"))
    generator = GeminiGenerationAdapter(api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL)
    writer = ReportLabCaseStudyWriter() if settings.CASE_STUDY_FORMAT == "pdf" else PlainTextCaseStudyWriter()

    ingest = IngestArtifactUseCase(
        registry,
        LocalStorageAdapter(storage_root(), public_base_url=settings.STORAGE_PUBLIC_BASE_URL),
        FasterWhisperTranscriberAdapter(
            model_size=settings.TRANSCRIPTION_FW_MODEL,
            device=settings.TRANSCRIPTION_FW_DEVICE,
            compute_type=settings.TRANSCRIPTION_FW_COMPUTE,
            beam_size=settings.TRANSCRIPTION_FW_BEAM_SIZE,
            vad_filter=settings.TRANSCRIPTION_FW_VAD_FILTER,
        ),
        DocumentTextExtractorAdapter(),
        generator,
        monitor,
        ArtifactLogs(logs_root()),
        StoragePathFactory(settings.STORAGE_PREFIX),
        language=settings.TRANSCRIPTION_LANG,
        analysis_enabled=settings.ANALYSIS_ENABLED,
    )
    case_study = GenerateCaseStudyUseCase(
        registry,
        generator,
        writer,
        monitor,
        case_study_root(),
        max_output_tokens=settings.CASE_STUDY_MAX_OUTPUT_TOKENS,
    )
    gate = AuthGate(StaticTokenAuthAdapter(parse_tokens(settings.AUTH_TOKENS)))
    return IngestionService(registry, gate, ingest, case_study)


service = build_service()


def get_service() -> IngestionService:
    return service


class LoginRequest(BaseModel):
    token: str


class AuthStateResponse(BaseModel):
    user_id: str | None = None
    is_loading: bool = False


class CaseStudyResponse(BaseModel):
    artifact_id: str
    filename: str
    media_type: str
    download_url: str
    text: str


def _auth_state(svc: IngestionService) -> AuthStateResponse:
    state = svc.gate.state
    return AuthStateResponse(user_id=state.user.user_id if state.user else None, is_loading=state.is_loading)


def _require_user(svc: IngestionService) -> None:
    try:
        svc.gate.require_user()
    except AuthenticationRequired as e:
        raise HTTPException(status_code=401, detail=str(e))


def _dump(artifact) -> dict:
    return artifact.model_dump(mode="json")


@app.post("/v1/auth/login", response_model=AuthStateResponse)
async def login(req: LoginRequest, svc: IngestionService = Depends(get_service)):
    await svc.gate.auth.login(req.token)
    if svc.gate.state.user is None:
        raise HTTPException(status_code=401, detail="invalid token")
    return _auth_state(svc)


@app.post("/v1/auth/logout", response_model=AuthStateResponse)
async def logout(svc: IngestionService = Depends(get_service)):
    await svc.gate.auth.logout()
    return _auth_state(svc)


@app.get("/v1/auth/state", response_model=AuthStateResponse)
async def auth_state(svc: IngestionService = Depends(get_service)):
    return _auth_state(svc)


@app.get("/v1/tracks/{track}/accept")
async def track_accept(track: Literal["audio", "transcript"]):
    return {"track": track, "accept": accept_types(track)}


@app.post("/v1/artifacts", status_code=202)
async def submit_artifacts(
    track: Literal["audio", "transcript"] = Query(...),
    files: List[UploadFile] = File(...),
    svc: IngestionService = Depends(get_service),
):
    _require_user(svc)
    raw_files = [
        RawFile(
            name=f.filename or "upload",
            content_type=f.content_type or "",
            data=await f.read(),
        )
        for f in files
    ]
    created = svc.submit(raw_files, track)
    return {"track": track, "artifacts": [_dump(a) for a in created]}


@app.get("/v1/artifacts")
async def list_artifacts(svc: IngestionService = Depends(get_service)):
    _require_user(svc)
    return {"artifacts": [_dump(a) for a in svc.snapshot()]}


@app.get("/v1/artifacts/{artifact_id}")
async def get_artifact(artifact_id: str, svc: IngestionService = Depends(get_service)):
    _require_user(svc)
    artifact = svc.get(artifact_id)
    if artifact is None:
        raise HTTPException(status_code=404, detail="artifact not found")
    return _dump(artifact)


@app.delete("/v1/artifacts/{artifact_id}")
async def remove_artifact(artifact_id: str, svc: IngestionService = Depends(get_service)):
    _require_user(svc)
    removed = svc.remove(artifact_id)
    return {"artifact_id": artifact_id, "removed": removed}


@app.post("/v1/artifacts/{artifact_id}/case-study", response_model=CaseStudyResponse)
async def create_case_study(artifact_id: str, svc: IngestionService = Depends(get_service)):
    _require_user(svc)
    try:
        doc = await svc.generate_case_study(artifact_id)
    except ArtifactNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CaseStudyUnavailable as e:
        raise HTTPException(status_code=409, detail={"status": e.status})
    except GenerationFailure as e:
        raise HTTPException(status_code=502, detail=str(e))
    return CaseStudyResponse(
        artifact_id=artifact_id,
        filename=doc.filename,
        media_type=doc.media_type,
        download_url=f"/v1/artifacts/{artifact_id}/case-study/download",
        text=doc.text,
    )


@app.get("/v1/artifacts/{artifact_id}/case-study/download")
async def download_case_study(artifact_id: str, svc: IngestionService = Depends(get_service)):
    _require_user(svc)
    artifact = svc.get(artifact_id)
    if artifact is None:
        raise HTTPException(status_code=404, detail="artifact not found")
    if not artifact.case_study_path:
        raise HTTPException(status_code=404, detail="case study not generated")

    path = Path(artifact.case_study_path)
    if not path.exists():
        raise HTTPException(status_code=404, detail="case study file not found")
    media_type = "application/pdf" if path.suffix == ".pdf" else "text/plain"
    return FileResponse(path, media_type=media_type, filename=path.name)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
