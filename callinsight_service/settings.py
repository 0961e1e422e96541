from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_ENV_PATH, env_file_encoding="utf-8", extra="ignore")

    STORAGE_ROOT: str = "./_data/storage"
    STORAGE_PUBLIC_BASE_URL: str = "http://localhost:8000/storage"
    STORAGE_PREFIX: str = "call-analysis"

    LOGS_DIR: str = "./logs"

    CASE_STUDY_ROOT: str = "./_data/case_studies"
    CASE_STUDY_FORMAT: Literal["txt", "pdf"] = "txt"
    CASE_STUDY_MAX_OUTPUT_TOKENS: int = 1500

    ANALYSIS_ENABLED: bool = True

    TRANSCRIPTION_LANG: str = "en"
    TRANSCRIPTION_FW_MODEL: str = "base"
    TRANSCRIPTION_FW_DEVICE: str = "cpu"
    TRANSCRIPTION_FW_COMPUTE: str = "int8"
    TRANSCRIPTION_FW_BEAM_SIZE: int = 2
    TRANSCRIPTION_FW_VAD_FILTER: bool = True

    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-2.0-flash"

    # Comma separated "token:user_id" pairs.
    AUTH_TOKENS: str = ""


settings = Settings()
