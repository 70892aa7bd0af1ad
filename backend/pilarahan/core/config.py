# backend/pilarahan/core/config.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _resolve_env_files() -> List[str]:
    """
    Make .env loading deterministic regardless of where uvicorn is launched from.

    Priority:
      1) Repo root .env
      2) backend/.env
      3) CWD .env
    """
    here = Path(__file__).resolve()
    repo_root = here.parents[3]  # backend/pilarahan/core/config.py -> repo root
    backend_dir = repo_root / "backend"
    candidates = [
        repo_root / ".env",
        backend_dir / ".env",
        Path.cwd() / ".env",
    ]
    return [str(p) for p in candidates if p.exists()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_resolve_env_files() or ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    PROJECT_NAME: str = Field(default="PilaRahan")
    APP_VERSION: str = Field(default="1.0.0")
    BUILD_COMMIT: str = Field(default="unknown")
    BUILD_DATE: str = Field(default="unknown")
    API_PREFIX: str = Field(default="/api")

    # CORS (frontend typically on Vite:5173). Override in .env as JSON.
    BACKEND_CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"]
    )

    # Upload limits
    MAX_FILE_SIZE_MB: int = Field(default=10, ge=1)
    MAX_FILES_PER_BATCH: int = Field(default=10, ge=1)
    MAX_IMAGE_MEGAPIXELS: float = Field(default=40.0, ge=1.0)

    # Generative AI collaborator. No key -> offline fallbacks only.
    GEMINI_API_KEY: Optional[str] = Field(default=None)
    GEMINI_MODEL: str = Field(default="gemini-1.5-flash")
    GEMINI_BASE_URL: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    GEMINI_TIMEOUT_S: float = Field(default=20.0, gt=0)

    # Classification
    ENABLE_AI_CLASSIFIER: bool = Field(default=True)
    MODEL_CONFIDENCE_THRESHOLD: float = Field(default=0.75, ge=0.0, le=1.0)

    # Recycling-center search origin when the client sends no coordinates
    DEFAULT_LATITUDE: float = Field(default=37.7749)
    DEFAULT_LONGITUDE: float = Field(default=-122.4194)

    # JSONL event log
    TELEMETRY_ENABLED: bool = Field(default=True)
    LOG_JSONL_PATH: str = Field(default="logs/events.jsonl")


settings = Settings()
