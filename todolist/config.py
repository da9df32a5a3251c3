"""Settings loaded from environment variables (+ optional .env).

Nothing secret lives in code: the database URL, including any credentials,
comes only from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODOLIST"

DEFAULT_DATABASE_URL = "sqlite:///.local/todolist/tasks.sqlite3"
DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "http://localhost:8080"]


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    app_name: str = "Task Tracker API"
    log_level: str = "INFO"
    log_dir: Path | None = None

    database_url: str = DEFAULT_DATABASE_URL

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    metrics_enabled: bool = True

    # Where the client application finds the API.
    api_base_url: str = "http://localhost:8000"

    @staticmethod
    def from_env(*, dotenv: bool = True) -> Settings:
        if dotenv:
            load_dotenv(override=False)

        return Settings(
            app_name=_env(_k("APP_NAME"), "Task Tracker API"),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            log_dir=_env_path(_k("LOG_DIR")),
            database_url=_first_env(_k("DATABASE_URL"), "DATABASE_URL", default=DEFAULT_DATABASE_URL)
            or DEFAULT_DATABASE_URL,
            host=_env(_k("HOST"), "0.0.0.0"),
            port=_env_int(_k("PORT"), 8000),
            cors_origins=_env_list(_k("CORS_ORIGINS"), DEFAULT_CORS_ORIGINS),
            metrics_enabled=_env_bool(_k("METRICS_ENABLED"), True),
            api_base_url=_env(_k("API_BASE_URL"), "http://localhost:8000").rstrip("/"),
        )
