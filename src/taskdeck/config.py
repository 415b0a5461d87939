# src/taskdeck/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (credentials are typed at /login).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKDECK"

DEFAULT_API_BASE_URL = "https://ccbtodoapp-production.up.railway.app"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Remote service ----
    api_base_url: str
    request_timeout_seconds: float | None

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    session_path: Path
    persist_session: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskdeck").strip() or "taskdeck"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_base_url = _env(_k("API_BASE_URL"), DEFAULT_API_BASE_URL).strip() or DEFAULT_API_BASE_URL

        # None keeps httpx's own default timeout.
        request_timeout_seconds = _env_float(_k("REQUEST_TIMEOUT_SECONDS"), None)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskdeck"))
        session_path = _env_path(_k("SESSION_PATH"), data_dir / "session.json")
        persist_session = _env_bool(_k("PERSIST_SESSION"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_base_url=api_base_url,
            request_timeout_seconds=request_timeout_seconds,
            data_dir=data_dir,
            session_path=session_path,
            persist_session=persist_session,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
