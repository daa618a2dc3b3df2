# src/site_schedule/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time (the API URL has a local default).
- Bad values fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "SITE_SCHEDULE"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_optional(name: str) -> str | None:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


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


def _env_float(name: str, default: float) -> float:
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
    data_dir: Path

    # ---- Console ----
    console_enabled: bool

    # ---- Persistence API ----
    api_base_url: str
    api_timeout_seconds: float
    project_id: str | None

    # ---- Refresh ----
    refresh_interval_seconds: float

    # ---- Gantt ----
    gantt_day_width: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "site-schedule") or "site-schedule"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/site_schedule"))

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        api_base_url = _env(_k("API_BASE_URL"), "http://localhost:5000/api").rstrip("/")
        api_timeout_seconds = max(1.0, _env_float(_k("API_TIMEOUT_SECONDS"), 10.0))
        project_id = _env_optional(_k("PROJECT_ID"))

        refresh_interval_seconds = max(0.5, _env_float(_k("REFRESH_INTERVAL_SECONDS"), 30.0))

        # A zero/negative width would collapse every bar to a point.
        gantt_day_width = _env_int(_k("GANTT_DAY_WIDTH"), 50)
        if gantt_day_width <= 0:
            gantt_day_width = 50

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            console_enabled=console_enabled,
            api_base_url=api_base_url,
            api_timeout_seconds=api_timeout_seconds,
            project_id=project_id,
            refresh_interval_seconds=refresh_interval_seconds,
            gantt_day_width=gantt_day_width,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
