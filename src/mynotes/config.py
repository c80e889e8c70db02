# src/mynotes/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every value has a default.
- Components receive settings by injection so tests can pass their own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "MYNOTES"

# Real environment always wins over a local .env file.
load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


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

    # ---- Local data paths ----
    data_dir: Path
    db_path: Path
    log_dir: Path

    # ---- UI ----
    todo_due_minutes: int
    editor_fallback: str

    # ---- Alert daemon ----
    alert_interval_seconds: float
    alert_title: str
    alert_urgency: str

    @property
    def todo_due_seconds(self) -> float:
        return float(max(0, self.todo_due_minutes) * 60)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "mynotes") or "mynotes"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path.home() / ".local" / "share" / "mynotes")
        db_path = _env_path(_k("DB_PATH"), data_dir / "data.db")
        log_dir = _env_path(_k("LOG_DIR"), data_dir)

        todo_due_minutes = _env_int(_k("TODO_DUE_MINUTES"), 60)
        editor_fallback = _env(_k("EDITOR_FALLBACK"), "vim").strip() or "vim"

        alert_interval_seconds = _env_float(_k("ALERT_INTERVAL_SECONDS"), 60.0)
        alert_title = _env(_k("ALERT_TITLE"), "Task Due!")
        alert_urgency = _env(_k("ALERT_URGENCY"), "critical").strip().lower() or "critical"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            log_dir=log_dir,
            todo_due_minutes=todo_due_minutes,
            editor_fallback=editor_fallback,
            alert_interval_seconds=alert_interval_seconds,
            alert_title=alert_title,
            alert_urgency=alert_urgency,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
