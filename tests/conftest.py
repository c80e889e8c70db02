# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from mynotes.core.state import AppState
from mynotes.storage.store import NotesStore
from mynotes.ui.state import SessionController

from .fakes import FakeClock

NOW = 1_700_000_000.0


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="mynotes",
        log_level="INFO",
        # Paths (tmp per test run)
        data_dir=tmp_path / "data",
        db_path=tmp_path / "data" / "data.db",
        log_dir=tmp_path / "logs",
        # UI
        todo_due_minutes=60,
        todo_due_seconds=3600.0,
        editor_fallback="vim",
        # Daemon
        alert_interval_seconds=0.01,
        alert_title="Task Due!",
        alert_urgency="critical",
    )


@pytest.fixture()
def store(tmp_path: Path) -> NotesStore:
    return NotesStore(tmp_path / "data.db")


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    return AppState(settings=settings, store=NotesStore(settings.db_path))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture()
def controller(store: NotesStore, clock: FakeClock) -> SessionController:
    return SessionController(store, due_offset_seconds=3600, clock=clock)
