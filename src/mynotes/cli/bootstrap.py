# src/mynotes/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local directories exist,
- wires concrete implementations (store, controller, notifier) together.
"""

from __future__ import annotations

import logging

from ..alerts.notifier import DesktopNotifier
from ..config import get_settings
from ..core.state import AppState
from ..storage.store import NotesStore
from ..ui.state import SessionController

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.log_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings(). Failing to open or
    create the database raises; callers treat that as fatal.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)
    return AppState(settings=settings, store=NotesStore(settings.db_path))


def build_controller(state: AppState) -> SessionController:
    return SessionController(
        state.store,
        due_offset_seconds=state.settings.todo_due_seconds,
    )


def build_notifier(state: AppState) -> DesktopNotifier:
    return DesktopNotifier(urgency=state.settings.alert_urgency)
