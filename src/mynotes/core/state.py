# src/mynotes/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..storage.store import NotesStore


@dataclass(slots=True)
class AppState:
    """
    Process-wide wiring shared by the UI and the daemon.

    Session state of the terminal UI lives in mynotes.ui.state, not here.
    """

    # Settings object (mynotes.config.Settings or a test SimpleNamespace).
    settings: Any
    store: NotesStore
