# src/mynotes/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the UI and the alert daemon.

Both depend on Protocols instead of the concrete SQLite store / notify-send
wrapper. This keeps them swappable and makes testing easier.
"""

from typing import Awaitable, Protocol

from ..storage.models import Note, Todo


class TodoRepo(Protocol):
    def add_todo(self, task: str, due_at: float) -> int: ...
    def list_todos(self) -> list[Todo]: ...
    def toggle_todo_done(self, todo_id: int, current: bool) -> None: ...
    def delete_todo(self, todo_id: int) -> None: ...


class NoteRepo(Protocol):
    def add_note(self, title: str, body: str = "") -> int: ...
    def list_notes(self) -> list[Note]: ...
    def update_note_body(self, note_id: int, body: str) -> None: ...
    def delete_note(self, note_id: int) -> None: ...


class NotesRepo(TodoRepo, NoteRepo, Protocol):
    """Everything the terminal UI needs from storage."""


class AlertRepo(Protocol):
    """Alert daemon API."""

    def list_due_alerts(self, *, now_ts: float) -> list[Todo]: ...
    def mark_alerted(self, todo_id: int) -> None: ...


class AlertNotifier(Protocol):
    """
    How the daemon raises a desktop notification.

    Implementations may raise on failure; the daemon treats delivery as
    best-effort.
    """

    def send_alert(self, *, title: str, body: str) -> Awaitable[None]: ...
