# src/mynotes/storage/models.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Todo:
    """
    A task with a due time.

    Notes:
    - alert_sent only ever goes false -> true (set by the alert daemon).
    - is_done toggles freely from the UI.
    """

    id: int
    task: str
    is_done: bool
    due_at: float
    alert_sent: bool = False
    created_at: float = 0.0


@dataclass(slots=True, frozen=True)
class Note:
    id: int
    title: str
    body: str
    created_at: float
