# src/mynotes/ui/render.py

from __future__ import annotations

import time
from datetime import datetime

from rich.markup import escape

from .state import Focus, InputMode, UIState

HELP_LINE = (
    "[t] New Task  [n] New Note  [e] Edit Note  [x] Delete  "
    "[Tab] Switch  [Enter] Toggle  [q] Quit"
)


def _due_label(due_at: float, now_ts: float) -> str:
    when = datetime.fromtimestamp(due_at).strftime("%Y-%m-%d %H:%M")
    if due_at <= now_ts:
        return f"[red]overdue {when}[/red]"
    return f"[dim]due {when}[/dim]"


def render_todos(state: UIState, *, now_ts: float | None = None) -> str:
    """Pending todos, then completed ones. Indices match the snapshot order."""
    if now_ts is None:
        now_ts = time.time()

    lines = ["[b reverse] TODOS [/]", "", "[b magenta]PENDING[/]"]
    completed: list[str] = []

    for i, todo in enumerate(state.snapshot.todos):
        selected = state.focus == Focus.TODOS and state.cursor == i
        marker = "[b magenta]> [/]" if selected else "  "
        if todo.is_done:
            completed.append(f"{marker}[dim strike]\\[x] {escape(todo.task)}[/]")
            continue
        text = f"\\[ ] {escape(todo.task)}"
        if selected:
            text = f"[b magenta]{text}[/]"
        lines.append(f"{marker}{text}  {_due_label(todo.due_at, now_ts)}")

    lines.append("")
    lines.append("[dim]COMPLETED[/]")
    lines.extend(completed)
    return "\n".join(lines)


def render_notes(state: UIState) -> str:
    lines = ["[b reverse] NOTES [/]", ""]
    for i, note in enumerate(state.snapshot.notes):
        selected = state.focus == Focus.NOTES and state.cursor == i
        title = escape(note.title)
        if selected:
            lines.append(f"[b magenta]> {title}[/]")
        else:
            lines.append(f"  {title}")
    if not state.snapshot.notes:
        lines.append("[dim]No notes yet.[/dim]")
    return "\n".join(lines)


def render_overlay_title(state: UIState) -> str:
    if state.input_mode == InputMode.NEW_NOTE:
        return "Creating note  [dim]\\[Enter] Confirm  \\[Esc] Cancel[/dim]"
    return "Creating todo  [dim]\\[Enter] Confirm  \\[Esc] Cancel[/dim]"


def render_status(state: UIState) -> str:
    if state.status:
        return f"[yellow]{escape(state.status)}[/yellow]"
    return f"[dim]{escape(HELP_LINE)}[/dim]"
