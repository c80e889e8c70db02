# src/mynotes/ui/state.py

"""
Terminal UI state machine.

The session state is an immutable value. `SessionController.handle()` takes the
current state plus one event and returns a Transition: the next state and,
optionally, a command the terminal shell must run (opening the editor).

Nothing here touches the terminal, so the whole flow is testable with a real
store and plain events:

    controller = SessionController(store)
    state = controller.initial_state()
    state = controller.handle(state, KeyPressed("t")).state
    state = controller.handle(state, InputChanged("Buy milk")).state
    state = controller.handle(state, KeyPressed("enter")).state

Every mutation is a synchronous storage call followed by a full reload.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import StrEnum

from ..core.ports import NotesRepo
from ..storage.models import Note, Todo
from .editor import EditorFinished

logger = logging.getLogger(__name__)

DEFAULT_DUE_OFFSET_SECONDS = 60 * 60


class Focus(StrEnum):
    TODOS = "todos"
    NOTES = "notes"
    INPUT = "input"


class InputMode(StrEnum):
    NEW_TODO = "new_todo"
    NEW_NOTE = "new_note"


PLACEHOLDERS: dict[InputMode, str] = {
    InputMode.NEW_TODO: "Task description...",
    InputMode.NEW_NOTE: "Note title...",
}


def default_keymap() -> dict[str, tuple[str, ...]]:
    """Action -> Textual key names."""
    return {
        "quit": ("q", "ctrl+c"),
        "switch_focus": ("tab",),
        "up": ("up", "k"),
        "down": ("down", "j"),
        "confirm": ("enter",),
        "delete": ("x",),
        "new_todo": ("t",),
        "new_note": ("n",),
        "edit_note": ("e",),
        "cancel": ("escape",),
    }


# ---- state ----


@dataclass(slots=True, frozen=True)
class Snapshot:
    todos: tuple[Todo, ...] = ()
    notes: tuple[Note, ...] = ()

    def find_note(self, note_id: int) -> Note | None:
        for note in self.notes:
            if note.id == note_id:
                return note
        return None


@dataclass(slots=True, frozen=True)
class UIState:
    snapshot: Snapshot = field(default_factory=Snapshot)
    focus: Focus = Focus.TODOS
    cursor: int = 0
    input_mode: InputMode | None = None
    buffer: str = ""
    placeholder: str = ""
    pending_note_id: int | None = None
    status: str = ""
    quit: bool = False

    @property
    def list_length(self) -> int:
        if self.focus == Focus.TODOS:
            return len(self.snapshot.todos)
        if self.focus == Focus.NOTES:
            return len(self.snapshot.notes)
        return 0

    @property
    def selected_todo(self) -> Todo | None:
        if self.focus != Focus.TODOS or not self.snapshot.todos:
            return None
        return self.snapshot.todos[self.cursor]

    @property
    def selected_note(self) -> Note | None:
        if self.focus != Focus.NOTES or not self.snapshot.notes:
            return None
        return self.snapshot.notes[self.cursor]


# ---- events / commands ----


@dataclass(slots=True, frozen=True)
class KeyPressed:
    key: str


@dataclass(slots=True, frozen=True)
class InputChanged:
    value: str


Event = KeyPressed | InputChanged | EditorFinished


@dataclass(slots=True, frozen=True)
class EditNote:
    """Ask the shell to suspend rendering and open the editor on a note."""

    note_id: int
    seed: str


@dataclass(slots=True, frozen=True)
class Transition:
    state: UIState
    command: EditNote | None = None


def clamp_cursor(cursor: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(cursor, length - 1))


class SessionController:
    """
    Interprets key events and editor-completion events.

    Storage failures never escape: they are logged, shown in `status`, and the
    previous snapshot is kept.
    """

    def __init__(
        self,
        store: NotesRepo,
        *,
        due_offset_seconds: float = DEFAULT_DUE_OFFSET_SECONDS,
        keymap: dict[str, tuple[str, ...]] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.due_offset_seconds = float(due_offset_seconds)
        self.clock = clock
        self._actions: dict[str, str] = {}
        for action, keys in (keymap or default_keymap()).items():
            for key in keys:
                self._actions[key] = action

    def action_for(self, key: str) -> str | None:
        return self._actions.get(key)

    # ---- snapshot ----

    def load_snapshot(self) -> Snapshot:
        return Snapshot(
            todos=tuple(self.store.list_todos()),
            notes=tuple(self.store.list_notes()),
        )

    def initial_state(self) -> UIState:
        return UIState(snapshot=self.load_snapshot())

    def _reload(self, state: UIState) -> UIState:
        try:
            snapshot = self.load_snapshot()
        except Exception as e:
            logger.exception("Snapshot reload failed")
            return replace(state, status=f"Could not reload data: {e}")
        state = replace(state, snapshot=snapshot)
        if state.focus == Focus.INPUT:
            return state
        return replace(state, cursor=clamp_cursor(state.cursor, state.list_length))

    def _mutate(self, state: UIState, what: str, op: Callable[[], object]) -> tuple[UIState, bool]:
        """Run one storage call, then reload. Returns (state, succeeded)."""
        try:
            op()
        except Exception as e:
            logger.exception("Storage call failed: %s", what)
            return replace(state, status=f"Could not {what}: {e}"), False
        return self._reload(state), True

    # ---- dispatch ----

    def handle(self, state: UIState, event: Event) -> Transition:
        if isinstance(event, EditorFinished):
            return Transition(self._on_editor_finished(state, event))

        if isinstance(event, InputChanged):
            if state.focus != Focus.INPUT:
                return Transition(state)
            return Transition(replace(state, buffer=event.value))

        if isinstance(event, KeyPressed):
            state = replace(state, status="")
            action = self.action_for(event.key)
            if state.focus == Focus.INPUT:
                return self._on_input_key(state, action)
            return self._on_list_key(state, action)

        raise TypeError(f"unknown event: {event!r}")

    # ---- list focus ----

    def _on_list_key(self, state: UIState, action: str | None) -> Transition:
        if action == "quit":
            return Transition(replace(state, quit=True))

        if action == "switch_focus":
            focus = Focus.NOTES if state.focus == Focus.TODOS else Focus.TODOS
            return Transition(replace(state, focus=focus, cursor=0))

        if action == "up":
            return Transition(replace(state, cursor=clamp_cursor(state.cursor - 1, state.list_length)))

        if action == "down":
            return Transition(replace(state, cursor=clamp_cursor(state.cursor + 1, state.list_length)))

        if action == "confirm":
            todo = state.selected_todo
            if todo is None:
                return Transition(state)
            # Cursor index stays put even if the todo moves to the other partition.
            state, _ = self._mutate(
                state,
                "toggle todo",
                lambda: self.store.toggle_todo_done(todo.id, todo.is_done),
            )
            return Transition(state)

        if action == "delete":
            return Transition(self._delete_selected(state))

        if action in ("new_todo", "new_note"):
            mode = InputMode.NEW_TODO if action == "new_todo" else InputMode.NEW_NOTE
            return Transition(
                replace(
                    state,
                    focus=Focus.INPUT,
                    input_mode=mode,
                    buffer="",
                    placeholder=PLACEHOLDERS[mode],
                )
            )

        if action == "edit_note":
            note = state.selected_note
            if note is None:
                return Transition(state)
            return Transition(
                replace(state, pending_note_id=note.id),
                EditNote(note_id=note.id, seed=note.body),
            )

        return Transition(state)

    def _delete_selected(self, state: UIState) -> UIState:
        prev_cursor = state.cursor
        if state.focus == Focus.TODOS and state.selected_todo is not None:
            target_id = state.selected_todo.id
            state, ok = self._mutate(state, "delete todo", lambda: self.store.delete_todo(target_id))
        elif state.focus == Focus.NOTES and state.selected_note is not None:
            target_id = state.selected_note.id
            state, ok = self._mutate(state, "delete note", lambda: self.store.delete_note(target_id))
        else:
            return state

        if ok and prev_cursor > 0:
            state = replace(state, cursor=clamp_cursor(prev_cursor - 1, state.list_length))
        return state

    # ---- input overlay ----

    def _close_overlay(self, state: UIState, focus: Focus) -> UIState:
        state = replace(state, focus=focus, input_mode=None, buffer="", placeholder="")
        return replace(state, cursor=clamp_cursor(state.cursor, state.list_length))

    def _on_input_key(self, state: UIState, action: str | None) -> Transition:
        if action == "cancel":
            return Transition(self._close_overlay(state, Focus.TODOS))

        if action != "confirm":
            # Line editing belongs to the input widget.
            return Transition(state)

        text = state.buffer.strip()
        if not text:
            return Transition(state)

        if state.input_mode == InputMode.NEW_TODO:
            due_at = self.clock() + self.due_offset_seconds
            state, ok = self._mutate(state, "add todo", lambda: self.store.add_todo(text, due_at))
            if not ok:
                return Transition(state)
            return Transition(self._close_overlay(state, Focus.TODOS))

        if state.input_mode == InputMode.NEW_NOTE:
            return self._create_note(state, text)

        return Transition(self._close_overlay(state, Focus.TODOS))

    def _create_note(self, state: UIState, title: str) -> Transition:
        try:
            note_id = self.store.add_note(title, "")
        except Exception as e:
            logger.exception("Storage call failed: add note")
            return Transition(replace(state, status=f"Could not add note: {e}"))

        state = self._close_overlay(self._reload(state), Focus.NOTES)
        fresh = state.snapshot.find_note(note_id)
        seed = fresh.body if fresh is not None else ""
        cursor = state.snapshot.notes.index(fresh) if fresh is not None else state.cursor
        return Transition(
            replace(state, cursor=cursor, pending_note_id=note_id),
            EditNote(note_id=note_id, seed=seed),
        )

    # ---- editor completion ----

    def _on_editor_finished(self, state: UIState, event: EditorFinished) -> UIState:
        status = ""
        if event.ok:
            try:
                self.store.update_note_body(event.note_id, event.content)
            except Exception as e:
                logger.exception("Storage call failed: update note body id=%s", event.note_id)
                status = f"Could not save note: {e}"
        else:
            logger.info("Editor session failed note_id=%s: %s", event.note_id, event.error)
            status = f"Note not saved: {event.error}"

        state = replace(state, focus=Focus.NOTES, pending_note_id=None, input_mode=None)
        state = replace(state, cursor=clamp_cursor(state.cursor, state.list_length))
        state = self._reload(state)
        if status:
            state = replace(state, status=status)
        return state
