# src/mynotes/ui/app.py

"""
Textual shell around SessionController.

The app owns no session logic: it turns keys and input-widget messages into
events, stores the returned state, runs editor commands and re-renders.
"""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult, SuspendNotSupported
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Input, Static

from .editor import DEFAULT_EDITOR, EditorFinished, run_editor
from .render import render_notes, render_overlay_title, render_status, render_todos
from .state import EditNote, Event, Focus, InputChanged, KeyPressed, SessionController, UIState

logger = logging.getLogger(__name__)


class NotesApp(App):
    """Two-pane todos/notes manager."""

    CSS = """
    #panes {
        height: 1fr;
    }

    .pane {
        width: 1fr;
        height: 100%;
        border: round $primary-darken-2;
        padding: 1;
    }

    .pane.active {
        border: round $accent;
    }

    #overlay {
        display: none;
        height: auto;
        border: round $accent;
        padding: 0 1;
    }

    #status {
        height: 1;
        padding: 0 1;
    }
    """

    TITLE = "mynotes"
    SUB_TITLE = "Todos and notes"
    AUTO_FOCUS = None

    # Letter keys are plain bindings so the input widget swallows them while typing.
    BINDINGS = [
        Binding("ctrl+c", "dispatch('ctrl+c')", "Quit", show=False, priority=True),
        Binding("q", "dispatch('q')", "Quit"),
        Binding("tab", "dispatch('tab')", "Switch", priority=True),
        Binding("up,k", "dispatch('up')", "Up", show=False),
        Binding("down,j", "dispatch('down')", "Down", show=False),
        Binding("enter", "dispatch('enter')", "Toggle"),
        Binding("x", "dispatch('x')", "Delete"),
        Binding("t", "dispatch('t')", "New Task"),
        Binding("n", "dispatch('n')", "New Note"),
        Binding("e", "dispatch('e')", "Edit Note"),
        Binding("escape", "dispatch('escape')", "Cancel", show=False, priority=True),
    ]

    def __init__(
        self,
        controller: SessionController,
        *,
        editor: str | None = None,
        editor_fallback: str = DEFAULT_EDITOR,
    ) -> None:
        super().__init__()
        self.controller = controller
        self.editor_command = editor
        self.editor_fallback = editor_fallback
        try:
            self.session = controller.initial_state()
        except Exception as e:
            logger.exception("Initial load failed")
            self.session = UIState(status=f"Could not load data: {e}")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="panes"):
            yield Static(id="todos", classes="pane")
            yield Static(id="notes", classes="pane")
        with Vertical(id="overlay"):
            yield Static(id="overlay-title")
            yield Input(id="entry")
        yield Static(id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.sync_view()

    # ---- events in ----

    def action_dispatch(self, key: str) -> None:
        self.handle_session_event(KeyPressed(key))

    def on_input_changed(self, event: Input.Changed) -> None:
        if self.session.focus == Focus.INPUT:
            self.handle_session_event(InputChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.handle_session_event(InputChanged(event.value))
        self.handle_session_event(KeyPressed("enter"))

    def handle_session_event(self, event: Event) -> None:
        transition = self.controller.handle(self.session, event)
        self.session = transition.state

        if transition.command is not None:
            finished = self.open_editor(transition.command)
            self.session = self.controller.handle(self.session, finished).state

        self.sync_view()
        if self.session.quit:
            self.exit()

    def open_editor(self, command: EditNote) -> EditorFinished:
        """Suspend rendering, run the editor, resume. Blocks the event loop."""
        try:
            with self.suspend():
                return run_editor(
                    command.note_id,
                    command.seed,
                    editor=self.editor_command,
                    fallback=self.editor_fallback,
                )
        except SuspendNotSupported:
            logger.warning("Terminal cannot be suspended; editor not opened note_id=%s", command.note_id)
            return EditorFinished(
                note_id=command.note_id,
                content="",
                error="this terminal cannot be suspended",
            )

    # ---- rendering ----

    def sync_view(self) -> None:
        s = self.session
        todos = self.query_one("#todos", Static)
        notes = self.query_one("#notes", Static)
        todos.update(render_todos(s))
        notes.update(render_notes(s))
        todos.set_class(s.focus == Focus.TODOS, "active")
        notes.set_class(s.focus == Focus.NOTES, "active")
        self.query_one("#status", Static).update(render_status(s))

        overlay = self.query_one("#overlay", Vertical)
        entry = self.query_one("#entry", Input)
        if s.focus == Focus.INPUT:
            if not overlay.display:
                overlay.display = True
                self.query_one("#overlay-title", Static).update(render_overlay_title(s))
                entry.placeholder = s.placeholder
                entry.value = s.buffer
                entry.focus()
        elif overlay.display:
            overlay.display = False
            entry.value = ""
            self.set_focus(None)
