# tests/test_app.py

from __future__ import annotations

import pytest

from mynotes.storage.store import NotesStore
from mynotes.ui.app import NotesApp
from mynotes.ui.editor import EditorFinished
from mynotes.ui.state import EditNote, Focus, SessionController


@pytest.mark.asyncio
async def test_app_switches_focus_and_quits(store: NotesStore) -> None:
    store.add_note("note")
    app = NotesApp(SessionController(store))

    async with app.run_test() as pilot:
        await pilot.press("tab")
        await pilot.pause()
        assert app.session.focus == Focus.NOTES

        await pilot.press("q")
        await pilot.pause()

    assert app.session.quit is True


@pytest.mark.asyncio
async def test_app_creates_todo_through_input_overlay(store: NotesStore) -> None:
    app = NotesApp(SessionController(store))

    async with app.run_test() as pilot:
        await pilot.press("t")
        await pilot.pause()
        assert app.session.focus == Focus.INPUT

        await pilot.press("m", "i", "l", "k")
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()

        assert app.session.focus == Focus.TODOS

    assert [t.task for t in store.list_todos()] == ["milk"]


@pytest.mark.asyncio
async def test_new_note_without_suspend_support_keeps_empty_body(store: NotesStore) -> None:
    app = NotesApp(SessionController(store))

    async with app.run_test() as pilot:
        await pilot.press("n")
        await pilot.pause()
        await pilot.press("p", "l", "u", "m", "enter")
        await pilot.pause()

        assert app.session.focus == Focus.NOTES
        assert app.session.pending_note_id is None
        assert "cannot be suspended" in app.session.status

    assert [(n.title, n.body) for n in store.list_notes()] == [("plum", "")]


@pytest.mark.asyncio
async def test_editor_content_is_saved_to_new_note(
    monkeypatch: pytest.MonkeyPatch,
    store: NotesStore,
) -> None:
    app = NotesApp(SessionController(store))
    opened: list[EditNote] = []

    def fake_open_editor(command: EditNote) -> EditorFinished:
        opened.append(command)
        return EditorFinished(note_id=command.note_id, content="Ideas are cheap")

    monkeypatch.setattr(app, "open_editor", fake_open_editor)

    async with app.run_test() as pilot:
        await pilot.press("n")
        await pilot.pause()
        await pilot.press("p", "l", "u", "m", "enter")
        await pilot.pause()

        assert app.session.focus == Focus.NOTES
        assert app.session.status == ""

    assert [c.seed for c in opened] == [""]
    assert [(n.title, n.body) for n in store.list_notes()] == [("plum", "Ideas are cheap")]
