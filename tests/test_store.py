# tests/test_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from mynotes.storage.store import NotesStore

NOW = 1_700_000_000.0


def test_todo_add_toggle_delete_scenario(store: NotesStore) -> None:
    todo_id = store.add_todo("Buy milk", NOW + 3600)
    assert todo_id > 0

    todos = store.list_todos()
    assert [(t.task, t.is_done) for t in todos] == [("Buy milk", False)]

    store.toggle_todo_done(todo_id, todos[0].is_done)
    other = store.add_todo("Call mom", NOW + 7200)
    todos = store.list_todos()
    assert [(t.id, t.is_done) for t in todos] == [(other, False), (todo_id, True)]

    store.delete_todo(todo_id)
    assert todo_id not in [t.id for t in store.list_todos()]
    store.delete_todo(other)
    assert store.list_todos() == []


@pytest.mark.parametrize("toggles", [0, 1, 2, 3, 6])
def test_toggle_parity(store: NotesStore, toggles: int) -> None:
    todo_id = store.add_todo("Water plants", NOW)
    for _ in range(toggles):
        current = store.get_todo(todo_id)
        assert current is not None
        store.toggle_todo_done(todo_id, current.is_done)

    final = store.get_todo(todo_id)
    assert final is not None
    assert final.is_done is (toggles % 2 == 1)


def test_list_todos_partitions_incomplete_before_completed(store: NotesStore) -> None:
    late = store.add_todo("late", NOW + 300)
    early = store.add_todo("early", NOW + 100)
    done_early = store.add_todo("done early", NOW + 50)
    done_late = store.add_todo("done late", NOW + 500)
    store.toggle_todo_done(done_early, False)
    store.toggle_todo_done(done_late, False)

    # Daemon writes to unrelated rows must not change the ordering.
    store.mark_alerted(late)

    todos = store.list_todos()
    assert [t.id for t in todos] == [early, late, done_early, done_late]
    flags = [t.is_done for t in todos]
    assert flags == sorted(flags)


def test_add_rejects_blank_text(store: NotesStore) -> None:
    with pytest.raises(ValueError):
        store.add_todo("   ", NOW)
    with pytest.raises(ValueError):
        store.add_note("")
    assert store.count_todos() == 0
    assert store.count_notes() == 0


def test_due_alerts_exclude_done_future_and_alerted(store: NotesStore) -> None:
    overdue = store.add_todo("overdue", NOW - 60)
    future = store.add_todo("future", NOW + 60)
    done = store.add_todo("done", NOW - 60)
    store.toggle_todo_done(done, False)

    due = store.list_due_alerts(now_ts=NOW)
    assert [t.id for t in due] == [overdue]
    assert all(not t.alert_sent for t in due)

    store.mark_alerted(overdue)
    store.mark_alerted(overdue)  # idempotent
    assert store.list_due_alerts(now_ts=NOW) == []

    # Even far in the future, an alerted todo never comes back.
    later = store.list_due_alerts(now_ts=NOW + 10_000)
    assert [t.id for t in later] == [future]

    alerted = store.get_todo(overdue)
    assert alerted is not None and alerted.alert_sent is True


def test_alert_flag_survives_toggle(store: NotesStore) -> None:
    todo_id = store.add_todo("stretch", NOW - 1)
    store.mark_alerted(todo_id)
    store.toggle_todo_done(todo_id, False)
    store.toggle_todo_done(todo_id, True)

    todo = store.get_todo(todo_id)
    assert todo is not None
    assert todo.alert_sent is True
    assert store.list_due_alerts(now_ts=NOW) == []


def test_notes_order_update_delete(store: NotesStore) -> None:
    first = store.add_note("Ideas")
    second = store.add_note("Groceries", "eggs")

    notes = store.list_notes()
    assert [n.id for n in notes] == [second, first]
    assert notes[1].title == "Ideas"
    assert notes[1].body == ""

    store.update_note_body(first, "Ideas are cheap")
    note = store.get_note(first)
    assert note is not None
    assert note.body == "Ideas are cheap"

    store.delete_note(second)
    assert [n.id for n in store.list_notes()] == [first]
    assert store.get_note(second) is None


def test_schema_migration_adds_missing_columns(tmp_path: Path) -> None:
    db = tmp_path / "old.db"
    conn = sqlite3.connect(db)
    conn.executescript(
        """
        CREATE TABLE todos (id INTEGER PRIMARY KEY AUTOINCREMENT, task TEXT);
        CREATE TABLE notes (id INTEGER PRIMARY KEY AUTOINCREMENT, content TEXT);
        """
    )
    conn.commit()
    conn.close()

    store = NotesStore(db)
    todo_id = store.add_todo("migrated", NOW)
    note_id = store.add_note("migrated note", "body")

    todo = store.get_todo(todo_id)
    note = store.get_note(note_id)
    assert todo is not None and todo.due_at == NOW and todo.alert_sent is False
    assert note is not None and note.body == "body"


def test_store_creates_parent_directory(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "dir" / "data.db"
    store = NotesStore(db)
    assert db.exists()
    assert store.db_path == db
