# src/mynotes/storage/store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

from .models import Note, Todo

logger = logging.getLogger(__name__)


class NotesStore:
    """
    SQLite store for todos and notes.

    The schema is intentionally simple and migration-safe:
    - create tables if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread/process-safety:
    - each method opens its own SQLite connection
    - every write touches a single row, so the UI and the alert daemon can
      share the file without extra locking
    """

    def __init__(self, db_path: str | Path = "data.db") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            todos, notes = self.count_todos(), self.count_notes()
        except Exception:
            todos = notes = -1
        logger.info("NotesStore ready db=%s todos=%s notes=%s", self._db_path, todos, notes)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    task TEXT NOT NULL,
                    is_done INTEGER NOT NULL DEFAULT 0,
                    due_at REAL NOT NULL,
                    alert_sent INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS notes (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    body TEXT NOT NULL DEFAULT '',
                    created_at REAL NOT NULL
                )
                """
            )

            def add_cols(table: str, wanted: dict[str, str]) -> None:
                cur.execute(f"PRAGMA table_info({table})")
                cols = {row["name"] for row in cur.fetchall()}
                for name, decl in wanted.items():
                    if name in cols:
                        continue
                    cur.execute(f"ALTER TABLE {table} ADD COLUMN {name} {decl}")
                    logger.info("NotesStore migration: added column %s.%s", table, name)

            add_cols(
                "todos",
                {
                    "is_done": "INTEGER NOT NULL DEFAULT 0",
                    "due_at": "REAL NOT NULL DEFAULT 0",
                    "alert_sent": "INTEGER NOT NULL DEFAULT 0",
                    "created_at": "REAL NOT NULL DEFAULT 0",
                },
            )
            add_cols(
                "notes",
                {
                    "title": "TEXT NOT NULL DEFAULT ''",
                    "body": "TEXT NOT NULL DEFAULT ''",
                    "created_at": "REAL NOT NULL DEFAULT 0",
                },
            )

            cur.execute("CREATE INDEX IF NOT EXISTS idx_todos_done_due ON todos(is_done, due_at)")
            cur.execute(
                "CREATE INDEX IF NOT EXISTS idx_todos_alerts ON todos(alert_sent, is_done, due_at)"
            )

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_todo(row: sqlite3.Row) -> Todo:
        return Todo(
            id=int(row["id"]),
            task=str(row["task"] or ""),
            is_done=bool(row["is_done"]),
            due_at=float(row["due_at"] or 0.0),
            alert_sent=bool(row["alert_sent"]),
            created_at=float(row["created_at"] or 0.0),
        )

    @staticmethod
    def _row_to_note(row: sqlite3.Row) -> Note:
        return Note(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            body=str(row["body"] or ""),
            created_at=float(row["created_at"] or 0.0),
        )

    def _execute(self, sql: str, params: tuple) -> int:
        """Run a single-row write and return the number of affected rows."""
        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
            return cur.rowcount
        finally:
            conn.close()

    # ---- todos ----

    def count_todos(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM todos").fetchone()
            return int(n)
        finally:
            conn.close()

    def add_todo(self, task: str, due_at: float) -> int:
        if not task or not task.strip():
            raise ValueError("task is required")

        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO todos(task, is_done, due_at, alert_sent, created_at)
                VALUES (?, 0, ?, 0, ?)
                """,
                (task.strip(), float(due_at), now),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for todos insert")
            todo_id = int(rowid)
            logger.debug("Todo added id=%s due_at=%s", todo_id, due_at)
            return todo_id
        finally:
            conn.close()

    def get_todo(self, todo_id: int) -> Todo | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM todos WHERE id = ?", (int(todo_id),)).fetchone()
            return self._row_to_todo(row) if row else None
        finally:
            conn.close()

    def list_todos(self) -> list[Todo]:
        """
        All todos: incomplete first ordered by due time, then completed ones.
        """
        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                SELECT *
                FROM todos
                ORDER BY is_done ASC, due_at ASC, id ASC
                """
            )
            return [self._row_to_todo(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def toggle_todo_done(self, todo_id: int, current: bool) -> None:
        """Set is_done to the opposite of `current` (the flag the caller last saw)."""
        self._execute(
            "UPDATE todos SET is_done = ? WHERE id = ?",
            (0 if current else 1, int(todo_id)),
        )
        logger.debug("Todo toggled id=%s is_done=%s", todo_id, not current)

    def delete_todo(self, todo_id: int) -> None:
        n = self._execute("DELETE FROM todos WHERE id = ?", (int(todo_id),))
        logger.debug("Todo deleted id=%s rows=%s", todo_id, n)

    def list_due_alerts(self, *, now_ts: float) -> list[Todo]:
        """
        Todos that should raise a notification now.

        A todo qualifies if:
        - due_at <= now_ts
        - it is not done
        - no alert was sent for it yet
        """
        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                SELECT *
                FROM todos
                WHERE due_at <= ?
                  AND alert_sent = 0
                  AND is_done = 0
                ORDER BY due_at ASC, id ASC
                """,
                (float(now_ts),),
            )
            return [self._row_to_todo(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def mark_alerted(self, todo_id: int) -> None:
        # Idempotent: marking twice is harmless.
        self._execute("UPDATE todos SET alert_sent = 1 WHERE id = ?", (int(todo_id),))

    # ---- notes ----

    def count_notes(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM notes").fetchone()
            return int(n)
        finally:
            conn.close()

    def add_note(self, title: str, body: str = "") -> int:
        if not title or not title.strip():
            raise ValueError("title is required")

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "INSERT INTO notes(title, body, created_at) VALUES (?, ?, ?)",
                (title.strip(), body or "", time.time()),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for notes insert")
            note_id = int(rowid)
            logger.debug("Note added id=%s", note_id)
            return note_id
        finally:
            conn.close()

    def get_note(self, note_id: int) -> Note | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM notes WHERE id = ?", (int(note_id),)).fetchone()
            return self._row_to_note(row) if row else None
        finally:
            conn.close()

    def list_notes(self) -> list[Note]:
        """Most recently created first."""
        conn = self._get_conn()
        try:
            cur = conn.execute("SELECT * FROM notes ORDER BY created_at DESC, id DESC")
            return [self._row_to_note(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def update_note_body(self, note_id: int, body: str) -> None:
        n = self._execute("UPDATE notes SET body = ? WHERE id = ?", (body, int(note_id)))
        logger.debug("Note body updated id=%s chars=%s rows=%s", note_id, len(body), n)

    def delete_note(self, note_id: int) -> None:
        n = self._execute("DELETE FROM notes WHERE id = ?", (int(note_id),))
        logger.debug("Note deleted id=%s rows=%s", note_id, n)
