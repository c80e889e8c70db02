# src/mynotes/ui/editor.py

from __future__ import annotations

import contextlib
import logging
import os
import shlex
import subprocess
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vim"

Runner = Callable[[list[str]], "subprocess.CompletedProcess"]


@dataclass(slots=True, frozen=True)
class EditorFinished:
    """
    Delivered once the external editor exits.

    `error` is None on success. On failure `content` is "" and the note body
    must be left alone.
    """

    note_id: int
    content: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def resolve_editor(editor: str | None = None, *, fallback: str = DEFAULT_EDITOR) -> list[str]:
    """
    Editor command as argv: explicit value, else $EDITOR, else the fallback.

    The value is shell-split so `EDITOR="code --wait"` works.
    """
    raw = (editor or os.environ.get("EDITOR") or "").strip() or fallback
    argv = shlex.split(raw)
    return argv or [fallback]


def _default_runner(argv: list[str]) -> subprocess.CompletedProcess:
    # stdin/stdout/stderr are inherited from the terminal.
    return subprocess.run(argv, check=False)


def run_editor(
    note_id: int,
    seed: str,
    *,
    editor: str | None = None,
    fallback: str = DEFAULT_EDITOR,
    runner: Runner | None = None,
) -> EditorFinished:
    """
    Open `seed` in the external editor and block until it exits.

    The temp file is removed on every exit path.
    """
    run = runner or _default_runner
    try:
        fd, tmp = tempfile.mkstemp(prefix="mynotes-", suffix=".md")
    except OSError as e:
        logger.warning("Temp file creation failed note_id=%s: %s", note_id, e)
        return EditorFinished(note_id=note_id, content="", error=f"cannot create temp file: {e}")

    path = Path(tmp)
    try:
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(seed or "")
        except OSError as e:
            logger.warning("Writing temp file failed path=%s: %s", path, e)
            return EditorFinished(note_id=note_id, content="", error=f"cannot create temp file: {e}")

        try:
            argv = [*resolve_editor(editor, fallback=fallback), str(path)]
        except ValueError as e:
            return EditorFinished(note_id=note_id, content="", error=f"bad editor command: {e}")
        logger.debug("Launching editor argv=%s note_id=%s", argv, note_id)

        try:
            proc = run(argv)
        except OSError as e:
            logger.warning("Editor launch failed argv=%s: %s", argv[:-1], e)
            return EditorFinished(note_id=note_id, content="", error=f"cannot launch {argv[0]}: {e}")

        if proc.returncode != 0:
            logger.warning("Editor exited with %s note_id=%s", proc.returncode, note_id)
            return EditorFinished(
                note_id=note_id,
                content="",
                error=f"{argv[0]} exited with status {proc.returncode}",
            )

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Reading editor output failed path=%s: %s", path, e)
            return EditorFinished(note_id=note_id, content="", error=f"cannot read note: {e}")

        return EditorFinished(note_id=note_id, content=content)
    finally:
        with contextlib.suppress(FileNotFoundError):
            path.unlink()
