# src/mynotes/alerts/notifier.py

from __future__ import annotations

import asyncio
import logging

logger = logging.getLogger(__name__)


class NotificationError(RuntimeError):
    """Raised when a desktop notification could not be delivered."""


class DesktopNotifier:
    """
    AlertNotifier backed by `notify-send` (libnotify).

    Urgency is one of: low, normal, critical.
    """

    def __init__(self, *, urgency: str = "critical", program: str = "notify-send") -> None:
        self.urgency = urgency
        self.program = program

    async def send_alert(self, *, title: str, body: str) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                self.program,
                "-u",
                self.urgency,
                title,
                body,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise NotificationError(f"cannot launch {self.program}: {e}") from e

        _, stderr = await proc.communicate()
        if proc.returncode != 0:
            detail = (stderr or b"").decode("utf-8", "replace").strip()
            raise NotificationError(f"{self.program} exited with {proc.returncode}: {detail}")

        logger.debug("Notification sent title=%r", title)
