# src/mynotes/alerts/daemon.py

from __future__ import annotations

"""
Alert daemon.

A small polling loop that:
- fetches todos that are due, incomplete and not alerted yet,
- raises a desktop notification for each (best-effort),
- marks them alerted so they never fire again.

It shares nothing with the terminal UI except the SQLite file.
"""

import asyncio
import logging
import time

from ..core.ports import AlertNotifier, AlertRepo

logger = logging.getLogger(__name__)

DEFAULT_ALERT_TITLE = "Task Due!"


async def run_alert_tick(
        store: AlertRepo,
        notifier: AlertNotifier,
        *,
        now_ts: float | None = None,
        title: str = DEFAULT_ALERT_TITLE,
) -> int:
    """
    One polling pass. Returns how many todos were marked alerted.

    Notification failures are logged and ignored; the todo is still marked.
    """
    if now_ts is None:
        now_ts = time.time()

    todos = store.list_due_alerts(now_ts=now_ts)
    marked = 0

    for todo in todos:
        try:
            await notifier.send_alert(title=title, body=todo.task)
        except Exception:
            logger.warning("notification failed todo_id=%s", todo.id, exc_info=True)

        try:
            store.mark_alerted(todo.id)
        except Exception:
            logger.exception("mark_alerted failed todo_id=%s", todo.id)
            continue

        marked += 1
        logger.info("Todo %s alerted", todo.id)

    return marked


async def run_alert_daemon(
        store: AlertRepo,
        notifier: AlertNotifier,
        *,
        interval_seconds: float = 60.0,
        title: str = DEFAULT_ALERT_TITLE,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Simple polling daemon.

    Every interval_seconds:
    - run one alert tick
    - a failing tick is logged; the loop keeps going

    Returns once stop_event is set; without one, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))
    stop = stop_event if stop_event is not None else asyncio.Event()
    logger.info("Alert daemon started interval=%.1fs", sleep_s)

    while not stop.is_set():
        try:
            await run_alert_tick(store, notifier, title=title)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("alert tick failed")

        try:
            await asyncio.wait_for(stop.wait(), timeout=sleep_s)
        except asyncio.TimeoutError:
            pass

    logger.info("Alert daemon stopped")
