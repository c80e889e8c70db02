# src/mynotes/cli/main.py

"""
CLI entrypoint.

    mynotes            launch the terminal UI
    mynotes ui         same
    mynotes daemon     run the background alert daemon

Initializes logging, builds AppState, then runs the selected command.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys

from ..alerts.daemon import run_alert_daemon
from ..cli.bootstrap import build_controller, build_notifier, create_initial_state
from ..config import get_settings
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mynotes", description="A CLI todo and notes manager.")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("ui", help="Launch the interactive terminal UI (default)")
    sub.add_parser("daemon", help="Run the background notification listener")
    return parser


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.store.close()
    except Exception:
        logger.debug("Store close failed.", exc_info=True)


def run_ui(state: AppState) -> int:
    from ..ui.app import NotesApp

    app = NotesApp(
        build_controller(state),
        editor_fallback=state.settings.editor_fallback,
    )
    app.run()
    return int(app.return_code or 0)


async def _serve_alerts(state: AppState) -> None:
    settings = state.settings
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    def _handle_signal(signum: int) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _handle_signal, sig)
        except (NotImplementedError, RuntimeError):
            # Some platforms/loops do not support signal handlers.
            logger.debug("Cannot install handler for signal %s", sig)

    await run_alert_daemon(
        state.store,
        build_notifier(state),
        interval_seconds=settings.alert_interval_seconds,
        title=settings.alert_title,
        stop_event=stop,
    )


def run_daemon(state: AppState) -> int:
    try:
        asyncio.run(_serve_alerts(state))
    except KeyboardInterrupt:
        logger.info("Alert daemon interrupted, shutting down...")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    command = args.command or "ui"

    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    # The UI owns the terminal; only the daemon logs to the console.
    setup_logging(
        log_dir=settings.log_dir,
        console=command == "daemon",
        console_level=console_level,
    )
    logger.info("Starting %s %s...", settings.app_name, command)

    try:
        state = create_initial_state(settings=settings)
    except Exception as e:
        logger.exception("Cannot open storage at %s", settings.db_path)
        print(f"mynotes: cannot open storage at {settings.db_path}: {e}", file=sys.stderr)
        return 1

    try:
        if command == "daemon":
            return run_daemon(state)
        return run_ui(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    sys.exit(main())
