"""
mynotes: a terminal todo and notes manager.

Components:
- storage/: SQLite-backed todos and notes
- ui/: session state machine, external editor invoker, Textual shell
- alerts/: polling daemon that raises desktop notifications for due todos
- cli/: entrypoint and composition root
"""

__version__ = "0.1.0"
