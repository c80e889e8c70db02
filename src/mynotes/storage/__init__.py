"""
Storage subsystem.

Components:
- models.py: data structures (Todo, Note)
- store.py: SQLite-backed storage + query/update helpers
"""
