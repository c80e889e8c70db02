"""
Terminal UI.

Components:
- state.py: immutable session state + SessionController (the state machine)
- editor.py: runs $EDITOR on a temp file and reports EditorFinished
- render.py: Rich markup for the panes
- app.py: Textual app wiring keys, widgets and editor suspension
"""
