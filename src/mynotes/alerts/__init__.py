"""
Alert subsystem.

Components:
- daemon.py: polling loop that alerts each due todo once
- notifier.py: notify-send wrapper
"""
