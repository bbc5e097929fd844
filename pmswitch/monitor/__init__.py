"""
pmswitch.monitor — Clipboard watching.

Exports:
    ClipboardMonitor   — start/stop state machine (at most one watcher)
    ClipboardWatcher   — the background polling task
    EventBus           — fire-and-forget rewrite notifications
    MonitorState
"""

from pmswitch.monitor.events import EventBus, Listener
from pmswitch.monitor.lifecycle import ClipboardMonitor, MonitorState
from pmswitch.monitor.watcher import DEFAULT_INTERVAL, ClipboardWatcher

__all__ = [
    "ClipboardMonitor",
    "ClipboardWatcher",
    "DEFAULT_INTERVAL",
    "EventBus",
    "Listener",
    "MonitorState",
]
