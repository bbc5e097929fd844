"""
pmswitch.clipboard.memory — Clipboards that never touch the OS.

``MemoryClipboard`` is a thread-safe in-process buffer, used by the test
suite and by ``pmswitch watch --backend memory`` for demos.
``NullClipboard`` is the stub for platforms without clipboard access:
it is always empty and drops every write.
"""

from __future__ import annotations

import threading


class MemoryClipboard:
    """In-memory clipboard.

    Parameters
    ----------
    text : str
        Initial contents.
    """

    def __init__(self, text: str = "") -> None:
        self._lock = threading.Lock()
        self._text = text
        self.writes = 0

    def read_text(self) -> str:
        with self._lock:
            return self._text

    def write_text(self, text: str) -> None:
        with self._lock:
            self._text = text
            self.writes += 1


class NullClipboard:
    """Stub clipboard: reads ``""``, discards writes."""

    def read_text(self) -> str:
        return ""

    def write_text(self, text: str) -> None:
        return None
