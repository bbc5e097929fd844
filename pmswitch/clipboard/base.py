"""
pmswitch.clipboard.base — The clipboard capability contract.

Every backend (real OS clipboard, no-op stub, in-memory fake) implements
``read_text()`` / ``write_text()``.  The watcher only ever talks to this
protocol, so the platform choice is made once, at startup.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class ClipboardError(Exception):
    """A single clipboard read or write failed.

    Transient: the watcher logs it and tries again on the next cycle.
    """


class ClipboardUnavailableError(ClipboardError):
    """No clipboard backend could be attached (raised at monitor start)."""


@runtime_checkable
class ClipboardBackend(Protocol):
    """Contract that every clipboard backend must satisfy."""

    def read_text(self) -> str:
        """Return the current clipboard text (``""`` when empty).

        Raises
        ------
        ClipboardError
            If the clipboard could not be read this time.
        """
        ...

    def write_text(self, text: str) -> None:
        """Replace the clipboard contents with *text*.

        Raises
        ------
        ClipboardError
            If the clipboard could not be written this time.
        """
        ...
