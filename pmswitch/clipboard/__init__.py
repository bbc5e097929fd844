"""
pmswitch.clipboard — Clipboard backends.

Exports:
    get_backend()         — factory that returns the configured backend
    ClipboardBackend      — protocol for type-checking
    SystemClipboard       — OS clipboard (pyperclip)
    MemoryClipboard       — in-process fake
    NullClipboard         — no-op stub
    ClipboardError, ClipboardUnavailableError
"""

from pmswitch.clipboard.base import (
    ClipboardBackend,
    ClipboardError,
    ClipboardUnavailableError,
)
from pmswitch.clipboard.memory import MemoryClipboard, NullClipboard
from pmswitch.clipboard.system import SystemClipboard

BACKENDS = ("system", "null", "memory")


def get_backend(name: str = "system") -> ClipboardBackend:
    """Factory: return a fresh clipboard backend.

    Parameters
    ----------
    name : str
        ``"system"``, ``"null"`` or ``"memory"``.

    Raises
    ------
    ClipboardUnavailableError
        If ``"system"`` is requested but the OS clipboard is unreachable.
    ValueError
        If *name* is not a known backend.
    """
    if name == "system":
        return SystemClipboard()
    if name == "null":
        return NullClipboard()
    if name == "memory":
        return MemoryClipboard()
    raise ValueError(f"Unknown clipboard backend: {name!r} (expected one of {', '.join(BACKENDS)})")


__all__ = [
    "BACKENDS",
    "get_backend",
    "ClipboardBackend",
    "ClipboardError",
    "ClipboardUnavailableError",
    "SystemClipboard",
    "MemoryClipboard",
    "NullClipboard",
]
