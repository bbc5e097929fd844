"""
pmswitch.clipboard.system — The real OS clipboard via ``pyperclip``.

pyperclip picks a copy/paste mechanism per platform (pbcopy, xclip,
xsel, wl-clipboard, the Win32 API).  When none is available every call
raises ``PyperclipException``; we probe once on construction so that
case fails at start time instead of on every poll.

pyperclip decodes the helper's output strictly, so a clipboard holding
non-UTF-8 bytes raises ``UnicodeDecodeError``; a helper that vanishes
mid-session raises ``OSError``.  Both count as a failed read or write.
"""

from __future__ import annotations

import logging

import pyperclip

from pmswitch.clipboard.base import ClipboardError, ClipboardUnavailableError

logger = logging.getLogger(__name__)

# Per-call failures: the clipboard exists but this read/write did not work
_TRANSIENT_ERRORS = (pyperclip.PyperclipException, UnicodeError, OSError)


class SystemClipboard:
    """Clipboard backend backed by the operating system clipboard."""

    def __init__(self) -> None:
        try:
            pyperclip.paste()
        except (pyperclip.PyperclipException, OSError) as exc:
            raise ClipboardUnavailableError(
                f"Clipboard access is not available on this system: {exc}"
            ) from exc
        except UnicodeError as exc:
            # Reachable, just holding undecodable bytes right now
            logger.debug("Initial clipboard contents are not decodable: %s", exc)

    def read_text(self) -> str:
        try:
            return pyperclip.paste() or ""
        except _TRANSIENT_ERRORS as exc:
            raise ClipboardError(f"Clipboard read failed: {exc}") from exc

    def write_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except _TRANSIENT_ERRORS as exc:
            raise ClipboardError(f"Clipboard write failed: {exc}") from exc
