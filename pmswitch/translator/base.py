"""
pmswitch.translator.base — Shared data types for command translation.

Defines the closed ``PackageManager`` set, the ``TranslationEvent`` that
is emitted after every clipboard rewrite, and the whitespace tokenizer
used by the subcommand rules.  No translation logic lives here.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum


# ---------------------------------------------------------------------------
# Package managers
# ---------------------------------------------------------------------------


class PackageManager(str, Enum):
    """The package managers pmswitch knows how to translate between."""

    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"

    @classmethod
    def parse(cls, name: str | PackageManager | None, strict: bool = True) -> PackageManager | None:
        """Return the member named *name*, or ``None`` if it is not one of ours.

        A stored preference must match a member value exactly (``"PNPM"``
        is not ``pnpm``).  Pass ``strict=False`` for typed user input such
        as ``--to " PNPM"``: case and surrounding whitespace are ignored.
        An unknown name is not an error; it simply matches nothing.
        """
        if isinstance(name, cls):
            return name
        if not name:
            return None
        if not strict:
            name = name.strip().lower()
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def runner(self) -> str:
        """The manager's native "run without installing" prefix (with trailing space)."""
        return _RUNNERS[self]


_RUNNERS: dict[PackageManager, str] = {
    PackageManager.NPM: "npx ",
    PackageManager.PNPM: "pnpx ",
    PackageManager.YARN: "yarn dlx ",
    PackageManager.BUN: "bunx ",
}


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TranslationEvent:
    """A single successful clipboard rewrite.

    Attributes
    ----------
    original : str
        The text that was on the clipboard.
    translated : str
        The text pmswitch wrote back in its place.
    """

    original: str
    translated: str

    def to_dict(self) -> dict[str, str]:
        """Return the ``{original, translated}`` payload sent to listeners."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Tokenizing
# ---------------------------------------------------------------------------


def split_command(command: str) -> tuple[str, str | None, str]:
    """Split *command* into ``(verb, subcommand, args)``.

    Splitting collapses runs of whitespace, so ``args`` is the remaining
    tokens re-joined by single spaces.  A command with a single token has
    no subcommand and empty args.
    """
    parts = command.split()
    if not parts:
        return "", None, ""
    if len(parts) == 1:
        return parts[0], None, ""
    return parts[0], parts[1], " ".join(parts[2:])
