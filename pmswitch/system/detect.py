"""
pmswitch.system.detect — Find out which package managers are installed.

Runs ``<manager> --version`` for npm, pnpm, yarn and bun.  Used by
``pmswitch info`` and to pick a sensible default in ``pmswitch setup``.

Cached per session — probes run once, not on every call.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass, field
from functools import lru_cache

from pmswitch.translator.base import PackageManager


def _probe_tool(command: list[str]) -> str | None:
    """Run a command and return the first line of output, or None if not found."""
    # Resolve through PATH so Windows .cmd shims (npm.cmd, pnpm.cmd) are found
    executable = shutil.which(command[0])
    if executable is None:
        return None
    try:
        result = subprocess.run(
            [executable, *command[1:]],
            capture_output=True,
            text=True,
            timeout=5,
            stdin=subprocess.DEVNULL,
        )
        output = (result.stdout or result.stderr).strip()
        return output.split("\n")[0].strip() if output else None
    except (FileNotFoundError, subprocess.TimeoutExpired, OSError):
        return None


@dataclass
class InstalledManagers:
    """Versions of the package managers found on this machine."""

    versions: dict[PackageManager, str] = field(default_factory=dict)

    @classmethod
    def detect(cls) -> InstalledManagers:
        """Probe every known manager and return what was found."""
        found = cls()
        for pm in PackageManager:
            version = _probe_tool([pm.value, "--version"])
            if version:
                found.versions[pm] = version
        return found

    @property
    def missing(self) -> list[PackageManager]:
        return [pm for pm in PackageManager if pm not in self.versions]

    def suggested_default(self) -> PackageManager:
        """The first installed manager in declaration order, else npm."""
        for pm in PackageManager:
            if pm in self.versions:
                return pm
        return PackageManager.NPM


@lru_cache(maxsize=1)
def get_installed_managers() -> InstalledManagers:
    """Return a cached detection result (probes run once per session)."""
    return InstalledManagers.detect()
