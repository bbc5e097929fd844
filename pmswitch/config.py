"""
pmswitch.config — Load, validate, and expose configuration.

Config search order (first found wins):
1. ``~/.pmswitch/config.yaml``  (user-level, created by ``pmswitch setup``)
2. ``./config/config.yaml``     (project-level, for development)
3. Built-in Pydantic defaults

Environment variables override everything (``PMSWITCH_MANAGER``,
``PMSWITCH_POLL_INTERVAL``, ``PMSWITCH_BACKEND``, ``PMSWITCH_LOG_LEVEL``).
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

# User-level config directory
PMSWITCH_HOME = Path.home() / ".pmswitch"
USER_CONFIG_PATH = PMSWITCH_HOME / "config.yaml"
USER_ENV_PATH = PMSWITCH_HOME / ".env"

# Project root (dev mode) = directory containing pyproject.toml
PROJECT_ROOT = Path(__file__).resolve().parent.parent
PROJECT_CONFIG_PATH = PROJECT_ROOT / "config" / "config.yaml"
PROJECT_ENV_PATH = PROJECT_ROOT / ".env"


def config_path() -> Path:
    """Return the config file that ``get_settings()`` will read."""
    if USER_CONFIG_PATH.exists():
        return USER_CONFIG_PATH
    return PROJECT_CONFIG_PATH


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------


class MonitorSettings(BaseModel):
    """Clipboard watcher settings."""

    poll_interval: float = Field(default=0.5, gt=0)
    backend: Literal["system", "null", "memory"] = "system"
    notify: bool = True


class LoggingSettings(BaseModel):
    """Log level and optional log file."""

    level: str = "WARNING"
    file: Optional[str] = None  # noqa: UP007


class PmSwitchSettings(BaseModel):
    """Top-level settings object for the entire application."""

    version: int = 1
    # Any string is accepted; only npm / pnpm / yarn / bun translate anything
    preferred_manager: str = "npm"

    monitor: MonitorSettings = Field(default_factory=MonitorSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def _load_yaml(path: Path) -> dict[str, Any]:
    """Read and parse a YAML file.  Returns {} if not found."""
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def needs_setup() -> bool:
    """Return True if neither user-level nor project-level config exists."""
    return not USER_CONFIG_PATH.exists() and not PROJECT_CONFIG_PATH.exists()


@lru_cache(maxsize=1)
def get_settings() -> PmSwitchSettings:
    """Return the validated, cached application settings.

    Loading order (each layer overrides the previous):
    1. Built-in defaults (Pydantic field defaults).
    2. Config YAML (user-level ``~/.pmswitch/`` or project-level ``config/``).
    3. Environment variables / ``.env`` file.
    """

    # 1. Load .env (if present) so env-vars are visible below
    load_dotenv(USER_ENV_PATH if USER_ENV_PATH.exists() else PROJECT_ENV_PATH)

    # 2. Parse YAML
    raw: dict[str, Any] = _load_yaml(config_path())

    # 3. Overlay env-var overrides
    if manager := os.getenv("PMSWITCH_MANAGER"):
        raw["preferred_manager"] = manager
    if interval := os.getenv("PMSWITCH_POLL_INTERVAL"):
        raw.setdefault("monitor", {})["poll_interval"] = interval
    if backend := os.getenv("PMSWITCH_BACKEND"):
        raw.setdefault("monitor", {})["backend"] = backend
    if level := os.getenv("PMSWITCH_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = level

    # 4. Validate through Pydantic
    return PmSwitchSettings(**raw)


def save_settings(settings: PmSwitchSettings, path: Path | None = None) -> Path:
    """Write *settings* as YAML (default: the user-level config) and return the path."""
    path = path or USER_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        yaml.safe_dump(settings.model_dump(), fh, default_flow_style=False, sort_keys=False)
    return path
