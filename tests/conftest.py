"""Shared fixtures: keep tests away from the real ~/.pmswitch config."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from pmswitch.config import get_settings
from pmswitch.system.detect import get_installed_managers


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the user-level config at an empty temp dir and drop env overrides."""
    for var in ("PMSWITCH_MANAGER", "PMSWITCH_POLL_INTERVAL", "PMSWITCH_BACKEND", "PMSWITCH_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)

    user_home = tmp_path / ".pmswitch"
    with patch("pmswitch.config.USER_CONFIG_PATH", user_home / "config.yaml"), \
            patch("pmswitch.config.USER_ENV_PATH", user_home / ".env"):
        get_settings.cache_clear()
        get_installed_managers.cache_clear()
        yield user_home
    get_settings.cache_clear()
    get_installed_managers.cache_clear()
