"""Tests for pmswitch.system.detect — installed package manager discovery."""

from __future__ import annotations

import sys
from unittest.mock import patch

from pmswitch.system.detect import InstalledManagers, _probe_tool, get_installed_managers
from pmswitch.translator import PackageManager


class TestProbing:
    """Verify tool detection probes."""

    def test_probe_python_version(self) -> None:
        """Python should always be detected."""
        result = _probe_tool([sys.executable, "--version"])
        assert result is not None
        assert "python" in result.lower()

    def test_probe_nonexistent_tool(self) -> None:
        assert _probe_tool(["this_tool_does_not_exist_12345", "--version"]) is None


class TestInstalledManagers:
    def test_detect_records_found_versions(self) -> None:
        versions = {"pnpm": "9.1.0", "bun": "1.1.0"}
        with patch("pmswitch.system.detect._probe_tool", side_effect=lambda cmd: versions.get(cmd[0])):
            found = InstalledManagers.detect()
        assert found.versions == {PackageManager.PNPM: "9.1.0", PackageManager.BUN: "1.1.0"}
        assert found.missing == [PackageManager.NPM, PackageManager.YARN]

    def test_suggested_default_prefers_declaration_order(self) -> None:
        found = InstalledManagers(versions={PackageManager.BUN: "1.1.0", PackageManager.YARN: "4.0.0"})
        assert found.suggested_default() is PackageManager.YARN

    def test_suggested_default_without_any(self) -> None:
        assert InstalledManagers().suggested_default() is PackageManager.NPM

    def test_detection_is_cached(self) -> None:
        with patch("pmswitch.system.detect._probe_tool", return_value=None) as probe:
            first = get_installed_managers()
            second = get_installed_managers()
        assert first is second
        assert probe.call_count == len(PackageManager)
