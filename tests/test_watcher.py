"""Tests for pmswitch.monitor.watcher — one observe/translate/write-back cycle."""

from __future__ import annotations

import time
from unittest.mock import MagicMock

import pytest

from pmswitch.clipboard import ClipboardBackend, ClipboardError, MemoryClipboard
from pmswitch.monitor.events import EventBus
from pmswitch.monitor.watcher import ClipboardWatcher
from pmswitch.translator import PackageManager, TranslationEvent


def _pnpm() -> PackageManager:
    return PackageManager.PNPM


def _make_watcher(clip: ClipboardBackend, events: EventBus | None = None) -> ClipboardWatcher:
    return ClipboardWatcher(clip, _pnpm, events=events, interval=0.01)


class _FlakyClipboard(MemoryClipboard):
    """Reads blow up with a non-clipboard error while ``broken`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.broken = False

    def read_text(self) -> str:
        if self.broken:
            raise ValueError("garbled clipboard")
        return super().read_text()


class TestPollOnce:
    def test_rewrites_new_command_and_emits(self) -> None:
        clip = MemoryClipboard()
        bus = EventBus()
        seen: list[TranslationEvent] = []
        bus.subscribe(seen.append)
        watcher = _make_watcher(clip, bus)

        clip.write_text("npm install react")
        event = watcher.poll_once()

        assert event == TranslationEvent("npm install react", "pnpm add react")
        assert clip.read_text() == "pnpm add react"
        assert seen == [event]

    def test_existing_content_is_not_rewritten(self) -> None:
        clip = MemoryClipboard("npm install react")
        watcher = _make_watcher(clip)
        assert watcher.poll_once() is None
        assert clip.read_text() == "npm install react"

    def test_unchanged_content_only_triggers_once(self) -> None:
        clip = MemoryClipboard()
        watcher = _make_watcher(clip)
        clip.write_text("npm i lodash")
        assert watcher.poll_once() is not None
        assert watcher.poll_once() is None
        assert watcher.poll_once() is None
        assert clip.writes == 2  # the copy plus our single rewrite

    def test_own_write_does_not_retrigger(self) -> None:
        clip = MemoryClipboard()
        watcher = _make_watcher(clip)
        clip.write_text("yarn build")
        watcher.poll_once()
        assert watcher.last_observed == "pnpm run build"
        assert watcher.poll_once() is None

    def test_empty_clipboard_is_ignored(self) -> None:
        clip = MemoryClipboard("npm i x")
        watcher = _make_watcher(clip)
        clip.write_text("")
        assert watcher.poll_once() is None
        assert watcher.last_observed == "npm i x"

    def test_non_command_updates_last_observed(self) -> None:
        clip = MemoryClipboard()
        watcher = _make_watcher(clip)
        clip.write_text("hello world")
        assert watcher.poll_once() is None
        assert watcher.last_observed == "hello world"

    def test_recopying_original_after_rewrite_translates_again(self) -> None:
        clip = MemoryClipboard()
        watcher = _make_watcher(clip)
        clip.write_text("npm i react")
        assert watcher.poll_once() is not None
        clip.write_text("npm i react")
        assert watcher.poll_once() is not None

    def test_target_read_per_change(self) -> None:
        clip = MemoryClipboard()
        target = {"pm": PackageManager.BUN}
        watcher = ClipboardWatcher(clip, lambda: target["pm"], interval=0.01)
        clip.write_text("npm i react")
        assert watcher.poll_once().translated == "bun add react"

        target["pm"] = PackageManager.YARN
        clip.write_text("npm i vue")
        assert watcher.poll_once().translated == "yarn add vue"

    def test_unknown_target_disables_translation(self) -> None:
        clip = MemoryClipboard()
        watcher = ClipboardWatcher(clip, lambda: None, interval=0.01)
        clip.write_text("npm i react")
        assert watcher.poll_once() is None
        assert clip.read_text() == "npm i react"


class TestTransientFailures:
    def test_read_failure_skips_cycle(self) -> None:
        clip = MagicMock(spec=ClipboardBackend)
        clip.read_text.side_effect = ["", ClipboardError("busy"), "npm i react"]
        watcher = _make_watcher(clip)

        assert watcher.poll_once() is None
        event = watcher.poll_once()
        assert event is not None and event.translated == "pnpm add react"

    def test_write_failure_retries_next_cycle(self) -> None:
        clip = MagicMock(spec=ClipboardBackend)
        clip.read_text.side_effect = ["", "npm i react", "npm i react"]
        clip.write_text.side_effect = [ClipboardError("locked"), None]
        bus = EventBus()
        seen: list[TranslationEvent] = []
        bus.subscribe(seen.append)
        watcher = _make_watcher(clip, bus)

        assert watcher.poll_once() is None
        assert watcher.last_observed == ""
        assert seen == []

        assert watcher.poll_once() is not None
        assert len(seen) == 1

    def test_seed_failure_starts_empty(self) -> None:
        clip = MagicMock(spec=ClipboardBackend)
        clip.read_text.side_effect = ClipboardError("busy")
        assert _make_watcher(clip).last_observed == ""

    def test_unexpected_seed_failure_starts_empty(self) -> None:
        clip = MagicMock(spec=ClipboardBackend)
        clip.read_text.side_effect = RuntimeError("backend bug")
        assert _make_watcher(clip).last_observed == ""

    def test_listener_failure_does_not_undo_rewrite(self) -> None:
        clip = MemoryClipboard()
        bus = EventBus()
        bus.subscribe(MagicMock(side_effect=RuntimeError("ui gone")))
        watcher = _make_watcher(clip, bus)
        clip.write_text("npm i react")
        assert watcher.poll_once() is not None
        assert clip.read_text() == "pnpm add react"


class TestWatcherThread:
    def test_thread_rewrites_and_stops(self) -> None:
        clip = MemoryClipboard()
        watcher = _make_watcher(clip)
        watcher.start()
        try:
            clip.write_text("npx cowsay hi")
            deadline = time.monotonic() + 2.0
            while clip.read_text() != "pnpx cowsay hi" and time.monotonic() < deadline:
                time.sleep(0.01)
            assert clip.read_text() == "pnpx cowsay hi"
        finally:
            watcher.stop()
            watcher.join(timeout=2.0)
        assert not watcher.is_alive()
        assert watcher.stopped

    def test_disabled_flag_ends_thread(self) -> None:
        watcher = ClipboardWatcher(MemoryClipboard(), _pnpm, interval=0.01, enabled=lambda: False)
        watcher.start()
        watcher.join(timeout=2.0)
        assert not watcher.is_alive()

    def test_cannot_start_twice(self) -> None:
        watcher = _make_watcher(MemoryClipboard())
        watcher.start()
        try:
            with pytest.raises(RuntimeError):
                watcher.start()
        finally:
            watcher.stop()
            watcher.join(timeout=2.0)

    def test_unexpected_backend_error_does_not_kill_thread(self) -> None:
        clip = _FlakyClipboard()
        watcher = _make_watcher(clip)
        watcher.start()
        try:
            clip.broken = True
            time.sleep(0.05)
            assert watcher.is_alive()

            clip.broken = False
            clip.write_text("npm i react")
            deadline = time.monotonic() + 2.0
            while clip.read_text() != "pnpm add react" and time.monotonic() < deadline:
                time.sleep(0.01)
            assert clip.read_text() == "pnpm add react"
        finally:
            watcher.stop()
            watcher.join(timeout=2.0)
