"""
pmswitch.monitor.watcher — The background clipboard polling task.

One ``ClipboardWatcher`` is one watch task: a daemon thread that, every
``interval`` seconds,

1.  exits if its stop event is set (or the monitor was switched off),
2.  reads the clipboard,
3.  skips empty text and text equal to the last observation,
4.  translates new text for the current target and, if that produces a
    rewrite, writes it back and emits a ``TranslationEvent``,
5.  remembers what it saw.

Stopping is cooperative and only checked at the top of a cycle: a
rewrite already in progress finishes, the next one never starts.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from pmswitch.clipboard.base import ClipboardBackend, ClipboardError
from pmswitch.monitor.events import EventBus
from pmswitch.translator.base import PackageManager, TranslationEvent
from pmswitch.translator.engine import translate

logger = logging.getLogger(__name__)

TargetGetter = Callable[[], Optional[PackageManager]]

DEFAULT_INTERVAL = 0.5


class ClipboardWatcher:
    """Polls a clipboard backend and rewrites package-manager commands.

    Parameters
    ----------
    backend : ClipboardBackend
        Where to read and write text.
    target_getter : Callable[[], PackageManager | None]
        Returns a snapshot of the preferred manager; called once per change.
        ``None`` disables translation for that cycle.
    events : EventBus | None
        Where rewrites are published.  ``None`` drops them.
    interval : float
        Seconds to wait between polls.
    enabled : Callable[[], bool] | None
        The owning monitor's on/off flag, checked at the top of every cycle.
    """

    def __init__(
        self,
        backend: ClipboardBackend,
        target_getter: TargetGetter,
        events: EventBus | None = None,
        interval: float = DEFAULT_INTERVAL,
        enabled: Callable[[], bool] | None = None,
    ) -> None:
        self.backend = backend
        self.target_getter = target_getter
        self.events = events
        self.interval = interval
        self._enabled = enabled or (lambda: True)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.last_observed = self._seed()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Spawn the watch thread.  A watcher can only be started once."""
        if self._thread is not None:
            raise RuntimeError("ClipboardWatcher already started")
        self._thread = threading.Thread(
            target=self._run, name="pmswitch-clipboard-watcher", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Ask the thread to exit before its next cycle.  Does not wait."""
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the thread to finish (tests and shutdown only)."""
        if self._thread is not None:
            self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    # ------------------------------------------------------------------
    # One cycle
    # ------------------------------------------------------------------

    def poll_once(self) -> TranslationEvent | None:
        """Run a single observe → translate → write-back cycle.

        Returns
        -------
        TranslationEvent | None
            The emitted event if the clipboard was rewritten.
        """
        try:
            current = self.backend.read_text()
        except ClipboardError as exc:
            logger.warning("Skipping cycle, clipboard read failed: %s", exc)
            return None

        if not current or current == self.last_observed:
            return None

        target = self.target_getter()
        translated = translate(current, target) if target is not None else None
        if translated is None:
            self.last_observed = current
            return None

        try:
            self.backend.write_text(translated)
        except ClipboardError as exc:
            logger.warning("Skipping cycle, clipboard write failed: %s", exc)
            return None

        # Our own write must not look like a fresh copy on the next read
        self.last_observed = translated
        event = TranslationEvent(original=current, translated=translated)
        logger.info("Translated %r -> %r", current, translated)
        if self.events is not None:
            self.events.emit(event)
        return event

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _seed(self) -> str:
        """Read what is on the clipboard now; pre-existing text is not rewritten."""
        try:
            return self.backend.read_text()
        except ClipboardError as exc:
            logger.debug("Could not read initial clipboard contents: %s", exc)
        except Exception:
            logger.warning("Clipboard backend failed on the initial read", exc_info=True)
        return ""

    def _should_continue(self) -> bool:
        return not self._stop_event.is_set() and self._enabled()

    def _run(self) -> None:
        logger.debug("Clipboard watcher started (interval=%.2fs)", self.interval)
        while self._should_continue():
            try:
                self.poll_once()
            except Exception:
                # The thread must outlive a misbehaving backend while the monitor is on
                logger.exception("Clipboard watch cycle failed; retrying next cycle")
            self._stop_event.wait(self.interval)
        logger.debug("Clipboard watcher exited")
