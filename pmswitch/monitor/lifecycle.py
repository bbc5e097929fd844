"""
pmswitch.monitor.lifecycle — Start/stop state machine for the watcher.

``ClipboardMonitor`` guarantees that at most one ``ClipboardWatcher`` is
alive at a time.  Starting while running tears the old watcher down
first (idempotent restart); stopping while stopped is a no-op.

Two locks keep the critical sections short:

- ``_control_lock`` serializes whole start/stop transitions.
- ``_state_lock`` guards the running flag and the watcher handle and is
  never held across clipboard I/O, so ``is_running()`` never waits on a
  watch cycle.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable

from pmswitch.clipboard.base import ClipboardBackend
from pmswitch.monitor.events import EventBus
from pmswitch.monitor.watcher import DEFAULT_INTERVAL, ClipboardWatcher, TargetGetter

logger = logging.getLogger(__name__)


class MonitorState(str, Enum):
    """Whether clipboard monitoring is active."""

    STOPPED = "stopped"
    RUNNING = "running"


class ClipboardMonitor:
    """Owns the (single) background watch task.

    Parameters
    ----------
    backend_factory : Callable[[], ClipboardBackend]
        Called on every ``start()`` to attach to the clipboard.  May raise
        ``ClipboardUnavailableError``, which propagates to the caller.
    events : EventBus | None
        Bus the watcher publishes rewrites on.
    interval : float
        Poll interval handed to each watcher.
    """

    def __init__(
        self,
        backend_factory: Callable[[], ClipboardBackend],
        events: EventBus | None = None,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self.backend_factory = backend_factory
        self.events = events
        self.interval = interval
        self._control_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._state = MonitorState.STOPPED
        self._watcher: ClipboardWatcher | None = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> MonitorState:
        with self._state_lock:
            return self._state

    def is_running(self) -> bool:
        """Return True while monitoring is on."""
        return self.state is MonitorState.RUNNING

    @property
    def watcher(self) -> ClipboardWatcher | None:
        """The live watch task, if any."""
        with self._state_lock:
            return self._watcher

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, target_getter: TargetGetter) -> ClipboardWatcher:
        """Start monitoring, replacing any watcher that is already running.

        Parameters
        ----------
        target_getter : Callable[[], PackageManager | None]
            Snapshot of the preferred manager, read on every change.

        Returns
        -------
        ClipboardWatcher
            The newly started watch task.

        Raises
        ------
        ClipboardUnavailableError
            If the clipboard backend cannot be attached.  The monitor is
            left stopped.
        """
        with self._control_lock:
            self._stop_locked()

            backend = self.backend_factory()
            watcher = ClipboardWatcher(
                backend,
                target_getter,
                events=self.events,
                interval=self.interval,
                enabled=self.is_running,
            )

            with self._state_lock:
                self._watcher = watcher
                self._state = MonitorState.RUNNING

            watcher.start()
            logger.info("Clipboard monitoring started")
            return watcher

    def stop(self) -> None:
        """Stop monitoring.  Safe to call when already stopped."""
        with self._control_lock:
            self._stop_locked()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _stop_locked(self) -> None:
        """Clear the flag and signal the current watcher (control lock held)."""
        with self._state_lock:
            watcher, self._watcher = self._watcher, None
            was_running = self._state is MonitorState.RUNNING
            self._state = MonitorState.STOPPED

        if watcher is not None:
            watcher.stop()
        if was_running:
            logger.info("Clipboard monitoring stopped")
