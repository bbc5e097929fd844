"""
pmswitch.context — The explicitly owned application state.

One ``AppContext`` holds everything that is shared between the caller
(CLI, console) and the background watcher:

- the preferred package manager (a plain string, default ``"npm"``),
- the ``ClipboardMonitor`` and its running flag,
- the ``EventBus`` rewrites are announced on.

The control surface mirrors what a tray/menubar UI would call:
``set_preferred_manager`` / ``get_preferred_manager`` and
``toggle_monitoring`` / ``get_monitoring_state``.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable

from pmswitch.clipboard import ClipboardBackend, get_backend
from pmswitch.monitor.events import EventBus, Listener
from pmswitch.monitor.lifecycle import ClipboardMonitor
from pmswitch.monitor.watcher import DEFAULT_INTERVAL
from pmswitch.translator.base import PackageManager

if TYPE_CHECKING:
    from pmswitch.config import PmSwitchSettings

logger = logging.getLogger(__name__)

DEFAULT_MANAGER = PackageManager.NPM.value


class AppContext:
    """Shared preference + monitor + event bus.

    Parameters
    ----------
    backend_factory : Callable[[], ClipboardBackend]
        How to attach to the clipboard when monitoring starts.
    interval : float
        Watcher poll interval in seconds.
    default_manager : str
        Preference applied by ``initialize()``.
    """

    def __init__(
        self,
        backend_factory: Callable[[], ClipboardBackend] = get_backend,
        interval: float = DEFAULT_INTERVAL,
        default_manager: str = DEFAULT_MANAGER,
    ) -> None:
        self.events = EventBus()
        self.monitor = ClipboardMonitor(backend_factory, events=self.events, interval=interval)
        self.default_manager = default_manager
        self._pref_lock = threading.Lock()
        self._preferred = DEFAULT_MANAGER
        self._init_lock = threading.Lock()
        self._initialized = False

    @classmethod
    def from_settings(cls, settings: PmSwitchSettings) -> AppContext:
        """Build a context from validated settings (backend, interval, preference)."""
        backend_name = settings.monitor.backend
        return cls(
            backend_factory=lambda: get_backend(backend_name),
            interval=settings.monitor.poll_interval,
            default_manager=settings.preferred_manager,
        )

    def initialize(self) -> bool:
        """One-time setup; returns False if it already ran."""
        with self._init_lock:
            if self._initialized:
                return False
            self._initialized = True
        self.set_preferred_manager(self.default_manager)
        logger.debug("Context initialized (preferred manager: %s)", self.default_manager)
        return True

    # ------------------------------------------------------------------
    # Preference
    # ------------------------------------------------------------------

    def set_preferred_manager(self, name: str) -> None:
        """Set the target manager.  Unknown names are stored, not rejected."""
        with self._pref_lock:
            self._preferred = name
        if PackageManager.parse(name) is None:
            logger.warning("Unknown package manager %r: clipboard translation is disabled", name)

    def get_preferred_manager(self) -> str:
        with self._pref_lock:
            return self._preferred

    def current_target(self) -> PackageManager | None:
        """Snapshot of the preference as a ``PackageManager`` (None if unknown)."""
        return PackageManager.parse(self.get_preferred_manager())

    # ------------------------------------------------------------------
    # Monitoring
    # ------------------------------------------------------------------

    def toggle_monitoring(self, enabled: bool) -> None:
        """Turn clipboard monitoring on or off.

        Raises
        ------
        ClipboardUnavailableError
            When enabling and the clipboard backend cannot be attached.
        """
        if enabled:
            self.monitor.start(self.current_target)
        else:
            self.monitor.stop()

    def get_monitoring_state(self) -> bool:
        return self.monitor.is_running()

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Attach a translation listener; returns its unsubscribe function."""
        return self.events.subscribe(listener)

    def shutdown(self) -> None:
        """Stop monitoring and wait briefly for the watcher thread to exit."""
        watcher = self.monitor.watcher
        self.monitor.stop()
        if watcher is not None:
            watcher.join(timeout=max(self.monitor.interval * 2, 1.0))
