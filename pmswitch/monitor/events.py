"""
pmswitch.monitor.events — Fire-and-forget notification of rewrites.

The watcher publishes a ``TranslationEvent`` after every successful
clipboard rewrite.  Listeners (the CLI printer, the console, tests)
subscribe here instead of being called directly, so the watcher never
needs to know whether anyone is listening.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from pmswitch.translator.base import TranslationEvent

logger = logging.getLogger(__name__)

Listener = Callable[[TranslationEvent], None]


class EventBus:
    """A thread-safe list of listeners.

    Delivery is best-effort: an event emitted with no listeners is
    dropped, and a listener that raises is logged and skipped.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Attach *listener* and return a callable that detaches it."""
        with self._lock:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Detach *listener*; unknown listeners are ignored."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def emit(self, event: TranslationEvent) -> int:
        """Deliver *event* to every listener and return how many accepted it."""
        with self._lock:
            listeners = list(self._listeners)

        delivered = 0
        for listener in listeners:
            try:
                listener(event)
                delivered += 1
            except Exception:
                logger.warning("Translation listener %r failed", listener, exc_info=True)
        return delivered

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)
