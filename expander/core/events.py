"""Named notification channels with pub/sub semantics."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Hashable

logger = logging.getLogger(__name__)

Listener = Callable[..., None]


class EventEmitter:
    """Simple pub/sub emitter keyed by channel name.

    Listeners are notified in registration order. A listener is stored
    at most once per channel. Subscription changes are guarded by a lock
    because emits may arrive from a transport worker thread.
    """

    def __init__(self) -> None:
        self._channels: dict[Hashable, list[Listener]] = {}
        self._lock = threading.Lock()

    def on(self, channel: Hashable, listener: Listener) -> None:
        """Subscribe a listener to a channel."""
        with self._lock:
            listeners = self._channels.setdefault(channel, [])
            if listener not in listeners:
                listeners.append(listener)

    def off(self, channel: Hashable, listener: Listener) -> None:
        """Unsubscribe a listener from a channel."""
        with self._lock:
            listeners = self._channels.get(channel)
            if listeners and listener in listeners:
                listeners.remove(listener)
                if not listeners:
                    del self._channels[channel]

    def clear(self, channel: Hashable) -> None:
        """Drop every listener of a channel."""
        with self._lock:
            self._channels.pop(channel, None)

    def listeners(self, channel: Hashable) -> list[Listener]:
        """Return a copy of a channel's listeners."""
        with self._lock:
            return list(self._channels.get(channel, ()))

    def emit(self, channel: Hashable, *args: Any) -> None:
        """Notify every current listener of a channel."""
        self.notify(self.listeners(channel), *args)

    @staticmethod
    def notify(listeners: list[Listener], *args: Any) -> None:
        """Call listeners in order.

        A failing listener is logged and does not prevent the rest from
        being notified.
        """
        for listener in listeners:
            try:
                listener(*args)
            except Exception:
                logger.exception(f"Listener {listener!r} raised during notification")
