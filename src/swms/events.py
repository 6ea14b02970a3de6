"""Fire-and-forget fan-out of state-change events to live listeners.

Delivery is best effort and at most once per process: there are no
acknowledgements, retries or backlog. Clients that reconnect must re-fetch state
through the REST endpoints.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)

BIN_UPDATE = "bin:update"
BIN_ALERT = "bin:alert"
COMPLAINT_NEW = "complaint:new"
COMPLAINT_UPDATE = "complaint:update"

Listener = Callable[[dict], None]


class EventBroadcaster:
    """Registry of listeners that each receive every emitted event."""

    def __init__(self) -> None:
        self._listeners: dict[int, Listener] = {}
        self._next_id = 0
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> int:
        with self._lock:
            token = self._next_id
            self._next_id += 1
            self._listeners[token] = listener
        return token

    def unsubscribe(self, token: int) -> None:
        with self._lock:
            self._listeners.pop(token, None)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self, event: str, payload: dict[str, Any]) -> None:
        """Deliver ``{"event": event, "data": payload}`` to every listener.

        A listener that raises is dropped; the error never reaches the caller.
        """
        message = {"event": event, "data": payload}
        with self._lock:
            listeners = list(self._listeners.items())
        for token, listener in listeners:
            try:
                listener(message)
            except Exception as e:
                logger.warning(f"Dropping event listener {token} after delivery failure: {e}")
                self.unsubscribe(token)

    def queue_listener(self, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue) -> Listener:
        """Listener that hands messages to an asyncio queue owned by ``loop``.

        Route handlers run in a worker thread, so the hand-off goes through
        ``call_soon_threadsafe``.
        """

        def _deliver(message: dict) -> None:
            if loop.is_closed():
                raise RuntimeError("event loop closed")
            loop.call_soon_threadsafe(queue.put_nowait, message)

        return _deliver


broadcaster = EventBroadcaster()


def emit(event: str, payload: dict[str, Any]) -> None:
    broadcaster.emit(event, payload)
