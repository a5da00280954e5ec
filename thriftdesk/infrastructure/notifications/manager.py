"""Connection registry for the urgent note stream."""

from __future__ import annotations

import asyncio
import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """Destination for events pushed to one connected client."""

    async def send(self, message: dict[str, Any]) -> None: ...


class QueueSink:
    """Sink backed by an :class:`asyncio.Queue` drained by a streaming response."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    async def send(self, message: dict[str, Any]) -> None:
        await self._queue.put(message)

    async def receive(self) -> dict[str, Any]:
        return await self._queue.get()


@dataclass(frozen=True)
class Subscription:
    """A registered stream: who is listening and where events go."""

    user_id: int
    username: str
    sink: EventSink


class UrgentConnectionManager:
    """Track open client streams and fan events out to all of them.

    Registration, removal and snapshotting happen under one lock so a
    broadcast never observes a half-removed connection. Sends run outside the
    lock on a snapshot. The registry lives in process memory only and starts
    empty on every restart.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._connections: dict[str, Subscription] = {}

    def connect(self, user_id: int, username: str, sink: EventSink) -> str:
        """Register ``sink`` for ``user_id`` and return a new connection id."""

        connection_id = uuid.uuid4().hex
        with self._lock:
            self._connections[connection_id] = Subscription(user_id, username, sink)
        logger.debug("Urgent stream %s opened for user %s", connection_id, user_id)
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        """Forget ``connection_id``; unknown ids are ignored."""

        with self._lock:
            removed = self._connections.pop(connection_id, None)
        if removed is not None:
            logger.debug(
                "Urgent stream %s closed for user %s", connection_id, removed.user_id
            )

    @property
    def connection_count(self) -> int:
        with self._lock:
            return len(self._connections)

    async def broadcast(self, message: dict[str, Any]) -> int:
        """Send ``message`` to every registered sink and return the delivery count.

        A failing sink is logged and dropped; it never stops delivery to the
        remaining connections and never raises to the caller.
        """

        with self._lock:
            snapshot = list(self._connections.items())

        delivered = 0
        for connection_id, subscription in snapshot:
            try:
                await subscription.sink.send(dict(message))
            except Exception:
                logger.warning(
                    "Dropping urgent stream %s for user %s after a failed write",
                    connection_id,
                    subscription.user_id,
                    exc_info=True,
                )
                self.disconnect(connection_id)
            else:
                delivered += 1
        return delivered


urgent_connection_manager = UrgentConnectionManager()


__all__ = [
    "EventSink",
    "QueueSink",
    "Subscription",
    "UrgentConnectionManager",
    "urgent_connection_manager",
]
