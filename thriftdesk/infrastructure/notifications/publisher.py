"""Push newly created urgent notes to every open stream."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from thriftdesk.domain.entities import CommunicationEntry, User
from thriftdesk.utils import to_store_time

from .manager import UrgentConnectionManager, urgent_connection_manager

logger = logging.getLogger(__name__)

URGENT_NOTE_EVENT = "urgent_note"


class UrgentNotePublisher:
    """Serialize urgent entries and schedule their delivery."""

    def __init__(self, manager: UrgentConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task[int]] = set()

    def dispatch(self, entry: CommunicationEntry, author: User) -> None:
        """Schedule ``entry`` to be delivered to every connected client.

        Delivery is best effort and happens after the entry was committed; any
        failure is logged and never reaches the author's request.
        """

        message = {"type": URGENT_NOTE_EVENT, "note": serialize_urgent_note(entry, author)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._deliver_from_worker_thread(message)
        else:
            task = loop.create_task(self._manager.broadcast(message))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    def _deliver_from_worker_thread(self, message: dict[str, Any]) -> None:
        try:
            delivered = from_thread.run(self._manager.broadcast, message)
        except RuntimeError:
            logger.warning(
                "No event loop reachable; urgent note %s was not pushed",
                message["note"]["id"],
            )
        except Exception:
            logger.exception("Urgent note %s broadcast failed", message["note"]["id"])
        else:
            logger.info(
                "Urgent note %s pushed to %d connection(s)",
                message["note"]["id"],
                delivered,
            )


def serialize_urgent_note(entry: CommunicationEntry, author: User) -> dict[str, Any]:
    """Return the stream payload describing ``entry``."""

    created_at = to_store_time(entry.created_at)
    return {
        "id": entry.id,
        "note": entry.note,
        "category": entry.category,
        "username": entry.username or author.username,
        "role": entry.role or author.role,
        "created_at": created_at.isoformat() if created_at else None,
    }


urgent_note_publisher = UrgentNotePublisher(urgent_connection_manager)


def dispatch_urgent_note(entry: CommunicationEntry, author: User) -> None:
    """Public helper that delegates to the shared publisher instance."""

    urgent_note_publisher.dispatch(entry, author)


__all__ = [
    "URGENT_NOTE_EVENT",
    "UrgentNotePublisher",
    "dispatch_urgent_note",
    "serialize_urgent_note",
    "urgent_note_publisher",
]
