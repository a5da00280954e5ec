"""Realtime urgent note delivery for the infrastructure layer."""

from .manager import (
    EventSink,
    QueueSink,
    Subscription,
    UrgentConnectionManager,
    urgent_connection_manager,
)
from .publisher import (
    URGENT_NOTE_EVENT,
    UrgentNotePublisher,
    dispatch_urgent_note,
    serialize_urgent_note,
    urgent_note_publisher,
)

__all__ = [
    "EventSink",
    "QueueSink",
    "Subscription",
    "UrgentConnectionManager",
    "urgent_connection_manager",
    "URGENT_NOTE_EVENT",
    "UrgentNotePublisher",
    "dispatch_urgent_note",
    "serialize_urgent_note",
    "urgent_note_publisher",
]
