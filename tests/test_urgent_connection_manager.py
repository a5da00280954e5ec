"""Unit tests for the urgent note connection registry and publisher."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any

from thriftdesk.domain.entities import CommunicationEntry, User
from thriftdesk.infrastructure.notifications import (
    QueueSink,
    UrgentConnectionManager,
    UrgentNotePublisher,
    serialize_urgent_note,
)


class RecordingSink:
    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def send(self, message: dict[str, Any]) -> None:
        self.messages.append(message)


class BrokenSink:
    async def send(self, message: dict[str, Any]) -> None:
        raise ConnectionResetError("client went away")


def _author() -> User:
    return User(
        id=1,
        username="alice",
        password="hash",
        role="Admin",
        email=None,
        furniture_alerts=False,
        clothing_alerts=False,
        bricabrac_alerts=False,
        is_active=True,
        created_at=None,
        deleted_at=None,
    )


def _entry() -> CommunicationEntry:
    return CommunicationEntry(
        id=7,
        user_id=1,
        note="Power outage",
        category="Urgent",
        pinned=False,
        is_urgent=True,
        created_at=datetime(2024, 3, 1, 9, 30),
    )


def test_broadcast_reaches_every_sink_once():
    manager = UrgentConnectionManager()
    sinks = [RecordingSink(), RecordingSink()]
    for user_id, sink in enumerate(sinks, start=1):
        manager.connect(user_id, f"user{user_id}", sink)

    delivered = asyncio.run(manager.broadcast({"type": "urgent_note", "note": {"id": 1}}))

    assert delivered == 2
    assert [len(sink.messages) for sink in sinks] == [1, 1]


def test_failing_sink_is_dropped_without_affecting_others(caplog):
    manager = UrgentConnectionManager()
    healthy = RecordingSink()
    manager.connect(1, "alice", BrokenSink())
    manager.connect(2, "bob", healthy)

    with caplog.at_level(logging.WARNING):
        delivered = asyncio.run(manager.broadcast({"type": "urgent_note"}))

    assert delivered == 1
    assert healthy.messages == [{"type": "urgent_note"}]
    assert manager.connection_count == 1
    assert "Dropping urgent stream" in caplog.text


def test_disconnect_is_idempotent():
    manager = UrgentConnectionManager()
    sink = RecordingSink()
    connection_id = manager.connect(1, "alice", sink)

    manager.disconnect(connection_id)
    manager.disconnect(connection_id)
    manager.disconnect("unknown")

    assert manager.connection_count == 0
    assert asyncio.run(manager.broadcast({"type": "urgent_note"})) == 0
    assert sink.messages == []


def test_each_connection_gets_its_own_id():
    manager = UrgentConnectionManager()
    first = manager.connect(1, "alice", RecordingSink())
    second = manager.connect(1, "alice", RecordingSink())

    assert first != second
    assert manager.connection_count == 2


def test_queue_sink_hands_messages_to_the_stream():
    async def scenario() -> dict[str, Any]:
        manager = UrgentConnectionManager()
        sink = QueueSink()
        manager.connect(1, "alice", sink)
        await manager.broadcast({"type": "urgent_note", "note": {"id": 3}})
        return await asyncio.wait_for(sink.receive(), timeout=1)

    assert asyncio.run(scenario()) == {"type": "urgent_note", "note": {"id": 3}}


def test_publisher_schedules_broadcast_on_running_loop():
    manager = UrgentConnectionManager()
    sink = RecordingSink()
    manager.connect(2, "bob", sink)
    publisher = UrgentNotePublisher(manager)

    async def scenario() -> None:
        publisher.dispatch(_entry(), _author())
        assert len(publisher._pending) == 1
        await asyncio.sleep(0.01)
        assert not publisher._pending

    asyncio.run(scenario())

    assert len(sink.messages) == 1
    assert sink.messages[0]["type"] == "urgent_note"
    assert sink.messages[0]["note"]["id"] == 7


def test_publisher_without_event_loop_logs_and_returns(caplog):
    manager = UrgentConnectionManager()
    sink = RecordingSink()
    manager.connect(2, "bob", sink)

    with caplog.at_level(logging.WARNING):
        UrgentNotePublisher(manager).dispatch(_entry(), _author())

    assert sink.messages == []
    assert "was not pushed" in caplog.text


def test_serialized_note_falls_back_to_author_details():
    payload = serialize_urgent_note(_entry(), _author())

    assert payload["id"] == 7
    assert payload["note"] == "Power outage"
    assert payload["category"] == "Urgent"
    assert payload["username"] == "alice"
    assert payload["role"] == "Admin"
    assert payload["created_at"].startswith("2024-03-01T09:30:00")
