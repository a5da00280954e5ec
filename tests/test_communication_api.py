"""API tests for the communication log, read receipts and urgent notes."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from thriftdesk.application.use_cases.communication import mark_all_read
from thriftdesk.infrastructure.database import SessionLocal
from thriftdesk.infrastructure.models import (
    CommunicationReadModel,
    UrgentNoteDismissalModel,
)
from thriftdesk.infrastructure.notifications import urgent_connection_manager
from thriftdesk.infrastructure.repositories import CommunicationRepository
from thriftdesk.interfaces.api.routes.communication import format_sse_event

from .conftest import GENERIC_ERROR, database_unavailable, stored_files


class RecordingSink:
    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def send(self, message: dict[str, Any]) -> None:
        self.messages.append(message)


@pytest.fixture()
def connect_sink() -> Iterator:
    """Register recording sinks on the shared registry and remove them afterwards."""

    connection_ids: list[str] = []

    def _connect(user) -> RecordingSink:
        sink = RecordingSink()
        connection_ids.append(
            urgent_connection_manager.connect(user.id, user.username, sink)
        )
        return sink

    yield _connect
    for connection_id in connection_ids:
        urgent_connection_manager.disconnect(connection_id)


def _post_entry(
    client: TestClient, headers: dict[str, str], note: str, category: str | None = None, **data
):
    form = {"note": note, **data}
    if category is not None:
        form["category"] = category
    return client.post("/api/communication/", data=form, headers=headers)


def _dismissal_rows(session, entry_id: int, user_id: int) -> int:
    return (
        session.query(UrgentNoteDismissalModel)
        .filter(
            UrgentNoteDismissalModel.note_id == entry_id,
            UrgentNoteDismissalModel.user_id == user_id,
        )
        .count()
    )


def test_employees_cannot_use_the_log(client, employee_headers):
    assert client.get("/api/communication/", headers=employee_headers).status_code == 403


def test_urgent_flag_follows_category(client, admin_headers):
    urgent = _post_entry(client, admin_headers, "Fire drill at 3pm", "Urgent")
    general = _post_entry(client, admin_headers, "Truck arrives Monday")

    assert urgent.status_code == 201
    assert urgent.json()["entry"]["is_urgent"] is True
    assert general.json()["entry"]["category"] == "General"
    assert general.json()["entry"]["is_urgent"] is False

    entry_id = urgent.json()["entry"]["id"]
    demoted = client.put(
        f"/api/communication/{entry_id}",
        data={"note": "Fire drill moved", "category": "Reminder"},
        headers=admin_headers,
    )
    assert demoted.status_code == 200
    assert demoted.json()["entry"]["is_urgent"] is False


def test_note_is_required(client, manager_headers):
    response = _post_entry(client, manager_headers, "   ")

    assert response.status_code == 400
    assert response.json()["detail"] == "Note is required"


def test_only_admins_post_urgent_notes(client, manager_headers, connect_sink, admin):
    sink = connect_sink(admin)

    response = _post_entry(client, manager_headers, "Leak in back room", "Urgent")

    assert response.status_code == 403
    assert client.get("/api/communication/", headers=manager_headers).json()["entries"] == []
    assert sink.messages == []


def test_only_admins_promote_entries_to_urgent(
    client, admin_headers, manager_headers, connect_sink, manager
):
    entry_id = _post_entry(client, manager_headers, "Check the freezer").json()["entry"]["id"]
    sink = connect_sink(manager)

    denied = client.put(
        f"/api/communication/{entry_id}",
        data={"note": "Check the freezer", "category": "Urgent"},
        headers=manager_headers,
    )
    assert denied.status_code == 403

    promoted = client.put(
        f"/api/communication/{entry_id}",
        data={"note": "Check the freezer", "category": "Urgent"},
        headers=admin_headers,
    )
    assert promoted.status_code == 200
    assert promoted.json()["entry"]["is_urgent"] is True
    assert sink.messages == []


def test_urgent_note_reaches_connected_clients_and_catch_up(
    client, admin, manager, admin_headers, manager_headers, connect_sink, db_session
):
    manager_sink = connect_sink(manager)
    admin_sink = connect_sink(admin)

    response = _post_entry(client, admin_headers, "Store closing early", "Urgent")
    assert response.status_code == 201
    entry = response.json()["entry"]

    late_sink = connect_sink(manager)

    for sink in (manager_sink, admin_sink):
        assert len(sink.messages) == 1
        message = sink.messages[0]
        assert message["type"] == "urgent_note"
        assert message["note"]["id"] == entry["id"]
        assert message["note"]["note"] == "Store closing early"
        assert message["note"]["username"] == admin.username
    assert late_sink.messages == []

    catch_up = client.get("/api/communication/urgent/undismissed", headers=manager_headers)
    assert catch_up.status_code == 200
    assert [note["id"] for note in catch_up.json()["urgentNotes"]] == [entry["id"]]


def test_general_entries_are_not_broadcast(client, admin_headers, connect_sink, admin):
    sink = connect_sink(admin)

    _post_entry(client, admin_headers, "New mop in closet")

    assert sink.messages == []


def test_dismissing_is_idempotent(
    client, admin_headers, manager, manager_headers, db_session
):
    entry_id = _post_entry(client, admin_headers, "Alarm code changed", "Urgent").json()[
        "entry"
    ]["id"]

    first = client.post(f"/api/communication/urgent/{entry_id}/dismiss", headers=manager_headers)
    second = client.post(f"/api/communication/urgent/{entry_id}/dismiss", headers=manager_headers)

    assert first.status_code == 200
    assert second.status_code == 200
    assert _dismissal_rows(db_session, entry_id, manager.id) == 1

    catch_up = client.get("/api/communication/urgent/undismissed", headers=manager_headers)
    assert catch_up.json()["urgentNotes"] == []
    unread = client.get("/api/communication/unread-count", headers=manager_headers)
    assert unread.json()["unread_count"] == 0


def test_dismissal_survives_a_concurrent_mark_all_read(
    client, admin_headers, manager, manager_headers, db_session, monkeypatch
):
    entry_id = _post_entry(client, admin_headers, "Back door stays locked", "Urgent").json()[
        "entry"
    ]["id"]
    add_dismissal = CommunicationRepository.add_dismissal

    def add_dismissal_after_mark_all_read(self, *args, **kwargs):
        other_session = SessionLocal()
        try:
            assert mark_all_read(other_session, user=manager) == 1
        finally:
            other_session.close()
        return add_dismissal(self, *args, **kwargs)

    monkeypatch.setattr(
        CommunicationRepository, "add_dismissal", add_dismissal_after_mark_all_read
    )

    response = client.post(
        f"/api/communication/urgent/{entry_id}/dismiss", headers=manager_headers
    )

    assert response.status_code == 200
    assert _dismissal_rows(db_session, entry_id, manager.id) == 1
    receipts = (
        db_session.query(CommunicationReadModel)
        .filter(
            CommunicationReadModel.message_id == entry_id,
            CommunicationReadModel.user_id == manager.id,
        )
        .count()
    )
    assert receipts == 1
    catch_up = client.get("/api/communication/urgent/undismissed", headers=manager_headers)
    assert catch_up.json()["urgentNotes"] == []


def test_failed_create_removes_stored_pictures(client, manager_headers, monkeypatch):
    before = stored_files("communication")
    monkeypatch.setattr(CommunicationRepository, "create", database_unavailable)

    response = client.post(
        "/api/communication/",
        data={"note": "Broken shelf"},
        files=[("pictures", ("shelf.jpg", b"\xff\xd8\xff\xe0", "image/jpeg"))],
        headers=manager_headers,
    )

    assert response.status_code == 500
    assert response.json()["detail"] == GENERIC_ERROR
    assert stored_files("communication") == before
    assert client.get("/api/communication/", headers=manager_headers).json()["entries"] == []


def test_dismissing_requires_an_urgent_note(client, admin_headers, manager_headers):
    entry_id = _post_entry(client, admin_headers, "Just FYI").json()["entry"]["id"]

    not_urgent = client.post(
        f"/api/communication/urgent/{entry_id}/dismiss", headers=manager_headers
    )
    missing = client.post("/api/communication/urgent/999/dismiss", headers=manager_headers)

    assert not_urgent.status_code == 400
    assert missing.status_code == 400


def test_unread_count_skips_own_entries(client, admin_headers, manager_headers):
    _post_entry(client, admin_headers, "First")
    _post_entry(client, admin_headers, "Second")
    _post_entry(client, manager_headers, "Mine")

    manager_unread = client.get("/api/communication/unread-count", headers=manager_headers)
    admin_unread = client.get("/api/communication/unread-count", headers=admin_headers)
    assert manager_unread.json() == {"unread_count": 2}
    assert admin_unread.json() == {"unread_count": 1}

    marked = client.post("/api/communication/mark-all-read", headers=manager_headers)
    assert marked.json() == {"success": True, "marked_read": 2}
    again = client.post("/api/communication/mark-all-read", headers=manager_headers)
    assert again.json()["marked_read"] == 0
    assert (
        client.get("/api/communication/unread-count", headers=manager_headers).json()[
            "unread_count"
        ]
        == 0
    )


def test_pinned_entries_come_first(client, manager_headers):
    pinned_id = _post_entry(client, manager_headers, "Older").json()["entry"]["id"]
    newer_id = _post_entry(client, manager_headers, "Newer").json()["entry"]["id"]

    toggled = client.patch(f"/api/communication/{pinned_id}/pin", headers=manager_headers)
    assert toggled.json() == {"message": "Entry pinned", "pinned": True}

    entries = client.get("/api/communication/", headers=manager_headers).json()["entries"]
    assert [entry["id"] for entry in entries] == [pinned_id, newer_id]

    untoggled = client.patch(f"/api/communication/{pinned_id}/pin", headers=manager_headers)
    assert untoggled.json()["pinned"] is False


def test_delete_entry(client, manager_headers):
    entry_id = _post_entry(client, manager_headers, "Temporary").json()["entry"]["id"]

    assert client.delete(f"/api/communication/{entry_id}", headers=manager_headers).status_code == 200
    assert client.get(f"/api/communication/{entry_id}", headers=manager_headers).status_code == 404
    assert client.patch(f"/api/communication/{entry_id}/pin", headers=manager_headers).status_code == 404


def test_entry_pictures_are_stored(client, manager_headers):
    response = client.post(
        "/api/communication/",
        data={"note": "Broken shelf"},
        files=[("pictures", ("shelf.jpg", b"\xff\xd8\xff\xe0", "image/jpeg"))],
        headers=manager_headers,
    )

    assert response.status_code == 201
    urls = response.json()["entry"]["picture_urls"]
    assert len(urls) == 1
    assert urls[0].startswith("/uploads/communication/")
    assert urls[0].endswith(".jpg")


def test_urgent_stream_requires_a_valid_manager_token(client, employee_headers):
    assert client.get("/api/communication/urgent-stream").status_code == 401
    assert (
        client.get("/api/communication/urgent-stream", params={"token": "garbage"}).status_code
        == 401
    )

    employee_token = employee_headers["Authorization"].removeprefix("Bearer ")
    response = client.get(
        "/api/communication/urgent-stream", params={"token": employee_token}
    )
    assert response.status_code == 403
    assert urgent_connection_manager.connection_count == 0


def test_sse_frames_carry_json_payloads():
    frame = format_sse_event({"type": "connected"})

    assert frame.startswith("data: ")
    assert frame.endswith("\n\n")
    assert json.loads(frame.removeprefix("data: ")) == {"type": "connected"}
