"""API tests for the furniture approval workflow."""

from __future__ import annotations

from decimal import Decimal

from fastapi.testclient import TestClient

from thriftdesk.infrastructure.repositories import DiscountItemRepository

from .conftest import GENERIC_ERROR, database_unavailable, stored_files

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def _create(client: TestClient, headers: dict[str, str], price: str = "10.00", **kwargs):
    response = client.post(
        "/api/discount-items/", data={"price": price, "notes": "oak table"}, headers=headers, **kwargs
    )
    assert response.status_code == 201, response.text
    return response.json()["item"]


def test_new_requests_start_pending(client, employee, employee_headers):
    item = _create(client, employee_headers)

    assert item["approval_status"] == "pending"
    assert item["created_by"] == employee.id
    assert item["created_by_username"] == employee.username
    assert item["days_in_discount"] == 0
    assert item["approved_by"] is None


def test_create_requires_price(client, employee_headers):
    response = client.post(
        "/api/discount-items/", data={"notes": "no price"}, headers=employee_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Price is required"


def test_create_with_pictures(client, employee_headers):
    item = _create(
        client,
        employee_headers,
        files=[
            ("pictures", ("front.png", PNG_BYTES, "image/png")),
            ("pictures", ("back.png", PNG_BYTES, "image/png")),
        ],
    )

    assert len(item["picture_urls"]) == 2
    assert all(url.startswith("/uploads/discount/") for url in item["picture_urls"])


def test_approved_items_are_locked(client, admin, admin_headers, employee_headers):
    item = _create(client, employee_headers, price="10.00")

    approval = client.post(
        f"/api/discount-items/{item['id']}/approve",
        json={"approval_note": "Looks good"},
        headers=admin_headers,
    )
    assert approval.status_code == 200
    approved = approval.json()["item"]
    assert approved["approval_status"] == "approved"
    assert approved["approval_note"] == "Looks good"
    assert approved["approved_by"] == admin.id
    assert approved["approved_by_username"] == admin.username
    assert approved["approved_at"] is not None

    edit = client.put(
        f"/api/discount-items/{item['id']}",
        data={"price": "5.00"},
        headers=employee_headers,
    )
    assert edit.status_code == 403
    assert edit.json()["detail"] == "Cannot edit approved items"

    detail = client.get(f"/api/discount-items/{item['id']}", headers=employee_headers)
    assert Decimal(detail.json()["item"]["price"]) == Decimal("10.00")


def test_only_admins_can_approve(client, manager_headers, employee_headers):
    item = _create(client, employee_headers)

    response = client.post(
        f"/api/discount-items/{item['id']}/approve", json={}, headers=manager_headers
    )

    assert response.status_code == 403
    detail = client.get(f"/api/discount-items/{item['id']}", headers=employee_headers)
    assert detail.json()["item"]["approval_status"] == "pending"


def test_approving_twice_is_a_conflict(client, admin_headers, employee_headers):
    item = _create(client, employee_headers)

    first = client.post(f"/api/discount-items/{item['id']}/approve", headers=admin_headers)
    second = client.post(f"/api/discount-items/{item['id']}/approve", headers=admin_headers)

    assert first.status_code == 200
    assert first.json()["item"]["approval_note"] is None
    assert second.status_code == 409


def test_approve_missing_item(client, admin_headers):
    response = client.post("/api/discount-items/999/approve", headers=admin_headers)

    assert response.status_code == 404


def test_pending_items_can_be_edited(client, employee_headers):
    item = _create(client, employee_headers)

    response = client.put(
        f"/api/discount-items/{item['id']}",
        data={"price": "7.5", "notes": "scratched leg"},
        headers=employee_headers,
    )

    assert response.status_code == 200
    updated = response.json()["item"]
    assert Decimal(updated["price"]) == Decimal("7.50")
    assert updated["notes"] == "scratched leg"
    assert updated["approval_status"] == "pending"


def test_listing_puts_pending_first(client, admin_headers, employee_headers):
    approved = _create(client, employee_headers, price="30")
    pending = _create(client, employee_headers, price="20")
    client.post(f"/api/discount-items/{approved['id']}/approve", headers=admin_headers)

    response = client.get("/api/discount-items/", headers=employee_headers)

    assert [item["id"] for item in response.json()["items"]] == [pending["id"], approved["id"]]


def test_approved_items_can_be_deleted(client, admin_headers, employee_headers):
    item = _create(client, employee_headers)
    client.post(f"/api/discount-items/{item['id']}/approve", headers=admin_headers)

    response = client.delete(f"/api/discount-items/{item['id']}", headers=employee_headers)

    assert response.status_code == 200
    assert client.get(f"/api/discount-items/{item['id']}", headers=employee_headers).status_code == 404
    assert client.get("/api/discount-items/", headers=employee_headers).json()["items"] == []


def test_failed_create_removes_stored_pictures(client, employee_headers, monkeypatch):
    before = stored_files("discount")
    monkeypatch.setattr(DiscountItemRepository, "create", database_unavailable)

    response = client.post(
        "/api/discount-items/",
        data={"price": "40"},
        files=[
            ("pictures", ("front.png", PNG_BYTES, "image/png")),
            ("pictures", ("back.png", PNG_BYTES, "image/png")),
        ],
        headers=employee_headers,
    )

    assert response.status_code == 500
    assert response.json()["detail"] == GENERIC_ERROR
    assert stored_files("discount") == before
