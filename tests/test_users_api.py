"""Integration tests for the user and authentication endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from thriftdesk.application.use_cases.users import (
    LoginOutcome,
    check_credentials,
    update_user,
)

from .conftest import PASSWORD, login


def test_user_crud_and_auth_flow(client: TestClient, admin_headers) -> None:
    """Exercise the full CRUD lifecycle and authentication for users."""

    registration_payload = {
        "username": "casey",
        "email": "casey@example.com",
        "role": "Clothing Manager",
        "password": "Secret123",
        "clothing_alerts": True,
    }

    response = client.post("/api/users/", json=registration_payload, headers=admin_headers)
    assert response.status_code == 201
    created_user = response.json()
    user_id = created_user["id"]
    assert created_user["clothing_alerts"] is True
    assert "password" not in created_user

    token_response = client.post(
        "/api/auth/token",
        data={"username": "CASEY", "password": registration_payload["password"]},
    )
    assert token_response.status_code == 200
    token_body = token_response.json()
    assert token_body["token_type"] == "bearer"
    assert token_body["user"]["username"] == "casey"
    user_headers = {"Authorization": f"Bearer {token_body['access_token']}"}

    me_response = client.get("/api/auth/me", headers=user_headers)
    assert me_response.status_code == 200
    assert me_response.json()["role"] == "Clothing Manager"

    list_response = client.get("/api/users/", headers=admin_headers)
    assert list_response.status_code == 200
    assert any(user["username"] == "casey" for user in list_response.json())

    update_response = client.put(
        f"/api/users/{user_id}",
        json={"role": "Manager", "password": "NewSecret123", "furniture_alerts": True},
        headers=admin_headers,
    )
    assert update_response.status_code == 200
    assert update_response.json()["role"] == "Manager"
    assert update_response.json()["furniture_alerts"] is True

    # A password change revokes tokens issued before it.
    assert client.get("/api/auth/me", headers=user_headers).status_code == 401
    new_token_response = client.post(
        "/api/auth/token",
        data={"username": "casey", "password": "NewSecret123"},
    )
    assert new_token_response.status_code == 200

    delete_response = client.delete(f"/api/users/{user_id}", headers=admin_headers)
    assert delete_response.status_code == 204

    not_found_response = client.get(f"/api/users/{user_id}", headers=admin_headers)
    assert not_found_response.status_code == 404


def test_non_admins_cannot_manage_users(client, employee_headers) -> None:
    assert client.get("/api/users/", headers=employee_headers).status_code == 403
    response = client.post(
        "/api/users/",
        json={"username": "sneaky", "role": "Admin", "password": "Secret123"},
        headers=employee_headers,
    )
    assert response.status_code == 403


def test_duplicate_usernames_are_rejected(client, admin, admin_headers) -> None:
    response = client.post(
        "/api/users/",
        json={"username": "Alice", "role": "Employee", "password": "Secret123"},
        headers=admin_headers,
    )

    assert response.status_code == 409


def test_unknown_role_is_rejected(client, admin_headers) -> None:
    response = client.post(
        "/api/users/",
        json={"username": "riley", "role": "Owner", "password": "Secret123"},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_admin_cannot_delete_themselves(client, admin, admin_headers) -> None:
    response = client.delete(f"/api/users/{admin.id}", headers=admin_headers)

    assert response.status_code == 400


def test_wrong_password_and_inactive_accounts(client, admin_headers, employee) -> None:
    wrong = client.post(
        "/api/auth/token", data={"username": employee.username, "password": "nope"}
    )
    assert wrong.status_code == 401

    deactivate = client.put(
        f"/api/users/{employee.id}", json={"is_active": False}, headers=admin_headers
    )
    assert deactivate.status_code == 200

    inactive = client.post(
        "/api/auth/token", data={"username": employee.username, "password": PASSWORD}
    )
    assert inactive.status_code == 403


def test_users_update_their_own_alerts(client, employee_headers) -> None:
    response = client.put(
        "/api/users/me/alerts",
        json={"clothing_alerts": True, "bricabrac_alerts": True},
        headers=employee_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["furniture_alerts"] is False
    assert body["clothing_alerts"] is True
    assert body["bricabrac_alerts"] is True


def test_health(client) -> None:
    assert client.get("/api/health").json() == {"status": "ok"}


def test_login_helper_matches_token_endpoint(client, manager) -> None:
    headers = login(client, manager.username)

    assert client.get("/api/auth/me", headers=headers).json()["username"] == manager.username


def test_check_credentials_outcomes(db_session, employee) -> None:
    unknown = check_credentials(db_session, username="nobody", password=PASSWORD)
    assert unknown.outcome is LoginOutcome.BAD_CREDENTIALS
    assert unknown.user is None

    accepted = check_credentials(
        db_session, username=f"  {employee.username.upper()} ", password=PASSWORD
    )
    assert accepted.outcome is LoginOutcome.ACCEPTED
    assert accepted.user.id == employee.id

    update_user(db_session, user_id=employee.id, is_active=False)

    wrong_password = check_credentials(
        db_session, username=employee.username, password="nope"
    )
    assert wrong_password.outcome is LoginOutcome.BAD_CREDENTIALS
    deactivated = check_credentials(
        db_session, username=employee.username, password=PASSWORD
    )
    assert deactivated.outcome is LoginOutcome.DEACTIVATED
