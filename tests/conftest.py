"""Shared fixtures: a throwaway SQLite database, upload directory and users."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from datetime import timedelta
from decimal import Decimal
from pathlib import Path

import pytest

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="thriftdesk-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_ROOT / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["UPLOAD_DIR"] = str(_TEST_ROOT / "uploads")
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ.pop("AZURE_STORAGE_CONNECTION_STRING", None)
os.environ.pop("AZURE_STORAGE_CONTAINER_NAME", None)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.exc import SQLAlchemyError  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from thriftdesk.application.use_cases.users import create_user  # noqa: E402
from thriftdesk.domain.entities import (  # noqa: E402
    ROLE_ADMIN,
    ROLE_EMPLOYEE,
    ROLE_MANAGER,
    ExclusiveItem,
    User,
)
from thriftdesk.infrastructure import models  # noqa: E402,F401
from thriftdesk.infrastructure.database import Base, SessionLocal, engine  # noqa: E402
from thriftdesk.infrastructure.repositories import ExclusiveItemRepository  # noqa: E402
from thriftdesk.infrastructure.storage import upload_root  # noqa: E402
from thriftdesk.utils import store_today  # noqa: E402

PASSWORD = "Secret123"
GENERIC_ERROR = "Something went wrong. Please try again."


@pytest.fixture(autouse=True)
def reset_database() -> Iterator[None]:
    """Give every test empty tables."""

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> Iterator[TestClient]:
    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


def make_user(session: Session, username: str, role: str, **alerts: bool) -> User:
    return create_user(session, username=username, password=PASSWORD, role=role, **alerts)


def login(client: TestClient, username: str) -> dict[str, str]:
    response = client.post(
        "/api/auth/token", data={"username": username, "password": PASSWORD}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def make_exclusive_item(
    session: Session,
    *,
    category: str = "Furniture",
    week: int = 1,
    days_ago: int = 0,
    price: str = "25.00",
) -> ExclusiveItem:
    """Insert an item that arrived ``days_ago`` days before today."""

    return ExclusiveItemRepository(session).create(
        ExclusiveItem(
            id=None,
            category=category,
            price=Decimal(price),
            date_arrived=store_today() - timedelta(days=days_ago),
            week=week,
            notes=None,
            picture_url=None,
            created_by=None,
            created_at=None,
            updated_at=None,
            deleted_at=None,
        )
    )


@pytest.fixture()
def admin(db_session: Session) -> User:
    return make_user(db_session, "alice", ROLE_ADMIN)


@pytest.fixture()
def manager(db_session: Session) -> User:
    return make_user(db_session, "morgan", ROLE_MANAGER)


@pytest.fixture()
def employee(db_session: Session) -> User:
    return make_user(db_session, "eli", ROLE_EMPLOYEE)


@pytest.fixture()
def admin_headers(client: TestClient, admin: User) -> dict[str, str]:
    return login(client, admin.username)


@pytest.fixture()
def manager_headers(client: TestClient, manager: User) -> dict[str, str]:
    return login(client, manager.username)


@pytest.fixture()
def employee_headers(client: TestClient, employee: User) -> dict[str, str]:
    return login(client, employee.username)


def stored_files(folder: str) -> set[Path]:
    """Return the files currently kept in one upload folder."""

    directory = upload_root() / folder
    if not directory.exists():
        return set()
    return {path for path in directory.iterdir() if path.is_file()}


def database_unavailable(*args, **kwargs):
    """Stand-in for a repository method whose write never reaches the database."""

    raise SQLAlchemyError("database unavailable")
