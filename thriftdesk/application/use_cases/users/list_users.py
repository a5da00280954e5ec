"""Use case for listing users."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from thriftdesk.domain.entities import User
from thriftdesk.infrastructure.repositories import UserRepository


def list_users(session: Session, *, skip: int = 0, limit: int = 100) -> Sequence[User]:
    """Return a list of users respecting pagination parameters."""

    return UserRepository(session).list(skip=skip, limit=limit)
