"""Use case for retrieving a single user."""

from sqlalchemy.orm import Session

from thriftdesk.domain.entities import User
from thriftdesk.domain.exceptions import NotFoundError
from thriftdesk.infrastructure.repositories import UserRepository


def get_user(session: Session, user_id: int) -> User:
    """Return the requested user or raise an error if it does not exist."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
