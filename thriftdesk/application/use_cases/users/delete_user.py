"""Use case for deleting a user."""

from sqlalchemy.orm import Session

from thriftdesk.domain.exceptions import NotFoundError, ValidationError
from thriftdesk.infrastructure.repositories import UserRepository


def delete_user(session: Session, user_id: int, *, acting_user_id: int | None = None) -> None:
    """Delete the specified user from the system."""

    if acting_user_id is not None and acting_user_id == user_id:
        raise ValidationError("You cannot delete your own account")

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    repository.delete(user_id)
