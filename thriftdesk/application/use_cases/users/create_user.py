"""Use case for creating users."""

from sqlalchemy.orm import Session

from thriftdesk.domain.entities import User
from thriftdesk.domain.exceptions import ConflictError
from thriftdesk.infrastructure.repositories import UserRepository
from thriftdesk.infrastructure.security import get_password_hash

from .validators import ensure_valid_password, ensure_valid_role, ensure_valid_username


def create_user(
    session: Session,
    *,
    username: str,
    password: str,
    role: str,
    email: str | None = None,
    furniture_alerts: bool = False,
    clothing_alerts: bool = False,
    bricabrac_alerts: bool = False,
) -> User:
    """Create a new user ensuring unique usernames."""

    repository = UserRepository(session)
    username = ensure_valid_username(username)

    if repository.get_by_username(username):
        raise ConflictError("Username is already taken")

    user = User(
        id=None,
        username=username,
        password=get_password_hash(ensure_valid_password(password)),
        role=ensure_valid_role(role),
        email=(email or "").strip() or None,
        furniture_alerts=furniture_alerts,
        clothing_alerts=clothing_alerts,
        bricabrac_alerts=bricabrac_alerts,
        is_active=True,
        created_at=None,
        deleted_at=None,
    )

    return repository.create(user)
