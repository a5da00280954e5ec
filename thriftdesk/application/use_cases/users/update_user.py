"""Use cases for updating user information."""

from dataclasses import replace

from sqlalchemy.orm import Session

from thriftdesk.domain.entities import User
from thriftdesk.domain.exceptions import ConflictError, NotFoundError
from thriftdesk.infrastructure.repositories import UserRepository
from thriftdesk.infrastructure.security import get_password_hash

from .validators import ensure_valid_password, ensure_valid_role, ensure_valid_username


def update_user(
    session: Session,
    *,
    user_id: int,
    username: str | None = None,
    email: str | None = None,
    role: str | None = None,
    is_active: bool | None = None,
    password: str | None = None,
    furniture_alerts: bool | None = None,
    clothing_alerts: bool | None = None,
    bricabrac_alerts: bool | None = None,
) -> User:
    """Update the provided user with the new values."""

    repository = UserRepository(session)
    current_user = repository.get(user_id)
    if current_user is None:
        raise NotFoundError("User not found")

    new_username = current_user.username
    if username is not None:
        new_username = ensure_valid_username(username)
        existing = repository.get_by_username(new_username)
        if existing and existing.id != user_id:
            raise ConflictError("Username is already taken")

    updated_user = replace(
        current_user,
        username=new_username,
        email=(email.strip() or None) if email is not None else current_user.email,
        role=ensure_valid_role(role) if role is not None else current_user.role,
        is_active=is_active if is_active is not None else current_user.is_active,
    )
    updated_user = _apply_alert_flags(
        updated_user,
        furniture_alerts=furniture_alerts,
        clothing_alerts=clothing_alerts,
        bricabrac_alerts=bricabrac_alerts,
    )

    if password:
        updated_user = replace(
            updated_user, password=get_password_hash(ensure_valid_password(password))
        )

    return repository.update(updated_user)


def update_alert_preferences(
    session: Session,
    *,
    user: User,
    furniture_alerts: bool | None = None,
    clothing_alerts: bool | None = None,
    bricabrac_alerts: bool | None = None,
) -> User:
    """Change which exclusive item categories ``user`` gets alerts for."""

    updated_user = _apply_alert_flags(
        user,
        furniture_alerts=furniture_alerts,
        clothing_alerts=clothing_alerts,
        bricabrac_alerts=bricabrac_alerts,
    )
    return UserRepository(session).update(updated_user)


def _apply_alert_flags(
    user: User,
    *,
    furniture_alerts: bool | None,
    clothing_alerts: bool | None,
    bricabrac_alerts: bool | None,
) -> User:
    return replace(
        user,
        furniture_alerts=(
            furniture_alerts if furniture_alerts is not None else user.furniture_alerts
        ),
        clothing_alerts=(
            clothing_alerts if clothing_alerts is not None else user.clothing_alerts
        ),
        bricabrac_alerts=(
            bricabrac_alerts if bricabrac_alerts is not None else user.bricabrac_alerts
        ),
    )
