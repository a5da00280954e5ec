"""Common validation helpers for user use cases."""

from thriftdesk.domain.entities import ROLES
from thriftdesk.domain.exceptions import ValidationError

MIN_PASSWORD_LENGTH = 8


def ensure_valid_username(username: str | None) -> str:
    """Return the trimmed username or raise :class:`ValidationError`."""

    normalized = (username or "").strip()
    if not normalized:
        raise ValidationError("Username is required")
    return normalized


def ensure_valid_role(role: str | None) -> str:
    if role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")
    return role


def ensure_valid_password(password: str | None) -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    return password
