"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from thriftdesk.domain.entities import User
from thriftdesk.infrastructure.database import get_db
from thriftdesk.infrastructure.repositories import UserRepository
from thriftdesk.infrastructure.security import decode_access_token, password_signature

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/token")


def _credentials_error(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    username = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(username, str) or not isinstance(signature_claim, str):
        raise _credentials_error()

    user = UserRepository(db).get_by_username(username)
    if user is None:
        raise _credentials_error("User not found")

    if signature_claim != password_signature(user.password, user.is_active):
        raise _credentials_error()

    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def require_manager_or_above(
    current_user: User = Depends(get_current_active_user),
) -> User:
    """Ensure the authenticated user holds a manager role or is an admin."""

    if not current_user.is_manager_or_above():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Manager access required",
        )
    return current_user
