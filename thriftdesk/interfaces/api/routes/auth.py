"""Authentication endpoints."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from thriftdesk.application.use_cases.users import LoginOutcome, check_credentials
from thriftdesk.config import get_settings
from thriftdesk.domain.entities import User
from thriftdesk.infrastructure.database import get_db
from thriftdesk.infrastructure.security import create_access_token, password_signature
from thriftdesk.interfaces.api.dependencies import get_current_active_user
from thriftdesk.interfaces.api.schemas import Token, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])
settings = get_settings()
logger = logging.getLogger(__name__)


# The form keeps the field names OAuth2PasswordRequestForm expects.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by username and return a JWT."""

    attempt = check_credentials(
        db, username=form_data.username, password=form_data.password
    )

    if attempt.outcome is LoginOutcome.BAD_CREDENTIALS:
        logger.info("Failed login attempt for %s", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if attempt.outcome is LoginOutcome.DEACTIVATED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = attempt.user
    access_token = create_access_token(
        data={
            "sub": user.username,
            "role": user.role,
            "pwd_sig": password_signature(user.password, user.is_active),
        },
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": UserRead.model_validate(user),
    }


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    """Return the authenticated user."""

    return UserRead.model_validate(current_user)
