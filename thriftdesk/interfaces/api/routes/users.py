"""Routes to manage staff accounts and alert subscriptions."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from thriftdesk.application.use_cases.users import (
    create_user as create_user_uc,
    delete_user as delete_user_uc,
    get_user as get_user_uc,
    list_users as list_users_uc,
    update_alert_preferences as update_alert_preferences_uc,
    update_user as update_user_uc,
)
from thriftdesk.domain.entities import User
from thriftdesk.infrastructure.database import get_db
from thriftdesk.interfaces.api.dependencies import get_current_active_user, require_admin
from thriftdesk.interfaces.api.schemas import (
    AlertPreferencesUpdate,
    UserCreate,
    UserRead,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Create a staff account."""

    user = create_user_uc(db, **user_in.model_dump())
    logger.info("User %s created by %s", user.username, current_user.username)
    return _to_read_model(user)


@router.put("/me/alerts", response_model=UserRead)
def update_my_alerts(
    preferences: AlertPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Choose which exclusive item categories raise alerts for the current user."""

    user = update_alert_preferences_uc(
        db, user=current_user, **preferences.model_dump(exclude_unset=True)
    )
    return _to_read_model(user)


@router.get("/", response_model=list[UserRead])
def list_users(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    users = list_users_uc(db, skip=skip, limit=limit)
    return [_to_read_model(user) for user in users]


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return _to_read_model(get_user_uc(db, user_id))


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Update role, contact details, alert flags, activation or password."""

    user = update_user_uc(db, user_id=user_id, **user_in.model_dump(exclude_unset=True))
    return _to_read_model(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    delete_user_uc(db, user_id, acting_user_id=current_user.id)
    logger.info("User %s deleted by %s", user_id, current_user.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
