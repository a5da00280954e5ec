"""Persistence layer for staff accounts."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from thriftdesk.domain.entities import User
from thriftdesk.infrastructure.models import UserModel
from thriftdesk.utils import storage_now, to_storage_time


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, skip: int = 0, limit: int = 100) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.deleted_at.is_(None))
            .order_by(UserModel.username.asc())
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: int) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.deleted_at.is_(None))
            .filter(func.lower(UserModel.username) == username.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self._get_model(id=user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: int) -> None:
        model = self._get_model(id=user_id)
        if not model:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)

        # Usernames may be reused once the previous holder is deleted.
        model.deleted_at = storage_now()
        model.is_active = False
        self.session.add(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            password=model.password_hash,
            role=model.role,
            email=model.email,
            furniture_alerts=bool(model.furniture_alerts),
            clothing_alerts=bool(model.clothing_alerts),
            bricabrac_alerts=bool(model.bricabrac_alerts),
            is_active=bool(model.is_active),
            created_at=model.created_at,
            deleted_at=model.deleted_at,
        )

    def _get_model(self, include_deleted: bool = False, **filters) -> UserModel | None:
        query = self.session.query(UserModel)
        if not include_deleted:
            query = query.filter(UserModel.deleted_at.is_(None))
        return query.filter_by(**filters).first()

    @staticmethod
    def _apply_entity_to_model(
        model: UserModel, user: User, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields:
            model.created_at = to_storage_time(user.created_at) or storage_now()
        model.username = user.username
        model.password_hash = user.password
        model.role = user.role
        model.email = user.email
        model.furniture_alerts = user.furniture_alerts
        model.clothing_alerts = user.clothing_alerts
        model.bricabrac_alerts = user.bricabrac_alerts
        model.is_active = user.is_active
        model.deleted_at = user.deleted_at


__all__ = ["UserRepository"]
