"""Persistence helpers for the communication log and its per-user ledgers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import exists, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from thriftdesk.domain.entities import CommunicationEntry
from thriftdesk.infrastructure.database import Base
from thriftdesk.infrastructure.models import (
    CommunicationLogModel,
    CommunicationReadModel,
    UrgentNoteDismissalModel,
)
from thriftdesk.utils import storage_now, to_storage_time

_UPSERT_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


class CommunicationRepository:
    """Provide CRUD operations for communication log entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self) -> Sequence[CommunicationEntry]:
        query = (
            self.session.query(CommunicationLogModel)
            .filter(CommunicationLogModel.deleted_at.is_(None))
            .order_by(
                CommunicationLogModel.pinned.desc(),
                CommunicationLogModel.created_at.desc(),
                CommunicationLogModel.id.desc(),
            )
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, entry_id: int) -> CommunicationEntry | None:
        model = self._get_model(entry_id)
        return self._to_entity(model) if model else None

    def create(self, entry: CommunicationEntry) -> CommunicationEntry:
        model = CommunicationLogModel()
        model.user_id = entry.user_id
        model.created_at = to_storage_time(entry.created_at) or storage_now()
        self._apply_entity_to_model(model, entry)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, entry: CommunicationEntry) -> CommunicationEntry:
        if entry.id is None:
            raise ValueError("Communication entry id is required for updates")
        model = self._get_model(entry.id)
        if model is None:
            msg = f"Communication entry with id {entry.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, entry)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def toggle_pin(self, entry_id: int) -> bool | None:
        """Flip the pinned flag; return the new value or ``None`` if not found."""

        model = self._get_model(entry_id)
        if model is None:
            return None
        model.pinned = not model.pinned
        self.session.add(model)
        self.session.commit()
        return bool(model.pinned)

    def soft_delete(self, entry_id: int) -> bool:
        updated = (
            self.session.query(CommunicationLogModel)
            .filter(
                CommunicationLogModel.id == entry_id,
                CommunicationLogModel.deleted_at.is_(None),
            )
            .update(
                {CommunicationLogModel.deleted_at: storage_now()},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated > 0

    def list_undismissed_urgent(self, user_id: int) -> Sequence[CommunicationEntry]:
        """Return live urgent entries the user has not dismissed, newest first."""

        dismissed = exists().where(
            UrgentNoteDismissalModel.note_id == CommunicationLogModel.id,
            UrgentNoteDismissalModel.user_id == user_id,
        )
        query = (
            self.session.query(CommunicationLogModel)
            .filter(CommunicationLogModel.deleted_at.is_(None))
            .filter(CommunicationLogModel.is_urgent.is_(True))
            .filter(~dismissed)
            .order_by(
                CommunicationLogModel.created_at.desc(),
                CommunicationLogModel.id.desc(),
            )
        )
        return [self._to_entity(model) for model in query.all()]

    def list_unread_ids(self, user_id: int) -> list[int]:
        """Return ids of live entries by other authors without a read receipt."""

        already_read = exists().where(
            CommunicationReadModel.message_id == CommunicationLogModel.id,
            CommunicationReadModel.user_id == user_id,
        )
        statement = (
            select(CommunicationLogModel.id)
            .where(CommunicationLogModel.deleted_at.is_(None))
            .where(
                (CommunicationLogModel.user_id.is_(None))
                | (CommunicationLogModel.user_id != user_id)
            )
            .where(~already_read)
            .order_by(CommunicationLogModel.id)
        )
        return list(self.session.scalars(statement).all())

    def add_read_receipts(
        self, message_ids: Sequence[int], *, user_id: int, commit: bool = True
    ) -> int:
        """Insert missing read receipts and return how many were added."""

        added = 0
        for message_id in dict.fromkeys(message_ids):
            if self._insert_unless_present(
                CommunicationReadModel, message_id=message_id, user_id=user_id
            ):
                added += 1
        if commit:
            self.session.commit()
        return added

    def add_dismissal(self, entry_id: int, *, user_id: int, commit: bool = True) -> bool:
        """Insert the dismissal row unless it exists; return ``True`` when added."""

        added = self._insert_unless_present(
            UrgentNoteDismissalModel, note_id=entry_id, user_id=user_id
        )
        if commit:
            self.session.commit()
        return added

    def _insert_unless_present(self, model_class: type[Base], **values: Any) -> bool:
        """Insert one ledger row; a row already held by the unique key is kept.

        A duplicate only skips its own row, so other rows staged in the same
        transaction survive it.
        """

        dialect = self.session.get_bind().dialect.name
        if dialect in _UPSERT_INSERTS:
            statement = (
                _UPSERT_INSERTS[dialect](model_class.__table__)
                .values(**values)
                .on_conflict_do_nothing()
            )
            return self.session.execute(statement).rowcount > 0
        try:
            with self.session.begin_nested():
                self.session.add(model_class(**values))
        except IntegrityError:
            return False
        return True

    def _get_model(self, entry_id: int) -> CommunicationLogModel | None:
        return (
            self.session.query(CommunicationLogModel)
            .filter(
                CommunicationLogModel.id == entry_id,
                CommunicationLogModel.deleted_at.is_(None),
            )
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: CommunicationLogModel, entry: CommunicationEntry
    ) -> None:
        model.note = entry.note
        model.category = entry.category
        model.pinned = entry.pinned
        model.is_urgent = entry.is_urgent
        model.picture_urls = list(entry.picture_urls)

    @staticmethod
    def _to_entity(model: CommunicationLogModel) -> CommunicationEntry:
        author = model.author
        return CommunicationEntry(
            id=model.id,
            user_id=model.user_id,
            note=model.note,
            category=model.category,
            pinned=bool(model.pinned),
            is_urgent=bool(model.is_urgent),
            picture_urls=list(model.picture_urls or []),
            created_at=model.created_at,
            deleted_at=model.deleted_at,
            username=author.username if author else None,
            role=author.role if author else None,
        )


__all__ = ["CommunicationRepository"]
