"""Persistence helpers for furniture approval requests."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import case
from sqlalchemy.orm import Session

from thriftdesk.domain.entities import (
    APPROVAL_STATUS_APPROVED,
    APPROVAL_STATUS_PENDING,
    DiscountItem,
)
from thriftdesk.infrastructure.models import DiscountItemModel
from thriftdesk.utils import storage_now, to_storage_time


class DiscountItemRepository:
    """Provide CRUD operations and the approval transition for discount items."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self) -> Sequence[DiscountItem]:
        pending_first = case(
            (DiscountItemModel.approval_status == APPROVAL_STATUS_PENDING, 0),
            else_=1,
        )
        query = (
            self.session.query(DiscountItemModel)
            .filter(DiscountItemModel.deleted_at.is_(None))
            .order_by(
                pending_first,
                DiscountItemModel.date_added.desc(),
                DiscountItemModel.id.desc(),
            )
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, item_id: int) -> DiscountItem | None:
        model = self._get_model(item_id)
        return self._to_entity(model) if model else None

    def create(self, item: DiscountItem) -> DiscountItem:
        model = DiscountItemModel()
        model.date_added = item.date_added
        model.created_by = item.created_by
        model.created_at = to_storage_time(item.created_at) or storage_now()
        model.approval_status = APPROVAL_STATUS_PENDING
        self._apply_editable_fields(model, item)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_pending(self, item: DiscountItem) -> DiscountItem | None:
        """Persist editable fields only while the item is still pending.

        Returns ``None`` when no pending row matched, which happens when the
        item was approved or deleted after it was read.
        """

        if item.id is None:
            raise ValueError("Discount item id is required for updates")
        updated = (
            self.session.query(DiscountItemModel)
            .filter(
                DiscountItemModel.id == item.id,
                DiscountItemModel.deleted_at.is_(None),
                DiscountItemModel.approval_status == APPROVAL_STATUS_PENDING,
            )
            .update(
                {
                    DiscountItemModel.price: item.price,
                    DiscountItemModel.notes: item.notes,
                    DiscountItemModel.picture_urls: list(item.picture_urls),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        if not updated:
            return None
        return self.get(item.id)

    def approve(
        self,
        item_id: int,
        *,
        approved_by: int,
        approval_note: str | None,
        approved_at: datetime | None = None,
    ) -> bool:
        """Move a pending item to approved; return ``False`` if it was not pending."""

        stamp = to_storage_time(approved_at) or storage_now()
        updated = (
            self.session.query(DiscountItemModel)
            .filter(
                DiscountItemModel.id == item_id,
                DiscountItemModel.deleted_at.is_(None),
                DiscountItemModel.approval_status == APPROVAL_STATUS_PENDING,
            )
            .update(
                {
                    DiscountItemModel.approval_status: APPROVAL_STATUS_APPROVED,
                    DiscountItemModel.approval_note: approval_note,
                    DiscountItemModel.approved_by: approved_by,
                    DiscountItemModel.approved_at: stamp,
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated > 0

    def soft_delete(self, item_id: int) -> bool:
        updated = (
            self.session.query(DiscountItemModel)
            .filter(
                DiscountItemModel.id == item_id,
                DiscountItemModel.deleted_at.is_(None),
            )
            .update(
                {DiscountItemModel.deleted_at: storage_now()},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated > 0

    def _get_model(self, item_id: int) -> DiscountItemModel | None:
        return (
            self.session.query(DiscountItemModel)
            .filter(
                DiscountItemModel.id == item_id,
                DiscountItemModel.deleted_at.is_(None),
            )
            .populate_existing()
            .first()
        )

    @staticmethod
    def _apply_editable_fields(model: DiscountItemModel, item: DiscountItem) -> None:
        model.price = item.price
        model.notes = item.notes
        model.picture_urls = list(item.picture_urls)

    @staticmethod
    def _to_entity(model: DiscountItemModel) -> DiscountItem:
        return DiscountItem(
            id=model.id,
            price=model.price,
            notes=model.notes,
            date_added=model.date_added,
            approval_status=model.approval_status,
            created_by=model.created_by,
            picture_urls=list(model.picture_urls or []),
            approval_note=model.approval_note,
            approved_by=model.approved_by,
            approved_at=model.approved_at,
            created_at=model.created_at,
            deleted_at=model.deleted_at,
            created_by_username=model.creator.username if model.creator else None,
            approved_by_username=model.approver.username if model.approver else None,
        )


__all__ = ["DiscountItemRepository"]
