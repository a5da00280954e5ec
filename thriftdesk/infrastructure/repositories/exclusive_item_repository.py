"""Persistence helpers for red tag exclusive items."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from thriftdesk.domain.entities import ExclusiveItem
from thriftdesk.domain.markdown import (
    COLOR_CYCLE_PROMOTION_DAYS,
    COLOR_CYCLE_WEEK,
    PROMOTION_SOURCE_WEEK,
    WEEK_ALERT_THRESHOLDS,
)
from thriftdesk.infrastructure.models import ExclusiveItemModel
from thriftdesk.utils import storage_now, to_storage_time


class ExclusiveItemRepository:
    """Provide CRUD operations and the markdown sweep for exclusive items."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, *, category: str | None = None) -> Sequence[ExclusiveItem]:
        query = self.session.query(ExclusiveItemModel).filter(
            ExclusiveItemModel.deleted_at.is_(None)
        )
        if category is not None:
            query = query.filter(ExclusiveItemModel.category == category)
        query = query.order_by(
            ExclusiveItemModel.week.asc(),
            ExclusiveItemModel.date_arrived.desc(),
            ExclusiveItemModel.id.desc(),
        )
        return [self._to_entity(model) for model in query.all()]

    def list_needing_attention(
        self, categories: Sequence[str], *, today: date
    ) -> Sequence[ExclusiveItem]:
        """Return items in ``categories`` whose markdown is overdue."""

        if not categories:
            return []

        overdue = [
            and_(
                ExclusiveItemModel.week == week,
                ExclusiveItemModel.date_arrived <= today - timedelta(days=days),
            )
            for week, days in WEEK_ALERT_THRESHOLDS.items()
        ]
        overdue.append(ExclusiveItemModel.week == COLOR_CYCLE_WEEK)

        query = (
            self.session.query(ExclusiveItemModel)
            .filter(ExclusiveItemModel.deleted_at.is_(None))
            .filter(ExclusiveItemModel.category.in_(list(categories)))
            .filter(or_(*overdue))
            .order_by(ExclusiveItemModel.date_arrived.asc(), ExclusiveItemModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, item_id: int) -> ExclusiveItem | None:
        model = self._get_model(item_id)
        return self._to_entity(model) if model else None

    def create(self, item: ExclusiveItem) -> ExclusiveItem:
        model = ExclusiveItemModel()
        self._apply_entity_to_model(model, item)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, item: ExclusiveItem) -> ExclusiveItem | None:
        """Persist editable fields unless the stored week is already past ``item.week``.

        Returns ``None`` when no row matched, which happens when the item was
        deleted or moved further down the markdown schedule after it was read.
        """

        if item.id is None:
            raise ValueError("Exclusive item id is required for updates")
        updated = (
            self.session.query(ExclusiveItemModel)
            .filter(
                ExclusiveItemModel.id == item.id,
                ExclusiveItemModel.deleted_at.is_(None),
                ExclusiveItemModel.week <= item.week,
            )
            .update(
                {
                    ExclusiveItemModel.category: item.category,
                    ExclusiveItemModel.current_price: item.price,
                    ExclusiveItemModel.week: item.week,
                    ExclusiveItemModel.notes: item.notes,
                    ExclusiveItemModel.picture_url: item.picture_url,
                    ExclusiveItemModel.updated_at: storage_now(),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        if not updated:
            return None
        return self.get(item.id)

    def soft_delete(self, item_id: int, *, deleted_at: datetime | None = None) -> bool:
        """Stamp ``deleted_at`` on a live item; return ``False`` if none matched."""

        stamp = to_storage_time(deleted_at) or storage_now()
        updated = (
            self.session.query(ExclusiveItemModel)
            .filter(
                ExclusiveItemModel.id == item_id,
                ExclusiveItemModel.deleted_at.is_(None),
            )
            .update({ExclusiveItemModel.deleted_at: stamp}, synchronize_session=False)
        )
        self.session.commit()
        return updated > 0

    def promote_due_for_color_cycle(self, *, today: date) -> int:
        """Move week 4 items that reached the promotion age to week 5.

        The predicate excludes rows that are already promoted, so concurrent
        sweeps cannot promote twice; a racing sweep simply updates zero rows.
        """

        cutoff = today - timedelta(days=COLOR_CYCLE_PROMOTION_DAYS)
        promoted = (
            self.session.query(ExclusiveItemModel)
            .filter(
                ExclusiveItemModel.week == PROMOTION_SOURCE_WEEK,
                ExclusiveItemModel.deleted_at.is_(None),
                ExclusiveItemModel.date_arrived <= cutoff,
            )
            .update(
                {
                    ExclusiveItemModel.week: COLOR_CYCLE_WEEK,
                    ExclusiveItemModel.updated_at: storage_now(),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return promoted

    def _get_model(self, item_id: int) -> ExclusiveItemModel | None:
        return (
            self.session.query(ExclusiveItemModel)
            .filter(
                ExclusiveItemModel.id == item_id,
                ExclusiveItemModel.deleted_at.is_(None),
            )
            .populate_existing()
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(model: ExclusiveItemModel, item: ExclusiveItem) -> None:
        model.date_arrived = item.date_arrived
        model.created_by = item.created_by
        model.created_at = to_storage_time(item.created_at) or storage_now()
        model.category = item.category
        model.current_price = item.price
        model.week = item.week
        model.notes = item.notes
        model.picture_url = item.picture_url

    @staticmethod
    def _to_entity(model: ExclusiveItemModel) -> ExclusiveItem:
        return ExclusiveItem(
            id=model.id,
            category=model.category,
            price=model.current_price,
            date_arrived=model.date_arrived,
            week=model.week,
            notes=model.notes,
            picture_url=model.picture_url,
            created_by=model.created_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )


__all__ = ["ExclusiveItemRepository"]
