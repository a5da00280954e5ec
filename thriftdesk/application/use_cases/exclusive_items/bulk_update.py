"""Use case applying price and week changes to a batch of items."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from thriftdesk.domain.exceptions import ConflictError, ValidationError
from thriftdesk.domain.markdown import normalize_price, normalize_week
from thriftdesk.infrastructure.repositories import ExclusiveItemRepository
from thriftdesk.utils import store_today

from .update_item import (
    effective_week,
    ensure_week_not_lowered,
    explain_rejected_write,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkUpdateEntry:
    """Validated change requested for one item."""

    item_id: int
    price: Decimal
    week: int | None


@dataclass(frozen=True)
class BulkUpdateFailure:
    item_id: int
    reason: str


@dataclass
class BulkUpdateResult:
    """Outcome of a batch: each item succeeds or fails on its own."""

    updated: list[int] = field(default_factory=list)
    failed: list[BulkUpdateFailure] = field(default_factory=list)


def parse_bulk_entries(items: object) -> list[BulkUpdateEntry]:
    """Validate the whole payload before anything is written."""

    if not isinstance(items, list) or not items:
        raise ValidationError("Items array is required")

    entries: list[BulkUpdateEntry] = []
    for position, raw in enumerate(items):
        if not isinstance(raw, Mapping):
            raise ValidationError(f"Item {position} must be an object")
        item_id = raw.get("id")
        if isinstance(item_id, bool) or not isinstance(item_id, int):
            raise ValidationError(f"Item {position} needs a numeric id")
        week = raw.get("week")
        entries.append(
            BulkUpdateEntry(
                item_id=item_id,
                price=normalize_price(raw.get("current_price")),
                week=normalize_week(week) if week is not None else None,
            )
        )
    return entries


def bulk_update_exclusive_items(
    session: Session,
    *,
    items: Iterable[BulkUpdateEntry],
    today: date | None = None,
) -> BulkUpdateResult:
    """Apply each entry independently; one failure never undoes the others."""

    today = today or store_today()
    repository = ExclusiveItemRepository(session)
    result = BulkUpdateResult()

    for entry in items:
        current = repository.get(entry.item_id)
        if current is None:
            result.failed.append(BulkUpdateFailure(entry.item_id, "Item not found"))
            continue

        week = entry.week if entry.week is not None else effective_week(current, today)
        try:
            ensure_week_not_lowered(current, week, today)
        except ConflictError as exc:
            result.failed.append(BulkUpdateFailure(entry.item_id, str(exc)))
            continue

        try:
            written = repository.update(replace(current, price=entry.price, week=week))
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Bulk update failed for exclusive item %s", entry.item_id)
            result.failed.append(BulkUpdateFailure(entry.item_id, "Failed to update item"))
            continue
        if written is None:
            error = explain_rejected_write(repository, entry.item_id)
            result.failed.append(BulkUpdateFailure(entry.item_id, str(error)))
            continue
        result.updated.append(entry.item_id)

    return result
