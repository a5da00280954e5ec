"""Use case for editing a red tag item."""

import logging
from dataclasses import replace
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from thriftdesk.domain.entities import ExclusiveItem
from thriftdesk.domain.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    StorageError,
)
from thriftdesk.domain.markdown import (
    COLOR_CYCLE_WEEK,
    is_due_for_color_cycle,
    normalize_category,
    normalize_price,
    normalize_week,
)
from thriftdesk.infrastructure.repositories import ExclusiveItemRepository
from thriftdesk.infrastructure.storage import ImageUpload, discard_images, store_image
from thriftdesk.utils import store_today

from .create_item import IMAGE_FOLDER

logger = logging.getLogger(__name__)


def effective_week(item: ExclusiveItem, today: date) -> int:
    """Return the week ``item`` is at once the automatic promotion is applied."""

    if is_due_for_color_cycle(item.week, item.days_on_floor(today)):
        return COLOR_CYCLE_WEEK
    return item.week


def ensure_week_not_lowered(item: ExclusiveItem, requested_week: int, today: date) -> None:
    """Reject a week that would move ``item`` back up the markdown ladder."""

    current_week = effective_week(item, today)
    if requested_week < current_week:
        raise ConflictError(
            f"Item is already at week {current_week}; markdowns cannot be reversed"
        )


def explain_rejected_write(repository: ExclusiveItemRepository, item_id: int) -> DomainError:
    """Return the error for a guarded write that matched no row."""

    latest = repository.get(item_id)
    if latest is None:
        return NotFoundError("Item not found")
    return ConflictError(
        f"Item is already at week {latest.week}; markdowns cannot be reversed"
    )


def update_exclusive_item(
    session: Session,
    *,
    item_id: int,
    category: str | None,
    price: object,
    week: object = None,
    notes: str | None = None,
    picture: ImageUpload | None = None,
    today: date | None = None,
) -> ExclusiveItem:
    """Update category, price, week, notes and optionally replace the picture.

    Leaving ``week`` out keeps the current week, including a promotion the
    sweep has not written yet.
    """

    normalized_category = normalize_category(category)
    normalized_price = normalize_price(price)
    normalized_week = normalize_week(week) if week is not None else None

    repository = ExclusiveItemRepository(session)
    current = repository.get(item_id)
    if current is None:
        raise NotFoundError("Item not found")
    today = today or store_today()
    if normalized_week is None:
        normalized_week = effective_week(current, today)
    ensure_week_not_lowered(current, normalized_week, today)

    new_picture_url = store_image(IMAGE_FOLDER, picture) if picture is not None else None

    updated = replace(
        current,
        category=normalized_category,
        price=normalized_price,
        week=normalized_week,
        notes=(notes or "").strip() or None,
        picture_url=new_picture_url or current.picture_url,
    )
    try:
        result = repository.update(updated)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to update exclusive item %s", item_id)
        discard_images([new_picture_url])
        raise StorageError("Failed to update exclusive item") from exc

    if result is None:
        discard_images([new_picture_url])
        raise explain_rejected_write(repository, item_id)

    if new_picture_url and current.picture_url:
        discard_images([current.picture_url])
    return result
