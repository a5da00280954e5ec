"""Use case for registering a new red tag item."""

import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from thriftdesk.domain.entities import ExclusiveItem
from thriftdesk.domain.exceptions import StorageError
from thriftdesk.domain.markdown import FIRST_WEEK, normalize_category, normalize_price
from thriftdesk.infrastructure.repositories import ExclusiveItemRepository
from thriftdesk.infrastructure.storage import ImageUpload, discard_images, store_image
from thriftdesk.utils import store_today

logger = logging.getLogger(__name__)

IMAGE_FOLDER = "exclusive"


def create_exclusive_item(
    session: Session,
    *,
    category: str | None,
    price: object,
    notes: str | None = None,
    picture: ImageUpload | None = None,
    created_by: int | None = None,
    today: date | None = None,
) -> ExclusiveItem:
    """Create an item at week 1 that arrived today."""

    normalized_category = normalize_category(category)
    normalized_price = normalize_price(price)

    picture_url = store_image(IMAGE_FOLDER, picture) if picture is not None else None

    entity = ExclusiveItem(
        id=None,
        category=normalized_category,
        price=normalized_price,
        date_arrived=today or store_today(),
        week=FIRST_WEEK,
        notes=(notes or "").strip() or None,
        picture_url=picture_url,
        created_by=created_by,
        created_at=None,
        updated_at=None,
        deleted_at=None,
    )
    try:
        return ExclusiveItemRepository(session).create(entity)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to create exclusive item")
        discard_images([picture_url])
        raise StorageError("Failed to create exclusive item") from exc
