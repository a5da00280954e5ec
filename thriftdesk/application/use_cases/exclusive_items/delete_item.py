"""Use cases that take an item off the markdown ladder."""

import logging

from sqlalchemy.orm import Session

from thriftdesk.domain.exceptions import NotFoundError
from thriftdesk.infrastructure.repositories import ExclusiveItemRepository

logger = logging.getLogger(__name__)


def delete_exclusive_item(session: Session, item_id: int) -> None:
    """Soft delete the item."""

    if not ExclusiveItemRepository(session).soft_delete(item_id):
        raise NotFoundError("Item not found")


def move_to_color_cycle(session: Session, item_id: int) -> None:
    """Confirm that the item went to the color cycle floor.

    Stored the same way as a deletion; the row is kept with ``deleted_at`` set.
    """

    if not ExclusiveItemRepository(session).soft_delete(item_id):
        raise NotFoundError("Item not found")
    logger.info("Exclusive item %s moved to the color cycle", item_id)
