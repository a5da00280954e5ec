"""Use cases for reading exclusive items."""

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from thriftdesk.domain.entities import ExclusiveItem, User
from thriftdesk.domain.exceptions import NotFoundError
from thriftdesk.domain.markdown import normalize_category
from thriftdesk.infrastructure.repositories import ExclusiveItemRepository
from thriftdesk.utils import store_today


def list_exclusive_items(
    session: Session, *, category: str | None = None
) -> Sequence[ExclusiveItem]:
    """Return live items ordered by week, newest arrivals first within a week."""

    if category is not None:
        category = normalize_category(category)
    return ExclusiveItemRepository(session).list(category=category)


def get_exclusive_item(session: Session, item_id: int) -> ExclusiveItem:
    """Return the item identified by ``item_id`` or raise :class:`NotFoundError`."""

    item = ExclusiveItemRepository(session).get(item_id)
    if item is None:
        raise NotFoundError("Item not found")
    return item


def list_exclusive_alerts(
    session: Session, *, user: User, today: date | None = None
) -> Sequence[ExclusiveItem]:
    """Return the overdue items in the categories ``user`` subscribed to."""

    categories = user.alert_categories()
    if not categories:
        return []
    return ExclusiveItemRepository(session).list_needing_attention(
        categories, today=today or store_today()
    )
