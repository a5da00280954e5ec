"""Use cases for the furniture approval workflow.

A discount item starts ``pending``. Staff may edit it freely until an admin
approves it; from then on price, notes and pictures are locked.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from thriftdesk.domain.entities import APPROVAL_STATUS_PENDING, DiscountItem, User
from thriftdesk.domain.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from thriftdesk.domain.markdown import normalize_price
from thriftdesk.infrastructure.repositories import DiscountItemRepository
from thriftdesk.infrastructure.storage import ImageUpload, discard_images, store_images
from thriftdesk.utils import store_today

logger = logging.getLogger(__name__)

IMAGE_FOLDER = "discount"
MAX_PICTURES = 10


def _clean_notes(notes: str | None) -> str | None:
    return (notes or "").strip() or None


def _stage_pictures(pictures: Sequence[ImageUpload] | None) -> list[str]:
    pictures = list(pictures or [])
    if len(pictures) > MAX_PICTURES:
        raise ValidationError(f"At most {MAX_PICTURES} pictures can be attached")
    return store_images(IMAGE_FOLDER, pictures) if pictures else []


def list_discount_items(session: Session) -> Sequence[DiscountItem]:
    """Return live items, pending ones first."""

    return DiscountItemRepository(session).list()


def get_discount_item(session: Session, item_id: int) -> DiscountItem:
    item = DiscountItemRepository(session).get(item_id)
    if item is None:
        raise NotFoundError("Item not found")
    return item


def create_discount_item(
    session: Session,
    *,
    price: object,
    notes: str | None = None,
    pictures: Sequence[ImageUpload] | None = None,
    created_by: int | None = None,
    today: date | None = None,
) -> DiscountItem:
    """Register a new approval request; it always starts pending."""

    normalized_price = normalize_price(price)
    picture_urls = _stage_pictures(pictures)

    entity = DiscountItem(
        id=None,
        price=normalized_price,
        notes=_clean_notes(notes),
        date_added=today or store_today(),
        approval_status=APPROVAL_STATUS_PENDING,
        created_by=created_by,
        picture_urls=picture_urls,
    )
    try:
        return DiscountItemRepository(session).create(entity)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to create discount item")
        discard_images(picture_urls)
        raise StorageError("Failed to create furniture approval request") from exc


def update_discount_item(
    session: Session,
    *,
    item_id: int,
    price: object,
    notes: str | None = None,
    pictures: Sequence[ImageUpload] | None = None,
) -> DiscountItem:
    """Edit a pending item. New pictures replace every previous picture.

    Approved items are immutable and raise :class:`PermissionDeniedError`,
    including when the approval lands between the read and the write.
    """

    normalized_price = normalize_price(price)

    repository = DiscountItemRepository(session)
    current = repository.get(item_id)
    if current is None:
        raise NotFoundError("Item not found")
    if current.is_approved:
        raise PermissionDeniedError("Cannot edit approved items")

    new_picture_urls = _stage_pictures(pictures)
    updated = replace(
        current,
        price=normalized_price,
        notes=_clean_notes(notes),
        picture_urls=new_picture_urls or current.picture_urls,
    )
    try:
        result = repository.update_pending(updated)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to update discount item %s", item_id)
        discard_images(new_picture_urls)
        raise StorageError("Failed to update furniture approval request") from exc

    if result is None:
        discard_images(new_picture_urls)
        if repository.get(item_id) is None:
            raise NotFoundError("Item not found")
        raise PermissionDeniedError("Cannot edit approved items")

    if new_picture_urls:
        discard_images(current.picture_urls)
    return result


def approve_discount_item(
    session: Session,
    *,
    item_id: int,
    approver: User,
    approval_note: str | None = None,
) -> DiscountItem:
    """Approve a pending item on behalf of an admin."""

    if not approver.is_admin():
        raise PermissionDeniedError("Only admins can approve items")

    repository = DiscountItemRepository(session)
    current = repository.get(item_id)
    if current is None:
        raise NotFoundError("Item not found")
    if current.is_approved:
        raise ConflictError("Item is already approved")

    approved = repository.approve(
        item_id,
        approved_by=approver.id,
        approval_note=_clean_notes(approval_note),
    )
    if not approved:
        # Lost the race against another approval or a delete.
        if repository.get(item_id) is None:
            raise NotFoundError("Item not found")
        raise ConflictError("Item is already approved")

    logger.info("Discount item %s approved by %s", item_id, approver.username)
    return get_discount_item(session, item_id)


def delete_discount_item(session: Session, item_id: int) -> None:
    """Soft delete an item whether it is pending or approved."""

    if not DiscountItemRepository(session).soft_delete(item_id):
        raise NotFoundError("Item not found")


__all__ = [
    "IMAGE_FOLDER",
    "MAX_PICTURES",
    "approve_discount_item",
    "create_discount_item",
    "delete_discount_item",
    "get_discount_item",
    "list_discount_items",
    "update_discount_item",
]
