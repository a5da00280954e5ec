"""Use cases for writing and reading communication log entries."""

import logging
from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from thriftdesk.domain.entities import (
    CATEGORY_GENERAL,
    CommunicationEntry,
    User,
    is_urgent_category,
)
from thriftdesk.domain.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from thriftdesk.infrastructure.notifications import dispatch_urgent_note
from thriftdesk.infrastructure.repositories import CommunicationRepository
from thriftdesk.infrastructure.storage import ImageUpload, discard_images, store_images

logger = logging.getLogger(__name__)

IMAGE_FOLDER = "communication"
MAX_PICTURES = 10


def _normalize_note(note: str | None) -> str:
    normalized = (note or "").strip()
    if not normalized:
        raise ValidationError("Note is required")
    return normalized


def _normalize_category(category: str | None) -> str:
    return (category or "").strip() or CATEGORY_GENERAL


def _stage_pictures(pictures: Sequence[ImageUpload] | None) -> list[str]:
    pictures = list(pictures or [])
    if len(pictures) > MAX_PICTURES:
        raise ValidationError(f"At most {MAX_PICTURES} pictures can be attached")
    return store_images(IMAGE_FOLDER, pictures) if pictures else []


def list_communication_entries(session: Session) -> Sequence[CommunicationEntry]:
    """Return live entries, pinned first and newest first."""

    return CommunicationRepository(session).list()


def get_communication_entry(session: Session, entry_id: int) -> CommunicationEntry:
    entry = CommunicationRepository(session).get(entry_id)
    if entry is None:
        raise NotFoundError("Entry not found")
    return entry


def create_communication_entry(
    session: Session,
    *,
    author: User,
    note: str | None,
    category: str | None = None,
    pinned: bool = False,
    pictures: Sequence[ImageUpload] | None = None,
) -> CommunicationEntry:
    """Add an entry to the log and push it to open streams when urgent.

    Only admins may post urgent entries. The broadcast happens after the
    commit, so a client that misses it still finds the entry through the
    undismissed catch-up list.
    """

    normalized_note = _normalize_note(note)
    normalized_category = _normalize_category(category)
    urgent = is_urgent_category(normalized_category)
    if urgent and not author.is_admin():
        raise PermissionDeniedError("Only admins can post urgent notes")

    picture_urls = _stage_pictures(pictures)
    entity = CommunicationEntry(
        id=None,
        user_id=author.id,
        note=normalized_note,
        category=normalized_category,
        pinned=bool(pinned),
        is_urgent=urgent,
        picture_urls=picture_urls,
    )
    try:
        entry = CommunicationRepository(session).create(entity)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to create communication entry")
        discard_images(picture_urls)
        raise StorageError("Failed to create entry") from exc

    if entry.is_urgent:
        dispatch_urgent_note(entry, author)
    return entry


def update_communication_entry(
    session: Session,
    *,
    entry_id: int,
    editor: User,
    note: str | None,
    category: str | None = None,
    pinned: bool = False,
    pictures: Sequence[ImageUpload] | None = None,
) -> CommunicationEntry:
    """Edit an entry; new pictures replace the previous ones.

    Turning an entry urgent is reserved to admins and is not broadcast again.
    """

    normalized_note = _normalize_note(note)
    normalized_category = _normalize_category(category)
    urgent = is_urgent_category(normalized_category)

    repository = CommunicationRepository(session)
    current = repository.get(entry_id)
    if current is None:
        raise NotFoundError("Entry not found")
    if urgent and not current.is_urgent and not editor.is_admin():
        raise PermissionDeniedError("Only admins can post urgent notes")

    new_picture_urls = _stage_pictures(pictures)
    updated = replace(
        current,
        note=normalized_note,
        category=normalized_category,
        pinned=bool(pinned),
        is_urgent=urgent,
        picture_urls=new_picture_urls or current.picture_urls,
    )
    try:
        result = repository.update(updated)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to update communication entry %s", entry_id)
        discard_images(new_picture_urls)
        raise StorageError("Failed to update entry") from exc

    if new_picture_urls:
        discard_images(current.picture_urls)
    return result


def toggle_pin(session: Session, entry_id: int) -> bool:
    """Flip the pinned flag and return its new value."""

    pinned = CommunicationRepository(session).toggle_pin(entry_id)
    if pinned is None:
        raise NotFoundError("Entry not found")
    return pinned


def delete_communication_entry(session: Session, entry_id: int) -> None:
    if not CommunicationRepository(session).soft_delete(entry_id):
        raise NotFoundError("Entry not found")
