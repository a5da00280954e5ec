"""Use cases tracking what each user has read or dismissed."""

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from thriftdesk.domain.entities import CommunicationEntry, User
from thriftdesk.domain.exceptions import ValidationError
from thriftdesk.infrastructure.repositories import CommunicationRepository

logger = logging.getLogger(__name__)


def count_unread(session: Session, *, user: User) -> int:
    """Count live entries by other authors that ``user`` has not read."""

    return len(CommunicationRepository(session).list_unread_ids(user.id))


def mark_all_read(session: Session, *, user: User) -> int:
    """Record a read receipt for every unread entry; return how many were marked."""

    repository = CommunicationRepository(session)
    unread_ids = repository.list_unread_ids(user.id)
    return repository.add_read_receipts(unread_ids, user_id=user.id)


def list_undismissed_urgent(
    session: Session, *, user: User
) -> Sequence[CommunicationEntry]:
    """Return urgent entries ``user`` still has to acknowledge, newest first."""

    return CommunicationRepository(session).list_undismissed_urgent(user.id)


def dismiss_urgent_note(session: Session, *, entry_id: int, user: User) -> None:
    """Acknowledge an urgent entry for ``user``.

    The dismissal and the matching read receipt are committed together. Either
    row may already exist, from an earlier dismissal or a mark-all-read, and
    is then left as it is. Dismissing twice leaves a single dismissal row.
    """

    repository = CommunicationRepository(session)
    entry = repository.get(entry_id)
    if entry is None or not entry.is_urgent:
        raise ValidationError("Urgent note not found")

    if not repository.add_dismissal(entry_id, user_id=user.id, commit=False):
        logger.debug("Urgent note %s already dismissed by user %s", entry_id, user.id)
    repository.add_read_receipts([entry_id], user_id=user.id, commit=False)
    session.commit()
