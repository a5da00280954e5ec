"""Automatic week 4 -> week 5 promotion run before every listing."""

import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from thriftdesk.infrastructure.repositories import ExclusiveItemRepository
from thriftdesk.utils import store_today

logger = logging.getLogger(__name__)


def promote_due_items(session: Session, *, today: date | None = None) -> int:
    """Promote every week 4 item that reached the color cycle age.

    Returns the number of promoted rows. A failing sweep is rolled back and
    logged, and reported as zero promotions so the read that triggered it can
    still be served.
    """

    repository = ExclusiveItemRepository(session)
    try:
        promoted = repository.promote_due_for_color_cycle(
            today=today or store_today()
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Markdown sweep failed; serving pre-sweep data")
        return 0

    if promoted:
        logger.info("Markdown sweep moved %d item(s) to the color cycle week", promoted)
    return promoted
