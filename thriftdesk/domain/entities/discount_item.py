"""Domain entity for items awaiting furniture approval."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Final

APPROVAL_STATUS_PENDING: Final[str] = "pending"
APPROVAL_STATUS_APPROVED: Final[str] = "approved"


@dataclass
class DiscountItem:
    """A price-reduced piece that needs admin sign-off before going on sale."""

    id: int | None
    price: Decimal
    notes: str | None
    date_added: date
    approval_status: str
    created_by: int | None
    picture_urls: list[str] = field(default_factory=list)
    approval_note: str | None = None
    approved_by: int | None = None
    approved_at: datetime | None = None
    created_at: datetime | None = None
    deleted_at: datetime | None = None
    created_by_username: str | None = None
    approved_by_username: str | None = None

    @property
    def is_approved(self) -> bool:
        return self.approval_status == APPROVAL_STATUS_APPROVED


__all__ = [
    "DiscountItem",
    "APPROVAL_STATUS_PENDING",
    "APPROVAL_STATUS_APPROVED",
]
