"""Domain entity describing a red tag exclusive item."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass
class ExclusiveItem:
    """A specially priced piece moving through the markdown schedule."""

    id: int | None
    category: str
    price: Decimal
    date_arrived: date
    week: int
    notes: str | None
    picture_url: str | None
    created_by: int | None
    created_at: datetime | None
    updated_at: datetime | None
    deleted_at: datetime | None

    def days_on_floor(self, today: date) -> int:
        """Return the whole days elapsed since the item arrived."""

        return (today - self.date_arrived).days


__all__ = ["ExclusiveItem"]
