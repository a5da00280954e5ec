"""Domain entity for communication log entries."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

# Categories are free text (Reminder, Question, ...); only these two carry rules.
CATEGORY_GENERAL: Final[str] = "General"
CATEGORY_URGENT: Final[str] = "Urgent"


def is_urgent_category(category: str | None) -> bool:
    """Return ``True`` when ``category`` marks an entry as urgent."""

    return category == CATEGORY_URGENT


@dataclass
class CommunicationEntry:
    """A note left in the staff communication log."""

    id: int | None
    user_id: int | None
    note: str
    category: str
    pinned: bool
    is_urgent: bool
    picture_urls: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    deleted_at: datetime | None = None
    username: str | None = None
    role: str | None = None


__all__ = [
    "CommunicationEntry",
    "CATEGORY_GENERAL",
    "CATEGORY_URGENT",
    "is_urgent_category",
]
