"""Store clock.

Markdown ages are counted in calendar days of the store's own timezone.
Timestamp columns hold naive datetimes in that same timezone so SQLite and
PostgreSQL keep an identical representation.
"""

from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache
from zoneinfo import ZoneInfo

from thriftdesk.config import get_settings


@lru_cache(maxsize=1)
def store_timezone() -> ZoneInfo:
    return ZoneInfo(get_settings().app_timezone)


def store_now() -> datetime:
    return datetime.now(tz=store_timezone())


def store_today() -> date:
    """Return the calendar day it currently is in the store."""

    return store_now().date()


def storage_now() -> datetime:
    """Return the current store time in the naive form written to the database."""

    return store_now().replace(tzinfo=None)


def days_between(start: date, end: date) -> int:
    return (end - start).days


def to_store_time(value: datetime | None) -> datetime | None:
    """Express ``value`` in the store timezone; naive values are read as store time."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=store_timezone())
    return value.astimezone(store_timezone())


def to_storage_time(value: datetime | None) -> datetime | None:
    localized = to_store_time(value)
    return localized.replace(tzinfo=None) if localized else None


__all__ = [
    "days_between",
    "storage_now",
    "store_now",
    "store_timezone",
    "store_today",
    "to_storage_time",
    "to_store_time",
]
