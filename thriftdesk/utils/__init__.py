"""Utility helpers for reusable functionality."""

from .clock import (
    days_between,
    storage_now,
    store_now,
    store_timezone,
    store_today,
    to_storage_time,
    to_store_time,
)

__all__ = [
    "days_between",
    "storage_now",
    "store_now",
    "store_timezone",
    "store_today",
    "to_storage_time",
    "to_store_time",
]
