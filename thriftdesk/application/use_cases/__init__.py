"""Aggregate application use cases."""

from .exclusive_items import promote_due_items
from .users import check_credentials, create_user

__all__ = [
    "check_credentials",
    "create_user",
    "promote_due_items",
]
