"""Use cases for the red tag markdown lifecycle."""

from .bulk_update import (
    BulkUpdateEntry,
    BulkUpdateFailure,
    BulkUpdateResult,
    bulk_update_exclusive_items,
    parse_bulk_entries,
)
from .create_item import create_exclusive_item
from .delete_item import delete_exclusive_item, move_to_color_cycle
from .list_items import get_exclusive_item, list_exclusive_alerts, list_exclusive_items
from .markdown_sweep import promote_due_items
from .update_item import update_exclusive_item

__all__ = [
    "BulkUpdateEntry",
    "BulkUpdateFailure",
    "BulkUpdateResult",
    "bulk_update_exclusive_items",
    "parse_bulk_entries",
    "create_exclusive_item",
    "delete_exclusive_item",
    "move_to_color_cycle",
    "get_exclusive_item",
    "list_exclusive_alerts",
    "list_exclusive_items",
    "promote_due_items",
    "update_exclusive_item",
]
