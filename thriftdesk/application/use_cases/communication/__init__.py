"""Use cases for the staff communication log and urgent notes."""

from .entries import (
    create_communication_entry,
    delete_communication_entry,
    get_communication_entry,
    list_communication_entries,
    toggle_pin,
    update_communication_entry,
)
from .read_state import (
    count_unread,
    dismiss_urgent_note,
    list_undismissed_urgent,
    mark_all_read,
)

__all__ = [
    "create_communication_entry",
    "delete_communication_entry",
    "get_communication_entry",
    "list_communication_entries",
    "toggle_pin",
    "update_communication_entry",
    "count_unread",
    "dismiss_urgent_note",
    "list_undismissed_urgent",
    "mark_all_read",
]
