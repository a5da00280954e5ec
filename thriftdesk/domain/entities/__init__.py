"""Domain entities exposed by the application."""

from .communication_entry import (
    CATEGORY_GENERAL,
    CATEGORY_URGENT,
    CommunicationEntry,
    is_urgent_category,
)
from .discount_item import (
    APPROVAL_STATUS_APPROVED,
    APPROVAL_STATUS_PENDING,
    DiscountItem,
)
from .exclusive_item import ExclusiveItem
from .role import (
    MANAGER_ROLES,
    ROLE_ADMIN,
    ROLE_BRIC_A_BRAC_MANAGER,
    ROLE_CLOTHING_MANAGER,
    ROLE_EMPLOYEE,
    ROLE_MANAGER,
    ROLES,
)
from .user import User

__all__ = [
    "CATEGORY_GENERAL",
    "CATEGORY_URGENT",
    "CommunicationEntry",
    "is_urgent_category",
    "APPROVAL_STATUS_APPROVED",
    "APPROVAL_STATUS_PENDING",
    "DiscountItem",
    "ExclusiveItem",
    "MANAGER_ROLES",
    "ROLE_ADMIN",
    "ROLE_BRIC_A_BRAC_MANAGER",
    "ROLE_CLOTHING_MANAGER",
    "ROLE_EMPLOYEE",
    "ROLE_MANAGER",
    "ROLES",
    "User",
]
