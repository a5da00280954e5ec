"""Repository implementations for infrastructure layer."""

from .communication_repository import CommunicationRepository
from .discount_item_repository import DiscountItemRepository
from .exclusive_item_repository import ExclusiveItemRepository
from .user_repository import UserRepository

__all__ = [
    "CommunicationRepository",
    "DiscountItemRepository",
    "ExclusiveItemRepository",
    "UserRepository",
]
