"""ORM models used by the application infrastructure."""

from .communication import (
    CommunicationLogModel,
    CommunicationReadModel,
    UrgentNoteDismissalModel,
)
from .discount_item import DiscountItemModel
from .exclusive_item import ExclusiveItemModel
from .user import UserModel

__all__ = [
    "CommunicationLogModel",
    "CommunicationReadModel",
    "UrgentNoteDismissalModel",
    "DiscountItemModel",
    "ExclusiveItemModel",
    "UserModel",
]
