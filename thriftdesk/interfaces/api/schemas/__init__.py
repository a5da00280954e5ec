from .auth import Token
from .common import MessageResponse
from .communication import (
    CommunicationEntryList,
    CommunicationEntryRead,
    CommunicationEntryResponse,
    MarkAllReadResponse,
    PinToggleResponse,
    UnreadCountResponse,
    UrgentNoteList,
)
from .discount_item import (
    ApprovalRequest,
    DiscountItemList,
    DiscountItemRead,
    DiscountItemResponse,
)
from .exclusive_item import (
    BulkUpdateFailureRead,
    BulkUpdateRequest,
    BulkUpdateResponse,
    ExclusiveAlertList,
    ExclusiveItemList,
    ExclusiveItemRead,
    ExclusiveItemResponse,
)
from .user import AlertPreferencesUpdate, UserCreate, UserRead, UserUpdate

__all__ = [
    "Token",
    "MessageResponse",
    "CommunicationEntryList",
    "CommunicationEntryRead",
    "CommunicationEntryResponse",
    "MarkAllReadResponse",
    "PinToggleResponse",
    "UnreadCountResponse",
    "UrgentNoteList",
    "ApprovalRequest",
    "DiscountItemList",
    "DiscountItemRead",
    "DiscountItemResponse",
    "BulkUpdateFailureRead",
    "BulkUpdateRequest",
    "BulkUpdateResponse",
    "ExclusiveAlertList",
    "ExclusiveItemList",
    "ExclusiveItemRead",
    "ExclusiveItemResponse",
    "AlertPreferencesUpdate",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
