"""Domain-specific exceptions raised by the application use cases."""


class DomainError(Exception):
    """Base exception for domain errors."""


class ValidationError(DomainError, ValueError):
    """Raised when a required field is missing or malformed."""


class PermissionDeniedError(DomainError, PermissionError):
    """Raised on a role violation or when a locked record is modified."""


class NotFoundError(DomainError, LookupError):
    """Raised when the referenced record is absent or soft-deleted."""


class ConflictError(DomainError):
    """Raised when a state transition is not allowed from the current state."""


class StorageError(DomainError, RuntimeError):
    """Raised when the database or the image store fails to persist a change."""


__all__ = [
    "DomainError",
    "ValidationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
]
