"""Translate domain exceptions into HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from thriftdesk.domain.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


def status_for_error(error: DomainError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_domain_error(request: Request, error: DomainError) -> JSONResponse:
    """Render a domain error as ``{"detail": ...}``.

    Storage failures keep their details in the log and return a generic
    message to the client.
    """

    status_code = status_for_error(error)
    if isinstance(error, StorageError) or status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, error, exc_info=error
        )
        detail = GENERIC_ERROR_MESSAGE
    else:
        logger.debug("%s %s rejected: %s", request.method, request.url.path, error)
        detail = str(error)
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, handle_domain_error)


__all__ = ["handle_domain_error", "register_exception_handlers", "status_for_error"]
