"""Service exception to HTTP mapping."""

from fastapi import HTTPException, status

from marketplace.services.errors import (
    AuthorizationError,
    BadRequestError,
    InvalidQueryError,
    NotFoundError,
)
from marketplace.storage.base import StorageError


def error_status(exc: Exception) -> int:
    """Map a service or storage exception to an HTTP status code."""
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, AuthorizationError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, InvalidQueryError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(exc, BadRequestError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, StorageError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def raise_http(exc: Exception) -> None:
    """Raise HTTPException for exc. Never returns."""
    code = error_status(exc)
    detail = str(exc) if code != status.HTTP_502_BAD_GATEWAY else f"Storage error: {exc}"
    raise HTTPException(status_code=code, detail=detail) from exc
