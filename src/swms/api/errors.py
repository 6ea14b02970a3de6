"""Translation of service errors into HTTP responses."""

from __future__ import annotations

from fastapi import HTTPException, status

from ..errors import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    StorageUnavailableError,
    SWMSError,
    UnauthorizedError,
)

_STATUS_BY_ERROR: list[tuple[type[SWMSError], int]] = [
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (StorageUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def http_error(exc: SWMSError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
