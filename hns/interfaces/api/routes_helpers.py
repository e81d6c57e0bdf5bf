"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from hns.domain.errors import (
    AllocationExhaustedError,
    DiscoveryFailedError,
    DuplicateHostnameError,
    HNSError,
    NotFoundError,
    ResolutionUnavailableError,
    StateConflictError,
    TemplateInUseError,
    ValidationFailure,
)

_STATUS_BY_ERROR: tuple[tuple[type[HNSError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (TemplateInUseError, status.HTTP_409_CONFLICT),
    (ValidationFailure, status.HTTP_400_BAD_REQUEST),
    (StateConflictError, status.HTTP_409_CONFLICT),
    (AllocationExhaustedError, status.HTTP_409_CONFLICT),
    (DuplicateHostnameError, status.HTTP_409_CONFLICT),
    (ResolutionUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (DiscoveryFailedError, status.HTTP_404_NOT_FOUND),
)


def to_http_exception(exc: HNSError) -> HTTPException:
    """Translate a domain error into the matching ``HTTPException``."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
    )


__all__ = ["to_http_exception"]
