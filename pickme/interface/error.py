"""Interface layer errors.

Domain errors are translated into HTTP responses here so that routes only
have to catch ``DomainError``.
"""

from fastapi import HTTPException, status

from pickme.domain.error import (
    ConcurrencyConflictError,
    DomainError,
    DuplicateError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    SelfMatchError,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (SelfMatchError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConcurrencyConflictError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error onto the matching HTTP status.

    Unknown domain errors become a 400.
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


def unauthorized(detail: str = "Authentication required") -> HTTPException:
    """Build the 401 raised when no valid session cookie is present."""
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
