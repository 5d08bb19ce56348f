"""
Mapping from service errors to HTTP responses.
"""

from fastapi import HTTPException

from loyalty_admin.exceptions import (
    ConcurrentUpdateError,
    CustomerNotFoundError,
    DuplicatePhoneError,
    InfrastructureError,
)

# Checked in order; the first matching base class wins
STATUS_BY_ERROR = (
    (CustomerNotFoundError, 404),
    (DuplicatePhoneError, 409),
    (ConcurrentUpdateError, 409),
    (InfrastructureError, 503),
)

# Caught by every router: bad requests and failing dependencies
SERVICE_ERRORS = (ValueError, InfrastructureError)


def to_http_exception(error: Exception) -> HTTPException:
    """Anything not listed is a plain validation failure (400)."""
    status_code = next(
        (code for error_class, code in STATUS_BY_ERROR
         if isinstance(error, error_class)),
        400,
    )
    return HTTPException(status_code=status_code, detail=str(error))
