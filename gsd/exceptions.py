"""Domain errors raised by the services and rendered by the API layer."""
from typing import Optional

from fastapi import HTTPException, status


class DomainError(HTTPException):
    """Base for every caller-facing error. ``detail`` is a fixed message."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"

    def __init__(self, message: Optional[str] = None):
        super().__init__(status_code=type(self).status_code, detail=message or type(self).message)


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Resource not found"


class InvariantViolation(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Operation not allowed"


class CapacityExceeded(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Capacity exceeded"


class OrderIndexExhausted(CapacityExceeded):
    message = "Order index space exhausted - reindexing required"


class Forbidden(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "You don't have permission to access this resource"


class Conflict(DomainError):
    status_code = status.HTTP_409_CONFLICT
    message = "Resource already exists"


class Unauthorized(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message)
        self.headers = {"WWW-Authenticate": "Bearer"}


class DataIntegrityError(DomainError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Stored data is inconsistent"
