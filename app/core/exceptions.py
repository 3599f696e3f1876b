"""
Error taxonomy for the API.

Every error raised by the services carries its HTTP status and a client-safe
message; app.core.handlers turns them into the response envelope.
"""

from typing import Any, Dict, List, Optional
from fastapi import status

from app.schemas.schemas import FIELD_MESSAGES


class BaseAPIException(Exception):
    """Parent class for all API errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Any] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(BaseAPIException):
    """400: one or more fields failed validation. `details` lists every violation."""

    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation failed"):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=errors
        )

    @property
    def errors(self) -> List[Dict[str, str]]:
        return self.details

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        """Flatten a pydantic ValidationError into [{field, message}, ...]."""
        return cls(field_errors(exc.errors()))


def field_errors(errors) -> List[Dict[str, str]]:
    """
    Turn pydantic error dicts into [{field, message}, ...].

    Request location prefixes ("body", "query", "path") are dropped, an
    unparseable body is reported against "body", and known student fields
    get their fixed client-facing message.
    """
    result = []
    for error in errors:
        if error["type"] == "json_invalid":
            field = "body"
        else:
            field = ".".join(
                str(part) for part in error["loc"] if part not in ("body", "query", "path")
            ) or "body"
        result.append({"field": field, "message": FIELD_MESSAGES.get(field, error["msg"])})
    return result


class UnauthorizedException(BaseAPIException):
    """401: no credential supplied, or login credentials rejected."""

    def __init__(self, message: str = "Access token required"):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED)


class ForbiddenException(BaseAPIException):
    """403: credential supplied but invalid or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN)


class NotFoundException(BaseAPIException):
    """404"""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message=message, status_code=status.HTTP_404_NOT_FOUND)


class ConflictException(BaseAPIException):
    """409: unique constraint violation."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message=message, status_code=status.HTTP_409_CONFLICT)


class StoreError(BaseAPIException):
    """500: the relational store failed. The message never carries driver detail."""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
