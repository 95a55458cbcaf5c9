# perks_api/core/exceptions.py
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import status
from fastapi.responses import JSONResponse


class ErrorKind(str, Enum):
    """Every failure a request can end in."""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    DUPLICATE_KEY = "duplicate_key"
    UNCLASSIFIED = "unclassified"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_KEY: status.HTTP_409_CONFLICT,
    ErrorKind.UNCLASSIFIED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(
    kind: ErrorKind,
    message: str,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Render an error kind as ``{"message": ...}`` with its mapped status."""
    return JSONResponse(
        status_code=STATUS_BY_KIND[kind],
        content={"message": message},
        headers=headers,
    )


class BaseAPIException(Exception):
    """Base exception for all API errors."""

    kind: ErrorKind = ErrorKind.UNCLASSIFIED

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    @property
    def code(self) -> str:
        return self.kind.value


class ValidationError(BaseAPIException):
    """Payload failed schema validation."""
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str = "Validation error", **kwargs):
        super().__init__(message, **kwargs)


class NotFoundError(BaseAPIException):
    """Resource not found."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Perk not found", **kwargs):
        super().__init__(message, **kwargs)


class DuplicateKeyError(BaseAPIException):
    """Uniqueness constraint violated."""
    kind = ErrorKind.DUPLICATE_KEY

    def __init__(self, message: str = "Duplicate perk for this merchant", **kwargs):
        super().__init__(message, **kwargs)


class DatabaseError(BaseAPIException):
    """Database error."""
    kind = ErrorKind.UNCLASSIFIED

    def __init__(self, message: str = "Database error", **kwargs):
        super().__init__(message, **kwargs)
