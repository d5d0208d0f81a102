"""
Domain error taxonomy shared by the service and API layers.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable codes surfaced to API callers."""

    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class UserServiceError(Exception):
    """Base class for errors that carry an API error code."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(UserServiceError):
    """Raised when a referenced record does not exist."""

    code = ErrorCode.NOT_FOUND


class ValidationError(UserServiceError):
    """Raised when a field is malformed or out of range."""

    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class InvalidInputError(UserServiceError):
    """Raised when a referenced city name cannot be resolved."""

    code = ErrorCode.INVALID_INPUT


class InternalError(UserServiceError):
    """Raised for unexpected failures; the message is safe to show callers."""

    code = ErrorCode.INTERNAL_ERROR
