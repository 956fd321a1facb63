"""Custom exception classes for the application.

This module defines application-specific exceptions that map
to appropriate HTTP status codes and error responses.
"""

from typing import Any, Dict, Iterable, List, Optional


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code to return.
            details: Additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class BadRequestException(AppException):
    """Raised when the client sent a malformed or unacceptable request."""

    def __init__(
        self,
        message: str = "Bad request",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, status_code=400, details=details)


class NotFoundException(AppException):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize not found exception.

        Args:
            message: Human-readable error message.
            details: Additional error context.
        """
        super().__init__(message=message, status_code=404, details=details)


class ValidationException(AppException):
    """Raised when input validation fails.

    Field-level problems are carried in ``details["errors"]`` as a list of
    ``{"loc", "msg", "type"}`` entries.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        """Initialize validation exception.

        Args:
            message: Human-readable error message.
            errors: Structured list of field errors.
        """
        super().__init__(
            message=message,
            status_code=400,
            details={"errors": errors or []},
        )


class PayloadTooLargeException(AppException):
    """Raised when an uploaded file exceeds the configured size ceiling."""

    def __init__(
        self,
        message: str = "Uploaded file is too large",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, status_code=413, details=details)


class ContentAnalysisError(Exception):
    """Raised by a content analyzer that could not describe an image.

    Not an ``AppException``: analyzer failures are absorbed by the
    submission handler and never reach the client.
    """


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce pydantic error dicts to JSON-safe ``loc``/``msg``/``type`` entries.

    Args:
        errors: Output of ``ValidationError.errors()`` or
            ``RequestValidationError.errors()``.

    Returns:
        List of plain dictionaries suitable for a JSON response body.
    """
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]
