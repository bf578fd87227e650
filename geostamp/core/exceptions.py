"""Custom exception classes for the application.

This module defines application-specific exceptions that map
to appropriate HTTP status codes and error responses.
"""

from typing import Any, Dict, Optional


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


class ValidationException(AppException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize validation exception.

        Args:
            message: Human-readable error message.
            details: Additional error context.
        """
        super().__init__(message=message, status_code=422, details=details)


class ImageHostingException(AppException):
    """Raised when the image host rejects or fails an upload."""

    def __init__(
        self,
        message: str = "Upload to image host failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize image hosting exception.

        Args:
            message: Human-readable error message.
            details: Additional error context.
        """
        super().__init__(message=message, status_code=500, details=details)


class DeviceLocationException(AppException):
    """Raised when a device location report cannot be processed."""

    def __init__(
        self,
        message: str = "Error processing device location",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize device location exception.

        Args:
            message: Human-readable error message.
            details: Additional error context.
        """
        super().__init__(message=message, status_code=500, details=details)
