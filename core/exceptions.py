"""
Custom exception classes for the application.

All exceptions inherit from AppException and include:
- error_code: Machine-readable error code for i18n
- message: Human-readable error message
- status_code: HTTP status code to return
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors."""

    error_code: str = "internal_error"
    message: str = "An unexpected error occurred"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result = {
            "code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class AuthenticationError(AppException):
    """Raised when authentication fails."""

    error_code = "authentication_failed"
    message = "Authentication failed"
    status_code = 401


class AuthorizationError(AppException):
    """Raised when user lacks permission."""

    error_code = "authorization_failed"
    message = "You do not have permission to perform this action"
    status_code = 403


class NotFoundError(AppException):
    """Raised when a resource is not found."""

    error_code = "not_found"
    message = "Resource not found"
    status_code = 404


class ValidationError(AppException):
    """Raised when input validation fails."""

    error_code = "validation_error"
    message = "Invalid input"
    status_code = 422


class ConflictError(AppException):
    """Raised when a write collides with existing state (unique pairs)."""

    error_code = "conflict"
    message = "Resource already exists or is in a conflicting state"
    status_code = 409


class StorageError(AppException):
    """Raised when storage operation fails."""

    error_code = "storage_error"
    message = "Storage operation failed"
    status_code = 500


class DatabaseUnavailableError(AppException):
    """Raised when the database is not configured or not reachable."""

    error_code = "database_unavailable"
    message = "Database not configured"
    status_code = 503


class PromptNotFoundError(NotFoundError):
    """Raised when a prompt is not found."""

    error_code = "prompt_not_found"
    message = "Prompt not found"


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    error_code = "user_not_found"
    message = "User not found"


class CategoryNotFoundError(NotFoundError):
    """Raised when a category is not found."""

    error_code = "category_not_found"
    message = "Category not found"
