"""
Core modules for the Promptly API.

This package contains fundamental utilities used across the application:
- config: Application settings and configuration
- security: JWT token handling
- auth: Current-user dependencies
- exceptions: Custom exception classes
"""

from .config import Settings, get_settings
from .exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseUnavailableError,
    NotFoundError,
    StorageError,
    ValidationError,
)

__all__ = [
    # Config
    "get_settings",
    "Settings",
    # Exceptions
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "StorageError",
    "DatabaseUnavailableError",
]
