"""
Error types shared by services, query hooks and the API layer.
"""
from typing import Any, Dict, Optional


class AccountHubError(Exception):
    """Base class for every error raised on purpose by AccountHub."""

    def __init__(self, message: str, operation: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.details = details

    def __str__(self) -> str:
        return self.message


class ValidationError(AccountHubError):
    """Malformed input, raised before any database call is made."""
    pass


class ServiceError(AccountHubError):
    """The database rejected or failed an operation."""

    def __init__(self, message: str, operation: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"operation failed: {message}", operation, details)
        self.reason = message


class NotFoundError(ServiceError):
    """A single-row lookup matched nothing."""
    pass


class AuditError(AccountHubError):
    pass


class AuthError(AccountHubError):
    """Sign-in or token failure. ``code`` narrows the cause."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message, operation="auth")
        self.code = code
