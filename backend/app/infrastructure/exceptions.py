"""
Custom Exceptions for Team Billing

Hierarchical exception classes for proper error handling across layers.
Each API-facing class carries the error code and HTTP status it maps to.
"""

from typing import Optional, Dict, Any


class BillingError(Exception):
    """Base exception for all Team Billing errors."""

    code: str = "INTERNAL_SERVER_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        message = message or self.code
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class NotFoundError(BillingError):
    """Raised when a referenced entity does not exist."""
    code = "NOT_FOUND"
    status_code = 404


class BadRequestError(BillingError):
    """Raised when entities are valid but the requested transition is not."""
    code = "BAD_REQUEST"
    status_code = 400


class UnauthorizedError(BillingError):
    """
    Raised when identity is missing, invalid or insufficient.

    ``clear_session`` asks the exception handler to drop the session
    cookies so the client is forced to authenticate again.
    """
    code = "UNAUTHORIZED"
    status_code = 401

    def __init__(
        self,
        message: Optional[str] = None,
        clear_session: bool = False,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message, original_error=original_error)
        self.clear_session = clear_session


class InvalidTokenError(BillingError):
    """Raised by the token verifier; never leaves the access layer."""
    code = "UNAUTHORIZED"
    status_code = 401


class DatabaseError(BillingError):
    """Raised when database operations fail."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        table: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table
        super().__init__(message, details, original_error)


class ConfigurationError(BillingError):
    """Raised when configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        missing_keys: Optional[list] = None,
        original_error: Optional[Exception] = None
    ):
        details = {}
        if missing_keys:
            details["missing_keys"] = missing_keys
        super().__init__(message, details, original_error)
