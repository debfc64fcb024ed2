from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ApiError(DomainError):
    """Base exception for anything that went wrong talking to the backend."""

    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        # What the backend said, if anything.
        self.detail = message


class TransportError(ApiError):
    """The request never produced a usable response (network, timeout, bad JSON)."""

    default_message = "Could not reach the server"


class HttpStatusError(ApiError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message or f"Request failed with status {status_code}")
        self.status_code = status_code
        self.detail = message


class SessionExpiredError(HttpStatusError):
    """401 from the backend: the stored session is no longer valid."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(401, message or "Please login to access this page.")
        self.detail = message


class RejectedError(ApiError):
    """2xx response carrying ``success: false`` or an ``error`` field."""
