"""
Custom exceptions for the device gateway.

Provides explicit error types instead of silent failures. All of them
propagate unchanged to the caller; the gateway never retries.
"""

from typing import Optional


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    pass


class ConfigurationError(GatewayError):
    """Raised when a request is attempted without an access token."""

    def __init__(self, message: str = "SmartThings token not configured"):
        self.message = message
        super().__init__(message)


class TransportError(GatewayError):
    """Raised when the API is unreachable or returns an unparsable body."""

    def __init__(self, endpoint: str, cause: Optional[Exception] = None):
        self.endpoint = endpoint
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Request to {endpoint} failed{detail}")


class RemoteError(GatewayError):
    """Raised when the API answers with a non-success status code."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.message = message or f"API error: {status_code}"
        super().__init__(self.message)
