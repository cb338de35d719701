"""Custom exceptions for erp-gateway.

Exceptions are organized by where they are raised:

Client input (never reaches the backend):
    - InvalidIdentifierError: Malformed path identifier, answered with 400

Upstream failures (backend call attempted):
    - UpstreamError: Base for backend transport failures
    - UpstreamTimeoutError: Call exceeded its timeout budget (504)
    - UpstreamUnavailableError: Connection-level failure (502/503)

Startup:
    - ConfigurationError: Gateway config missing or invalid

Usage:
    from erp_gateway.exceptions import InvalidIdentifierError, UpstreamTimeoutError
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "GatewayError",
    "InvalidIdentifierError",
    "UpstreamError",
    "UpstreamTimeoutError",
    "UpstreamUnavailableError",
]


class GatewayError(Exception):
    """Base class for all erp-gateway errors."""


class ConfigurationError(GatewayError):
    """Raised when the gateway configuration cannot be loaded or is invalid."""


class InvalidIdentifierError(GatewayError):
    """Raised when a path identifier is missing or not a positive integer.

    Attributes:
        label: Human-readable resource label (e.g., "branch").
        raw_value: The identifier as received from the router.
        details: Explanation returned to the caller.
    """

    def __init__(self, label: str, raw_value: str | None, details: str) -> None:
        self.label = label
        self.raw_value = raw_value
        self.details = details
        super().__init__(f"Invalid {label} ID")

    @property
    def error(self) -> str:
        """Short error string for the response body."""
        return f"Invalid {self.label} ID"


class UpstreamError(GatewayError):
    """Backend call failed before a response was received.

    Attributes:
        status_code: HTTP status the gateway answers with when not masked.
        backend_url: URL that was being called.
    """

    status_code: int = 502
    default_message = "Failed to connect to backend API"

    def __init__(self, backend_url: str, cause: Exception | None = None) -> None:
        self.backend_url = backend_url
        self.cause = cause
        super().__init__(self.default_message)

    @property
    def details(self) -> str:
        """Underlying error text for the response body."""
        if self.cause is not None:
            return str(self.cause) or type(self.cause).__name__
        return self.default_message


class UpstreamTimeoutError(UpstreamError):
    """Backend did not answer within the endpoint's timeout."""

    status_code = 504
    default_message = "Backend API timeout - please try again"


class UpstreamUnavailableError(UpstreamError):
    """Backend refused the connection or could not be resolved."""

    status_code = 503
    default_message = "Backend API unavailable - please check connection"
