"""Structured API error handling.

This module provides:
- ErrorCode enum with domain-grouped error codes
- Exception handlers that turn gateway exceptions into JSON responses

Every error response carries the permissive CORS headers and the body
shape callers already parse:

    {
        "error": "Invalid branch ID",
        "details": "Branch ID must be a positive integer",
        "code": "INVALID_IDENTIFIER"
    }
"""

from __future__ import annotations

__all__ = [
    "ErrorCode",
    "http_exception_handler",
    "invalid_identifier_handler",
    "register_exception_handlers",
    "unhandled_exception_handler",
    "upstream_error_handler",
    "validation_error_handler",
]

import logging
from enum import Enum

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from erp_gateway.constants import APP_NAME
from erp_gateway.exceptions import (
    InvalidIdentifierError,
    UpstreamError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from erp_gateway.proxy.responses import error_response

_logger = logging.getLogger(f"{APP_NAME}.api.errors")


class ErrorCode(str, Enum):
    """Error codes for programmatic handling.

    Codes are namespaced by domain:
    - INVALID_*: Client input rejected before any backend call
    - UPSTREAM_*: Backend call failed
    - AUTH_*: Authentication errors
    - INTERNAL_*: Gateway bugs
    """

    # Client input (400)
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_PATH = "INVALID_PATH"

    # Authentication (401)
    AUTH_REQUIRED = "AUTH_REQUIRED"

    # Routing (404, 405)
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

    # Backend failures (502, 503, 504)
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"

    # Internal (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


def api_error_response(
    status_code: int,
    code: ErrorCode,
    error: str,
    details: str | None = None,
) -> JSONResponse:
    """Error response with code, error and details fields."""
    return error_response(status_code, error, details, code=code.value)


async def invalid_identifier_handler(request: Request, exc: InvalidIdentifierError) -> JSONResponse:
    """Malformed path identifier: 400, no backend call was made."""
    return api_error_response(400, ErrorCode.INVALID_IDENTIFIER, exc.error, exc.details)


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """Classify a backend transport failure that no fallback masked.

    Args:
        request: FastAPI request object.
        exc: UpstreamError raised by the forwarder.

    Returns:
        504 for timeouts, 503 for refused/unresolvable connections,
        502 for any other transport failure.
    """
    if isinstance(exc, UpstreamTimeoutError):
        code = ErrorCode.UPSTREAM_TIMEOUT
    elif isinstance(exc, UpstreamUnavailableError):
        code = ErrorCode.UPSTREAM_UNAVAILABLE
    else:
        code = ErrorCode.UPSTREAM_ERROR
    return api_error_response(exc.status_code, code, exc.default_message, exc.details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors as a 400.

    Args:
        request: FastAPI request object.
        exc: RequestValidationError from Pydantic.

    Returns:
        JSONResponse naming the first offending field.
    """
    errors = exc.errors()
    first_error = errors[0] if errors else {}
    field_name = ".".join(str(part) for part in first_error.get("loc", []) if part != "body")
    msg = first_error.get("msg", "Validation error")
    details = f"{field_name}: {msg}" if field_name else msg
    return api_error_response(400, ErrorCode.INVALID_REQUEST, "Invalid request", details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle router-level HTTP errors (unknown path, wrong method)."""
    code = {
        401: ErrorCode.AUTH_REQUIRED,
        404: ErrorCode.NOT_FOUND,
        405: ErrorCode.METHOD_NOT_ALLOWED,
    }.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    message = str(exc.detail) if exc.detail else f"HTTP {exc.status_code}"
    return api_error_response(exc.status_code, code, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: never let an error escape without a formatted body."""
    _logger.error(
        {
            "event": "unhandled_exception",
            "message": f"Unhandled error on {request.method} {request.url.path}: {exc}",
            "method": request.method,
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "error_message": str(exc),
        },
        exc_info=exc,
    )
    return api_error_response(500, ErrorCode.INTERNAL_ERROR, "Internal server error", str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all gateway exception handlers on an app."""
    app.add_exception_handler(InvalidIdentifierError, invalid_identifier_handler)
    app.add_exception_handler(UpstreamError, upstream_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
