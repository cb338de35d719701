"""Response builders shared by the proxy handler and the API layer.

Every response the gateway produces carries the permissive CORS headers,
so browser callers are never blocked by cross-origin policy whatever the
outcome (relay, fallback, validation error, internal error).
"""

from __future__ import annotations

__all__ = [
    "cors_headers",
    "error_response",
    "fallback_response",
    "options_response",
    "relay_response",
]

from typing import Any

import httpx
from fastapi import Response
from fastapi.responses import JSONResponse

from erp_gateway.constants import ALLOWED_METHODS, CORS_HEADERS, FALLBACK_HEADER
from erp_gateway.proxy.endpoints import FallbackResult

_DEFAULT_MEDIA_TYPE = "application/json"


def cors_headers(methods: str = ALLOWED_METHODS) -> dict[str, str]:
    """Permissive CORS headers.

    Args:
        methods: Value for Access-Control-Allow-Methods.

    Returns:
        Fresh header dict (safe to mutate).
    """
    headers = dict(CORS_HEADERS)
    headers["Access-Control-Allow-Methods"] = methods
    return headers


def error_response(
    status_code: int,
    error: str,
    details: Any = None,
    **extra: Any,
) -> JSONResponse:
    """Create standardized error response.

    Args:
        status_code: HTTP status code.
        error: Short message for the "error" field.
        details: Optional explanation for the "details" field.
        **extra: Additional body fields (e.g., timestamp).

    Returns:
        JSONResponse with {error, details} body and CORS headers.
    """
    content: dict[str, Any] = {"error": error}
    if details is not None:
        content["details"] = details
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=cors_headers())


def relay_response(upstream: httpx.Response) -> Response:
    """Relay a backend response verbatim with CORS headers.

    Args:
        upstream: Backend response.

    Returns:
        Response with the backend's status, body and content type.
    """
    if upstream.status_code == 204:
        return Response(status_code=204, headers=cors_headers())

    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type") or _DEFAULT_MEDIA_TYPE,
        headers=cors_headers(),
    )


def fallback_response(result: FallbackResult) -> JSONResponse:
    """Serve synthetic fallback data, marked with X-Fallback-Data."""
    headers = cors_headers()
    headers[FALLBACK_HEADER] = "true"
    return JSONResponse(status_code=result.status_code, content=result.body, headers=headers)


def options_response(methods: str = ALLOWED_METHODS) -> Response:
    """Answer a CORS preflight: 200, no body."""
    return Response(status_code=200, headers=cors_headers(methods))
