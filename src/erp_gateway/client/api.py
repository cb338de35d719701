"""Async HTTP client for the gateway's own /api routes.

Used by the service layer, the dashboard helpers and the CLI. Every
non-2xx response and every transport failure surfaces as GatewayAPIError
with a message assembled from the response body.
"""

from __future__ import annotations

__all__ = [
    "GatewayAPIError",
    "GatewayClient",
    "clean_params",
    "error_message",
]

import json
import logging
from types import TracebackType
from typing import Any, Mapping

import click
import httpx

from erp_gateway.constants import APP_NAME, CLIENT_TIMEOUT_SECONDS

_logger = logging.getLogger(f"{APP_NAME}.client")

SESSION_EXPIRED_MESSAGE = "Your session has expired. Please log in again."


class GatewayAPIError(click.ClickException):
    """Raised when a gateway request fails.

    Attributes:
        status_code: HTTP status, or None for transport failures.
        body: Parsed error body, if any.
    """

    def __init__(self, message: str, status_code: int | None = None, body: Any = None) -> None:
        if status_code:
            super().__init__(f"API error ({status_code}): {message}")
        else:
            super().__init__(f"API error: {message}")
        self.status_code = status_code
        self.body = body
        self.detail = message


def error_message(status_code: int, body: Any) -> str:
    """Human-readable message for an error response body.

    Understands FastAPI validation details (a list of {loc, msg}), plain
    string or object details, and the gateway's own {error, details} shape.

    Args:
        status_code: HTTP status of the response.
        body: Parsed JSON body (or raw text).

    Returns:
        Message suitable for display.
    """
    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, list):
            parts = []
            for item in detail:
                if isinstance(item, dict):
                    loc = ".".join(str(p) for p in item.get("loc") or []) or "error"
                    parts.append(f"{loc}: {item.get('msg') or 'unknown'}")
                else:
                    parts.append(str(item))
            return ", ".join(parts)
        if isinstance(detail, dict):
            return json.dumps(detail)
        if detail:
            return str(detail)
        if body.get("error"):
            if body.get("details"):
                return f"{body['error']}: {body['details']}"
            return str(body["error"])
        if body.get("message"):
            return str(body["message"])
    elif isinstance(body, str) and body.strip():
        return f"Server error: {status_code} {body.strip()}"
    return f"API Error: {status_code}"


def clean_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Drop None and empty-string values; stringify the rest."""
    if not params:
        return {}
    return {k: str(v) for k, v in params.items() if v is not None and v != ""}


class GatewayClient:
    """Async client bound to one gateway and one bearer token.

    Use as an async context manager:

        async with GatewayClient("http://localhost:3000", token=token) as client:
            customers = await CustomerService(client).get_all()

    Args:
        base_url: Gateway base URL.
        token: Bearer token attached to every request, if any.
        timeout: Request timeout in seconds.
        transport: Optional transport (tests pass httpx.ASGITransport or
            httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = CLIENT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GatewayClient:
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_data: Any = None,
    ) -> Any:
        """Send one request and parse the JSON response.

        Args:
            method: HTTP method.
            path: Gateway path (e.g., "/api/customers").
            params: Query parameters; empty values are dropped.
            json_data: JSON body for POST/PUT.

        Returns:
            Parsed JSON, or None for 204 and non-JSON bodies.

        Raises:
            GatewayAPIError: On transport failure or non-2xx status.
            RuntimeError: If used outside the async context manager.
        """
        if self._client is None:
            raise RuntimeError("GatewayClient must be used as an async context manager")

        url = "/" + path.lstrip("/")
        try:
            response = await self._client.request(
                method,
                url,
                params=clean_params(params),
                json=json_data,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            _logger.warning(
                {
                    "event": "gateway_request_failed",
                    "message": f"{method} {url} failed: {type(e).__name__}",
                    "method": method,
                    "path": url,
                    "error_type": type(e).__name__,
                }
            )
            raise GatewayAPIError(f"Network error: unable to reach the gateway at {self.base_url}") from e

        if response.status_code == 401:
            raise GatewayAPIError(SESSION_EXPIRED_MESSAGE, 401, _parse_body(response))

        if not response.is_success:
            body = _parse_body(response)
            raise GatewayAPIError(error_message(response.status_code, body), response.status_code, body)

        if response.status_code == 204 or not response.content:
            return None
        if "application/json" not in response.headers.get("content-type", ""):
            return None
        return response.json()


def _parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
