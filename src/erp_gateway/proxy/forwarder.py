"""Outbound calls to the external backend.

BackendForwarder owns URL resolution and outbound headers. Transport
failures are translated into the gateway's UpstreamError hierarchy so the
handler can apply fallback policy or classify the failure.
"""

from __future__ import annotations

__all__ = ["BackendForwarder"]

import logging
import time
from typing import Mapping

import httpx

from erp_gateway.config import GatewayConfig
from erp_gateway.constants import APP_NAME, TUNNEL_BYPASS_HEADER
from erp_gateway.exceptions import (
    UpstreamError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from erp_gateway.proxy.urls import build_backend_url

_logger = logging.getLogger(f"{APP_NAME}.proxy.forwarder")


class BackendForwarder:
    """Issue requests against the configured backend.

    Args:
        config: Gateway configuration (base URL, tunnel bypass).
        client: Shared async HTTP client.
    """

    def __init__(self, config: GatewayConfig, client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = client

    @property
    def base_url(self) -> str:
        return self._config.backend_url

    def url_for(self, path: str, params: Mapping[str, str] | None = None) -> str:
        """Absolute backend URL for a path and query parameters."""
        return build_backend_url(self._config.backend_url, path, params)

    def build_headers(
        self,
        authorization: str | None,
        extra: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Outbound headers.

        Args:
            authorization: Inbound Authorization header, forwarded verbatim
                when present.
            extra: Headers to merge in (take precedence over defaults).

        Returns:
            Header dict for the outbound request.
        """
        headers = {"Content-Type": "application/json"}
        if self._config.tunnel_bypass:
            name, value = TUNNEL_BYPASS_HEADER
            headers[name] = value
        if extra:
            headers.update(extra)
        if authorization:
            headers["Authorization"] = authorization
        return headers

    async def send(
        self,
        method: str,
        path: str,
        *,
        timeout: float,
        params: Mapping[str, str] | None = None,
        authorization: str | None = None,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request to the backend.

        Args:
            method: HTTP method.
            path: Backend path (joined onto the base URL).
            timeout: Timeout in seconds for the whole call.
            params: Query parameters.
            authorization: Inbound Authorization header value.
            content: Raw request body.
            headers: Replacement outbound headers. When given, only the
                tunnel bypass header is added.

        Returns:
            The backend response (any status).

        Raises:
            UpstreamTimeoutError: If the call exceeded its timeout.
            UpstreamUnavailableError: If the connection could not be made.
            UpstreamError: For any other transport failure.
        """
        url = self.url_for(path, params)
        if headers is None:
            outbound_headers = self.build_headers(authorization)
        else:
            outbound_headers = dict(headers)
            if self._config.tunnel_bypass:
                name, value = TUNNEL_BYPASS_HEADER
                outbound_headers[name] = value

        start_time = time.monotonic()
        try:
            response = await self._client.request(
                method,
                url,
                content=content,
                headers=outbound_headers,
                timeout=timeout,
            )
        except httpx.TimeoutException as e:
            self._log_failure("backend_timeout", method, url, start_time, e)
            raise UpstreamTimeoutError(url, e) from e
        except httpx.ConnectError as e:
            self._log_failure("backend_unreachable", method, url, start_time, e)
            raise UpstreamUnavailableError(url, e) from e
        except httpx.TransportError as e:
            self._log_failure("backend_transport_error", method, url, start_time, e)
            raise UpstreamError(url, e) from e

        duration_ms = int((time.monotonic() - start_time) * 1000)
        if response.status_code >= 400:
            _logger.warning(
                {
                    "event": "backend_response_error",
                    "message": f"Backend returned {response.status_code} for {method} {url}",
                    "method": method,
                    "backend_url": url,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                }
            )
        else:
            _logger.debug(
                {
                    "event": "backend_request",
                    "message": f"{method} {url} -> {response.status_code}",
                    "method": method,
                    "backend_url": url,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                }
            )
        return response

    @staticmethod
    def _log_failure(event: str, method: str, url: str, start_time: float, error: Exception) -> None:
        _logger.warning(
            {
                "event": event,
                "message": f"{method} {url} failed: {type(error).__name__}",
                "method": method,
                "backend_url": url,
                "error_type": type(error).__name__,
                "error_message": str(error),
                "duration_ms": int((time.monotonic() - start_time) * 1000),
            }
        )
