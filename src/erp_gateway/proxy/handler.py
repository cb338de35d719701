"""Generic proxy handler: forward, then relay or substitute.

Every resource route funnels through ProxyHandler.forward(). The handler
resolves the effective fallback policy for the endpoint, sends the request
(through the resource's delivery strategies for DELETE), then either relays
the backend response or serves the endpoint's fallback payload.

Unmasked transport failures propagate as UpstreamError; the API layer
classifies them (see erp_gateway.api.errors).

Policy semantics:
    TRANSPARENT       relay every backend response; transport failures
                      propagate
    MASK_UNREACHABLE  transport failures serve fallback data; backend
                      responses are relayed
    MASK_ERRORS       transport failures, 401 and any non-2xx serve
                      fallback data, except the endpoint's pass-through
                      statuses which are relayed
"""

from __future__ import annotations

__all__ = ["ProxyHandler", "parse_payload"]

import json
import logging
from typing import Any, Mapping, Sequence

import httpx
from fastapi import Request, Response

from erp_gateway.config import FallbackPolicy, GatewayConfig
from erp_gateway.constants import APP_NAME
from erp_gateway.exceptions import UpstreamError
from erp_gateway.proxy.delivery import DeliveryAttempt, DeliveryStrategy, deliver
from erp_gateway.proxy.endpoints import (
    Action,
    EndpointSpec,
    FallbackRequest,
    ResourceSpec,
)
from erp_gateway.proxy.forwarder import BackendForwarder
from erp_gateway.proxy.responses import fallback_response, relay_response

_logger = logging.getLogger(f"{APP_NAME}.proxy.handler")

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def parse_payload(content: bytes | None) -> dict[str, Any]:
    """Best-effort parse of a request body for fallback merging.

    Returns:
        The body as a dict, or an empty dict when it is missing, not JSON,
        or not a JSON object.
    """
    if not content:
        return {}
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


class ProxyHandler:
    """Forward inbound requests to the backend under a fallback policy.

    Args:
        config: Gateway configuration (fallback mode and overrides).
        forwarder: Outbound client wrapper.
    """

    def __init__(self, config: GatewayConfig, forwarder: BackendForwarder) -> None:
        self._config = config
        self._forwarder = forwarder

    @property
    def forwarder(self) -> BackendForwarder:
        return self._forwarder

    def effective_policy(self, resource: ResourceSpec, endpoint: EndpointSpec) -> FallbackPolicy:
        """Policy that applies to an endpoint after config overrides.

        Endpoints without a fallback builder are always TRANSPARENT.
        """
        if endpoint.fallback is None:
            return FallbackPolicy.TRANSPARENT
        return self._config.resolve_policy(resource.key(endpoint.action), endpoint.policy)

    async def forward(
        self,
        request: Request,
        resource: ResourceSpec,
        action: Action,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        resource_id: int | None = None,
        content: bytes | None = None,
        strategies: Sequence[DeliveryStrategy] | None = None,
        headers: Mapping[str, str] | None = None,
        method: str | None = None,
    ) -> Response:
        """Proxy one request.

        Args:
            request: Inbound request (Authorization header and body source).
            resource: Resource being addressed.
            action: Endpoint action; must be declared on the resource.
            path: Backend path (relative to the base URL).
            params: Outbound query parameters.
            resource_id: Validated path identifier, if any.
            content: Request body already read by the route. When None the
                body is read here for write verbs.
            strategies: DELETE delivery strategies; path is then the
                collection path and each strategy places the identifier.
            headers: Replacement outbound headers (generic pass-through).
            method: Outbound method when it differs from the declared one
                (generic pass-through).

        Returns:
            Relayed or fallback response (always with CORS headers).

        Raises:
            UpstreamError: On a transport failure the policy does not mask.
        """
        endpoint = resource.require(action)
        method = method or endpoint.method
        policy = self.effective_policy(resource, endpoint)
        authorization = request.headers.get("authorization")

        if content is None and method in _BODY_METHODS:
            content = await request.body()

        fallback_request = FallbackRequest(
            resource_id=resource_id,
            payload=parse_payload(content),
            params=dict(request.query_params),
        )

        try:
            if strategies and resource_id is not None:
                upstream = await self._deliver(endpoint, path, resource_id, strategies, authorization)
            else:
                upstream = await self._forwarder.send(
                    method,
                    path,
                    timeout=endpoint.timeout,
                    params=params,
                    authorization=authorization,
                    content=content,
                    headers=headers,
                )
        except UpstreamError as e:
            if policy in (FallbackPolicy.MASK_UNREACHABLE, FallbackPolicy.MASK_ERRORS):
                return self._serve_fallback(resource, endpoint, fallback_request, reason=type(e).__name__)
            raise

        if (
            policy is FallbackPolicy.MASK_ERRORS
            and not upstream.is_success
            and upstream.status_code not in endpoint.passthrough_statuses
        ):
            return self._serve_fallback(
                resource,
                endpoint,
                fallback_request,
                reason=f"status_{upstream.status_code}",
            )

        return relay_response(upstream)

    async def _deliver(
        self,
        endpoint: EndpointSpec,
        collection_path: str,
        resource_id: int,
        strategies: Sequence[DeliveryStrategy],
        authorization: str | None,
    ) -> httpx.Response:
        async def send(attempt: DeliveryAttempt) -> httpx.Response:
            return await self._forwarder.send(
                endpoint.method,
                attempt.path,
                timeout=endpoint.timeout,
                params=attempt.params,
                authorization=authorization,
                content=attempt.content,
            )

        return await deliver(send, strategies, collection_path, resource_id)

    def _serve_fallback(
        self,
        resource: ResourceSpec,
        endpoint: EndpointSpec,
        fallback_request: FallbackRequest,
        reason: str,
    ) -> Response:
        assert endpoint.fallback is not None
        result = endpoint.fallback(fallback_request)
        _logger.warning(
            {
                "event": "fallback_served",
                "message": f"Serving fallback data for {resource.key(endpoint.action)} ({reason})",
                "resource": resource.name,
                "action": endpoint.action.value,
                "reason": reason,
                "status_code": result.status_code,
            }
        )
        return fallback_response(result)
