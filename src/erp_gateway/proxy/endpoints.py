"""Endpoint and resource declarations for the proxy layer.

A ResourceSpec describes one backend resource (URL segment, label used
in error messages, list filters, DELETE delivery strategies) and the
endpoints the gateway exposes for it. Each EndpointSpec fixes the HTTP
method, the outbound timeout, the declared fallback policy and the
builder used when the policy substitutes data.
"""

from __future__ import annotations

__all__ = [
    "Action",
    "EndpointSpec",
    "FallbackBuilder",
    "FallbackRequest",
    "FallbackResult",
    "ResourceSpec",
]

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from erp_gateway.config import FallbackPolicy
from erp_gateway.proxy.delivery import PATH_DELIVERY, DeliveryStrategy


class Action(str, Enum):
    """Endpoint actions. Value is used in "<resource>.<action>" keys."""

    LIST = "list"
    CREATE = "create"
    GET = "get"
    UPDATE = "update"
    DELETE = "delete"

    # Resource-specific endpoints
    PERMISSIONS = "permissions"
    GRANT = "grant"
    REVOKE = "revoke"
    BY_SLUG = "by_slug"
    CATEGORIES = "categories"
    AVAILABLE = "available"
    BY_STOCK_NUMBER = "by_stock_number"
    LOGIN = "login"
    ME = "me"
    FETCH = "fetch"
    FORWARD = "forward"


@dataclass(frozen=True)
class FallbackRequest:
    """Inputs a fallback builder may draw on.

    Attributes:
        resource_id: Validated path identifier, if the route has one.
        payload: Best-effort parse of the request body (empty if not a
            JSON object).
        params: Inbound query parameters.
    """

    resource_id: int | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FallbackResult:
    """Synthetic payload and the status it is served with."""

    body: Any
    status_code: int = 200


FallbackBuilder = Callable[[FallbackRequest], FallbackResult]


@dataclass(frozen=True)
class EndpointSpec:
    """One proxied endpoint.

    Attributes:
        action: What the endpoint does.
        method: Outbound HTTP method.
        timeout: Outbound timeout in seconds.
        policy: Declared fallback policy (config may override).
        fallback: Builder for substituted data; None means the endpoint
            never masks regardless of policy.
        passthrough_statuses: Backend statuses relayed even under
            MASK_ERRORS (e.g., 404 on a single-record read).
    """

    action: Action
    method: str
    timeout: float
    policy: FallbackPolicy = FallbackPolicy.TRANSPARENT
    fallback: FallbackBuilder | None = None
    passthrough_statuses: frozenset[int] = frozenset()


@dataclass(frozen=True)
class ResourceSpec:
    """A backend resource and the endpoints exposed for it.

    Attributes:
        name: URL segment under /api (e.g., "stock-items").
        label: Singular label for messages (e.g., "stock item").
        endpoints: Endpoints exposed for the resource.
        filters: Optional list query parameters forwarded when non-empty.
        delete_strategies: Ordered DELETE delivery strategies.
    """

    name: str
    label: str
    endpoints: tuple[EndpointSpec, ...]
    filters: tuple[str, ...] = ()
    delete_strategies: tuple[DeliveryStrategy, ...] = (PATH_DELIVERY,)

    @property
    def path(self) -> str:
        """Backend path of the collection, without trailing slash."""
        return f"api/{self.name}"

    def endpoint(self, action: Action) -> EndpointSpec | None:
        """Look up the endpoint for an action, if exposed."""
        for spec in self.endpoints:
            if spec.action is action:
                return spec
        return None

    def require(self, action: Action) -> EndpointSpec:
        """Look up the endpoint for an action.

        Raises:
            KeyError: If the resource does not expose the action.
        """
        spec = self.endpoint(action)
        if spec is None:
            raise KeyError(f"{self.name} has no '{action.value}' endpoint")
        return spec

    def key(self, action: Action) -> str:
        """Config key for policy overrides ("customers.get")."""
        return f"{self.name}.{action.value}"
