"""Request forwarding, fallback substitution and error classification."""

from erp_gateway.proxy.delivery import BODY, PATH, QUERY, DeliveryStrategy, deliver
from erp_gateway.proxy.endpoints import (
    Action,
    EndpointSpec,
    FallbackRequest,
    FallbackResult,
    ResourceSpec,
)
from erp_gateway.proxy.forwarder import BackendForwarder
from erp_gateway.proxy.handler import ProxyHandler
from erp_gateway.proxy.identifiers import parse_resource_id
from erp_gateway.proxy.urls import build_backend_url, collection_params

__all__ = [
    "Action",
    "BODY",
    "BackendForwarder",
    "DeliveryStrategy",
    "EndpointSpec",
    "FallbackRequest",
    "FallbackResult",
    "PATH",
    "ProxyHandler",
    "QUERY",
    "ResourceSpec",
    "build_backend_url",
    "collection_params",
    "deliver",
    "parse_resource_id",
]
