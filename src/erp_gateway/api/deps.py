"""Shared dependencies for API routes.

FastAPI convention: deps.py contains reusable request dependencies.

Usage with Annotated:
    from erp_gateway.api.deps import ConfigDep, HandlerDep

    @router.get("/backend-status")
    async def backend_status(config: ConfigDep, handler: HandlerDep) -> Response:
        ...
"""

from __future__ import annotations

__all__ = [
    "get_config",
    "get_handler",
    "ConfigDep",
    "HandlerDep",
]

from typing import Annotated

from fastapi import Depends, Request

from erp_gateway.config import GatewayConfig
from erp_gateway.proxy.handler import ProxyHandler


def get_config(request: Request) -> GatewayConfig:
    """Gateway configuration resolved at startup."""
    config: GatewayConfig = request.app.state.config
    return config


def get_handler(request: Request) -> ProxyHandler:
    """Proxy handler bound to the app's shared HTTP client.

    The handler is created in the app lifespan, so it only exists while
    the app is running.
    """
    handler: ProxyHandler = request.app.state.handler
    return handler


ConfigDep = Annotated[GatewayConfig, Depends(get_config)]
HandlerDep = Annotated[ProxyHandler, Depends(get_handler)]
