"""FastAPI application for the ERP gateway.

Currently implements:
- CRUD proxy routes for every ERP resource (/api/{resource}, /api/{resource}/{id})
- Role permission assignment and slug lookup (/api/roles/...)
- Inventory lookups (/api/stock-items/categories, /api/po-items/...)
- Auth (/api/auth/login, /api/auth/me, /api/auth/logout)
- Image relay (/api/images/{path}) and generic pass-through (/api/proxy/{path})
- Backend connectivity probe (/api/backend-status)

Lifecycle:
    One httpx.AsyncClient is created when the app starts and closed when it
    stops. The configuration, forwarder and handler live on app.state.

Usage:
    uvicorn erp_gateway.api.server:create_app --factory --port 3000

    Or via the CLI:
        erp-gateway serve
"""

from __future__ import annotations

__all__ = ["create_app"]

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from erp_gateway import __version__
from erp_gateway.config import GatewayConfig, load_config
from erp_gateway.constants import APP_NAME
from erp_gateway.proxy.forwarder import BackendForwarder
from erp_gateway.proxy.handler import ProxyHandler
from erp_gateway.resources import RESOURCES

from .errors import register_exception_handlers
from .routes import auth, images, inventory, passthrough, resources, roles, status

_logger = logging.getLogger(f"{APP_NAME}.api.server")


def create_app(
    config: GatewayConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the gateway application with all routes.

    Args:
        config: Gateway configuration. Loaded with load_config() when None.
        transport: Transport for the outbound client (tests inject an
            httpx.MockTransport here).

    Returns:
        Configured FastAPI application.
    """
    config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with httpx.AsyncClient(transport=transport, follow_redirects=False) as client:
            forwarder = BackendForwarder(config, client)
            app.state.forwarder = forwarder
            app.state.handler = ProxyHandler(config, forwarder)
            _logger.info(
                {
                    "event": "gateway_started",
                    "message": f"Gateway forwarding to {config.backend_url}",
                    "backend_url": config.backend_url,
                    "fallback_mode": config.fallback_mode.value,
                }
            )
            yield
        _logger.info({"event": "gateway_stopped", "message": "Gateway stopped"})

    app = FastAPI(
        title="ERP Gateway",
        description="Proxy and fallback layer in front of the ERP REST backend",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.config = config

    register_exception_handlers(app)

    # Fixed sub-paths first: they share prefixes with /{item_id} routes
    app.include_router(inventory.router)
    app.include_router(roles.router)
    app.include_router(auth.router)
    app.include_router(images.router)
    app.include_router(passthrough.router)
    app.include_router(status.router)
    for resource in RESOURCES:
        app.include_router(resources.build_resource_router(resource))

    return app
