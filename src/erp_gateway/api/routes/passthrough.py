"""Generic pass-through: /api/proxy/{path} -> {backend}/{path}.

Used by pages that talk to backend endpoints without a dedicated route.
All inbound headers are forwarded except the ones that identify the
browser-facing origin.
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter, Request, Response

from erp_gateway.api.deps import HandlerDep
from erp_gateway.proxy.endpoints import Action
from erp_gateway.proxy.responses import options_response
from erp_gateway.resources import PASSTHROUGH

PASSTHROUGH_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH"]

# content-length is recomputed by the HTTP client
_STRIP_HEADERS = frozenset({"host", "origin", "referer", "content-length"})

router = APIRouter(prefix="/api/proxy", tags=["proxy"])


@router.api_route("/{path:path}", methods=PASSTHROUGH_METHODS)
async def passthrough(path: str, request: Request, handler: HandlerDep) -> Response:
    headers = {k: v for k, v in request.headers.items() if k.lower() not in _STRIP_HEADERS}
    return await handler.forward(
        request,
        PASSTHROUGH,
        Action.FORWARD,
        path,
        params=dict(request.query_params),
        headers=headers,
        method=request.method,
    )


@router.options("/{path:path}")
async def passthrough_options(path: str) -> Response:
    return options_response(", ".join([*PASSTHROUGH_METHODS, "OPTIONS"]))
