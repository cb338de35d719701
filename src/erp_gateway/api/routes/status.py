"""Backend connectivity probe.

    GET /api/backend-status

Always answers 200; reachability is reported in the body so dashboards
can show an indicator without treating the probe itself as failed.
"""

from __future__ import annotations

__all__ = ["router"]

import time
from typing import Any

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from erp_gateway.api.deps import ConfigDep, HandlerDep
from erp_gateway.constants import STATUS_PROBE_TIMEOUT_SECONDS
from erp_gateway.exceptions import UpstreamError
from erp_gateway.proxy.responses import cors_headers, options_response
from erp_gateway.utils.logging.iso_formatter import utc_now_iso

router = APIRouter(prefix="/api/backend-status", tags=["status"])


@router.get("")
async def backend_status(config: ConfigDep, handler: HandlerDep) -> Response:
    """Probe the backend root URL.

    Returns:
        {backend_url, reachable, status_code, latency_ms, checked_at} and,
        when unreachable, an error string.
    """
    body: dict[str, Any] = {"backend_url": config.backend_url, "checked_at": utc_now_iso()}
    start_time = time.monotonic()
    try:
        upstream = await handler.forwarder.send("GET", "", timeout=STATUS_PROBE_TIMEOUT_SECONDS, headers={})
    except UpstreamError as e:
        body.update(reachable=False, status_code=None, error=e.default_message)
    else:
        body.update(reachable=upstream.status_code < 500, status_code=upstream.status_code)
    body["latency_ms"] = int((time.monotonic() - start_time) * 1000)
    return JSONResponse(body, headers=cors_headers())


@router.options("")
async def backend_status_options() -> Response:
    return options_response("GET, OPTIONS")
