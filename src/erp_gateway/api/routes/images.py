"""Binary relay of backend static files (uploaded profile images etc.).

    GET /api/images/{path}  ->  {backend}/{path}
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter, Response
from fastapi.responses import PlainTextResponse

from erp_gateway.api.deps import HandlerDep
from erp_gateway.api.errors import ErrorCode, api_error_response
from erp_gateway.proxy.endpoints import Action
from erp_gateway.proxy.responses import cors_headers, options_response
from erp_gateway.resources import IMAGES

# Uploaded files never change in place
_CACHE_CONTROL = "public, max-age=31536000, immutable"
_DEFAULT_IMAGE_TYPE = "image/png"

router = APIRouter(prefix="/api/images", tags=["images"])


def _is_safe_image_path(path: str) -> bool:
    segments = path.split("/")
    return bool(path) and all(segment not in ("", ".", "..") for segment in segments)


@router.get("/{path:path}")
async def get_image(path: str, handler: HandlerDep) -> Response:
    """Fetch a backend file and relay its bytes.

    Args:
        path: File path on the backend (e.g., "uploads/profiles/users/1.png").
        handler: Proxy handler (for its forwarder).

    Returns:
        The file with its content type and a long-lived cache header,
        404-style plain text when the backend has no such file, or 400
        for an empty or traversing path.
    """
    if not _is_safe_image_path(path):
        return api_error_response(400, ErrorCode.INVALID_PATH, "Invalid image path", path or None)

    endpoint = IMAGES.require(Action.FETCH)
    upstream = await handler.forwarder.send("GET", path, timeout=endpoint.timeout, headers={})

    if not upstream.is_success:
        return PlainTextResponse("Image not found", status_code=upstream.status_code, headers=cors_headers())

    headers = cors_headers()
    headers["Cache-Control"] = _CACHE_CONTROL
    return Response(
        content=upstream.content,
        media_type=upstream.headers.get("content-type") or _DEFAULT_IMAGE_TYPE,
        headers=headers,
    )


@router.options("/{path:path}")
async def image_options(path: str) -> Response:
    return options_response("GET, OPTIONS")
