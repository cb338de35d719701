"""Authentication routes.

    POST /api/auth/login   forwarded; the token in the response is opaque
    GET  /api/auth/me      forwarded; requires an Authorization header
    POST /api/auth/logout  local; clears the auth_token cookie
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from erp_gateway.api.deps import HandlerDep
from erp_gateway.api.errors import ErrorCode, api_error_response
from erp_gateway.proxy.endpoints import Action
from erp_gateway.proxy.responses import cors_headers, options_response
from erp_gateway.resources import AUTH
from erp_gateway.utils.logging.iso_formatter import utc_now_iso

AUTH_COOKIE = "auth_token"
_POST_METHODS = "POST, OPTIONS"

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(request: Request, handler: HandlerDep) -> Response:
    return await handler.forward(request, AUTH, Action.LOGIN, f"{AUTH.path}/login")


@router.get("/me")
async def current_user(request: Request, handler: HandlerDep) -> Response:
    """Profile of the bearer of the forwarded token."""
    if not request.headers.get("authorization"):
        return api_error_response(401, ErrorCode.AUTH_REQUIRED, "Authorization header required")
    return await handler.forward(request, AUTH, Action.ME, f"{AUTH.path}/me")


@router.post("/logout")
async def logout() -> Response:
    """Expire the auth cookie. Nothing is sent to the backend."""
    response = JSONResponse(
        {"message": "Logged out successfully", "timestamp": utc_now_iso()},
        headers=cors_headers(_POST_METHODS),
    )
    response.delete_cookie(AUTH_COOKIE, path="/", httponly=True, samesite="lax")
    return response


@router.options("/login")
@router.options("/logout")
async def post_only_options() -> Response:
    return options_response(_POST_METHODS)


@router.options("/me")
async def me_options() -> Response:
    return options_response()
