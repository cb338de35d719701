"""Role permission assignment and slug lookup routes.

    GET     /api/roles/{role_id}/permissions
    POST    /api/roles/{role_id}/permissions/{permission_id}
    DELETE  /api/roles/{role_id}/permissions/{permission_id}
    GET     /api/roles/slug/{slug}
"""

from __future__ import annotations

__all__ = ["router"]

from urllib.parse import quote

from fastapi import APIRouter, Request, Response

from erp_gateway.api.deps import HandlerDep
from erp_gateway.proxy.endpoints import Action
from erp_gateway.proxy.identifiers import parse_resource_id
from erp_gateway.proxy.responses import options_response
from erp_gateway.resources import ROLES

router = APIRouter(prefix="/api/roles", tags=["roles"])


@router.get("/{role_id}/permissions")
async def list_role_permissions(role_id: str, request: Request, handler: HandlerDep) -> Response:
    """Permissions granted to a role."""
    resource_id = parse_resource_id(role_id, ROLES.label)
    return await handler.forward(
        request,
        ROLES,
        Action.PERMISSIONS,
        f"{ROLES.path}/{resource_id}/permissions",
        resource_id=resource_id,
    )


@router.options("/{role_id}/permissions")
async def role_permissions_options(role_id: str) -> Response:
    return options_response()


async def _assignment(
    request: Request,
    handler: HandlerDep,
    action: Action,
    role_id: str,
    permission_id: str,
) -> Response:
    resource_id = parse_resource_id(role_id, ROLES.label)
    target_id = parse_resource_id(permission_id, "permission")
    return await handler.forward(
        request,
        ROLES,
        action,
        f"{ROLES.path}/{resource_id}/permissions/{target_id}",
        resource_id=resource_id,
    )


@router.post("/{role_id}/permissions/{permission_id}")
async def grant_permission(
    role_id: str,
    permission_id: str,
    request: Request,
    handler: HandlerDep,
) -> Response:
    """Grant a permission to a role."""
    return await _assignment(request, handler, Action.GRANT, role_id, permission_id)


@router.delete("/{role_id}/permissions/{permission_id}")
async def revoke_permission(
    role_id: str,
    permission_id: str,
    request: Request,
    handler: HandlerDep,
) -> Response:
    """Revoke a permission from a role."""
    return await _assignment(request, handler, Action.REVOKE, role_id, permission_id)


@router.options("/{role_id}/permissions/{permission_id}")
async def assignment_options(role_id: str, permission_id: str) -> Response:
    return options_response()


@router.get("/slug/{slug}")
async def get_role_by_slug(slug: str, request: Request, handler: HandlerDep) -> Response:
    """Role lookup by slug (e.g., "sales-representative")."""
    return await handler.forward(request, ROLES, Action.BY_SLUG, f"{ROLES.path}/slug/{quote(slug, safe='')}")


@router.options("/slug/{slug}")
async def slug_options(slug: str) -> Response:
    return options_response()
