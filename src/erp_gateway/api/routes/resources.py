"""Collection and item routes for every CRUD resource.

One router is built per ResourceSpec. Only the endpoints a resource
declares are mounted:

    GET    /api/{name}            list (skip, limit, declared filters)
    POST   /api/{name}            create
    GET    /api/{name}/{item_id}  read
    PUT    /api/{name}/{item_id}  update
    DELETE /api/{name}/{item_id}  delete (through delivery strategies)
    OPTIONS on both shapes        CORS preflight
"""

from __future__ import annotations

__all__ = ["build_resource_router"]

from fastapi import APIRouter, Request, Response

from erp_gateway.api.deps import HandlerDep
from erp_gateway.proxy.endpoints import Action, ResourceSpec
from erp_gateway.proxy.identifiers import parse_resource_id
from erp_gateway.proxy.responses import options_response
from erp_gateway.proxy.urls import collection_params

_COLLECTION_ACTIONS = (Action.LIST, Action.CREATE)
_ITEM_ACTIONS = (Action.GET, Action.UPDATE, Action.DELETE)


def build_resource_router(resource: ResourceSpec) -> APIRouter:
    """Create the router for one resource.

    Args:
        resource: Resource declaration.

    Returns:
        APIRouter mounted under /api/{resource.name}.
    """
    router = APIRouter(prefix=f"/{resource.path}", tags=[resource.name])
    collection_path = f"{resource.path}/"

    if resource.endpoint(Action.LIST):

        @router.get("")
        async def list_records(request: Request, handler: HandlerDep) -> Response:
            params = collection_params(request.query_params, resource.filters)
            return await handler.forward(request, resource, Action.LIST, collection_path, params=params)

    if resource.endpoint(Action.CREATE):

        @router.post("")
        async def create_record(request: Request, handler: HandlerDep) -> Response:
            return await handler.forward(request, resource, Action.CREATE, collection_path)

    if any(resource.endpoint(action) for action in _COLLECTION_ACTIONS):

        @router.options("")
        async def collection_options() -> Response:
            return options_response()

    if resource.endpoint(Action.GET):

        @router.get("/{item_id}")
        async def get_record(item_id: str, request: Request, handler: HandlerDep) -> Response:
            resource_id = parse_resource_id(item_id, resource.label)
            return await handler.forward(
                request,
                resource,
                Action.GET,
                f"{resource.path}/{resource_id}",
                resource_id=resource_id,
            )

    if resource.endpoint(Action.UPDATE):

        @router.put("/{item_id}")
        async def update_record(item_id: str, request: Request, handler: HandlerDep) -> Response:
            resource_id = parse_resource_id(item_id, resource.label)
            return await handler.forward(
                request,
                resource,
                Action.UPDATE,
                f"{resource.path}/{resource_id}",
                resource_id=resource_id,
            )

    if resource.endpoint(Action.DELETE):

        @router.delete("/{item_id}")
        async def delete_record(item_id: str, request: Request, handler: HandlerDep) -> Response:
            resource_id = parse_resource_id(item_id, resource.label)
            return await handler.forward(
                request,
                resource,
                Action.DELETE,
                resource.path,
                resource_id=resource_id,
                strategies=resource.delete_strategies,
            )

    if any(resource.endpoint(action) for action in _ITEM_ACTIONS):

        @router.options("/{item_id}")
        async def item_options(item_id: str) -> Response:
            return options_response()

    return router
