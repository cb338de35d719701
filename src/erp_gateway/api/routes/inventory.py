"""Inventory lookups that sit beside the generic CRUD routes.

These paths share a prefix with item routes (/api/stock-items/{item_id},
/api/po-items/{item_id}), so this router must be mounted first.
"""

from __future__ import annotations

__all__ = ["router"]

from urllib.parse import quote

from fastapi import APIRouter, Request, Response

from erp_gateway.api.deps import HandlerDep
from erp_gateway.proxy.endpoints import Action
from erp_gateway.proxy.responses import options_response
from erp_gateway.resources import PO_ITEMS, STOCK_ITEMS

router = APIRouter(prefix="/api", tags=["inventory"])


@router.get("/stock-items/categories")
async def stock_categories(request: Request, handler: HandlerDep) -> Response:
    """Stock item category tree."""
    return await handler.forward(request, STOCK_ITEMS, Action.CATEGORIES, f"{STOCK_ITEMS.path}/categories")


@router.get("/po-items/available")
async def available_po_items(request: Request, handler: HandlerDep) -> Response:
    """Purchase order items not yet received into a container."""
    return await handler.forward(
        request,
        PO_ITEMS,
        Action.AVAILABLE,
        f"{PO_ITEMS.path}/available",
        params=dict(request.query_params),
    )


@router.get("/po-items/stock/{stock_number}")
async def po_item_by_stock_number(stock_number: str, request: Request, handler: HandlerDep) -> Response:
    return await handler.forward(
        request,
        PO_ITEMS,
        Action.BY_STOCK_NUMBER,
        f"{PO_ITEMS.path}/stock/{quote(stock_number, safe='')}",
    )


@router.options("/stock-items/categories")
@router.options("/po-items/available")
@router.options("/po-items/stock/{stock_number}")
async def inventory_options() -> Response:
    return options_response()
