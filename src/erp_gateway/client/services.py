"""Per-resource service wrappers over GatewayClient.

Each service maps one gateway resource to get_all/get_by_id/create/
update/delete. Resource-specific helpers live on the subclasses.
"""

from __future__ import annotations

__all__ = [
    "SERVICES",
    "AuthService",
    "BranchService",
    "ContainerItemService",
    "ContainerService",
    "CustomerService",
    "InvoiceService",
    "PermissionService",
    "PurchaseOrderItemService",
    "PurchaseOrderService",
    "ResourceService",
    "RoleService",
    "StockItemService",
    "SupplierService",
    "UserService",
    "service_for",
]

from typing import Any
from urllib.parse import quote

from erp_gateway.client.api import GatewayClient
from erp_gateway.constants import DEFAULT_LIMIT, DEFAULT_SKIP


class ResourceService:
    """CRUD calls for one /api/<resource> collection.

    Args:
        client: Open gateway client.
    """

    resource: str = ""

    def __init__(self, client: GatewayClient) -> None:
        if not self.resource:
            raise TypeError(f"{type(self).__name__} does not declare a resource")
        self._client = client

    @property
    def base_path(self) -> str:
        return f"/api/{self.resource}"

    def item_path(self, item_id: int | str) -> str:
        return f"{self.base_path}/{item_id}"

    async def get_all(
        self,
        skip: int = int(DEFAULT_SKIP),
        limit: int = int(DEFAULT_LIMIT),
        **filters: Any,
    ) -> Any:
        """Fetch the collection. Filters with None or "" values are dropped."""
        params = {"skip": skip, "limit": limit, **filters}
        return await self._client.request("GET", self.base_path, params=params)

    async def get_by_id(self, item_id: int | str) -> Any:
        return await self._client.request("GET", self.item_path(item_id))

    async def create(self, data: dict[str, Any]) -> Any:
        return await self._client.request("POST", self.base_path, json_data=data)

    async def update(self, item_id: int | str, data: dict[str, Any]) -> Any:
        return await self._client.request("PUT", self.item_path(item_id), json_data=data)

    async def delete(self, item_id: int | str) -> Any:
        return await self._client.request("DELETE", self.item_path(item_id))


class BranchService(ResourceService):
    resource = "branches"


class CustomerService(ResourceService):
    resource = "customers"


class SupplierService(ResourceService):
    resource = "suppliers"


class StockItemService(ResourceService):
    resource = "stock-items"

    async def get_categories(self) -> Any:
        """Fetch the stock category tree."""
        return await self._client.request("GET", f"{self.base_path}/categories")


class ContainerService(ResourceService):
    resource = "containers"


class ContainerItemService(ResourceService):
    resource = "container-items"


class PurchaseOrderService(ResourceService):
    resource = "purchase-orders"


class PurchaseOrderItemService(ResourceService):
    resource = "po-items"

    async def get_all(
        self,
        skip: int = int(DEFAULT_SKIP),
        limit: int = int(DEFAULT_LIMIT),
        **filters: Any,
    ) -> Any:
        """PO items have no collection route; use get_available() instead."""
        raise NotImplementedError("po-items cannot be listed; use get_available()")

    async def get_available(self, **filters: Any) -> Any:
        """Fetch purchase order items not yet allocated to a container."""
        return await self._client.request("GET", f"{self.base_path}/available", params=filters)

    async def get_by_stock_number(self, stock_number: str) -> Any:
        return await self._client.request(
            "GET", f"{self.base_path}/stock/{quote(stock_number, safe='')}"
        )


class InvoiceService(ResourceService):
    resource = "invoices"


class RoleService(ResourceService):
    resource = "roles"

    async def get_permissions(self, role_id: int | str) -> Any:
        return await self._client.request("GET", f"{self.item_path(role_id)}/permissions")

    async def assign_permission(self, role_id: int | str, permission_id: int | str) -> Any:
        return await self._client.request(
            "POST", f"{self.item_path(role_id)}/permissions/{permission_id}"
        )

    async def revoke_permission(self, role_id: int | str, permission_id: int | str) -> Any:
        return await self._client.request(
            "DELETE", f"{self.item_path(role_id)}/permissions/{permission_id}"
        )

    async def get_by_slug(self, slug: str) -> Any:
        return await self._client.request("GET", f"{self.base_path}/slug/{quote(slug, safe='')}")


class PermissionService(ResourceService):
    resource = "permissions"


class UserService(ResourceService):
    resource = "users"


class AuthService:
    """Login, logout and current-user calls under /api/auth."""

    def __init__(self, client: GatewayClient) -> None:
        self._client = client

    async def login(self, email: str, password: str) -> Any:
        return await self._client.request(
            "POST", "/api/auth/login", json_data={"email": email, "password": password}
        )

    async def me(self) -> Any:
        return await self._client.request("GET", "/api/auth/me")

    async def logout(self) -> Any:
        return await self._client.request("POST", "/api/auth/logout")


# Keyed by resource name as used in /api/<resource>
SERVICES: dict[str, type[ResourceService]] = {
    cls.resource: cls
    for cls in (
        BranchService,
        CustomerService,
        SupplierService,
        StockItemService,
        ContainerService,
        ContainerItemService,
        PurchaseOrderService,
        PurchaseOrderItemService,
        InvoiceService,
        RoleService,
        PermissionService,
        UserService,
    )
}


def service_for(resource: str, client: GatewayClient) -> ResourceService:
    """Instantiate the service for a resource name.

    Raises:
        KeyError: If the resource is unknown.
    """
    try:
        cls = SERVICES[resource]
    except KeyError:
        raise KeyError(f"Unknown resource '{resource}'") from None
    return cls(client)
