"""Async client and per-resource services for the gateway API."""

from erp_gateway.client.api import GatewayAPIError, GatewayClient, error_message
from erp_gateway.client.services import (
    SERVICES,
    AuthService,
    BranchService,
    ContainerItemService,
    ContainerService,
    CustomerService,
    InvoiceService,
    PermissionService,
    PurchaseOrderItemService,
    PurchaseOrderService,
    ResourceService,
    RoleService,
    StockItemService,
    SupplierService,
    UserService,
    service_for,
)

__all__ = [
    "SERVICES",
    "AuthService",
    "BranchService",
    "ContainerItemService",
    "ContainerService",
    "CustomerService",
    "GatewayAPIError",
    "GatewayClient",
    "InvoiceService",
    "PermissionService",
    "PurchaseOrderItemService",
    "PurchaseOrderService",
    "ResourceService",
    "RoleService",
    "StockItemService",
    "SupplierService",
    "UserService",
    "error_message",
    "service_for",
]
