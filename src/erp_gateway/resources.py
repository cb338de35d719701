"""Resource table: every proxied backend resource and its endpoints.

Timeouts and fallback policies are fixed per endpoint here; the gateway
config can only switch masking off globally or override a policy by
"<resource>.<action>" key.
"""

from __future__ import annotations

__all__ = ["RESOURCES", "get_resource"]

from erp_gateway.config import FallbackPolicy
from erp_gateway.constants import (
    FAST_LIST_TIMEOUT_SECONDS,
    HEAVY_WRITE_TIMEOUT_SECONDS,
    LIST_TIMEOUT_SECONDS,
    PASSTHROUGH_TIMEOUT_SECONDS,
    READ_TIMEOUT_SECONDS,
    WRITE_TIMEOUT_SECONDS,
)
from erp_gateway.fallback import builders
from erp_gateway.proxy.delivery import BODY, PATH, QUERY, DeliveryStrategy
from erp_gateway.proxy.endpoints import Action, EndpointSpec, ResourceSpec

TRANSPARENT = FallbackPolicy.TRANSPARENT
MASK_UNREACHABLE = FallbackPolicy.MASK_UNREACHABLE
MASK_ERRORS = FallbackPolicy.MASK_ERRORS


def _crud(
    *,
    list_timeout: float = LIST_TIMEOUT_SECONDS,
    update_timeout: float = WRITE_TIMEOUT_SECONDS,
) -> tuple[EndpointSpec, ...]:
    """Plain pass-through collection and item endpoints."""
    return (
        EndpointSpec(Action.LIST, "GET", list_timeout),
        EndpointSpec(Action.CREATE, "POST", WRITE_TIMEOUT_SECONDS),
        EndpointSpec(Action.GET, "GET", READ_TIMEOUT_SECONDS),
        EndpointSpec(Action.UPDATE, "PUT", update_timeout),
        EndpointSpec(Action.DELETE, "DELETE", READ_TIMEOUT_SECONDS),
    )


BRANCHES = ResourceSpec(
    name="branches",
    label="branch",
    endpoints=(
        EndpointSpec(
            Action.LIST, "GET", FAST_LIST_TIMEOUT_SECONDS, MASK_ERRORS, builders.list_branches
        ),
        *_crud()[1:],
    ),
    filters=("status",),
)

CUSTOMERS = ResourceSpec(
    name="customers",
    label="customer",
    endpoints=(
        EndpointSpec(Action.LIST, "GET", LIST_TIMEOUT_SECONDS, MASK_ERRORS, builders.list_customers),
        EndpointSpec(
            Action.CREATE, "POST", WRITE_TIMEOUT_SECONDS, MASK_UNREACHABLE, builders.create_customer
        ),
        EndpointSpec(
            Action.GET,
            "GET",
            READ_TIMEOUT_SECONDS,
            MASK_ERRORS,
            builders.build_customer,
            passthrough_statuses=frozenset({404}),
        ),
        EndpointSpec(
            Action.UPDATE, "PUT", WRITE_TIMEOUT_SECONDS, MASK_UNREACHABLE, builders.update_customer
        ),
        EndpointSpec(
            Action.DELETE,
            "DELETE",
            READ_TIMEOUT_SECONDS,
            MASK_UNREACHABLE,
            builders.deletion("Customer"),
        ),
    ),
    filters=("status",),
    delete_strategies=(
        DeliveryStrategy(PATH),
        DeliveryStrategy(QUERY, "customer_id"),
        DeliveryStrategy(BODY, "customer_id"),
    ),
)

SUPPLIERS = ResourceSpec(
    name="suppliers",
    label="supplier",
    endpoints=(
        EndpointSpec(Action.LIST, "GET", LIST_TIMEOUT_SECONDS, MASK_ERRORS, builders.list_suppliers),
        EndpointSpec(
            Action.CREATE, "POST", WRITE_TIMEOUT_SECONDS, MASK_UNREACHABLE, builders.create_supplier
        ),
        *_crud()[2:],
    ),
    filters=("status",),
)

STOCK_ITEMS = ResourceSpec(
    name="stock-items",
    label="stock item",
    endpoints=(
        *_crud(),
        EndpointSpec(Action.CATEGORIES, "GET", READ_TIMEOUT_SECONDS),
    ),
    filters=("parent_id",),
)

CONTAINERS = ResourceSpec(
    name="containers",
    label="container",
    endpoints=(
        EndpointSpec(Action.LIST, "GET", LIST_TIMEOUT_SECONDS, MASK_UNREACHABLE, builders.empty_list),
        *_crud()[1:],
    ),
    filters=("supplier_id", "branch_id", "status"),
)

CONTAINER_ITEMS = ResourceSpec(
    name="container-items",
    label="item",
    endpoints=_crud(),
    filters=("container_id",),
)

PURCHASE_ORDERS = ResourceSpec(
    name="purchase-orders",
    label="purchase order",
    endpoints=_crud(),
    filters=("supplier_id", "branch_id", "status"),
)

PO_ITEMS = ResourceSpec(
    name="po-items",
    label="item",
    endpoints=(
        *_crud()[2:],
        EndpointSpec(Action.AVAILABLE, "GET", READ_TIMEOUT_SECONDS, MASK_UNREACHABLE, builders.empty_list),
        EndpointSpec(Action.BY_STOCK_NUMBER, "GET", READ_TIMEOUT_SECONDS),
    ),
)

INVOICES = ResourceSpec(
    name="invoices",
    label="invoice",
    endpoints=_crud(update_timeout=HEAVY_WRITE_TIMEOUT_SECONDS),
    filters=("customer_id", "status"),
)

ROLES = ResourceSpec(
    name="roles",
    label="role",
    endpoints=(
        EndpointSpec(Action.LIST, "GET", FAST_LIST_TIMEOUT_SECONDS, MASK_ERRORS, builders.list_roles),
        EndpointSpec(Action.CREATE, "POST", READ_TIMEOUT_SECONDS),
        EndpointSpec(Action.GET, "GET", READ_TIMEOUT_SECONDS, MASK_UNREACHABLE, builders.build_role),
        EndpointSpec(Action.UPDATE, "PUT", WRITE_TIMEOUT_SECONDS),
        EndpointSpec(Action.DELETE, "DELETE", READ_TIMEOUT_SECONDS),
        EndpointSpec(
            Action.PERMISSIONS,
            "GET",
            READ_TIMEOUT_SECONDS,
            MASK_UNREACHABLE,
            builders.list_role_permissions,
        ),
        EndpointSpec(Action.GRANT, "POST", READ_TIMEOUT_SECONDS),
        EndpointSpec(Action.REVOKE, "DELETE", READ_TIMEOUT_SECONDS),
        EndpointSpec(Action.BY_SLUG, "GET", READ_TIMEOUT_SECONDS),
    ),
)

PERMISSIONS = ResourceSpec(
    name="permissions",
    label="permission",
    endpoints=(
        EndpointSpec(Action.LIST, "GET", LIST_TIMEOUT_SECONDS, MASK_ERRORS, builders.list_permissions),
        EndpointSpec(Action.CREATE, "POST", WRITE_TIMEOUT_SECONDS, MASK_ERRORS, builders.create_permission),
        EndpointSpec(Action.GET, "GET", READ_TIMEOUT_SECONDS, MASK_ERRORS, builders.build_permission),
        EndpointSpec(Action.UPDATE, "PUT", WRITE_TIMEOUT_SECONDS, MASK_ERRORS, builders.update_permission),
        EndpointSpec(
            Action.DELETE, "DELETE", READ_TIMEOUT_SECONDS, MASK_ERRORS, builders.deletion("Permission")
        ),
    ),
)

USERS = ResourceSpec(
    name="users",
    label="user",
    endpoints=(
        EndpointSpec(Action.LIST, "GET", LIST_TIMEOUT_SECONDS, MASK_ERRORS, builders.list_users),
        EndpointSpec(Action.CREATE, "POST", WRITE_TIMEOUT_SECONDS, MASK_UNREACHABLE, builders.create_user),
        EndpointSpec(Action.GET, "GET", READ_TIMEOUT_SECONDS, MASK_ERRORS, builders.build_user),
        EndpointSpec(Action.UPDATE, "PUT", WRITE_TIMEOUT_SECONDS, MASK_ERRORS, builders.update_user),
        EndpointSpec(
            Action.DELETE, "DELETE", READ_TIMEOUT_SECONDS, MASK_UNREACHABLE, builders.deletion("User")
        ),
    ),
    filters=("status", "branch_id", "role_id"),
)

AUTH = ResourceSpec(
    name="auth",
    label="session",
    endpoints=(
        EndpointSpec(Action.LOGIN, "POST", WRITE_TIMEOUT_SECONDS),
        EndpointSpec(Action.ME, "GET", READ_TIMEOUT_SECONDS),
    ),
)

IMAGES = ResourceSpec(
    name="images",
    label="image",
    endpoints=(EndpointSpec(Action.FETCH, "GET", READ_TIMEOUT_SECONDS),),
)

PASSTHROUGH = ResourceSpec(
    name="proxy",
    label="path",
    endpoints=(EndpointSpec(Action.FORWARD, "GET", PASSTHROUGH_TIMEOUT_SECONDS),),
)

# Resources served by the generic collection/item router, in route order
RESOURCES: tuple[ResourceSpec, ...] = (
    BRANCHES,
    CUSTOMERS,
    SUPPLIERS,
    STOCK_ITEMS,
    CONTAINERS,
    CONTAINER_ITEMS,
    PURCHASE_ORDERS,
    PO_ITEMS,
    INVOICES,
    ROLES,
    PERMISSIONS,
    USERS,
)

_BY_NAME = {resource.name: resource for resource in RESOURCES}


def get_resource(name: str) -> ResourceSpec:
    """Look up a CRUD resource by URL segment.

    Raises:
        KeyError: If no such resource is declared.
    """
    return _BY_NAME[name]
