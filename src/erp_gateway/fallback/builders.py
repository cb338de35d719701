"""Fallback builders: turn a FallbackRequest into a synthetic payload.

Builders follow one merge rule for caller-supplied fields: a field is
taken from the request body when it is truthy, otherwise the generated
default is used. Status-like flags are taken whenever the key is present
(so an explicit false survives). Created records get a random id in
100-1099 and status 201.
"""

from __future__ import annotations

__all__ = [
    "build_customer",
    "build_permission",
    "build_role",
    "build_user",
    "create_customer",
    "create_permission",
    "create_supplier",
    "create_user",
    "deletion",
    "empty_list",
    "list_branches",
    "list_customers",
    "list_permissions",
    "list_role_permissions",
    "list_roles",
    "list_suppliers",
    "list_users",
    "new_record_id",
    "update_customer",
    "update_permission",
    "update_user",
]

import random
from typing import Any, Mapping

from erp_gateway.constants import DEFAULT_LIMIT, DEFAULT_SKIP
from erp_gateway.fallback.models import (
    CustomerRecord,
    DeletionRecord,
    Page,
    PermissionRecord,
    RoleRecord,
    RoleSummary,
    SupplierRecord,
    UserRecord,
)
from erp_gateway.fallback.samples import (
    MAIN_BRANCH,
    NORTH_BRANCH,
    sample_branches,
    sample_customers,
    sample_permissions,
    sample_role_permissions,
    sample_roles,
    sample_suppliers,
    sample_users,
    supplier_summaries,
)
from erp_gateway.proxy.endpoints import FallbackBuilder, FallbackRequest, FallbackResult
from erp_gateway.utils.logging.iso_formatter import utc_now_iso

_CUSTOMER_STAMP = "2026-01-28T06:17:15"
_PERMISSION_STAMP = "2024-01-15T10:00:00Z"

_CUSTOMER_FIELDS = (
    "customer_code",
    "full_name",
    "phone",
    "business_name",
    "business_number",
    "address",
    "notes",
)
_SUPPLIER_FIELDS = (
    "supplier_code",
    "name",
    "type",
    "contact_person",
    "contact_email",
    "contact_number",
    "company",
    "address",
    "notes",
)
_PERMISSION_FIELDS = ("name", "slug", "description", "module")

# (role id, name, slug, description) per user tier
_ADMIN_ROLE = (1, "Administrator", "administrator", "Full system access")
_MANAGER_ROLE = (2, "Manager", "manager", "Branch management access")
_SALES_ROLE = (3, "Sales Representative", "sales_representative", "Sales and customer management")


def new_record_id() -> int:
    """Id for a record created while the backend is unavailable."""
    return random.randint(100, 1099)


def _pick(payload: Mapping[str, Any], key: str, default: Any) -> Any:
    """Caller value when truthy, else default. Empty lists count as set."""
    value = payload.get(key)
    if value is None or value == "" or value is False:
        return default
    if isinstance(value, (int, float)) and value == 0:
        return default
    return value


def _flag(payload: Mapping[str, Any], key: str, default: Any = True) -> Any:
    return payload[key] if key in payload else default


def _merge(record: dict[str, Any], payload: Mapping[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    """Overlay caller values onto generated defaults, field by field."""
    for name in fields:
        record[name] = _pick(payload, name, record[name])
    return record


def _int_param(params: Mapping[str, str], name: str, default: str) -> int:
    try:
        return int(params.get(name) or default)
    except ValueError:
        return int(default)


def _page(items: list[dict[str, Any]], params: Mapping[str, str]) -> dict[str, Any]:
    return Page(
        items=items,
        total=len(items),
        skip=_int_param(params, "skip", DEFAULT_SKIP),
        limit=_int_param(params, "limit", DEFAULT_LIMIT),
    ).model_dump()


# =============================================================================
# Shared
# =============================================================================


def empty_list(request: FallbackRequest) -> FallbackResult:
    return FallbackResult([])


def deletion(label: str) -> FallbackBuilder:
    """Builder acknowledging a DELETE of `label` (e.g., "Customer")."""

    def build(request: FallbackRequest) -> FallbackResult:
        record = DeletionRecord(
            message=f"{label} {request.resource_id} deleted successfully",
            id=request.resource_id,
            deleted_at=utc_now_iso(),
        )
        return FallbackResult(record.model_dump())

    return build


# =============================================================================
# Branches
# =============================================================================


def list_branches(request: FallbackRequest) -> FallbackResult:
    return FallbackResult([b.model_dump() for b in sample_branches()])


# =============================================================================
# Customers
# =============================================================================


def list_customers(request: FallbackRequest) -> FallbackResult:
    return FallbackResult([c.model_dump() for c in sample_customers()])


def build_customer(request: FallbackRequest) -> FallbackResult:
    """Sample customer by id, or 404 when the id is not in the sample."""
    for customer in sample_customers():
        if customer.id == request.resource_id:
            return FallbackResult(customer.model_dump())
    return FallbackResult({"detail": "Customer not found"}, status_code=404)


def create_customer(request: FallbackRequest) -> FallbackResult:
    customer_id = new_record_id()
    now = utc_now_iso()
    record = CustomerRecord(
        customer_code=f"CUST-{customer_id:03d}",
        full_name=f"New Customer {customer_id}",
        phone=f"+971 50 {customer_id:03d} {random.randint(0, 9998):04d}",
        address="Dubai, UAE",
        id=customer_id,
        created_at=now,
        updated_at=now,
    ).model_dump()
    _merge(record, request.payload, _CUSTOMER_FIELDS)
    record["status"] = _flag(request.payload, "status")
    return FallbackResult(record, status_code=201)


def update_customer(request: FallbackRequest) -> FallbackResult:
    customer_id = request.resource_id
    record = CustomerRecord(
        customer_code=f"CUST-{customer_id:03d}",
        full_name=f"Updated Customer {customer_id}",
        phone="+971 50 123 4567",
        total_purchase="1250.75",
        address="Dubai, UAE",
        id=customer_id,
        created_at=_CUSTOMER_STAMP,
        updated_at=utc_now_iso(),
    ).model_dump()
    _merge(record, request.payload, _CUSTOMER_FIELDS)
    record["status"] = _flag(request.payload, "status")
    return FallbackResult(record)


# =============================================================================
# Suppliers
# =============================================================================


def list_suppliers(request: FallbackRequest) -> FallbackResult:
    items = [s.model_dump() for s in sample_suppliers()]
    return FallbackResult(_page(items, request.params))


def create_supplier(request: FallbackRequest) -> FallbackResult:
    supplier_id = new_record_id()
    now = utc_now_iso()
    record = SupplierRecord(
        id=supplier_id,
        supplier_code=f"SUP-{supplier_id:03d}",
        name=f"New Supplier {supplier_id}",
        contact_person=f"Contact Person {supplier_id}",
        contact_email=f"supplier{supplier_id}@company.com",
        contact_number=f"+1-555-{supplier_id:04d}",
        address=f"{supplier_id} Business Street, City, State 12345",
        created_at=now,
        updated_at=now,
    ).model_dump()
    _merge(record, request.payload, _SUPPLIER_FIELDS)
    record["status"] = _flag(request.payload, "status")
    return FallbackResult(record, status_code=201)


# =============================================================================
# Roles
# =============================================================================


def list_roles(request: FallbackRequest) -> FallbackResult:
    return FallbackResult([r.model_dump() for r in sample_roles()])


def build_role(request: FallbackRequest) -> FallbackResult:
    """Sample role by id, or a placeholder role seeded from the id."""
    for role in sample_roles():
        if role.id == request.resource_id:
            return FallbackResult(role.model_dump())
    role = RoleRecord(
        id=request.resource_id,
        name=f"Role {request.resource_id}",
        slug=f"role-{request.resource_id}",
        description=f"Description for role {request.resource_id}",
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-01T00:00:00Z",
    )
    return FallbackResult(role.model_dump())


def list_role_permissions(request: FallbackRequest) -> FallbackResult:
    return FallbackResult([p.model_dump() for p in sample_role_permissions()])


# =============================================================================
# Permissions
# =============================================================================


def _permission_module(permission_id: int) -> str:
    if permission_id <= 4:
        return "Users"
    if permission_id <= 8:
        return "Roles"
    if permission_id <= 12:
        return "Permissions"
    return "General"


def list_permissions(request: FallbackRequest) -> FallbackResult:
    return FallbackResult([p.model_dump() for p in sample_permissions()])


def build_permission(request: FallbackRequest) -> FallbackResult:
    permission_id = request.resource_id
    record = PermissionRecord(
        id=permission_id,
        name=f"Permission {permission_id}",
        slug=f"permission_{permission_id}",
        description=f"Description for permission {permission_id}",
        module=_permission_module(permission_id),
        created_at=_PERMISSION_STAMP,
        updated_at=_PERMISSION_STAMP,
    )
    return FallbackResult(record.model_dump())


def create_permission(request: FallbackRequest) -> FallbackResult:
    permission_id = new_record_id()
    now = utc_now_iso()
    record = PermissionRecord(
        id=permission_id,
        name=f"New Permission {permission_id}",
        slug=f"new_permission_{permission_id}",
        description=f"Description for permission {permission_id}",
        created_at=now,
        updated_at=now,
    ).model_dump()
    _merge(record, request.payload, _PERMISSION_FIELDS)
    return FallbackResult(record, status_code=201)


def update_permission(request: FallbackRequest) -> FallbackResult:
    permission_id = request.resource_id
    record = PermissionRecord(
        id=permission_id,
        name=f"Permission {permission_id}",
        slug=f"permission_{permission_id}",
        description=f"Description for permission {permission_id}",
        created_at=_PERMISSION_STAMP,
        updated_at=utc_now_iso(),
    ).model_dump()
    _merge(record, request.payload, _PERMISSION_FIELDS)
    return FallbackResult(record)


# =============================================================================
# Users
# =============================================================================


def _role_summary(role: tuple[int, str, str, str]) -> RoleSummary:
    role_id, name, slug, description = role
    return RoleSummary(id=role_id, name=name, slug=slug, description=description)


def _user_from_payload(
    data: Mapping[str, Any],
    user_id: int,
    *,
    username: str,
    full_name: str,
    phone: str,
    created_at: str,
) -> dict[str, Any]:
    record = UserRecord(
        id=user_id,
        username=username,
        email=f"user{user_id}@company.com",
        full_name=full_name,
        phone=phone,
        role=_role_summary(_ADMIN_ROLE),
        branch_ids=[1],
        branches=[MAIN_BRANCH],
        created_at=created_at,
        updated_at=utc_now_iso(),
    ).model_dump()

    record["username"] = _pick(data, "username", None) or _pick(data, "user_code", username)
    record["full_name"] = _pick(data, "full_name", None) or _pick(data, "name", full_name)
    _merge(record, data, ("email", "phone", "role_id", "branch_ids", "supplier_ids"))
    record["is_active"] = _flag(data, "is_active", _flag(data, "status"))
    record["role"]["id"] = record["role_id"]
    return record


def list_users(request: FallbackRequest) -> FallbackResult:
    items = [u.model_dump() for u in sample_users()]
    return FallbackResult(_page(items, request.params))


def build_user(request: FallbackRequest) -> FallbackResult:
    """Placeholder user whose role, branches and suppliers depend on the
    id tier: 1-2 administrator, 3-4 manager, otherwise sales."""
    user_id = request.resource_id
    if user_id <= 2:
        role, branches, suppliers = _ADMIN_ROLE, [MAIN_BRANCH, NORTH_BRANCH], (1, 2, 3)
    elif user_id <= 4:
        role, branches, suppliers = _MANAGER_ROLE, [MAIN_BRANCH], (1, 2)
    else:
        role, branches, suppliers = _SALES_ROLE, [MAIN_BRANCH], ()

    record = UserRecord(
        id=user_id,
        username=f"user_{user_id}",
        email=f"user{user_id}@company.com",
        full_name=f"User {user_id}",
        phone=f"+1-555-000{user_id}",
        role_id=role[0],
        role=_role_summary(role),
        branch_ids=[b.id for b in branches],
        branches=branches,
        supplier_ids=list(suppliers),
        suppliers=supplier_summaries(suppliers),
        created_at=_PERMISSION_STAMP,
        updated_at=_PERMISSION_STAMP,
    )
    return FallbackResult(record.model_dump())


def create_user(request: FallbackRequest) -> FallbackResult:
    user_id = new_record_id()
    now = utc_now_iso()
    record = _user_from_payload(
        request.payload,
        user_id,
        username=f"new_user_{user_id}",
        full_name=f"New User {user_id}",
        phone=f"+1-555-{user_id:04d}",
        created_at=now,
    )
    record["updated_at"] = now
    return FallbackResult(record, status_code=201)


def update_user(request: FallbackRequest) -> FallbackResult:
    user_id = request.resource_id
    record = _user_from_payload(
        request.payload,
        user_id,
        username=f"user_{user_id}",
        full_name=f"User {user_id}",
        phone=f"+1-555-000{user_id}",
        created_at=_PERMISSION_STAMP,
    )
    record["permission_ids"] = _pick(request.payload, "permission_ids", [])
    record["permissions"] = []
    return FallbackResult(record)
