"""Typed shapes for synthetic fallback records.

Only the gateway's own fallback payloads are modelled; records relayed
from the backend pass through untouched. Timestamps are kept as strings
because the sample tables carry the backend's exact formats (with and
without a zone suffix).
"""

from __future__ import annotations

__all__ = [
    "BranchRecord",
    "BranchSummary",
    "CustomerRecord",
    "DeletionRecord",
    "Page",
    "PermissionRecord",
    "RolePermissionRecord",
    "RoleRecord",
    "RoleSummary",
    "SupplierRecord",
    "SupplierSummary",
    "UserRecord",
]

from typing import Any

from pydantic import BaseModel, Field


class BranchRecord(BaseModel):
    id: int
    branch_name: str
    branch_code: str
    address: str
    phone: str
    status: bool = True
    created_at: str
    updated_at: str


class CustomerRecord(BaseModel):
    customer_code: str
    full_name: str
    phone: str
    business_name: str | None = None
    business_number: str | None = None
    total_purchase: str = "0.00"
    outstanding_balance: str = "0.00"
    address: str
    notes: str | None = None
    status: bool = True
    id: int
    created_at: str
    updated_at: str


class SupplierRecord(BaseModel):
    id: int
    supplier_code: str
    name: str
    type: str = "Owner"
    contact_person: str
    contact_email: str
    contact_number: str
    company: str | None = None
    address: str
    notes: str | None = None
    status: bool = True
    created_at: str
    updated_at: str


class RoleRecord(BaseModel):
    id: int
    name: str
    slug: str
    description: str
    created_at: str
    updated_at: str


class PermissionRecord(BaseModel):
    id: int
    name: str
    slug: str
    description: str
    module: str = "General"
    created_at: str
    updated_at: str


class RolePermissionRecord(BaseModel):
    """Permission as listed under a role."""

    id: int
    name: str
    module: str


class RoleSummary(BaseModel):
    id: int
    name: str
    slug: str
    description: str


class BranchSummary(BaseModel):
    id: int
    branch_name: str
    branch_code: str


class SupplierSummary(BaseModel):
    id: int
    name: str
    supplier_code: str


class UserRecord(BaseModel):
    """User with embedded role, branch and supplier summaries."""

    id: int
    username: str
    email: str
    full_name: str
    phone: str
    is_active: bool = True
    role_id: int = 1
    role: RoleSummary
    branch_ids: list[int] = Field(default_factory=list)
    branches: list[BranchSummary] = Field(default_factory=list)
    supplier_ids: list[int] = Field(default_factory=list)
    suppliers: list[SupplierSummary] = Field(default_factory=list)
    created_at: str
    updated_at: str


class DeletionRecord(BaseModel):
    """Acknowledgement served when a DELETE is masked."""

    message: str
    id: int
    deleted_at: str


class Page(BaseModel):
    """Paginated envelope used by the supplier and user lists."""

    items: list[dict[str, Any]]
    total: int
    skip: int
    limit: int
