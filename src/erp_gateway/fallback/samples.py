"""Fixed sample tables served when a list or lookup is masked.

Each function returns freshly built records so callers can never mutate
shared state between requests.
"""

from __future__ import annotations

__all__ = [
    "MAIN_BRANCH",
    "NORTH_BRANCH",
    "sample_branches",
    "sample_customers",
    "sample_permissions",
    "sample_role_permissions",
    "sample_roles",
    "sample_suppliers",
    "sample_users",
    "supplier_summaries",
]

from erp_gateway.fallback.models import (
    BranchRecord,
    BranchSummary,
    CustomerRecord,
    PermissionRecord,
    RolePermissionRecord,
    RoleRecord,
    RoleSummary,
    SupplierRecord,
    SupplierSummary,
    UserRecord,
)

_REFERENCE_STAMP = "2024-01-01T00:00:00Z"
_CUSTOMER_STAMP = "2026-01-28T06:17:15"
_PERMISSION_STAMP = "2024-01-15T10:00:00Z"

_BRANCHES = (
    (1, "Main Warehouse - Dubai", "DXB", "Dubai Industrial Area", "+971-4-1234567"),
    (2, "Branch 1 - Abu Dhabi", "AUH", "Abu Dhabi Industrial City", "+971-2-1234567"),
    (3, "Branch 2 - Sharjah", "SHJ", "Sharjah Industrial Area", "+971-6-1234567"),
    (4, "Branch 3 - Ajman", "AJM", "Ajman Free Zone", "+971-6-7654321"),
)

# id, code, name, phone, business, business no., purchases, balance, address, notes
_CUSTOMERS = (
    (1, "CUST-001", "John Doe", "+971 50 123 4567", "AutoFix Ltd.", "123456789",
     "1250.75", "0.00", "Al Quoz Industrial Area, Dubai, UAE",
     "Regular customer, good payment history"),
    (2, "CUST-002", "Ahmed Al Mansouri", "+971 55 987 6543", "Gulf Motors Trading", "987654321",
     "3450.00", "850.00", "Ras Al Khor Industrial Area, Dubai, UAE",
     "Wholesale customer, bulk orders"),
    (3, "CUST-003", "Sarah Johnson", "+971 52 456 7890", "Quick Fix Garage", "456789123",
     "890.50", "200.00", "Al Ain Industrial Area, Al Ain, UAE",
     "Small garage, frequent small orders"),
    (4, "CUST-004", "Mohammed Hassan", "+971 56 321 0987", "Hassan Auto Parts", "321098765",
     "5670.25", "1200.00", "Sharjah Industrial Area, Sharjah, UAE",
     "Large retailer, monthly payment terms"),
    (5, "CUST-005", "Lisa Chen", "+971 50 789 0123", "Chen Motors", "789012345",
     "2340.00", "0.00", "Abu Dhabi Industrial City, Abu Dhabi, UAE",
     "Specializes in Japanese car parts"),
    (6, "CUST-006", "Omar Al Zaabi", "+971 55 234 5678", None, None,
     "450.00", "0.00", "Jumeirah, Dubai, UAE",
     "Individual customer, occasional purchases"),
)

# id, code, name, type, contact, email, number, address, created
_SUPPLIERS = (
    (1, "SUP-001", "ABC Electronics Ltd", "Owner", "John Smith", "john@abcelectronics.com",
     "+1-555-0101", "123 Tech Street, Silicon Valley, CA 94000", "2024-01-15T10:00:00Z"),
    (2, "SUP-002", "Global Components Inc", "Rental", "Sarah Johnson", "sarah@globalcomponents.com",
     "+1-555-0102", "456 Industrial Blvd, Austin, TX 78701", "2024-01-16T11:30:00Z"),
    (3, "SUP-003", "Tech Solutions Corp", "Owner", "Mike Davis", "mike@techsolutions.com",
     "+1-555-0103", "789 Innovation Drive, Seattle, WA 98101", "2024-01-17T14:15:00Z"),
    (4, "SUP-004", "Premium Parts Ltd", "Owner", "Lisa Chen", "lisa@premiumparts.com",
     "+1-555-0104", "321 Quality Lane, Denver, CO 80201", "2024-01-18T09:45:00Z"),
    (5, "SUP-005", "Reliable Suppliers Co", "Owner", "Robert Wilson", "robert@reliablesuppliers.com",
     "+1-555-0105", "654 Commerce St, Miami, FL 33101", "2024-01-19T16:20:00Z"),
)

_ROLES = (
    (1, "Administrator", "administrator", "Full system access with all permissions"),
    (2, "Manager", "manager", "Management level access with most permissions"),
    (3, "Staff", "staff", "Standard staff access with limited permissions"),
    (4, "Sales Representative", "sales-representative",
     "Sales focused access with customer and order permissions"),
    (5, "Accountant", "accountant", "Financial access with invoice and reporting permissions"),
)

# module, noun for descriptions
_CRUD_MODULES = (("Users", "user"), ("Roles", "role"), ("Permissions", "permission"))

_EXTRA_PERMISSIONS = (
    ("View Inventory", "view_inventory", "Can view inventory items", "Inventory"),
    ("Manage Inventory", "manage_inventory", "Can create, edit, and delete inventory items", "Inventory"),
    ("View Sales", "view_sales", "Can view sales data and reports", "Sales"),
    ("Manage Sales", "manage_sales", "Can create and manage sales orders", "Sales"),
)

_ROLE_PERMISSIONS = (
    (1, "View Dashboard", "Dashboard"),
    (2, "Manage Users", "Users"),
    (3, "View Users", "Users"),
    (4, "Manage Roles", "Roles"),
    (5, "View Roles", "Roles"),
)

MAIN_BRANCH = BranchSummary(id=1, branch_name="Main Branch", branch_code="MB001")
NORTH_BRANCH = BranchSummary(id=2, branch_name="North Branch", branch_code="NB002")

_SUPPLIER_SUMMARIES = {
    1: SupplierSummary(id=1, name="ABC Electronics Ltd", supplier_code="SUP001"),
    2: SupplierSummary(id=2, name="Global Components Inc", supplier_code="SUP002"),
    3: SupplierSummary(id=3, name="Tech Solutions Corp", supplier_code="SUP003"),
    4: SupplierSummary(id=4, name="Premium Parts Ltd", supplier_code="SUP004"),
}

# id, username, email, full name, role (id, name, slug, description), branches, suppliers, stamp
_USERS = (
    (1, "admin", "admin@company.com", "System Administrator",
     (1, "Administrator", "administrator", "Full system access"),
     (MAIN_BRANCH, NORTH_BRANCH), (1, 2, 3), "2024-01-15T10:00:00Z"),
    (2, "manager", "manager@company.com", "Branch Manager",
     (2, "Manager", "manager", "Branch management access"),
     (MAIN_BRANCH,), (1, 2), "2024-01-16T11:30:00Z"),
    (3, "sales_rep", "sales@company.com", "Sales Representative",
     (3, "Sales Representative", "sales_representative", "Sales and customer management"),
     (MAIN_BRANCH,), (), "2024-01-17T14:15:00Z"),
    (4, "inventory_clerk", "inventory@company.com", "Inventory Clerk",
     (4, "Inventory Clerk", "inventory_clerk", "Inventory management access"),
     (NORTH_BRANCH,), (1, 3, 4), "2024-01-18T09:45:00Z"),
    (5, "cashier", "cashier@company.com", "Store Cashier",
     (5, "Cashier", "cashier", "Point of sale access"),
     (MAIN_BRANCH,), (), "2024-01-19T16:20:00Z"),
)


def supplier_summaries(supplier_ids: tuple[int, ...]) -> list[SupplierSummary]:
    return [_SUPPLIER_SUMMARIES[i] for i in supplier_ids]


def sample_branches() -> list[BranchRecord]:
    return [
        BranchRecord(
            id=branch_id,
            branch_name=name,
            branch_code=code,
            address=address,
            phone=phone,
            created_at=_REFERENCE_STAMP,
            updated_at=_REFERENCE_STAMP,
        )
        for branch_id, name, code, address, phone in _BRANCHES
    ]


def sample_customers() -> list[CustomerRecord]:
    records = []
    for (customer_id, code, name, phone, business, number,
         purchases, balance, address, notes) in _CUSTOMERS:
        records.append(
            CustomerRecord(
                customer_code=code,
                full_name=name,
                phone=phone,
                business_name=business,
                business_number=number,
                total_purchase=purchases,
                outstanding_balance=balance,
                address=address,
                notes=notes,
                id=customer_id,
                created_at=_CUSTOMER_STAMP,
                updated_at=_CUSTOMER_STAMP,
            )
        )
    return records


def sample_suppliers() -> list[SupplierRecord]:
    return [
        SupplierRecord(
            id=supplier_id,
            supplier_code=code,
            name=name,
            type=kind,
            contact_person=contact,
            contact_email=email,
            contact_number=number,
            address=address,
            created_at=stamp,
            updated_at=stamp,
        )
        for supplier_id, code, name, kind, contact, email, number, address, stamp in _SUPPLIERS
    ]


def sample_roles() -> list[RoleRecord]:
    return [
        RoleRecord(
            id=role_id,
            name=name,
            slug=slug,
            description=description,
            created_at=_REFERENCE_STAMP,
            updated_at=_REFERENCE_STAMP,
        )
        for role_id, name, slug, description in _ROLES
    ]


def sample_permissions() -> list[PermissionRecord]:
    """Sixteen permissions: CRUD on users, roles and permissions, then
    inventory and sales."""
    rows: list[tuple[str, str, str, str]] = []
    for module, noun in _CRUD_MODULES:
        plural = module.lower()
        rows.extend(
            [
                (f"View {module}", f"view_{plural}", f"Can view {noun} list and details", module),
                (f"Create {module}", f"create_{plural}", f"Can create new {plural}", module),
                (f"Edit {module}", f"edit_{plural}", f"Can edit existing {plural}", module),
                (f"Delete {module}", f"delete_{plural}", f"Can delete {plural}", module),
            ]
        )
    rows.extend(_EXTRA_PERMISSIONS)

    return [
        PermissionRecord(
            id=index,
            name=name,
            slug=slug,
            description=description,
            module=module,
            created_at=_PERMISSION_STAMP,
            updated_at=_PERMISSION_STAMP,
        )
        for index, (name, slug, description, module) in enumerate(rows, start=1)
    ]


def sample_role_permissions() -> list[RolePermissionRecord]:
    return [
        RolePermissionRecord(id=permission_id, name=name, module=module)
        for permission_id, name, module in _ROLE_PERMISSIONS
    ]


def sample_users() -> list[UserRecord]:
    users = []
    for user_id, username, email, full_name, role, branches, suppliers, stamp in _USERS:
        role_id, role_name, role_slug, role_description = role
        users.append(
            UserRecord(
                id=user_id,
                username=username,
                email=email,
                full_name=full_name,
                phone=f"+1-555-000{user_id}",
                role_id=role_id,
                role=RoleSummary(id=role_id, name=role_name, slug=role_slug, description=role_description),
                branch_ids=[b.id for b in branches],
                branches=list(branches),
                supplier_ids=list(suppliers),
                suppliers=supplier_summaries(suppliers),
                created_at=stamp,
                updated_at=stamp,
            )
        )
    return users
