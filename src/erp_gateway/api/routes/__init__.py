"""API route modules.

Route organization:
- resources: Generic collection/item routes, one router per resource
- roles: Role permission assignment and slug lookup
- inventory: Stock categories and purchase order item lookups
- auth: Login, current user, logout
- images: Binary relay of backend files
- passthrough: Generic /api/proxy/{path} forwarding
- status: Backend connectivity probe
"""

from . import auth, images, inventory, passthrough, resources, roles, status

__all__ = [
    "auth",
    "images",
    "inventory",
    "passthrough",
    "resources",
    "roles",
    "status",
]
