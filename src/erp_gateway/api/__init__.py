"""HTTP surface of the gateway."""

from erp_gateway.api.server import create_app

__all__ = ["create_app"]
