"""Dashboard list and form helpers."""

from erp_gateway.dashboard.detail import ContainerDetail, load_container_detail
from erp_gateway.dashboard.forms import FormState
from erp_gateway.dashboard.list_view import ListView, StatusFilter, extract_items

__all__ = [
    "ContainerDetail",
    "FormState",
    "ListView",
    "StatusFilter",
    "extract_items",
    "load_container_detail",
]
