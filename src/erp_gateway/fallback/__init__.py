"""Synthetic records served when the backend is unreachable or erroring."""

from erp_gateway.fallback import builders
from erp_gateway.fallback.builders import deletion, empty_list, new_record_id

__all__ = ["builders", "deletion", "empty_list", "new_record_id"]
