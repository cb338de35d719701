"""Path identifier validation.

The router hands route segments through as raw strings, including the
literal "undefined"/"null" a page produces when it builds a URL before its
data has loaded. Anything that is not a positive integer is rejected here,
before any backend call is attempted.
"""

from __future__ import annotations

__all__ = ["parse_resource_id"]

import logging
import re

from erp_gateway.constants import APP_NAME
from erp_gateway.exceptions import InvalidIdentifierError

_logger = logging.getLogger(f"{APP_NAME}.proxy.identifiers")

_PLACEHOLDER_VALUES = frozenset({"", "undefined", "null"})
_DIGITS = re.compile(r"[0-9]+")


def parse_resource_id(raw_value: str | None, label: str) -> int:
    """Parse a path identifier into a positive integer.

    Args:
        raw_value: Identifier as received from the route (may be None).
        label: Resource label used in the error message (e.g., "branch").

    Returns:
        The identifier as an int (> 0).

    Raises:
        InvalidIdentifierError: If the value is missing, a placeholder,
            non-numeric, or not positive.
    """
    if raw_value is None or raw_value in _PLACEHOLDER_VALUES:
        _log_rejected(label, raw_value)
        raise InvalidIdentifierError(
            label,
            raw_value,
            f"{label.capitalize()} ID is required and must be a valid number",
        )

    if not _DIGITS.fullmatch(raw_value) or int(raw_value) <= 0:
        _log_rejected(label, raw_value)
        raise InvalidIdentifierError(
            label,
            raw_value,
            f"{label.capitalize()} ID must be a positive integer",
        )

    return int(raw_value)


def _log_rejected(label: str, raw_value: str | None) -> None:
    _logger.info(
        {
            "event": "invalid_identifier",
            "message": f"Rejected {label} ID {raw_value!r}",
            "label": label,
            "raw_value": raw_value,
        }
    )
