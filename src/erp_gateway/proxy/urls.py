"""Backend URL and query string construction."""

from __future__ import annotations

__all__ = ["build_backend_url", "collection_params"]

from typing import Mapping, Sequence
from urllib.parse import urlencode

from erp_gateway.constants import DEFAULT_LIMIT, DEFAULT_SKIP


def build_backend_url(
    base_url: str,
    path: str,
    params: Mapping[str, str] | None = None,
) -> str:
    """Join the backend base URL, a resource path and a query string.

    Trailing slashes on the base and leading slashes on the path are
    collapsed so the result never contains "//" after the scheme.

    Args:
        base_url: Configured backend base URL.
        path: Resource path (e.g., "api/branches/3" or "api/roles/").
        params: Query parameters, in the order they should appear.

    Returns:
        Absolute backend URL.

    Example:
        >>> build_backend_url("http://api.local//", "/api/branches/3")
        'http://api.local/api/branches/3'
    """
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return url


def collection_params(query: Mapping[str, str], filters: Sequence[str] = ()) -> dict[str, str]:
    """Outbound query for a collection read.

    skip and limit are always sent (defaulting to 0 and 100); each declared
    filter is sent only when the caller gave a non-empty value.

    Args:
        query: Inbound query parameters.
        filters: Filter names the resource forwards.

    Returns:
        Ordered parameter dict.
    """
    params = {
        "skip": query.get("skip") or DEFAULT_SKIP,
        "limit": query.get("limit") or DEFAULT_LIMIT,
    }
    for name in filters:
        value = query.get(name)
        if value:
            params[name] = value
    return params
