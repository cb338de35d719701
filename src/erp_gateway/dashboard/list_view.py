"""Search, status filter and pagination over one fetched collection.

ListView never fetches. It is handed the records once and every derived
value (filtered rows, page count, current page) is recomputed from its
state, so two views with the same inputs always agree.
"""

from __future__ import annotations

__all__ = ["ListView", "StatusFilter", "extract_items"]

import math
from enum import Enum
from typing import Any, Iterable, Sequence

MIN_ITEMS_PER_PAGE = 6
MAX_ITEMS_PER_PAGE = 8


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


def extract_items(payload: Any) -> list[dict[str, Any]]:
    """Normalize a collection response to a list of records.

    Accepts a bare list or a {"items": [...]} page envelope.
    """
    if isinstance(payload, dict):
        payload = payload.get("items", [])
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, dict)]


def _is_active(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("active", "true", "1")
    return bool(value)


class ListView:
    """Client-side list state for a dashboard table.

    Args:
        records: Rows to display.
        search_fields: Two to four record keys matched by the search box.
        status_field: Boolean (or "active"/"inactive") key used by the
            status filter, if the table has one.
        items_per_page: Page size, between 6 and 8.

    Raises:
        ValueError: On an invalid page size or search field count.
    """

    def __init__(
        self,
        records: Iterable[dict[str, Any]],
        search_fields: Sequence[str],
        *,
        status_field: str | None = None,
        items_per_page: int = MAX_ITEMS_PER_PAGE,
    ) -> None:
        if not MIN_ITEMS_PER_PAGE <= items_per_page <= MAX_ITEMS_PER_PAGE:
            raise ValueError(
                f"items_per_page must be between {MIN_ITEMS_PER_PAGE} and "
                f"{MAX_ITEMS_PER_PAGE}, got {items_per_page}"
            )
        if not 2 <= len(search_fields) <= 4:
            raise ValueError(f"expected 2 to 4 search fields, got {len(search_fields)}")

        self._records = tuple(records)
        self.search_fields = tuple(search_fields)
        self.status_field = status_field
        self.items_per_page = items_per_page
        self._search_query = ""
        self._status_filter = StatusFilter.ALL
        self._page = 1
        self._open_menu: Any = None

    # =========================================================================
    # Filter state
    # =========================================================================

    @property
    def records(self) -> tuple[dict[str, Any], ...]:
        return self._records

    @property
    def search_query(self) -> str:
        return self._search_query

    @search_query.setter
    def search_query(self, value: str) -> None:
        self._search_query = value or ""
        self._page = 1

    @property
    def status_filter(self) -> StatusFilter:
        return self._status_filter

    @status_filter.setter
    def status_filter(self, value: StatusFilter | str) -> None:
        self._status_filter = StatusFilter(value)
        self._page = 1

    # =========================================================================
    # Derived views
    # =========================================================================

    def _matches_search(self, record: dict[str, Any]) -> bool:
        needle = self._search_query.strip().lower()
        if not needle:
            return True
        for field in self.search_fields:
            value = record.get(field)
            if value is not None and needle in str(value).lower():
                return True
        return False

    def _matches_status(self, record: dict[str, Any]) -> bool:
        if self._status_filter is StatusFilter.ALL or self.status_field is None:
            return True
        active = _is_active(record.get(self.status_field))
        return active if self._status_filter is StatusFilter.ACTIVE else not active

    @property
    def filtered(self) -> list[dict[str, Any]]:
        return [r for r in self._records if self._matches_search(r) and self._matches_status(r)]

    @property
    def total_pages(self) -> int:
        """Number of pages for the filtered rows (at least 1)."""
        return max(1, math.ceil(len(self.filtered) / self.items_per_page))

    @property
    def page(self) -> int:
        return self._page

    def set_page(self, page: int) -> int:
        """Move to a page, clamped to 1..total_pages. Returns the new page."""
        self._page = min(max(1, page), self.total_pages)
        return self._page

    @property
    def page_items(self) -> list[dict[str, Any]]:
        start = (self._page - 1) * self.items_per_page
        return self.filtered[start : start + self.items_per_page]

    # =========================================================================
    # Row menus
    # =========================================================================

    @property
    def open_menu(self) -> Any:
        """Key of the row whose action menu is open, or None."""
        return self._open_menu

    def toggle_menu(self, row_key: Any) -> Any:
        """Open one row's menu, closing any other; a second toggle closes it."""
        self._open_menu = None if self._open_menu == row_key else row_key
        return self._open_menu
