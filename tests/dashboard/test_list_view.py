"""Tests for dashboard list state."""

import pytest

from erp_gateway.dashboard import ListView, StatusFilter, extract_items


def customers(count: int = 20) -> list[dict]:
    return [
        {
            "id": i,
            "full_name": f"Customer {i}",
            "customer_code": f"CUST-{i:03d}",
            "phone": f"+971 50 000 {i:04d}",
            "status": i % 2 == 0,
        }
        for i in range(1, count + 1)
    ]


@pytest.fixture
def view() -> ListView:
    return ListView(customers(), ("full_name", "customer_code", "phone"), status_field="status", items_per_page=8)


class TestConstruction:
    @pytest.mark.parametrize("per_page", [5, 9])
    def test_page_size_bounds(self, per_page):
        with pytest.raises(ValueError):
            ListView([], ("a", "b"), items_per_page=per_page)

    @pytest.mark.parametrize("fields", [("a",), ("a", "b", "c", "d", "e")])
    def test_search_field_count(self, fields):
        with pytest.raises(ValueError):
            ListView([], fields)


class TestFiltering:
    def test_search_case_insensitive_across_fields(self, view):
        view.search_query = "cust-01"

        assert [r["id"] for r in view.filtered] == list(range(10, 20))

        view.search_query = "CUSTOMER 7"
        assert [r["id"] for r in view.filtered] == [7]

    def test_status_filter(self, view):
        view.status_filter = "active"
        assert all(r["status"] for r in view.filtered)
        assert len(view.filtered) == 10

        view.status_filter = StatusFilter.INACTIVE
        assert not any(r["status"] for r in view.filtered)

    def test_string_status_values(self):
        rows = [{"id": 1, "name": "a", "code": "x", "status": "active"}, {"id": 2, "name": "b", "code": "y", "status": "inactive"}]
        view = ListView(rows, ("name", "code"), status_field="status", items_per_page=6)

        view.status_filter = "active"

        assert [r["id"] for r in view.filtered] == [1]

    def test_changing_query_or_filter_resets_page(self, view):
        view.set_page(3)
        view.search_query = "customer"
        assert view.page == 1

        view.set_page(2)
        view.status_filter = "inactive"
        assert view.page == 1


class TestPaging:
    def test_total_pages_pure(self, view):
        assert view.total_pages == 3
        assert view.total_pages == 3
        assert len(view.records) == 20

        view.search_query = "nothing matches"
        assert view.total_pages == 1
        assert view.page_items == []

    def test_page_items(self, view):
        view.set_page(3)

        assert [r["id"] for r in view.page_items] == [17, 18, 19, 20]

    @pytest.mark.parametrize("requested,expected", [(0, 1), (2, 2), (99, 3)])
    def test_set_page_clamps(self, view, requested, expected):
        assert view.set_page(requested) == expected

    def test_same_inputs_same_outputs(self):
        first = ListView(customers(), ("full_name", "phone"), items_per_page=6)
        second = ListView(customers(), ("full_name", "phone"), items_per_page=6)
        for v in (first, second):
            v.search_query = "1"
            v.set_page(2)

        assert first.page_items == second.page_items


class TestMenus:
    def test_single_open(self, view):
        assert view.toggle_menu(3) == 3
        assert view.toggle_menu(5) == 5
        assert view.open_menu == 5
        assert view.toggle_menu(5) is None


class TestExtractItems:
    @pytest.mark.parametrize(
        "payload,expected",
        [
            ([{"id": 1}], [{"id": 1}]),
            ({"items": [{"id": 2}], "total": 1}, [{"id": 2}]),
            ({"detail": "x"}, []),
            (None, []),
            ([1, {"id": 3}], [{"id": 3}]),
        ],
    )
    def test_shapes(self, payload, expected):
        assert extract_items(payload) == expected
