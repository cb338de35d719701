"""Tests for synthetic fallback payloads."""

import pytest

from erp_gateway.fallback import builders
from erp_gateway.fallback.samples import sample_customers, sample_permissions, sample_users
from erp_gateway.proxy.endpoints import FallbackRequest


def call(builder, resource_id=None, payload=None, params=None):
    return builder(FallbackRequest(resource_id=resource_id, payload=payload or {}, params=params or {}))


class TestSamples:
    def test_fresh_records_per_call(self):
        first = sample_customers()
        first[0].full_name = "Mutated"

        assert sample_customers()[0].full_name == "John Doe"

    def test_sixteen_permissions_with_modules(self):
        permissions = sample_permissions()

        assert [p.id for p in permissions] == list(range(1, 17))
        assert {p.module for p in permissions} == {"Users", "Roles", "Permissions", "Inventory", "Sales"}

    def test_users_carry_role_and_branches(self):
        admin = sample_users()[0]

        assert admin.username == "admin"
        assert admin.role.id == admin.role_id == 1
        assert admin.branch_ids == [1, 2]
        assert [s.id for s in admin.suppliers] == [1, 2, 3]


class TestCreateBuilders:
    def test_new_ids_in_range(self):
        ids = {builders.new_record_id() for _ in range(200)}

        assert all(100 <= i <= 1099 for i in ids)

    def test_create_customer_truthy_fields_win(self):
        result = call(builders.create_customer, payload={"full_name": "Acme", "phone": "", "notes": None})

        assert result.status_code == 201
        assert result.body["full_name"] == "Acme"
        assert result.body["phone"].startswith("+971 50")
        assert result.body["customer_code"] == f"CUST-{result.body['id']:03d}"
        assert result.body["status"] is True

    def test_explicit_false_status_survives(self):
        result = call(builders.create_supplier, payload={"status": False, "name": "Parts Co"})

        assert result.body["status"] is False
        assert result.body["name"] == "Parts Co"
        assert result.body["type"] == "Owner"

    def test_create_user_accepts_alias_fields(self):
        result = call(builders.create_user, payload={"user_code": "jdoe", "name": "Jane Doe", "role_id": 3})

        assert result.status_code == 201
        assert result.body["username"] == "jdoe"
        assert result.body["full_name"] == "Jane Doe"
        assert result.body["role_id"] == 3
        assert result.body["role"]["id"] == 3

    def test_create_permission(self):
        result = call(builders.create_permission, payload={"module": "Sales"})

        assert result.status_code == 201
        assert result.body["module"] == "Sales"
        assert result.body["slug"].startswith("new_permission_")


class TestItemBuilders:
    def test_update_customer_keeps_id(self):
        result = call(builders.update_customer, resource_id=8, payload={"address": "Sharjah"})

        assert result.status_code == 200
        assert result.body["id"] == 8
        assert result.body["address"] == "Sharjah"
        assert result.body["customer_code"] == "CUST-008"

    @pytest.mark.parametrize(
        "user_id,role_name,suppliers",
        [(1, "Administrator", [1, 2, 3]), (4, "Manager", [1, 2]), (9, "Sales Representative", [])],
    )
    def test_user_tiers(self, user_id, role_name, suppliers):
        result = call(builders.build_user, resource_id=user_id)

        assert result.body["role"]["name"] == role_name
        assert result.body["supplier_ids"] == suppliers
        assert result.body["phone"] == f"+1-555-000{user_id}"

    def test_update_user_adds_permissions(self):
        result = call(builders.update_user, resource_id=2, payload={"permission_ids": [1, 4], "is_active": False})

        assert result.body["permission_ids"] == [1, 4]
        assert result.body["permissions"] == []
        assert result.body["is_active"] is False

    @pytest.mark.parametrize("permission_id,module", [(1, "Users"), (6, "Roles"), (12, "Permissions"), (20, "General")])
    def test_permission_module_tiers(self, permission_id, module):
        assert call(builders.build_permission, resource_id=permission_id).body["module"] == module

    def test_deletion_acknowledgement(self):
        result = call(builders.deletion("User"), resource_id=3)

        assert result.body["message"] == "User 3 deleted successfully"
        assert result.body["id"] == 3
        assert result.body["deleted_at"].endswith("Z")


class TestListBuilders:
    def test_users_envelope_defaults(self):
        body = call(builders.list_users).body

        assert (body["total"], body["skip"], body["limit"]) == (5, 0, 100)

    def test_bad_paging_params_fall_back(self):
        body = call(builders.list_suppliers, params={"skip": "x", "limit": "20"}).body

        assert body["skip"] == 0
        assert body["limit"] == 20

    def test_empty_list(self):
        assert call(builders.empty_list).body == []
