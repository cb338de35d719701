"""Route-level tests for the gateway app.

Every test runs the real app against a recording mock backend.
Uses AAA pattern (Arrange-Act-Assert) for clarity.
"""

import httpx
import pytest

from erp_gateway.config import FallbackMode, FallbackPolicy

BACKEND = "http://backend.test"


def assert_cors(response) -> None:
    assert response.headers["access-control-allow-origin"] == "*"
    assert "Content-Type" in response.headers["access-control-allow-headers"]
    assert "Authorization" in response.headers["access-control-allow-headers"]


# =============================================================================
# Identifier validation
# =============================================================================


class TestMalformedIdentifiers:
    """Bad ids are answered locally with 400; the backend is never called."""

    @pytest.mark.parametrize(
        "method,path,error",
        [
            ("DELETE", "/api/branches/abc", "Invalid branch ID"),
            ("GET", "/api/customers/undefined", "Invalid customer ID"),
            ("PUT", "/api/invoices/null", "Invalid invoice ID"),
            ("GET", "/api/stock-items/12abc", "Invalid stock item ID"),
            ("DELETE", "/api/customers/0", "Invalid customer ID"),
            ("GET", "/api/users/-3", "Invalid user ID"),
            ("GET", "/api/roles/x/permissions", "Invalid role ID"),
            ("POST", "/api/roles/1/permissions/none", "Invalid permission ID"),
            ("GET", "/api/container-items/1.5", "Invalid item ID"),
            ("GET", "/api/branches/%EF%BC%93", "Invalid branch ID"),
            ("GET", "/api/branches/%D9%A3", "Invalid branch ID"),
            ("DELETE", "/api/branches/5%0A", "Invalid branch ID"),
        ],
    )
    def test_rejected_without_backend_call(self, client, backend, method, path, error):
        # Act
        response = client.request(method, path)

        # Assert
        assert response.status_code == 400
        assert response.json()["error"] == error
        assert response.json()["code"] == "INVALID_IDENTIFIER"
        assert_cors(response)
        assert backend.requests == []

    def test_delete_branch_abc_message(self, client):
        response = client.delete("/api/branches/abc")

        assert response.json() == {
            "error": "Invalid branch ID",
            "details": "Branch ID must be a positive integer",
            "code": "INVALID_IDENTIFIER",
        }

    def test_placeholder_id_details(self, client):
        response = client.get("/api/customers/undefined")

        assert response.json()["details"] == "Customer ID is required and must be a valid number"


# =============================================================================
# URL construction
# =============================================================================


class TestBackendUrls:
    """Outbound URLs are exact whatever the configured trailing slashes."""

    @pytest.mark.parametrize(
        "method,path,expected",
        [
            ("GET", "/api/suppliers/7", f"{BACKEND}/api/suppliers/7"),
            ("PUT", "/api/containers/3", f"{BACKEND}/api/containers/3"),
            ("GET", "/api/po-items/12", f"{BACKEND}/api/po-items/12"),
            ("DELETE", "/api/branches/2", f"{BACKEND}/api/branches/2"),
            ("GET", "/api/roles/slug/store-manager", f"{BACKEND}/api/roles/slug/store-manager"),
            ("POST", "/api/roles/2/permissions/7", f"{BACKEND}/api/roles/2/permissions/7"),
            ("DELETE", "/api/roles/2/permissions/7", f"{BACKEND}/api/roles/2/permissions/7"),
            ("GET", "/api/stock-items/categories", f"{BACKEND}/api/stock-items/categories"),
            ("GET", "/api/po-items/stock/SN-001", f"{BACKEND}/api/po-items/stock/SN-001"),
        ],
    )
    def test_item_urls(self, client, backend, method, path, expected):
        response = client.request(method, path)

        assert response.status_code == 200
        assert backend.urls == [expected]
        assert backend.requests[0].method == method

    def test_collection_url_has_paging_defaults(self, client, backend):
        client.get("/api/branches")

        assert backend.urls == [f"{BACKEND}/api/branches/?skip=0&limit=100"]

    def test_declared_filters_forwarded_when_non_empty(self, client, backend):
        client.get("/api/containers", params={"skip": "20", "status": "open", "branch_id": "", "foo": "bar"})

        assert backend.urls == [f"{BACKEND}/api/containers/?skip=20&limit=100&status=open"]

    def test_available_po_items_keeps_query(self, client, backend):
        client.get("/api/po-items/available", params={"supplier_id": "4"})

        assert backend.urls == [f"{BACKEND}/api/po-items/available?supplier_id=4"]


# =============================================================================
# CORS preflight
# =============================================================================


class TestOptions:
    @pytest.mark.parametrize(
        "path",
        [
            "/api/customers",
            "/api/customers/5",
            "/api/branches",
            "/api/invoices/9",
            "/api/roles/1/permissions",
            "/api/roles/1/permissions/2",
            "/api/roles/slug/admin",
            "/api/stock-items/categories",
            "/api/po-items/available",
            "/api/po-items/stock/SN-1",
            "/api/auth/login",
            "/api/auth/me",
            "/api/auth/logout",
            "/api/images/uploads/a.png",
            "/api/proxy/reports/daily",
            "/api/backend-status",
        ],
    )
    def test_options_answered_locally(self, client, backend, path):
        response = client.options(path)

        assert response.status_code == 200
        assert response.content == b""
        assert_cors(response)
        assert backend.requests == []


# =============================================================================
# Fallback data
# =============================================================================


class TestFallback:
    def test_customer_list_on_network_failure(self, client, backend):
        backend.fail_with(httpx.ConnectError)

        response = client.get("/api/customers")

        assert response.status_code == 200
        assert response.headers["x-fallback-data"] == "true"
        assert_cors(response)
        assert len(response.json()) == 6

    def test_customer_one_fallback_record(self, client, backend):
        backend.fail_with(httpx.ConnectError)

        response = client.get("/api/customers/1")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == 1
        assert body["customer_code"] == "CUST-001"
        assert body["full_name"] == "John Doe"
        assert body["status"] is True

    def test_unknown_customer_fallback_is_404(self, client, backend):
        backend.fail_with(httpx.ConnectError)

        response = client.get("/api/customers/99")

        assert response.status_code == 404
        assert response.json() == {"detail": "Customer not found"}
        assert response.headers["x-fallback-data"] == "true"

    def test_customer_404_from_backend_is_relayed(self, client, backend):
        backend.queue(httpx.Response(404, json={"detail": "Customer not found"}))

        response = client.get("/api/customers/1")

        assert response.status_code == 404
        assert "x-fallback-data" not in response.headers

    def test_customer_500_from_backend_is_masked(self, client, backend):
        backend.queue(500)

        response = client.get("/api/customers/1")

        assert response.status_code == 200
        assert response.json()["full_name"] == "John Doe"

    def test_create_customer_on_timeout(self, client, backend):
        backend.fail_with(httpx.ReadTimeout)

        response = client.post("/api/customers", json={"full_name": "Acme Trading", "status": False})

        assert response.status_code == 201
        body = response.json()
        assert body["full_name"] == "Acme Trading"
        assert body["status"] is False
        assert 100 <= body["id"] <= 1099
        assert response.headers["x-fallback-data"] == "true"

    def test_create_customer_422_is_relayed(self, client, backend):
        backend.queue(httpx.Response(422, json={"detail": [{"loc": ["body", "phone"], "msg": "required"}]}))

        response = client.post("/api/customers", json={"full_name": "x"})

        assert response.status_code == 422
        assert response.json()["detail"][0]["msg"] == "required"

    def test_users_list_masks_unauthorized(self, client, backend):
        backend.queue(401)

        response = client.get("/api/users")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 5
        assert len(body["items"]) == 5

    def test_supplier_list_envelope(self, client, backend):
        backend.fail_with(httpx.ConnectError)

        response = client.get("/api/suppliers", params={"skip": "5", "limit": "10"})

        body = response.json()
        assert body["skip"] == 5
        assert body["limit"] == 10
        assert body["total"] == 5

    def test_role_item_seeded_placeholder(self, client, backend):
        backend.fail_with(httpx.ConnectError)

        response = client.get("/api/roles/9")

        assert response.status_code == 200
        assert response.json()["name"] == "Role 9"

    def test_role_permissions_fallback(self, client, backend):
        backend.fail_with(httpx.ConnectError)

        response = client.get("/api/roles/3/permissions")

        assert response.status_code == 200
        assert isinstance(response.json(), list)
        assert response.headers["x-fallback-data"] == "true"

    def test_available_po_items_empty_fallback(self, client, backend):
        backend.fail_with(httpx.ConnectError)

        response = client.get("/api/po-items/available")

        assert response.status_code == 200
        assert response.json() == []

    def test_transparent_mode_disables_fallback(self, make_client, gateway_config, backend):
        client = make_client(gateway_config.model_copy(update={"fallback_mode": FallbackMode.TRANSPARENT}))
        backend.fail_with(httpx.ConnectError)

        response = client.get("/api/customers")

        assert response.status_code == 503
        assert response.json()["code"] == "UPSTREAM_UNAVAILABLE"
        assert "x-fallback-data" not in response.headers

    def test_override_to_transparent(self, make_client, gateway_config, backend):
        config = gateway_config.model_copy(
            update={"fallback_overrides": {"customers.list": FallbackPolicy.TRANSPARENT}}
        )
        client = make_client(config)
        backend.fail_with(httpx.ConnectError, times=2)

        assert client.get("/api/customers").status_code == 503
        # Other endpoints keep their declared policy
        assert client.get("/api/customers/1").status_code == 200


# =============================================================================
# Unmasked failures
# =============================================================================


class TestUpstreamFailures:
    @pytest.mark.parametrize(
        "exc_type,status,code",
        [
            (httpx.ReadTimeout, 504, "UPSTREAM_TIMEOUT"),
            (httpx.ConnectError, 503, "UPSTREAM_UNAVAILABLE"),
            (httpx.RemoteProtocolError, 502, "UPSTREAM_ERROR"),
        ],
    )
    def test_transparent_endpoint_classifies_failure(self, client, backend, exc_type, status, code):
        backend.fail_with(exc_type)

        response = client.get("/api/invoices/3")

        assert response.status_code == status
        body = response.json()
        assert body["code"] == code
        assert body["error"]
        assert body["details"]
        assert_cors(response)

    def test_backend_error_relayed_verbatim(self, client, backend):
        backend.queue(httpx.Response(409, json={"detail": "Duplicate invoice number"}))

        response = client.post("/api/invoices", json={"invoice_number": "INV-1"})

        assert response.status_code == 409
        assert response.json() == {"detail": "Duplicate invoice number"}
        assert_cors(response)

    def test_unknown_route_is_json_404(self, client, backend):
        response = client.get("/api/warehouses")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"
        assert backend.requests == []


# =============================================================================
# Customer DELETE delivery
# =============================================================================


class TestCustomerDelete:
    def test_falls_through_path_query_body(self, client, backend):
        backend.queue(422, 422, httpx.Response(200, json={"message": "Customer deleted"}))

        response = client.delete("/api/customers/5")

        assert response.status_code == 200
        assert response.json() == {"message": "Customer deleted"}
        assert [r.method for r in backend.requests] == ["DELETE", "DELETE", "DELETE"]
        assert backend.urls == [
            f"{BACKEND}/api/customers/5",
            f"{BACKEND}/api/customers?customer_id=5",
            f"{BACKEND}/api/customers",
        ]
        assert backend.requests[0].content == b""
        assert backend.json_body(2) == {"customer_id": 5}

    def test_stops_at_first_accepted_convention(self, client, backend):
        backend.queue(204)

        response = client.delete("/api/customers/5")

        assert response.status_code == 204
        assert len(backend.requests) == 1

    def test_all_rejected_relays_last(self, client, backend):
        backend.queue(422, 422, httpx.Response(422, json={"detail": "no"}))

        response = client.delete("/api/customers/5")

        assert response.status_code == 422
        assert len(backend.requests) == 3

    def test_network_failure_acknowledged(self, client, backend):
        backend.fail_with(httpx.ConnectError)

        response = client.delete("/api/customers/5")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Customer 5 deleted successfully"
        assert body["id"] == 5
        assert len(backend.requests) == 1

    def test_other_resources_use_path_only(self, client, backend):
        backend.queue(422)

        response = client.delete("/api/suppliers/3")

        assert response.status_code == 422
        assert backend.urls == [f"{BACKEND}/api/suppliers/3"]


# =============================================================================
# Body and header pass-through
# =============================================================================


class TestPassThrough:
    def test_put_body_forwarded_byte_for_byte(self, client, backend):
        raw = b'{"total": 10.5, "lines": [1, 2], "note": "caf\\u00e9"}'
        backend.queue(lambda request: httpx.Response(200, content=request.content, headers={"content-type": "application/json"}))

        response = client.put(
            "/api/invoices/4",
            content=raw,
            headers={"Content-Type": "application/json", "Authorization": "Bearer tok"},
        )

        assert response.status_code == 200
        assert response.content == raw
        sent = backend.requests[0]
        assert sent.content == raw
        assert sent.headers["authorization"] == "Bearer tok"
        assert sent.headers["ngrok-skip-browser-warning"] == "true"

    def test_no_content_relayed(self, client, backend):
        backend.queue(204)

        response = client.delete("/api/invoices/2")

        assert response.status_code == 204
        assert response.content == b""
        assert_cors(response)

    def test_generic_proxy(self, client, backend):
        backend.queue(httpx.Response(500, json={"detail": "boom"}))

        response = client.post(
            "/api/proxy/reports/daily",
            params={"date": "2024-01-01"},
            content=b'{"a": 1}',
            headers={"Origin": "http://dashboard.test", "X-Trace": "abc"},
        )

        assert response.status_code == 500
        sent = backend.requests[0]
        assert str(sent.url) == f"{BACKEND}/reports/daily?date=2024-01-01"
        assert sent.method == "POST"
        assert sent.content == b'{"a": 1}'
        assert "origin" not in sent.headers
        assert sent.headers["x-trace"] == "abc"


# =============================================================================
# Auth, images, status
# =============================================================================


class TestAuth:
    def test_me_requires_authorization(self, client, backend):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["code"] == "AUTH_REQUIRED"
        assert backend.requests == []

    def test_me_forwards_token(self, client, backend):
        client.get("/api/auth/me", headers={"Authorization": "Bearer t"})

        assert backend.urls == [f"{BACKEND}/api/auth/me"]
        assert backend.requests[0].headers["authorization"] == "Bearer t"

    def test_login_forwarded(self, client, backend):
        backend.queue(httpx.Response(200, json={"access_token": "abc"}))

        response = client.post("/api/auth/login", json={"email": "a@b.c", "password": "pw"})

        assert response.json() == {"access_token": "abc"}
        assert backend.json_body(0) == {"email": "a@b.c", "password": "pw"}

    def test_logout_is_local(self, client, backend):
        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"
        assert "auth_token=" in response.headers["set-cookie"]
        assert backend.requests == []


class TestImages:
    def test_bytes_relayed_with_cache_header(self, client, backend):
        backend.queue(httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"}))

        response = client.get("/api/images/uploads/profiles/1.png")

        assert response.status_code == 200
        assert response.content == b"\x89PNG"
        assert response.headers["content-type"] == "image/png"
        assert "immutable" in response.headers["cache-control"]
        assert backend.urls == [f"{BACKEND}/uploads/profiles/1.png"]

    def test_missing_image(self, client, backend):
        backend.queue(404)

        response = client.get("/api/images/uploads/missing.png")

        assert response.status_code == 404
        assert response.text == "Image not found"

    @pytest.mark.parametrize(
        "path,safe",
        [
            ("uploads/a.png", True),
            ("", False),
            ("uploads/../secrets", False),
            ("uploads//a.png", False),
            ("./a.png", False),
        ],
    )
    def test_path_safety(self, path, safe):
        from erp_gateway.api.routes.images import _is_safe_image_path

        assert _is_safe_image_path(path) is safe


class TestBackendStatus:
    def test_reachable(self, client, backend):
        response = client.get("/api/backend-status")

        body = response.json()
        assert response.status_code == 200
        assert body["reachable"] is True
        assert body["status_code"] == 200
        assert body["backend_url"] == BACKEND
        assert backend.urls == [f"{BACKEND}/"]

    def test_unreachable_still_200(self, client, backend):
        backend.fail_with(httpx.ConnectError)

        response = client.get("/api/backend-status")

        body = response.json()
        assert response.status_code == 200
        assert body["reachable"] is False
        assert body["status_code"] is None
        assert "unavailable" in body["error"]
