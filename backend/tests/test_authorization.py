"""
Authorization tests.

Verifies:
- Unauthenticated requests return 401
- Client role denied warehouse operator operations (403)
- Partner roles are limited to browsing warehouses
- Denials are logged as security events
"""

import pytest

from warebnb.models import SecurityEvent
from warebnb.decorators import require_permission


# =============================================================================
# UNAUTHENTICATED ACCESS (401)
# =============================================================================


class TestUnauthenticatedAccess:
    """All protected endpoints return 401 without a token."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/v1/users/me"),
            ("GET", "/api/v1/navigation"),
            ("GET", "/api/v1/companies/me"),
            ("GET", "/api/v1/warehouses"),
            ("POST", "/api/v1/warehouses/quote"),
            ("GET", "/api/v1/bookings"),
            ("POST", "/api/v1/bookings"),
            ("GET", "/api/v1/invoices"),
            ("POST", "/api/v1/invoices/generate"),
            ("GET", "/api/v1/claims"),
            ("GET", "/api/v1/orders"),
            ("GET", "/api/v1/access-logs"),
            ("GET", "/api/v1/inventory"),
            ("GET", "/api/v1/dashboard/summary"),
            ("GET", "/api/v1/dashboard/security-events"),
        ],
    )
    def test_requires_auth(self, client, db_session, method, path):
        resp = getattr(client, method.lower())(path)
        assert resp.status_code == 401, f"{method} {path} returned {resp.status_code}"
        assert resp.get_json()["success"] is False


# =============================================================================
# CLIENT DENIED OPERATOR OPERATIONS (403)
# =============================================================================


class TestClientDeniedOperatorActions:
    """Warehouse client cannot perform warehouse-side operations."""

    def test_cannot_create_warehouse(self, client, client_headers):
        resp = client.post("/api/v1/warehouses", json={"name": "Mine"}, headers=client_headers)
        assert resp.status_code == 403

    def test_cannot_set_pricing(self, client, client_headers, warehouse_a):
        resp = client.put(
            f"/api/v1/warehouses/{warehouse_a.id}/pricing",
            json={"pricing_type": "pallet", "base_price_cents": 100, "unit": "per_pallet_per_month"},
            headers=client_headers,
        )
        assert resp.status_code == 403

    def test_cannot_generate_invoice(self, client, client_headers, booking_a):
        resp = client.post("/api/v1/invoices/generate", json={"booking_id": booking_a.id}, headers=client_headers)
        assert resp.status_code == 403

    def test_cannot_review_claims(self, client, client_headers):
        resp = client.post("/api/v1/claims/1/review", json={"status": "approved"}, headers=client_headers)
        assert resp.status_code == 403

    def test_cannot_view_access_logs(self, client, client_headers):
        resp = client.get("/api/v1/access-logs", headers=client_headers)
        assert resp.status_code == 403

    def test_cannot_propose_time(self, client, client_headers, booking_a):
        resp = client.post(
            f"/api/v1/bookings/{booking_a.id}/propose-time",
            json={"proposed_start_date": "2099-01-01", "proposed_start_time": "09:00"},
            headers=client_headers,
        )
        assert resp.status_code == 403

    def test_cannot_view_security_events(self, client, client_headers):
        resp = client.get("/api/v1/dashboard/security-events", headers=client_headers)
        assert resp.status_code == 403

    def test_cannot_create_company(self, client, admin_headers):
        resp = client.post("/api/v1/companies", json={"name": "Side Co"}, headers=admin_headers)
        assert resp.status_code == 403

    def test_denial_logged(self, client, db_session, client_headers):
        client.post("/api/v1/warehouses", json={"name": "Mine"}, headers=client_headers)

        db_session.expire_all()
        event = db_session.query(SecurityEvent).filter_by(event_type="PERMISSION_DENIED").first()
        assert event is not None
        assert event.action == "MANAGE_WAREHOUSES"


class TestStaffLimits:
    """Staff run daily operations but not pricing or claims review."""

    def test_staff_cannot_manage_pricing(self, client, staff_headers, warehouse_a):
        resp = client.put(
            f"/api/v1/warehouses/{warehouse_a.id}/pricing",
            json={"pricing_type": "pallet", "base_price_cents": 100, "unit": "per_pallet_per_month"},
            headers=staff_headers,
        )
        assert resp.status_code == 403

    def test_staff_cannot_edit_company(self, client, staff_headers):
        resp = client.patch("/api/v1/companies/me", json={"name": "Renamed"}, headers=staff_headers)
        assert resp.status_code == 403

    def test_staff_can_view_access_logs(self, client, staff_headers):
        resp = client.get("/api/v1/access-logs", headers=staff_headers)
        assert resp.status_code == 200


class TestPartnerRoles:

    def test_broker_can_browse_warehouses(self, client, broker_headers, warehouse_a):
        resp = client.get("/api/v1/warehouses", headers=broker_headers)
        assert resp.status_code == 200
        assert [w["id"] for w in resp.get_json()["data"]] == [warehouse_a.id]

    def test_broker_cannot_book(self, client, broker_headers, warehouse_a):
        resp = client.post(
            "/api/v1/bookings",
            json={"type": "pallet", "warehouse_id": warehouse_a.id},
            headers=broker_headers,
        )
        assert resp.status_code == 403


class TestSystemRoutes:

    def test_health(self, client, db_session):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.get_json()["database"] == "ok"

    def test_version(self, client):
        assert client.get("/version").get_json()["api"] == "v1"

    def test_unknown_route_json(self, client):
        resp = client.get("/api/v1/nope")
        assert resp.status_code == 404
        assert resp.get_json() == {"success": False, "error": "Not found"}

    def test_cors_for_allowed_origin(self, client, db_session):
        resp = client.get("/health", headers={"Origin": "http://localhost:3000"})
        assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"

    def test_no_cors_for_unknown_origin(self, client, db_session):
        resp = client.get("/health", headers={"Origin": "http://evil.test"})
        assert "Access-Control-Allow-Origin" not in resp.headers


class TestPermissionCatalog:

    def test_client_catalog_grouped(self, client, db_session, client_headers):
        resp = client.get("/api/v1/users/me/permissions", headers=client_headers)
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert set(data) == {"BOOKINGS", "BILLING", "CLAIMS", "ORDERS", "OPERATIONS", "WAREHOUSES"}
        assert [p["code"] for p in data["CLAIMS"]] == ["SUBMIT_CLAIM", "VIEW_CLAIMS"]

    def test_broker_catalog(self, client, db_session, broker_headers):
        data = client.get("/api/v1/users/me/permissions", headers=broker_headers).get_json()["data"]
        assert list(data) == ["WAREHOUSES"]
        assert data["WAREHOUSES"][0]["code"] == "VIEW_WAREHOUSES"
        assert data["WAREHOUSES"][0]["name"] == "View Warehouses"

    def test_unknown_code_rejected_at_decoration(self):
        with pytest.raises(ValueError):
            require_permission("LAUNCH_ROCKETS")
