"""
Dashboard navigation tests.

Verifies:
- Each role sees its own menu
- Root without a preview role sees an empty sidebar
- The root test-role switcher updates menus, themes and landing path
- Only root may switch, and only to known roles
"""

from warebnb.services.navigation_service import build_navigation, is_active, sidebar_theme


def _names(data):
    return [item["name"] for item in data["items"]]


class TestMenus:

    def test_client_menu(self, db_session, client_user):
        data = build_navigation(client_user, "/dashboard", None)
        assert _names(data) == ["Dashboard", "Bookings", "Calendar", "Claims", "Notifications", "Settings"]

    def test_admin_menu_includes_operator_items(self, db_session, admin_a):
        data = build_navigation(admin_a, "/dashboard", None)
        assert "Warehouses" in _names(data)
        assert "Invoices" in _names(data)
        assert data["my_company"]["href"] == "/dashboard/my-company"

    def test_broker_menu(self, db_session, broker):
        data = build_navigation(broker, None, None)
        assert _names(data)[1] == "Leads"
        assert data["my_company"] is None

    def test_root_without_preview_is_empty(self, db_session, root_user):
        data = build_navigation(root_user, "/admin", None)
        assert data["items"] == []
        assert data["is_root"] is True
        assert data["indicator"] is None

    def test_notification_badge_is_static(self, db_session, client_user):
        data = build_navigation(client_user, None, None)
        notifications = next(i for i in data["items"] if i["name"] == "Notifications")
        assert notifications["badge"] == 2

    def test_pending_booking_badge(self, db_session, client_user, booking_a):
        data = build_navigation(client_user, None, None)
        bookings = next(i for i in data["items"] if i["name"] == "Bookings")
        assert bookings["badge"] == 1

    def test_branding_defaults(self, db_session, client_user):
        assert build_navigation(client_user, None, None)["branding"]["name"] == "Warebnb"

    def test_branding_uses_company(self, db_session, admin_a):
        assert build_navigation(admin_a, None, None)["branding"]["name"] == "Acme Storage"


class TestActiveItem:

    def test_dashboard_exact_match_only(self):
        assert is_active("/dashboard", "/dashboard")
        assert not is_active("/dashboard", "/dashboard/bookings")

    def test_nested_path(self):
        assert is_active("/dashboard/bookings", "/dashboard/bookings/12")
        assert not is_active("/dashboard/bookings", "/dashboard/bookingsx")

    def test_no_pathname(self):
        assert not is_active("/dashboard", None)


class TestTestRoleRoutes:

    def test_root_switches_to_staff(self, client, db_session, root_headers):
        resp = client.post(
            "/api/v1/navigation/test-role",
            json={"role": "warehouse_staff"},
            headers=root_headers,
        )
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["data"]["redirect"] == "/warehouse"
        assert body["message"] == "Viewing as Warehouse Staff"

        nav = client.get("/api/v1/navigation?path=/dashboard", headers=root_headers).get_json()["data"]
        assert nav["effective_role"] == "warehouse_staff"
        assert nav["indicator"] == "Root → Warehouse Staff"
        assert nav["theme"]["sidebar"] == sidebar_theme("warehouse_staff")
        assert nav["theme"]["sidebar"].endswith("backdrop-blur-sm shadow-md")
        assert "bg-slate-100/95" in nav["theme"]["sidebar"]
        assert nav["landing_path"] == "/warehouse"

    def test_preview_does_not_grant_permissions(self, client, db_session, root_headers, client_user):
        client.post("/api/v1/navigation/test-role", json={"role": "warehouse_client"}, headers=root_headers)

        # Root keeps root permissions while previewing as a client
        resp = client.post("/api/v1/companies", json={"name": "New Co"}, headers=root_headers)
        assert resp.status_code == 201

    def test_clear_test_role(self, client, db_session, root_headers):
        client.post("/api/v1/navigation/test-role", json={"role": "warehouse_admin"}, headers=root_headers)
        resp = client.delete("/api/v1/navigation/test-role", headers=root_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["redirect"] == "/admin"

        nav = client.get("/api/v1/navigation", headers=root_headers).get_json()["data"]
        assert nav["items"] == []

    def test_non_root_forbidden(self, client, db_session, admin_headers):
        resp = client.post(
            "/api/v1/navigation/test-role",
            json={"role": "warehouse_staff"},
            headers=admin_headers,
        )
        assert resp.status_code == 403
        assert resp.get_json()["success"] is False

    def test_invalid_role(self, client, db_session, root_headers):
        resp = client.post(
            "/api/v1/navigation/test-role",
            json={"role": "janitor"},
            headers=root_headers,
        )
        assert resp.status_code == 400

    def test_requires_auth(self, client, db_session):
        assert client.get("/api/v1/navigation").status_code == 401
