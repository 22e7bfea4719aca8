"""
API client tests against httpx.MockTransport.
"""

import json

import httpx
import pytest

from warebnb.client import ApiClient, NotificationCenter


def make_client(handler):
    notifier = NotificationCenter()
    api = ApiClient("http://warebnb.test", notifier=notifier, transport=httpx.MockTransport(handler))
    return api, notifier


class TestToasts:

    def test_success_uses_server_message(self):
        def handler(request):
            return httpx.Response(201, json={"success": True, "data": {"id": 7}, "message": "Booking created"})

        api, notifier = make_client(handler)
        result = api.post("/api/v1/bookings", {"warehouse_id": 1})

        assert result.success
        assert result.data == {"id": 7}
        assert result.status == 201
        assert notifier.last.type == "success"
        assert notifier.last.message == "Booking created"
        assert notifier.last.duration == 5000

    def test_success_message_override(self):
        api, notifier = make_client(lambda request: httpx.Response(200, json={"success": True}))
        api.get("/api/v1/claims", success_message="Loaded")
        assert notifier.last.message == "Loaded"

    def test_default_success_message(self):
        api, notifier = make_client(lambda request: httpx.Response(200, json={"success": True, "data": []}))
        api.get("/api/v1/claims")
        assert notifier.last.message == "Operation completed successfully"

    def test_error_includes_status_and_body(self):
        def handler(request):
            return httpx.Response(409, json={"success": False, "error": "Insufficient capacity"})

        api, notifier = make_client(handler)
        result = api.post("/api/v1/bookings", {})

        assert not result.success
        assert result.error == "Insufficient capacity"
        assert notifier.last.type == "error"
        assert notifier.last.duration == 10000
        assert notifier.last.message.startswith("Insufficient capacity\n\n409: ")
        assert '"error": "Insufficient capacity"' in notifier.last.message

    def test_error_details_appended(self):
        def handler(request):
            return httpx.Response(400, json={"success": False, "error": "Invalid", "details": "pallet_count"})

        api, notifier = make_client(handler)
        result = api.post("/api/v1/bookings", {})
        assert result.extra == {"details": "pallet_count"}
        assert notifier.last.message.startswith("Invalid: pallet_count\n\n400")

    def test_success_false_in_2xx_is_error(self):
        api, notifier = make_client(lambda request: httpx.Response(200, json={"success": False, "error": "Nope"}))
        result = api.get("/api/v1/claims")
        assert not result.success
        assert notifier.last.type == "error"

    def test_show_toast_off(self):
        api, notifier = make_client(lambda request: httpx.Response(500, json={"success": False}))
        api.get("/api/v1/claims", show_toast=False)
        assert notifier.notifications == []


class TestFailures:

    def test_invalid_json(self):
        api, notifier = make_client(lambda request: httpx.Response(502, text="<html>Bad gateway</html>"))
        result = api.get("/api/v1/claims")

        assert not result.success
        assert result.error == "Invalid JSON response"
        assert result.message == "<html>Bad gateway</html>"
        assert notifier.last.type == "error"

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        api, notifier = make_client(handler)
        result = api.get("/api/v1/claims", error_message="Could not load claims")

        assert not result.success
        assert result.error == "Connection refused"
        assert result.status is None
        assert notifier.last.message == "Could not load claims\n\nError: ConnectError: Connection refused"

    def test_unserializable_body(self):
        calls = []
        api, notifier = make_client(lambda request: calls.append(request) or httpx.Response(200, json={}))
        result = api.post("/api/v1/claims", {"photo": object()})

        assert not result.success
        assert result.status is None
        assert calls == []
        assert notifier.last.type == "error"
        assert "TypeError" in notifier.last.message


class TestRequests:

    def test_login_keeps_token(self):
        seen = []

        def handler(request):
            seen.append(request)
            if request.url.path == "/api/v1/auth/login":
                return httpx.Response(200, json={"success": True, "data": {"token": "abc123"}})
            return httpx.Response(200, json={"success": True, "data": []})

        api, notifier = make_client(handler)
        api.login("client@example.test", "Password123!")
        api.get("/api/v1/bookings", show_toast=False)

        assert json.loads(seen[0].content) == {"email": "client@example.test", "password": "Password123!"}
        assert seen[1].headers["Authorization"] == "Bearer abc123"
        assert notifier.notifications == []

    def test_failed_login_keeps_no_token(self):
        api, _ = make_client(lambda request: httpx.Response(401, json={"success": False, "error": "Invalid"}))
        api.login("client@example.test", "wrong")
        assert api.token is None

    def test_json_content_type(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"success": True})

        api, _ = make_client(handler)
        api.patch("/api/v1/users/me", {"full_name": "Carla"})
        assert seen[0].headers["Content-Type"] == "application/json"

    def test_multipart_lets_httpx_set_boundary(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"success": True})

        api, _ = make_client(handler)
        api.request("POST", "/api/v1/uploads", files={"file": ("photo.jpg", b"jpeg", "image/jpeg")})
        assert seen[0].headers["Content-Type"].startswith("multipart/form-data; boundary=")

    @pytest.mark.parametrize("method", ["get", "delete"])
    def test_no_body_methods(self, method):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"success": True})

        api, _ = make_client(handler)
        getattr(api, method)("/api/v1/claims/1")
        assert seen[0].method == method.upper()
        assert seen[0].content == b""
