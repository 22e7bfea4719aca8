"""
Service order tests.

Verifies:
- Order numbers and server-side line prices
- Minimum quantities and warehouse-bound services
- The draft/pending edit window and operator progression
- Cancellation
"""

import re

import pytest

from warebnb.models import ServiceOrder
from warebnb.services.order_service import calculate_order_total, generate_order_number


ORDER_NUMBER = re.compile(r"^ORD-\d{8}-\d{4}$")


@pytest.fixture
def order_payload(warehouse_a, service_a):
    return {
        "warehouse_id": warehouse_a.id,
        "items": [{"service_id": service_a.id, "quantity": 12, "unit_price_cents": 1}],
    }


def _create(client, headers, payload):
    return client.post("/api/v1/orders", json=payload, headers=headers)


class TestOrderHelpers:

    def test_total(self):
        assert calculate_order_total([(2, 250), (3, 100)]) == 800
        assert calculate_order_total([]) == 0

    def test_order_number_format(self, db_session):
        assert ORDER_NUMBER.match(generate_order_number())


class TestCreateOrder:

    def test_create_defaults_to_draft(self, client, db_session, client_headers, order_payload):
        resp = _create(client, client_headers, order_payload)
        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["status"] == "draft"
        assert data["priority"] == "normal"
        assert ORDER_NUMBER.match(data["order_number"])

    def test_prices_come_from_service(self, client, db_session, client_headers, order_payload):
        data = _create(client, client_headers, order_payload).get_json()["data"]
        assert data["items"][0]["unit_price_cents"] == 250
        assert data["items"][0]["total_price_cents"] == 3000
        assert data["total_amount_cents"] == 3000

    def test_minimum_quantity(self, client, db_session, client_headers, order_payload):
        order_payload["items"][0]["quantity"] = 5
        resp = _create(client, client_headers, order_payload)
        assert resp.status_code == 400
        assert "minimum quantity for Labelling is 10" in resp.get_json()["error"]

    def test_service_from_other_warehouse(self, client, db_session, client_headers, order_payload, warehouse_b):
        order_payload["warehouse_id"] = warehouse_b.id
        resp = _create(client, client_headers, order_payload)
        assert resp.status_code == 400

    def test_items_required(self, client, db_session, client_headers, warehouse_a):
        resp = _create(client, client_headers, {"warehouse_id": warehouse_a.id, "items": []})
        assert resp.status_code == 400

    def test_initial_status_limited(self, client, db_session, client_headers, order_payload):
        order_payload["status"] = "completed"
        resp = _create(client, client_headers, order_payload)
        assert resp.status_code == 400

    def test_booking_must_be_own(self, client, db_session, client_headers, order_payload, booking_b):
        order_payload["booking_id"] = booking_b.id
        resp = _create(client, client_headers, order_payload)
        assert resp.status_code == 404


class TestEditWindow:

    def test_customer_edits_draft(self, client, db_session, client_headers, order_payload, service_a):
        order = _create(client, client_headers, order_payload).get_json()["data"]
        resp = client.patch(f"/api/v1/orders/{order['id']}", json={
            "status": "pending",
            "priority": "urgent",
            "items": [{"service_id": service_a.id, "quantity": 40}],
        }, headers=client_headers)
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["status"] == "pending"
        assert data["priority"] == "urgent"
        assert data["total_amount_cents"] == 10000

    def test_operator_confirms_and_progresses(
        self, client, db_session, client_headers, staff_headers, order_payload
    ):
        order_payload["status"] = "pending"
        order = _create(client, client_headers, order_payload).get_json()["data"]

        for status in ("confirmed", "in-progress", "completed"):
            resp = client.patch(f"/api/v1/orders/{order['id']}", json={"status": status}, headers=staff_headers)
            assert resp.status_code == 200, status
            assert resp.get_json()["data"]["status"] == status

    def test_confirmed_order_locked_for_customer(
        self, client, db_session, client_headers, order_payload
    ):
        order = _create(client, client_headers, order_payload).get_json()["data"]
        db_session.expire_all()
        db_session.get(ServiceOrder, order["id"]).status = "confirmed"
        db_session.commit()

        resp = client.patch(f"/api/v1/orders/{order['id']}", json={"notes": "late change"}, headers=client_headers)
        assert resp.status_code == 409
        assert resp.get_json()["error"] == "Cannot update order in current status"

    def test_other_customer_cannot_see(self, client, db_session, client_headers, other_client_headers, order_payload):
        order = _create(client, client_headers, order_payload).get_json()["data"]
        resp = client.get(f"/api/v1/orders/{order['id']}", headers=other_client_headers)
        assert resp.status_code == 404

    def test_list_omits_items(self, client, db_session, client_headers, order_payload):
        _create(client, client_headers, order_payload)
        data = client.get("/api/v1/orders", headers=client_headers).get_json()["data"]
        assert len(data) == 1
        assert "items" not in data[0]


class TestCancel:

    def test_cancel(self, client, db_session, client_headers, order_payload):
        order = _create(client, client_headers, order_payload).get_json()["data"]
        resp = client.post(f"/api/v1/orders/{order['id']}/cancel", headers=client_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["status"] == "cancelled"

    def test_cannot_cancel_twice(self, client, db_session, client_headers, order_payload):
        order = _create(client, client_headers, order_payload).get_json()["data"]
        client.post(f"/api/v1/orders/{order['id']}/cancel", headers=client_headers)
        resp = client.post(f"/api/v1/orders/{order['id']}/cancel", headers=client_headers)
        assert resp.status_code == 409
