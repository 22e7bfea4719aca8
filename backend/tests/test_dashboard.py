"""
Dashboard home summary and the root security event feed.
"""

from warebnb.models import Invoice
from warebnb.services.permission_service import log_security_event


def _invoice(db_session, booking, status="pending", total=1080):
    invoice = Invoice(
        booking_id=booking.id,
        customer_id=booking.customer_id,
        warehouse_id=booking.warehouse_id,
        status=status,
        items=[],
        subtotal_cents=1000,
        tax_cents=total - 1000,
        total_cents=total,
    )
    db_session.add(invoice)
    db_session.commit()
    return invoice


class TestSummary:

    def test_client_counts(self, client, db_session, client_headers, booking_a, booking_b):
        booking_a.proposed_start_date = booking_a.start_date
        booking_a.proposed_start_time = "09:00"
        db_session.commit()
        _invoice(db_session, booking_a)
        _invoice(db_session, booking_a, status="paid")

        resp = client.get("/api/v1/dashboard/summary", headers=client_headers)
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["role"] == "warehouse_client"
        assert data["counts"] == {
            "active_bookings": 0,
            "awaiting_time_slot": 1,
            "pending_invoices": 1,
            "recent_claims": 0,
        }
        assert data["pending_invoice_total_cents"] == 1080

    def test_confirmed_booking_counts_as_active(self, client, db_session, other_client_headers, booking_b):
        data = client.get("/api/v1/dashboard/summary", headers=other_client_headers).get_json()["data"]
        assert data["counts"]["active_bookings"] == 1
        assert data["active_bookings"][0]["id"] == booking_b.id

    def test_broker_gets_empty_lists(self, client, db_session, broker_headers):
        data = client.get("/api/v1/dashboard/summary", headers=broker_headers).get_json()["data"]
        assert data["role"] == "warehouse_broker"
        assert sum(data["counts"].values()) == 0

    def test_root_preview_as_broker(self, client, db_session, root_headers, booking_a, booking_b):
        data = client.get("/api/v1/dashboard/summary", headers=root_headers).get_json()["data"]
        assert data["role"] == "root"
        assert data["counts"]["active_bookings"] == 1

        client.post("/api/v1/navigation/test-role", json={"role": "warehouse_broker"}, headers=root_headers)
        data = client.get("/api/v1/dashboard/summary", headers=root_headers).get_json()["data"]
        assert data["role"] == "warehouse_broker"
        assert data["active_bookings"] == []

        client.delete("/api/v1/navigation/test-role", headers=root_headers)


class TestSecurityEvents:

    def test_root_reads_feed(self, client, db_session, root_headers):
        log_security_event(None, "LOGIN_FAILED", False, resource="auth")
        log_security_event(None, "PERMISSION_DENIED", False, action="MANAGE_PRICING")

        resp = client.get("/api/v1/dashboard/security-events?event_type=PERMISSION_DENIED", headers=root_headers)
        assert resp.status_code == 200
        events = resp.get_json()["data"]
        assert [e["event_type"] for e in events] == ["PERMISSION_DENIED"]
        assert events[0]["action"] == "MANAGE_PRICING"

    def test_admin_cannot_read_feed(self, client, db_session, admin_headers):
        resp = client.get("/api/v1/dashboard/security-events", headers=admin_headers)
        assert resp.status_code == 403
