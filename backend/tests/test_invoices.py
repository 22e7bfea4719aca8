"""
Invoice tests.

Booking invoices bill the first period with discount lines and 8% tax.
"""

from datetime import timedelta

from warebnb.models import Invoice
from warebnb.services.invoice_service import compute_tax_cents
from warebnb.time_utils import today


class TestTax:

    def test_half_up_rounding(self):
        from decimal import Decimal

        assert compute_tax_cents(22500, Decimal("0.08")) == 1800
        assert compute_tax_cents(1006, Decimal("0.08")) == 80
        assert compute_tax_cents(1007, Decimal("0.08")) == 81


class TestGenerateInvoice:

    def test_booking_invoice(self, client, db_session, admin_headers, booking_a):
        resp = client.post("/api/v1/invoices/generate", json={"booking_id": booking_a.id}, headers=admin_headers)
        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["status"] == "pending"
        assert data["subtotal_cents"] == 22500
        assert data["tax_cents"] == 1800
        assert data["total_cents"] == 24300
        assert data["warehouse_id"] == booking_a.warehouse_id
        assert data["due_date"] == (today() + timedelta(days=30)).isoformat()
        assert [item["description"] for item in data["items"]] == ["Pallet In", "Storage (1 month)"]

    def test_discount_lines(self, client, db_session, admin_headers, client_user, booking_a):
        client_user.membership_tier = "gold"
        booking_a.pallet_count = 60
        db_session.commit()

        resp = client.post("/api/v1/invoices/generate", json={"booking_id": booking_a.id}, headers=admin_headers)
        items = resp.get_json()["data"]["items"]
        assert items[-2] == {
            "description": "Volume Discount (10%)",
            "quantity": 1,
            "unit_price_cents": -13500,
            "total_cents": -13500,
        }
        assert items[-1]["description"] == "Membership Discount (10%)"
        assert resp.get_json()["data"]["subtotal_cents"] == 109350

    def test_order_invoice(self, client, db_session, admin_headers, client_headers, warehouse_a, service_a):
        order = client.post("/api/v1/orders", json={
            "warehouse_id": warehouse_a.id,
            "items": [{"service_id": service_a.id, "quantity": 20}],
        }, headers=client_headers).get_json()["data"]

        resp = client.post("/api/v1/invoices/generate", json={"service_order_id": order["id"]}, headers=admin_headers)
        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["subtotal_cents"] == 5000
        assert data["total_cents"] == 5400
        assert data["items"][0]["description"] == "Labelling"

    def test_exactly_one_source(self, client, db_session, admin_headers, booking_a):
        resp = client.post("/api/v1/invoices/generate", json={}, headers=admin_headers)
        assert resp.status_code == 400
        resp = client.post(
            "/api/v1/invoices/generate",
            json={"booking_id": booking_a.id, "service_order_id": 1},
            headers=admin_headers,
        )
        assert resp.status_code == 400

    def test_cancelled_booking(self, client, db_session, admin_headers, booking_a):
        booking_a.status = "cancelled"
        db_session.commit()
        resp = client.post("/api/v1/invoices/generate", json={"booking_id": booking_a.id}, headers=admin_headers)
        assert resp.status_code == 409

    def test_foreign_booking(self, client, db_session, admin_b_headers, booking_a):
        resp = client.post("/api/v1/invoices/generate", json={"booking_id": booking_a.id}, headers=admin_b_headers)
        assert resp.status_code == 404


class TestInvoiceAccess:

    def _invoice(self, db_session, booking):
        invoice = Invoice(
            booking_id=booking.id,
            customer_id=booking.customer_id,
            warehouse_id=booking.warehouse_id,
            status="pending",
            items=[],
            subtotal_cents=1000,
            tax_cents=80,
            total_cents=1080,
        )
        db_session.add(invoice)
        db_session.commit()
        return invoice

    def test_customer_sees_own(self, client, db_session, client_headers, booking_a, booking_b):
        mine = self._invoice(db_session, booking_a)
        self._invoice(db_session, booking_b)

        resp = client.get("/api/v1/invoices", headers=client_headers)
        assert [i["id"] for i in resp.get_json()["data"]] == [mine.id]

    def test_customer_cannot_read_other(self, client, db_session, client_headers, booking_b):
        theirs = self._invoice(db_session, booking_b)
        resp = client.get(f"/api/v1/invoices/{theirs.id}", headers=client_headers)
        assert resp.status_code == 404

    def test_mark_paid_stamps_date(self, client, db_session, admin_headers, booking_a):
        invoice = self._invoice(db_session, booking_a)
        resp = client.patch(f"/api/v1/invoices/{invoice.id}", json={"status": "paid"}, headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["paid_date"] == today().isoformat()

        resp = client.patch(f"/api/v1/invoices/{invoice.id}", json={"status": "overdue"}, headers=admin_headers)
        assert resp.get_json()["data"]["paid_date"] is None

    def test_total_not_writable(self, client, db_session, admin_headers, booking_a):
        invoice = self._invoice(db_session, booking_a)
        resp = client.patch(f"/api/v1/invoices/{invoice.id}", json={"total_cents": 1}, headers=admin_headers)
        assert resp.status_code == 400

    def test_status_filter_validated(self, client, db_session, admin_headers):
        resp = client.get("/api/v1/invoices?status=bogus", headers=admin_headers)
        assert resp.status_code == 400
