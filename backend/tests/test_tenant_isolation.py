# Overview: Pytest coverage for tenant isolation behavior.

"""
Multi-Tenant Isolation Tests

SECURITY TESTS: Prove that cross-tenant access is denied for core resources.

These tests create two companies with a warehouse each, plus customers,
then verify that:
1. Operators of company A cannot read or write company B's records
2. Customers only see their own bookings, invoices and claims
3. Out-of-scope lookups return 404 (not errors that reveal existence)
4. Security events are logged for cross-tenant access attempts
"""

import pytest

from warebnb.extensions import db
from warebnb.models import Booking, Claim, Invoice, SecurityEvent
from warebnb.services.tenant_service import (
    can_access,
    require_record_access,
    require_warehouse,
    scope_query,
)
from warebnb.time_utils import utcnow
from warebnb.validation import NotFoundError


class TestTenantServiceHelpers:
    """Test tenant_service helper functions."""

    def test_root_sees_everything(self, db_session, root_user, booking_a, booking_b):
        query = scope_query(
            db.session.query(Booking), root_user,
            customer_column=Booking.customer_id, warehouse_column=Booking.warehouse_id,
        )
        assert query.count() == 2

    def test_operator_sees_company_warehouses(self, db_session, admin_a, booking_a, booking_b):
        query = scope_query(
            db.session.query(Booking), admin_a,
            customer_column=Booking.customer_id, warehouse_column=Booking.warehouse_id,
        )
        assert [b.id for b in query] == [booking_a.id]

    def test_operator_without_company_sees_nothing(self, db_session, booking_a):
        from warebnb.services.auth_service import create_profile

        loose = create_profile("loose@example.test", "Password123!", role="warehouse_staff")
        query = scope_query(
            db.session.query(Booking), loose,
            customer_column=Booking.customer_id, warehouse_column=Booking.warehouse_id,
        )
        assert query.count() == 0

    def test_customer_sees_own_rows(self, db_session, client_user, booking_a, booking_b):
        query = scope_query(
            db.session.query(Booking), client_user,
            customer_column=Booking.customer_id, warehouse_column=Booking.warehouse_id,
        )
        assert [b.id for b in query] == [booking_a.id]

    def test_booking_column_scoping(self, db_session, admin_b, booking_a, booking_b, other_client):
        claim = Claim(
            customer_id=other_client.id, booking_id=booking_b.id, type="damage",
            description="Crushed pallet", amount_cents=5000, status="submitted",
        )
        db_session.add(claim)
        db_session.commit()

        query = scope_query(
            db.session.query(Claim), admin_b,
            customer_column=Claim.customer_id, booking_column=Claim.booking_id,
        )
        assert [c.id for c in query] == [claim.id]

    def test_can_access(self, db_session, admin_a, client_user, warehouse_a, warehouse_b):
        assert can_access(admin_a, customer_id=None, warehouse_id=warehouse_a.id)
        assert not can_access(admin_a, customer_id=None, warehouse_id=warehouse_b.id)
        assert can_access(client_user, customer_id=client_user.id, warehouse_id=warehouse_b.id)
        assert not can_access(client_user, customer_id=client_user.id + 1000, warehouse_id=warehouse_a.id)

    def test_cross_tenant_access_logs_security_event(self, db_session, app, admin_a, booking_b):
        with app.test_request_context():
            with pytest.raises(NotFoundError):
                require_record_access(
                    admin_a, booking_b, "Booking",
                    customer_id=booking_b.customer_id, warehouse_id=booking_b.warehouse_id,
                )

        event = db_session.query(SecurityEvent).filter_by(event_type="CROSS_TENANT_ACCESS_DENIED").first()
        assert event is not None
        assert event.profile_id == admin_a.id

    def test_manage_foreign_warehouse_denied(self, db_session, admin_a, warehouse_b):
        with pytest.raises(NotFoundError):
            require_warehouse(admin_a, warehouse_b.id, manage=True)

    def test_any_profile_reads_active_warehouse(self, db_session, client_user, warehouse_b):
        assert require_warehouse(client_user, warehouse_b.id).id == warehouse_b.id

    def test_inactive_warehouse_hidden(self, db_session, client_user, warehouse_b):
        warehouse_b.is_active = False
        db_session.commit()
        with pytest.raises(NotFoundError):
            require_warehouse(client_user, warehouse_b.id)


class TestBookingIsolation:

    def test_operator_cannot_read_foreign_booking(self, client, db_session, admin_headers, booking_b):
        resp = client.get(f"/api/v1/bookings/{booking_b.id}", headers=admin_headers)
        assert resp.status_code == 404

    def test_customer_cannot_read_other_booking(self, client, db_session, client_headers, booking_b):
        resp = client.get(f"/api/v1/bookings/{booking_b.id}", headers=client_headers)
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Booking not found"

    def test_listing_scoped(self, client, db_session, admin_b_headers, booking_a, booking_b):
        resp = client.get("/api/v1/bookings", headers=admin_b_headers)
        assert [b["id"] for b in resp.get_json()["data"]] == [booking_b.id]

    def test_operator_cannot_confirm_foreign_booking(self, client, db_session, admin_b_headers, booking_a):
        resp = client.patch(
            f"/api/v1/bookings/{booking_a.id}",
            json={"status": "confirmed"},
            headers=admin_b_headers,
        )
        assert resp.status_code == 404

        db_session.expire_all()
        assert db_session.get(Booking, booking_a.id).status == "pending"


class TestWarehouseIsolation:

    def test_cannot_edit_foreign_warehouse(self, client, db_session, admin_headers, warehouse_b):
        resp = client.patch(
            f"/api/v1/warehouses/{warehouse_b.id}",
            json={"name": "Hijacked"},
            headers=admin_headers,
        )
        assert resp.status_code == 404

    def test_cannot_price_foreign_warehouse(self, client, db_session, admin_headers, warehouse_b):
        resp = client.put(
            f"/api/v1/warehouses/{warehouse_b.id}/pricing",
            json={"pricing_type": "pallet", "base_price_cents": 1, "unit": "per_pallet_per_month"},
            headers=admin_headers,
        )
        assert resp.status_code == 404

    def test_cannot_check_in_at_foreign_warehouse(self, client, db_session, staff_headers, warehouse_b):
        resp = client.post(
            "/api/v1/access-logs",
            json={"warehouse_id": warehouse_b.id, "visitor_type": "visitor", "person_name": "Sam"},
            headers=staff_headers,
        )
        assert resp.status_code == 404

    def test_company_profile_scoped(self, client, db_session, admin_headers, company_a, company_b):
        resp = client.get(f"/api/v1/companies/me?company_id={company_b.id}", headers=admin_headers)
        assert resp.get_json()["data"]["id"] == company_a.id

    def test_root_reads_any_company(self, client, db_session, root_headers, company_b):
        resp = client.get(f"/api/v1/companies/me?company_id={company_b.id}", headers=root_headers)
        assert resp.get_json()["data"]["id"] == company_b.id


class TestBillingIsolation:

    def _claim(self, db_session, booking):
        claim = Claim(
            customer_id=booking.customer_id,
            booking_id=booking.id,
            type="damage",
            description="Crushed pallet",
            amount_cents=10000,
            status="submitted",
        )
        db_session.add(claim)
        db_session.commit()
        return claim

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

    def _denials(self, db_session, action):
        return db_session.query(SecurityEvent).filter_by(
            event_type="CROSS_TENANT_ACCESS_DENIED", action=action,
        ).all()

    def test_operator_cannot_read_foreign_claim(self, client, db_session, admin_b, admin_b_headers, booking_a):
        claim = self._claim(db_session, booking_a)

        resp = client.get(f"/api/v1/claims/{claim.id}", headers=admin_b_headers)
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Claim not found"

        db_session.expire_all()
        events = self._denials(db_session, "CLAIM")
        assert [e.profile_id for e in events] == [admin_b.id]

    def test_customer_cannot_read_other_claim(self, client, db_session, other_client_headers, booking_a):
        claim = self._claim(db_session, booking_a)
        resp = client.get(f"/api/v1/claims/{claim.id}", headers=other_client_headers)
        assert resp.status_code == 404

    def test_deleted_claim_not_found_without_denial(self, client, db_session, client_headers, booking_a):
        claim = self._claim(db_session, booking_a)
        claim.deleted_at = utcnow()
        db_session.commit()

        resp = client.get(f"/api/v1/claims/{claim.id}", headers=client_headers)
        assert resp.status_code == 404
        db_session.expire_all()
        assert self._denials(db_session, "CLAIM") == []

    def test_operator_cannot_read_foreign_invoice(self, client, db_session, admin_b, admin_b_headers, booking_a):
        invoice = self._invoice(db_session, booking_a)

        resp = client.get(f"/api/v1/invoices/{invoice.id}", headers=admin_b_headers)
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Invoice not found"

        db_session.expire_all()
        events = self._denials(db_session, "INVOICE")
        assert [e.profile_id for e in events] == [admin_b.id]

    def test_operator_reads_own_invoice(self, client, db_session, admin_headers, booking_a):
        invoice = self._invoice(db_session, booking_a)
        resp = client.get(f"/api/v1/invoices/{invoice.id}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["id"] == invoice.id
