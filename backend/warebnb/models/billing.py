from __future__ import annotations

from ..extensions import db
from warebnb.time_utils import to_iso_date, to_utc_z


class Invoice(db.Model):
    """
    Customer invoice for a booking or a service order.

    items: [{"description", "quantity", "unit_price_cents", "total_cents"}]
    Discount lines carry negative amounts.
    """
    __tablename__ = "invoices"
    __table_args__ = (
        db.Index("ix_invoices_customer_status", "customer_id", "status"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), nullable=True, index=True)
    service_order_id = db.Column(db.Integer, db.ForeignKey("service_orders.id"), nullable=True, index=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=False, index=True)
    warehouse_id = db.Column(db.Integer, db.ForeignKey("warehouses.id"), nullable=True, index=True)

    # draft | pending | paid | overdue | cancelled
    status = db.Column(db.String(16), nullable=False, default="pending", index=True)

    items = db.Column(db.JSON, nullable=False, default=list)
    subtotal_cents = db.Column(db.Integer, nullable=False, default=0)
    tax_cents = db.Column(db.Integer, nullable=False, default=0)
    total_cents = db.Column(db.Integer, nullable=False, default=0)

    due_date = db.Column(db.Date, nullable=True)
    paid_date = db.Column(db.Date, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    booking = db.relationship("Booking", backref=db.backref("invoices", lazy=True))
    customer = db.relationship("Profile", backref=db.backref("invoices", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "booking_id": self.booking_id,
            "service_order_id": self.service_order_id,
            "customer_id": self.customer_id,
            "warehouse_id": self.warehouse_id,
            "status": self.status,
            "items": self.items or [],
            "subtotal_cents": self.subtotal_cents,
            "tax_cents": self.tax_cents,
            "total_cents": self.total_cents,
            "due_date": to_iso_date(self.due_date),
            "paid_date": to_iso_date(self.paid_date),
            "notes": self.notes,
            "created_at": to_utc_z(self.created_at),
        }


class Claim(db.Model):
    """
    Customer claim against a booking.

    status: submitted -> under-review -> approved -> paid
                                      -> rejected
    Soft-deleted rows keep deleted_at and drop out of listings.
    """
    __tablename__ = "claims"
    __table_args__ = (
        db.Index("ix_claims_customer_status", "customer_id", "status"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=False, index=True)
    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), nullable=False, index=True)

    # damage | loss | delay | other
    type = db.Column(db.String(16), nullable=False)
    description = db.Column(db.Text, nullable=False)
    amount_cents = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(16), nullable=False, default="submitted", index=True)
    evidence = db.Column(db.JSON, nullable=True)

    resolution = db.Column(db.Text, nullable=True)
    approved_amount_cents = db.Column(db.Integer, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    reviewed_by = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    resolved_at = db.Column(db.DateTime(timezone=True), nullable=True)
    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True)

    booking = db.relationship("Booking", backref=db.backref("claims", lazy=True))
    customer = db.relationship("Profile", foreign_keys=[customer_id], backref=db.backref("claims", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "booking_id": self.booking_id,
            "type": self.type,
            "description": self.description,
            "amount_cents": self.amount_cents,
            "status": self.status,
            "evidence": self.evidence or [],
            "resolution": self.resolution,
            "approved_amount_cents": self.approved_amount_cents,
            "notes": self.notes,
            "reviewed_by": self.reviewed_by,
            "created_at": to_utc_z(self.created_at),
            "resolved_at": to_utc_z(self.resolved_at),
        }
