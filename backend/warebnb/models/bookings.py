from __future__ import annotations

from ..extensions import db
from warebnb.time_utils import to_iso_date, to_utc_z


class Booking(db.Model):
    """
    Storage booking: pallet storage or area rental at one warehouse.

    type: pallet | area-rental
    status: pending -> (awaiting_time_slot) -> confirmed -> active -> completed
            any open status -> cancelled

    proposed_start_date / proposed_start_time are set together by the
    warehouse when it proposes a drop-off slot.
    """
    __tablename__ = "bookings"
    __table_args__ = (
        db.Index("ix_bookings_customer_status", "customer_id", "status"),
        db.Index("ix_bookings_warehouse_status", "warehouse_id", "status"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=False, index=True)
    warehouse_id = db.Column(db.Integer, db.ForeignKey("warehouses.id"), nullable=False, index=True)

    type = db.Column(db.String(16), nullable=False)
    status = db.Column(db.String(32), nullable=False, default="pending", index=True)

    pallet_count = db.Column(db.Integer, nullable=True)
    area_sq_ft = db.Column(db.Integer, nullable=True)

    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=True)
    months = db.Column(db.Integer, nullable=False, default=1)

    total_amount_cents = db.Column(db.Integer, nullable=False, default=0)
    notes = db.Column(db.Text, nullable=True)

    proposed_start_date = db.Column(db.Date, nullable=True)
    proposed_start_time = db.Column(db.String(8), nullable=True)  # HH:MM
    proposal_reason = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    customer = db.relationship("Profile", backref=db.backref("bookings", lazy=True))
    warehouse = db.relationship("Warehouse", backref=db.backref("bookings", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "warehouse_id": self.warehouse_id,
            "type": self.type,
            "status": self.status,
            "pallet_count": self.pallet_count,
            "area_sq_ft": self.area_sq_ft,
            "start_date": to_iso_date(self.start_date),
            "end_date": to_iso_date(self.end_date),
            "months": self.months,
            "total_amount_cents": self.total_amount_cents,
            "notes": self.notes,
            "proposed_start_date": to_iso_date(self.proposed_start_date),
            "proposed_start_time": self.proposed_start_time,
            "proposal_reason": self.proposal_reason,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class InventoryItem(db.Model):
    """
    A pallet physically checked in against a booking.

    status: received | stored | shipped
    """
    __tablename__ = "inventory_items"
    __table_args__ = (
        db.UniqueConstraint("warehouse_id", "pallet_code", name="uq_inventory_items_pallet_code"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), nullable=False, index=True)
    warehouse_id = db.Column(db.Integer, db.ForeignKey("warehouses.id"), nullable=False, index=True)

    pallet_code = db.Column(db.String(64), nullable=False)
    description = db.Column(db.String(255), nullable=True)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    location = db.Column(db.String(64), nullable=True)
    status = db.Column(db.String(16), nullable=False, default="received", index=True)

    received_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    shipped_at = db.Column(db.DateTime(timezone=True), nullable=True)
    received_by = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=True)

    booking = db.relationship("Booking", backref=db.backref("inventory_items", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "booking_id": self.booking_id,
            "warehouse_id": self.warehouse_id,
            "pallet_code": self.pallet_code,
            "description": self.description,
            "quantity": self.quantity,
            "location": self.location,
            "status": self.status,
            "received_at": to_utc_z(self.received_at),
            "shipped_at": to_utc_z(self.shipped_at),
            "received_by": self.received_by,
        }
