from __future__ import annotations

from ..extensions import db
from warebnb.time_utils import to_iso_date, to_utc_z


class ServiceOrder(db.Model):
    """
    Order for warehouse add-on services.

    status: draft | pending | confirmed | in-progress | completed | cancelled
    Only draft and pending orders may be edited.
    """
    __tablename__ = "service_orders"
    __table_args__ = (
        db.Index("ix_service_orders_customer_status", "customer_id", "status"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    order_number = db.Column(db.String(32), nullable=False, unique=True, index=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=False, index=True)
    warehouse_id = db.Column(db.Integer, db.ForeignKey("warehouses.id"), nullable=False, index=True)
    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), nullable=True)

    status = db.Column(db.String(16), nullable=False, default="pending", index=True)
    priority = db.Column(db.String(16), nullable=False, default="normal")

    requested_date = db.Column(db.Date, nullable=True)
    due_date = db.Column(db.Date, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    total_amount_cents = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    items = db.relationship(
        "ServiceOrderItem",
        backref="order",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="ServiceOrderItem.id",
    )

    def to_dict(self, include_items: bool = True) -> dict:
        data = {
            "id": self.id,
            "order_number": self.order_number,
            "customer_id": self.customer_id,
            "warehouse_id": self.warehouse_id,
            "booking_id": self.booking_id,
            "status": self.status,
            "priority": self.priority,
            "requested_date": to_iso_date(self.requested_date),
            "due_date": to_iso_date(self.due_date),
            "notes": self.notes,
            "total_amount_cents": self.total_amount_cents,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
        if include_items:
            data["items"] = [item.to_dict() for item in self.items]
        return data


class ServiceOrderItem(db.Model):
    __tablename__ = "service_order_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("service_orders.id"), nullable=False, index=True)
    service_id = db.Column(db.Integer, db.ForeignKey("warehouse_services.id"), nullable=False)

    # Snapshot of the service at order time
    service_name = db.Column(db.String(255), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price_cents = db.Column(db.Integer, nullable=False)
    total_price_cents = db.Column(db.Integer, nullable=False)

    notes = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(16), nullable=False, default="pending")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order_id": self.order_id,
            "service_id": self.service_id,
            "service_name": self.service_name,
            "quantity": self.quantity,
            "unit_price_cents": self.unit_price_cents,
            "total_price_cents": self.total_price_cents,
            "notes": self.notes,
            "status": self.status,
        }
