from __future__ import annotations

from ..extensions import db
from warebnb.time_utils import to_utc_z


class AccessLog(db.Model):
    """
    Gate log entry for a person or vehicle entering a warehouse.

    status: checked_in | checked_out
    """
    __tablename__ = "access_logs"
    __table_args__ = (
        db.Index("ix_access_logs_warehouse_status", "warehouse_id", "status"),
        db.Index("ix_access_logs_entry_time", "entry_time"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    warehouse_id = db.Column(db.Integer, db.ForeignKey("warehouses.id"), nullable=False, index=True)

    # vehicle | staff | customer | visitor | family_friend | delivery_driver | other
    visitor_type = db.Column(db.String(32), nullable=False)
    status = db.Column(db.String(16), nullable=False, default="checked_in")

    entry_time = db.Column(db.DateTime(timezone=True), nullable=False)
    exit_time = db.Column(db.DateTime(timezone=True), nullable=True)

    person_name = db.Column(db.String(200), nullable=False)
    person_id_number = db.Column(db.String(100), nullable=True)
    person_phone = db.Column(db.String(50), nullable=True)
    person_email = db.Column(db.String(255), nullable=True)
    company_name = db.Column(db.String(200), nullable=True)

    vehicle_license_plate = db.Column(db.String(50), nullable=True)
    # car | truck | van | motorcycle | suv | other
    vehicle_type = db.Column(db.String(16), nullable=True)

    purpose = db.Column(db.String(500), nullable=True)
    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    checked_in_by = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=True)
    checked_out_by = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    warehouse = db.relationship("Warehouse", backref=db.backref("access_logs", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "warehouse_id": self.warehouse_id,
            "visitor_type": self.visitor_type,
            "status": self.status,
            "entry_time": to_utc_z(self.entry_time),
            "exit_time": to_utc_z(self.exit_time),
            "person_name": self.person_name,
            "person_id_number": self.person_id_number,
            "person_phone": self.person_phone,
            "person_email": self.person_email,
            "company_name": self.company_name,
            "vehicle_license_plate": self.vehicle_license_plate,
            "vehicle_type": self.vehicle_type,
            "purpose": self.purpose,
            "booking_id": self.booking_id,
            "notes": self.notes,
            "checked_in_by": self.checked_in_by,
            "checked_out_by": self.checked_out_by,
            "created_at": to_utc_z(self.created_at),
        }
