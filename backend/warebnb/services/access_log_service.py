# Overview: Service-layer operations for warehouse gate access logs.

from __future__ import annotations

import re

from ..extensions import db
from ..models import AccessLog, Booking, Profile
from ..validation import (
    ConflictError,
    NotFoundError,
    ValidationError,
    parse_int_field,
    validate_choice,
    validate_text,
)
from .tenant_service import require_record_access, require_warehouse, scope_query
from warebnb.time_utils import parse_iso_datetime, utcnow


VISITOR_TYPES = ("vehicle", "staff", "customer", "visitor", "family_friend", "delivery_driver", "other")
VEHICLE_TYPES = ("car", "truck", "van", "motorcycle", "suv", "other")
ACCESS_STATUSES = ("checked_in", "checked_out")

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Field name -> max length
_TEXT_LIMITS = {
    "person_id_number": 100,
    "person_phone": 50,
    "company_name": 200,
    "vehicle_license_plate": 50,
    "purpose": 500,
    "notes": 2000,
}


def list_access_logs(
    profile: Profile,
    *,
    warehouse_id: int | None = None,
    visitor_type: str | None = None,
    status: str | None = None,
    search: str | None = None,
) -> list[AccessLog]:
    query = scope_query(db.session.query(AccessLog), profile, warehouse_column=AccessLog.warehouse_id)
    if warehouse_id:
        query = query.filter(AccessLog.warehouse_id == warehouse_id)
    if visitor_type:
        validate_choice(visitor_type, VISITOR_TYPES, "visitor_type")
        query = query.filter(AccessLog.visitor_type == visitor_type)
    if status:
        validate_choice(status, ACCESS_STATUSES, "status")
        query = query.filter(AccessLog.status == status)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(db.or_(
            AccessLog.person_name.ilike(pattern),
            AccessLog.company_name.ilike(pattern),
            AccessLog.vehicle_license_plate.ilike(pattern),
        ))
    return query.order_by(AccessLog.entry_time.desc(), AccessLog.id.desc()).all()


def get_access_log(profile: Profile, log_id: int) -> AccessLog:
    log = db.session.get(AccessLog, log_id)
    return require_record_access(
        profile,
        log,
        "Access log",
        warehouse_id=log.warehouse_id if log else None,
    )


def check_in(profile: Profile, data: dict) -> AccessLog:
    """Record a person or vehicle entering a warehouse."""
    warehouse = require_warehouse(profile, data.get("warehouse_id"), manage=True)

    visitor_type = validate_choice(data.get("visitor_type"), VISITOR_TYPES, "visitor_type")
    person_name = validate_text(data.get("person_name"), "person_name", min_length=1, max_length=200)

    email = validate_text(data.get("person_email"), "person_email", max_length=255)
    if email and not EMAIL_PATTERN.match(email):
        raise ValidationError("person_email must be a valid email")

    vehicle_type = data.get("vehicle_type")
    if vehicle_type:
        validate_choice(vehicle_type, VEHICLE_TYPES, "vehicle_type")

    entry_time = utcnow()
    if data.get("entry_time"):
        try:
            entry_time = parse_iso_datetime(data["entry_time"])
        except ValueError:
            raise ValidationError("entry_time must be an ISO-8601 datetime")

    booking_id = None
    if data.get("booking_id") not in (None, ""):
        booking_id = parse_int_field(data["booking_id"], "booking_id")
        booking = db.session.get(Booking, booking_id)
        if booking is None or booking.warehouse_id != warehouse.id:
            raise NotFoundError("Booking not found")

    log = AccessLog(
        warehouse_id=warehouse.id,
        visitor_type=visitor_type,
        status="checked_in",
        entry_time=entry_time,
        person_name=person_name,
        person_email=email,
        vehicle_type=vehicle_type or None,
        booking_id=booking_id,
        checked_in_by=profile.id,
    )
    for field, limit in _TEXT_LIMITS.items():
        setattr(log, field, validate_text(data.get(field), field, max_length=limit))

    db.session.add(log)
    db.session.commit()
    return log


def check_out(profile: Profile, log_id: int, data: dict | None = None) -> AccessLog:
    log = get_access_log(profile, log_id)
    if log.status == "checked_out":
        raise ConflictError("Already checked out")

    exit_time = utcnow()
    if data and data.get("exit_time"):
        try:
            exit_time = parse_iso_datetime(data["exit_time"])
        except ValueError:
            raise ValidationError("exit_time must be an ISO-8601 datetime")
    if exit_time < log.entry_time:
        raise ValidationError("exit_time cannot be before entry_time")

    log.exit_time = exit_time
    log.status = "checked_out"
    log.checked_out_by = profile.id
    if data and "notes" in data:
        log.notes = validate_text(data["notes"], "notes", max_length=2000)
    db.session.commit()
    return log
