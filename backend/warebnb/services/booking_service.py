# Overview: Service-layer operations for bookings; search form, creation with pricing, status workflow.

"""
Bookings

A booking reserves pallet slots or an area of floor space at one
warehouse. It is created pending and priced server-side. The warehouse
may propose a drop-off slot (date and time together), which moves the
booking to awaiting_time_slot until the customer accepts it.

Capacity is counted from confirmed and active bookings; a warehouse
without a capacity figure is not limited.
"""

from __future__ import annotations

import re
from datetime import date

from flask import current_app
from sqlalchemy import func

from ..extensions import db
from ..models import Booking, Profile, Warehouse
from ..validation import (
    ConflictError,
    NotFoundError,
    ValidationError,
    parse_date_field,
    parse_int_field,
    validate_choice,
    validate_text,
)
from .permission_service import PermissionDeniedError, profile_has_permission
from .pricing_service import area_minimum, calculate_booking_pricing, get_warehouse_pricing
from .tenant_service import require_record_access, require_warehouse, scope_query
from warebnb.time_utils import add_months, today


BOOKING_TYPES = ("pallet", "area-rental")
BOOKING_STATUSES = ("pending", "awaiting_time_slot", "confirmed", "active", "completed", "cancelled")

# Quick picks offered for area-rental duration
MONTH_QUICK_PICKS = (1, 2, 3, 6, 12)

# Statuses that hold warehouse capacity
RESERVING_STATUSES = ("confirmed", "active")

ALLOWED_TRANSITIONS = {
    "pending": {"awaiting_time_slot", "confirmed", "cancelled"},
    "awaiting_time_slot": {"confirmed", "cancelled"},
    "confirmed": {"active", "cancelled"},
    "active": {"completed"},
}

# Statuses a customer may cancel from
CUSTOMER_CANCELLABLE = {"pending", "awaiting_time_slot"}

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def compute_rental_end_date(start: date, months: int) -> date:
    """End date of an area rental that starts on start and runs for months."""
    if months < 1:
        raise ValidationError("Area rental requires minimum 1 month duration")
    return add_months(start, months)


def months_between(start: date, end: date) -> int:
    """Whole billing months covering start..end, at least one."""
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if add_months(start, months) < end:
        months += 1
    return max(1, months)


def location_min_space(location: str | None) -> int | None:
    """Smallest area-rental minimum among active warehouses in a city."""
    if not location:
        return None
    return db.session.query(func.min(Warehouse.min_area_sq_ft)).filter(
        Warehouse.is_active.is_(True),
        func.lower(Warehouse.city) == location.strip().lower(),
    ).scalar()


def build_search_params(data: dict) -> dict:
    """
    Validate the booking search form and return normalized parameters.

    Area rentals derive the end date from start date + month duration.
    """
    location = (data.get("location") or "").strip()
    if not location:
        raise ValidationError("Please select a location")

    storage_type = data.get("type") or "area-rental"
    validate_choice(storage_type, BOOKING_TYPES, "type")

    start = parse_date_field(data.get("start_date"), "start_date")
    end = parse_date_field(data.get("end_date"), "end_date")

    months = None
    if storage_type == "area-rental":
        raw_months = data.get("months", 1)
        try:
            months = int(raw_months) if raw_months not in (None, "") else 0
        except (TypeError, ValueError):
            months = 0
        if start and months > 0:
            end = compute_rental_end_date(start, months)

    if not start or not end:
        raise ValidationError("Please select start and end dates")

    params = {
        "location": location,
        "type": storage_type,
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
    }

    if storage_type == "pallet":
        pallets = _loose_int(data.get("pallet_count"))
        if pallets < 1:
            raise ValidationError("Please enter a valid number of pallets (minimum 1)")
        params["pallet_count"] = pallets
    else:
        area = _loose_int(data.get("area_sq_ft"))
        if area < 1:
            raise ValidationError("Please enter a valid square footage")
        min_space = location_min_space(location)
        if min_space and area < min_space:
            raise ValidationError(
                f"In this area, you can search for a minimum of {min_space:,} sq ft. "
                f"Please enter a value of {min_space:,} or higher."
            )
        if months < 1:
            raise ValidationError("Area rental requires minimum 1 month duration")
        params["area_sq_ft"] = area
        params["months"] = months

    if data.get("warehouse_id"):
        params["warehouse_id"] = parse_int_field(data["warehouse_id"], "warehouse_id")

    return params


def _loose_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def search_warehouses(params: dict) -> list[Warehouse]:
    """Active warehouses in the searched city with room for the request."""
    query = db.session.query(Warehouse).filter(
        Warehouse.is_active.is_(True),
        func.lower(Warehouse.city) == params["location"].lower(),
    )
    if params.get("warehouse_id"):
        query = query.filter(Warehouse.id == params["warehouse_id"])

    results = []
    for warehouse in query.order_by(Warehouse.name).all():
        if params["type"] == "pallet":
            available = available_pallets(warehouse)
            if available is not None and available < params["pallet_count"]:
                continue
        else:
            if params["area_sq_ft"] < area_minimum(warehouse.id, get_warehouse_pricing(warehouse.id, "area")):
                continue
            available = available_sq_ft(warehouse)
            if available is not None and available < params["area_sq_ft"]:
                continue
        results.append(warehouse)
    return results


def available_pallets(warehouse: Warehouse) -> int | None:
    if warehouse.total_pallet_capacity is None:
        return None
    reserved = db.session.query(func.coalesce(func.sum(Booking.pallet_count), 0)).filter(
        Booking.warehouse_id == warehouse.id,
        Booking.type == "pallet",
        Booking.status.in_(RESERVING_STATUSES),
    ).scalar()
    return warehouse.total_pallet_capacity - int(reserved)


def available_sq_ft(warehouse: Warehouse) -> int | None:
    if warehouse.total_sq_ft is None:
        return None
    reserved = db.session.query(func.coalesce(func.sum(Booking.area_sq_ft), 0)).filter(
        Booking.warehouse_id == warehouse.id,
        Booking.type == "area-rental",
        Booking.status.in_(RESERVING_STATUSES),
    ).scalar()
    return warehouse.total_sq_ft - int(reserved)


def check_capacity(warehouse: Warehouse, booking_type: str, quantity: int) -> None:
    if booking_type == "pallet":
        available = available_pallets(warehouse)
        if available is not None and available < quantity:
            raise ConflictError(
                f"Insufficient capacity: Need {quantity} slots, only {available} available"
            )
    else:
        available = available_sq_ft(warehouse)
        if available is not None and available < quantity:
            raise ConflictError(
                f"Insufficient capacity: Need {quantity} sq ft, only {available} available"
            )


def existing_pallet_count(customer_id: int) -> int:
    """Pallets the customer already holds in active bookings (for volume discounts)."""
    total = db.session.query(func.coalesce(func.sum(Booking.pallet_count), 0)).filter(
        Booking.customer_id == customer_id,
        Booking.type == "pallet",
        Booking.status == "active",
    ).scalar()
    return int(total)


def list_bookings(profile: Profile, status: str | None = None, warehouse_id: int | None = None) -> list[Booking]:
    query = scope_query(
        db.session.query(Booking),
        profile,
        customer_column=Booking.customer_id,
        warehouse_column=Booking.warehouse_id,
    )
    if status:
        validate_choice(status, BOOKING_STATUSES, "status")
        query = query.filter(Booking.status == status)
    if warehouse_id:
        query = query.filter(Booking.warehouse_id == warehouse_id)
    return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()


def get_booking(profile: Profile, booking_id: int) -> Booking:
    booking = db.session.get(Booking, booking_id)
    return require_record_access(
        profile,
        booking,
        "Booking",
        customer_id=booking.customer_id if booking else None,
        warehouse_id=booking.warehouse_id if booking else None,
    )


def create_booking(profile: Profile, data: dict) -> Booking:
    """
    Validate the booking form, check capacity, price and store a pending booking.

    Pallet bookings bill whole months covering the date range unless
    months is given. Area rentals take months and derive the end date.
    """
    booking_type = data.get("type")
    validate_choice(booking_type, BOOKING_TYPES, "type")

    warehouse = require_warehouse(profile, data.get("warehouse_id"))

    start = parse_date_field(data.get("start_date"), "start_date")
    if start is None:
        raise ValidationError("start_date required")
    if start < today():
        raise ValidationError("start_date cannot be in the past")
    end = parse_date_field(data.get("end_date"), "end_date")

    notes = validate_text(data.get("notes"), "notes", max_length=1000)

    pallet_count = None
    area_sq_ft = None

    if booking_type == "pallet":
        pallet_count = parse_int_field(data.get("pallet_count"), "pallet_count", minimum=1)
        if end is None:
            raise ValidationError("end_date required")
        if end < start:
            raise ValidationError("end_date must be on or after start_date")
        months = (
            parse_int_field(data["months"], "months", minimum=1)
            if data.get("months") not in (None, "")
            else months_between(start, end)
        )
        quantity = pallet_count
    else:
        area_sq_ft = parse_int_field(data.get("area_sq_ft"), "area_sq_ft", minimum=1)
        months = parse_int_field(data.get("months", 1), "months", minimum=1)
        minimum = area_minimum(warehouse.id, get_warehouse_pricing(warehouse.id, "area"))
        if area_sq_ft < minimum:
            raise ValidationError(f"Minimum area rental is {minimum} sq ft")
        end = compute_rental_end_date(start, months)
        quantity = area_sq_ft

    check_capacity(warehouse, booking_type, quantity)

    pricing = calculate_booking_pricing(
        booking_type=booking_type,
        warehouse_id=warehouse.id,
        pallet_count=pallet_count,
        area_sq_ft=area_sq_ft,
        months=months,
        membership_tier=profile.membership_tier,
        existing_pallet_count=existing_pallet_count(profile.id),
    )

    booking = Booking(
        customer_id=profile.id,
        warehouse_id=warehouse.id,
        type=booking_type,
        status="pending",
        pallet_count=pallet_count,
        area_sq_ft=area_sq_ft,
        start_date=start,
        end_date=end,
        months=months,
        total_amount_cents=pricing.final_amount_cents,
        notes=notes,
    )
    db.session.add(booking)
    db.session.commit()

    current_app.logger.info("Booking %s created by profile %s", booking.id, profile.id)
    return booking


def update_booking(profile: Profile, booking_id: int, data: dict) -> Booking:
    """
    Edit a booking's notes or status.

    Warehouse roles move bookings through the status workflow; customers
    may only cancel their own bookings before confirmation.
    """
    booking = get_booking(profile, booking_id)
    allowed = {"notes", "status"}
    unknown = set(data) - allowed
    if unknown:
        raise ValidationError(f"Field not allowed: {sorted(unknown)[0]}")

    if "notes" in data:
        booking.notes = validate_text(data["notes"], "notes", max_length=1000)

    if "status" in data:
        new_status = validate_choice(data["status"], BOOKING_STATUSES, "status")
        if new_status != booking.status:
            _change_status(profile, booking, new_status)

    db.session.commit()
    return booking


def _change_status(profile: Profile, booking: Booking, new_status: str) -> None:
    can_manage = profile_has_permission(profile, "MANAGE_BOOKINGS")
    if not can_manage:
        if not (
            new_status == "cancelled"
            and booking.customer_id == profile.id
            and booking.status in CUSTOMER_CANCELLABLE
        ):
            raise PermissionDeniedError("Permission denied: MANAGE_BOOKINGS")

    if new_status not in ALLOWED_TRANSITIONS.get(booking.status, set()):
        raise ConflictError(f"Cannot change booking from {booking.status} to {new_status}")

    if new_status == "confirmed":
        warehouse = db.session.get(Warehouse, booking.warehouse_id)
        quantity = booking.pallet_count if booking.type == "pallet" else booking.area_sq_ft
        check_capacity(warehouse, booking.type, quantity or 0)

    booking.status = new_status


def propose_time(profile: Profile, booking_id: int, data: dict) -> Booking:
    """
    Warehouse proposes a drop-off slot. Date and time are required together.
    """
    booking = get_booking(profile, booking_id)
    if booking.status not in ("pending", "awaiting_time_slot"):
        raise ConflictError("Time slots can only be proposed for pending bookings")

    proposed_date = parse_date_field(data.get("proposed_start_date"), "proposed_start_date")
    proposed_time = (data.get("proposed_start_time") or "").strip()
    if proposed_date is None or not proposed_time:
        raise ValidationError("Both proposed_start_date and proposed_start_time are required")
    if not TIME_PATTERN.match(proposed_time):
        raise ValidationError("proposed_start_time must be HH:MM")
    if proposed_date < today():
        raise ValidationError("proposed_start_date cannot be in the past")

    booking.proposed_start_date = proposed_date
    booking.proposed_start_time = proposed_time
    booking.proposal_reason = validate_text(data.get("reason"), "reason", max_length=1000)
    booking.status = "awaiting_time_slot"
    db.session.commit()
    return booking


def accept_proposed_time(profile: Profile, booking_id: int) -> Booking:
    """Customer accepts the proposed slot; the booking moves to confirmed."""
    booking = get_booking(profile, booking_id)
    if booking.customer_id != profile.id:
        raise PermissionDeniedError("Only the booking customer can accept a proposed time")
    if booking.status not in ("pending", "awaiting_time_slot"):
        raise ConflictError(f"Cannot accept a proposed time for a {booking.status} booking")
    if booking.proposed_start_date is None or not booking.proposed_start_time:
        raise ConflictError("No proposed time to accept")

    # The rental keeps its length when the start moves
    if booking.type == "area-rental":
        booking.end_date = compute_rental_end_date(booking.proposed_start_date, booking.months)
    elif booking.end_date is not None and booking.start_date is not None:
        booking.end_date = booking.end_date + (booking.proposed_start_date - booking.start_date)
    booking.start_date = booking.proposed_start_date

    warehouse = db.session.get(Warehouse, booking.warehouse_id)
    quantity = booking.pallet_count if booking.type == "pallet" else booking.area_sq_ft
    check_capacity(warehouse, booking.type, quantity or 0)

    booking.status = "confirmed"
    booking.proposal_reason = None
    db.session.commit()
    return booking


def is_awaiting_time_slot(booking: Booking) -> bool:
    """Awaiting a slot: explicitly, or pending with a complete proposal."""
    if booking.status == "awaiting_time_slot":
        return True
    return (
        booking.status == "pending"
        and booking.proposed_start_date is not None
        and bool(booking.proposed_start_time)
    )
