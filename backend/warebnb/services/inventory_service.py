# Overview: Service-layer operations for pallet inventory checked in against bookings.

from __future__ import annotations

from ..extensions import db
from ..models import Booking, InventoryItem, Profile
from ..validation import (
    ConflictError,
    ValidationError,
    parse_int_field,
    validate_choice,
    validate_text,
)
from .tenant_service import require_record_access, scope_query
from warebnb.time_utils import utcnow


INVENTORY_STATUSES = ("received", "stored", "shipped")

# Bookings that may receive goods
RECEIVING_STATUSES = ("confirmed", "active")


def list_items(
    profile: Profile,
    *,
    booking_id: int | None = None,
    warehouse_id: int | None = None,
    status: str | None = None,
) -> list[InventoryItem]:
    query = scope_query(
        db.session.query(InventoryItem).join(Booking, InventoryItem.booking_id == Booking.id),
        profile,
        customer_column=Booking.customer_id,
        warehouse_column=InventoryItem.warehouse_id,
    )
    if booking_id:
        query = query.filter(InventoryItem.booking_id == booking_id)
    if warehouse_id:
        query = query.filter(InventoryItem.warehouse_id == warehouse_id)
    if status:
        validate_choice(status, INVENTORY_STATUSES, "status")
        query = query.filter(InventoryItem.status == status)
    return query.order_by(InventoryItem.received_at.desc(), InventoryItem.id.desc()).all()


def check_in_pallets(profile: Profile, booking_id: int, data: dict) -> list[InventoryItem]:
    """
    Receive pallets for a booking.

    data: {"pallets": [{"pallet_code", "description", "quantity", "location"}]}
    A pallet booking cannot hold more items than its pallet count.
    """
    booking = db.session.get(Booking, booking_id)
    booking = require_record_access(
        profile,
        booking,
        "Booking",
        warehouse_id=booking.warehouse_id if booking else None,
    )
    if booking.status not in RECEIVING_STATUSES:
        raise ConflictError("Goods can only be received for confirmed or active bookings")

    pallets = data.get("pallets")
    if not isinstance(pallets, list) or not pallets:
        raise ValidationError("At least one pallet is required")

    if booking.type == "pallet":
        held = db.session.query(InventoryItem).filter(
            InventoryItem.booking_id == booking.id,
            InventoryItem.status != "shipped",
        ).count()
        if held + len(pallets) > (booking.pallet_count or 0):
            raise ConflictError(f"Booking holds at most {booking.pallet_count} pallets")

    items = []
    for index, raw in enumerate(pallets):
        code = validate_text(raw.get("pallet_code"), f"pallets[{index}].pallet_code", min_length=1, max_length=64)
        duplicate = db.session.query(InventoryItem.id).filter_by(
            warehouse_id=booking.warehouse_id, pallet_code=code
        ).first()
        if duplicate or code in {item.pallet_code for item in items}:
            raise ConflictError(f"Pallet code already in use: {code}")
        items.append(InventoryItem(
            booking_id=booking.id,
            warehouse_id=booking.warehouse_id,
            pallet_code=code,
            description=validate_text(raw.get("description"), "description", max_length=255),
            quantity=parse_int_field(raw.get("quantity", 1), f"pallets[{index}].quantity", minimum=1),
            location=validate_text(raw.get("location"), "location", max_length=64),
            status="stored" if raw.get("location") else "received",
            received_at=utcnow(),
            received_by=profile.id,
        ))

    db.session.add_all(items)
    if booking.status == "confirmed":
        booking.status = "active"
    db.session.commit()
    return items


def ship_item(profile: Profile, item_id: int) -> InventoryItem:
    item = db.session.get(InventoryItem, item_id)
    item = require_record_access(
        profile,
        item,
        "Inventory item",
        warehouse_id=item.warehouse_id if item else None,
    )
    if item.status == "shipped":
        raise ConflictError("Item already shipped")
    item.status = "shipped"
    item.shipped_at = utcnow()
    db.session.commit()
    return item
