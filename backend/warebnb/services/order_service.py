# Overview: Service-layer operations for service orders; totals, numbering, edit window and cancellation.

from __future__ import annotations

import secrets

from flask import current_app

from ..extensions import db
from ..models import Booking, Profile, ServiceOrder, ServiceOrderItem, WarehouseService
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
from .tenant_service import require_record_access, require_warehouse, scope_query
from warebnb.time_utils import utcnow


ORDER_STATUSES = ("draft", "pending", "confirmed", "in-progress", "completed", "cancelled")
ORDER_PRIORITIES = ("low", "normal", "high", "urgent")
SERVICE_UNIT_TYPES = ("per-item", "per-pallet", "per-hour", "per-order", "flat-rate")

EDITABLE_STATUSES = ("draft", "pending")

# Progression applied by warehouse roles
OPERATOR_TRANSITIONS = {
    "pending": {"confirmed"},
    "confirmed": {"in-progress"},
    "in-progress": {"completed"},
}


def calculate_order_total(items) -> int:
    """Sum of quantity x unit price over (quantity, unit_price_cents) pairs."""
    return sum(quantity * unit_price for quantity, unit_price in items)


def generate_order_number() -> str:
    """ORD-YYYYMMDD-NNNN, retried until unused."""
    stamp = utcnow().strftime("%Y%m%d")
    while True:
        candidate = f"ORD-{stamp}-{secrets.randbelow(10000):04d}"
        exists = db.session.query(ServiceOrder.id).filter_by(order_number=candidate).first()
        if not exists:
            return candidate


def _build_items(warehouse_id: int, raw_items) -> list[ServiceOrderItem]:
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationError("At least one item is required")

    items = []
    for index, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            raise ValidationError(f"items[{index}] must be an object")
        service_id = parse_int_field(raw.get("service_id"), f"items[{index}].service_id")
        service = db.session.get(WarehouseService, service_id)
        if service is None or not service.is_active or service.warehouse_id != warehouse_id:
            raise ValidationError(f"items[{index}]: service not available at this warehouse")

        quantity = parse_int_field(raw.get("quantity"), f"items[{index}].quantity", minimum=1)
        if quantity < service.min_quantity:
            raise ValidationError(
                f"items[{index}]: minimum quantity for {service.name} is {service.min_quantity}"
            )

        items.append(ServiceOrderItem(
            service_id=service.id,
            service_name=service.name,
            quantity=quantity,
            unit_price_cents=service.base_price_cents,
            total_price_cents=quantity * service.base_price_cents,
            notes=validate_text(raw.get("notes"), f"items[{index}].notes", max_length=1000),
            status="pending",
        ))
    return items


def _refresh_total(order: ServiceOrder) -> None:
    order.total_amount_cents = calculate_order_total(
        (item.quantity, item.unit_price_cents) for item in order.items
    )


def list_orders(profile: Profile, status: str | None = None, booking_id: int | None = None) -> list[ServiceOrder]:
    query = scope_query(
        db.session.query(ServiceOrder),
        profile,
        customer_column=ServiceOrder.customer_id,
        warehouse_column=ServiceOrder.warehouse_id,
    )
    if status:
        validate_choice(status, ORDER_STATUSES, "status")
        query = query.filter(ServiceOrder.status == status)
    if booking_id:
        query = query.filter(ServiceOrder.booking_id == booking_id)
    return query.order_by(ServiceOrder.created_at.desc(), ServiceOrder.id.desc()).all()


def get_order(profile: Profile, order_id: int) -> ServiceOrder:
    order = db.session.get(ServiceOrder, order_id)
    return require_record_access(
        profile,
        order,
        "Service order",
        customer_id=order.customer_id if order else None,
        warehouse_id=order.warehouse_id if order else None,
    )


def create_order(profile: Profile, data: dict) -> ServiceOrder:
    warehouse = require_warehouse(profile, data.get("warehouse_id"))

    booking_id = None
    if data.get("booking_id") not in (None, ""):
        booking_id = parse_int_field(data["booking_id"], "booking_id")
        booking = db.session.get(Booking, booking_id)
        if booking is None or booking.customer_id != profile.id or booking.warehouse_id != warehouse.id:
            raise NotFoundError("Booking not found")

    status = data.get("status") or "draft"
    if status not in EDITABLE_STATUSES:
        raise ValidationError("New orders must be draft or pending")

    order = ServiceOrder(
        order_number=generate_order_number(),
        customer_id=profile.id,
        warehouse_id=warehouse.id,
        booking_id=booking_id,
        status=status,
        priority=validate_choice(data.get("priority") or "normal", ORDER_PRIORITIES, "priority"),
        requested_date=parse_date_field(data.get("requested_date"), "requested_date"),
        due_date=parse_date_field(data.get("due_date"), "due_date"),
        notes=validate_text(data.get("notes"), "notes", max_length=1000),
    )
    order.items = _build_items(warehouse.id, data.get("items"))
    _refresh_total(order)

    db.session.add(order)
    db.session.commit()

    current_app.logger.info("Service order %s created by profile %s", order.order_number, profile.id)
    return order


def update_order(profile: Profile, order_id: int, data: dict) -> ServiceOrder:
    """
    Edit a draft or pending order.

    Warehouse roles may also advance the status of confirmed orders.
    """
    order = get_order(profile, order_id)
    is_operator = profile_has_permission(profile, "MANAGE_ORDERS") and order.customer_id != profile.id

    new_status = data.get("status")
    if new_status is not None:
        validate_choice(new_status, ORDER_STATUSES, "status")

    if is_operator and new_status and new_status in OPERATOR_TRANSITIONS.get(order.status, set()):
        order.status = new_status
        db.session.commit()
        return order

    if order.status not in EDITABLE_STATUSES:
        raise ConflictError("Cannot update order in current status")
    if order.customer_id != profile.id and not is_operator:
        raise PermissionDeniedError("Only the ordering customer can edit this order")

    if new_status is not None and new_status != order.status:
        if new_status not in EDITABLE_STATUSES:
            raise ConflictError(f"Cannot change order from {order.status} to {new_status}")
        order.status = new_status
    if "priority" in data:
        order.priority = validate_choice(data["priority"], ORDER_PRIORITIES, "priority")
    if "requested_date" in data:
        order.requested_date = parse_date_field(data["requested_date"], "requested_date")
    if "due_date" in data:
        order.due_date = parse_date_field(data["due_date"], "due_date")
    if "notes" in data:
        order.notes = validate_text(data["notes"], "notes", max_length=1000)
    if "items" in data:
        order.items = _build_items(order.warehouse_id, data["items"])
        _refresh_total(order)

    db.session.commit()
    return order


def cancel_order(profile: Profile, order_id: int) -> ServiceOrder:
    order = get_order(profile, order_id)
    if order.status in ("completed", "cancelled"):
        raise ConflictError(f"Cannot cancel a {order.status} order")
    order.status = "cancelled"
    db.session.commit()
    return order
