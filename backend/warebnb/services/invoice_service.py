# Overview: Service-layer operations for invoices; generation from pricing and status updates.

"""
Invoices

A booking invoice bills the first period of a booking: one month for
pallet storage, the booked months for an area rental. Lines come from
the pricing breakdown; discounts are separate negative lines. Tax is
applied to the discounted subtotal.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from flask import current_app

from ..extensions import db
from ..models import Booking, Invoice, Profile, ServiceOrder
from ..validation import (
    ConflictError,
    NotFoundError,
    ValidationError,
    validate_choice,
    validate_text,
)
from .pricing_service import calculate_booking_pricing
from .tenant_service import require_record_access, scope_query
from warebnb.time_utils import today


INVOICE_STATUSES = ("draft", "pending", "paid", "overdue", "cancelled")


def _tax_rate() -> Decimal:
    return Decimal(str(current_app.config.get("INVOICE_TAX_RATE", "0.08")))


def _due_days() -> int:
    return int(current_app.config.get("INVOICE_DUE_DAYS", 30))


def compute_tax_cents(subtotal_cents: int, rate: Decimal) -> int:
    return int((Decimal(subtotal_cents) * rate).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_booking_invoice_items(booking: Booking, membership_tier: str | None) -> tuple[list[dict], int]:
    """Invoice lines and discounted subtotal (cents) for a booking."""
    months = 1 if booking.type == "pallet" else booking.months
    pricing = calculate_booking_pricing(
        booking_type=booking.type,
        warehouse_id=booking.warehouse_id,
        pallet_count=booking.pallet_count,
        area_sq_ft=booking.area_sq_ft,
        months=months,
        membership_tier=membership_tier,
    )

    items = [
        {
            "description": line["item"],
            "quantity": line["quantity"],
            "unit_price_cents": line["unit_price_cents"],
            "total_cents": line["total_cents"],
        }
        for line in pricing.breakdown
    ]

    if pricing.volume_discount_cents > 0:
        items.append({
            "description": f"Volume Discount ({pricing.volume_discount_percent.normalize():f}%)",
            "quantity": 1,
            "unit_price_cents": -pricing.volume_discount_cents,
            "total_cents": -pricing.volume_discount_cents,
        })

    if pricing.membership_discount_cents > 0:
        items.append({
            "description": f"Membership Discount ({pricing.membership_discount_percent.normalize():f}%)",
            "quantity": 1,
            "unit_price_cents": -pricing.membership_discount_cents,
            "total_cents": -pricing.membership_discount_cents,
        })

    return items, pricing.final_amount_cents


def generate_booking_invoice(profile: Profile, booking_id: int) -> Invoice:
    """Create a pending invoice for a booking, due in INVOICE_DUE_DAYS days."""
    booking = db.session.get(Booking, booking_id)
    booking = require_record_access(
        profile,
        booking,
        "Booking",
        customer_id=booking.customer_id if booking else None,
        warehouse_id=booking.warehouse_id if booking else None,
    )
    if booking.status == "cancelled":
        raise ConflictError("Cannot invoice a cancelled booking")

    customer = db.session.get(Profile, booking.customer_id)
    items, subtotal = build_booking_invoice_items(booking, customer.membership_tier if customer else None)
    tax = compute_tax_cents(subtotal, _tax_rate())

    invoice = Invoice(
        booking_id=booking.id,
        customer_id=booking.customer_id,
        warehouse_id=booking.warehouse_id,
        status="pending",
        items=items,
        subtotal_cents=subtotal,
        tax_cents=tax,
        total_cents=subtotal + tax,
        due_date=today() + timedelta(days=_due_days()),
    )
    db.session.add(invoice)
    db.session.commit()

    current_app.logger.info("Invoice %s generated for booking %s", invoice.id, booking.id)
    return invoice


def generate_order_invoice(profile: Profile, order_id: int) -> Invoice:
    """Create a pending invoice for a service order's line items."""
    order = db.session.get(ServiceOrder, order_id)
    order = require_record_access(
        profile,
        order,
        "Service order",
        customer_id=order.customer_id if order else None,
        warehouse_id=order.warehouse_id if order else None,
    )
    if order.status == "cancelled":
        raise ConflictError("Cannot invoice a cancelled order")

    items = [
        {
            "description": item.service_name,
            "quantity": item.quantity,
            "unit_price_cents": item.unit_price_cents,
            "total_cents": item.total_price_cents,
        }
        for item in order.items
    ]
    subtotal = order.total_amount_cents
    tax = compute_tax_cents(subtotal, _tax_rate())

    invoice = Invoice(
        service_order_id=order.id,
        booking_id=order.booking_id,
        customer_id=order.customer_id,
        warehouse_id=order.warehouse_id,
        status="pending",
        items=items,
        subtotal_cents=subtotal,
        tax_cents=tax,
        total_cents=subtotal + tax,
        due_date=today() + timedelta(days=_due_days()),
    )
    db.session.add(invoice)
    db.session.commit()
    return invoice


def _invoice_scope(query, profile: Profile):
    return scope_query(
        query,
        profile,
        customer_column=Invoice.customer_id,
        warehouse_column=Invoice.warehouse_id,
    )


def list_invoices(profile: Profile, status: str | None = None) -> list[Invoice]:
    query = _invoice_scope(db.session.query(Invoice), profile)
    if status:
        validate_choice(status, INVOICE_STATUSES, "status")
        query = query.filter(Invoice.status == status)
    return query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()


def get_invoice(profile: Profile, invoice_id: int) -> Invoice:
    invoice = db.session.get(Invoice, invoice_id)
    return require_record_access(
        profile,
        invoice,
        "Invoice",
        customer_id=invoice.customer_id if invoice else None,
        warehouse_id=invoice.warehouse_id if invoice else None,
    )


def update_invoice(profile: Profile, invoice_id: int, data: dict) -> Invoice:
    """
    Invoice form: status and notes.

    Marking paid stamps paid_date; leaving paid clears it.
    """
    invoice = get_invoice(profile, invoice_id)

    unknown = set(data) - {"status", "notes"}
    if unknown:
        raise ValidationError(f"Field not allowed: {sorted(unknown)[0]}")

    if "status" in data:
        status = validate_choice(data["status"], INVOICE_STATUSES, "status")
        if status == "paid" and invoice.status != "paid":
            invoice.paid_date = today()
        elif status != "paid":
            invoice.paid_date = None
        invoice.status = status

    if "notes" in data:
        invoice.notes = validate_text(data["notes"], "notes", max_length=1000)

    db.session.commit()
    return invoice
