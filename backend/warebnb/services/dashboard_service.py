# Overview: Service-layer operations for the dashboard home summary.

from __future__ import annotations

from ..models import Profile
from ..permissions.roles import WAREHOUSE_BROKER
from . import booking_service, claim_service, invoice_service, role_service


ACTIVE_BOOKING_STATUSES = ("active", "confirmed")
RECENT_CLAIM_STATUSES = ("submitted", "under-review")
RECENT_LIMIT = 5


def build_summary(profile: Profile, test_role: str | None = None) -> dict:
    """
    Counts and short lists for the dashboard home.

    Brokers have no bookings, invoices or claims of their own, so those
    are skipped for the broker view.
    """
    role = role_service.effective_role(role_service.profile_role(profile), test_role)

    if role == WAREHOUSE_BROKER:
        bookings, invoices, claims = [], [], []
    else:
        bookings = booking_service.list_bookings(profile)
        invoices = invoice_service.list_invoices(profile)
        claims = claim_service.list_claims(profile)

    active = [b for b in bookings if b.status in ACTIVE_BOOKING_STATUSES]
    awaiting = [b for b in bookings if booking_service.is_awaiting_time_slot(b)]
    pending_invoices = [i for i in invoices if i.status == "pending"]
    recent_claims = [c for c in claims if c.status in RECENT_CLAIM_STATUSES]

    return {
        "role": role,
        "counts": {
            "active_bookings": len(active),
            "awaiting_time_slot": len(awaiting),
            "pending_invoices": len(pending_invoices),
            "recent_claims": len(recent_claims),
        },
        "active_bookings": [b.to_dict() for b in active[:RECENT_LIMIT]],
        "awaiting_time_slot": [b.to_dict() for b in awaiting],
        "pending_invoices": [i.to_dict() for i in pending_invoices[:RECENT_LIMIT]],
        "recent_claims": [c.to_dict() for c in recent_claims[:RECENT_LIMIT]],
        "pending_invoice_total_cents": sum(i.total_cents for i in pending_invoices),
    }
