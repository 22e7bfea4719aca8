# Overview: Service-layer operations for claims; submission, review workflow, form edits and soft delete.

"""
Claims

Workflow: submitted -> under-review -> approved -> paid
                                    -> rejected

review() enforces the approval rules (positive amount, not above the
claimed amount). The claims edit form (update_claim) writes status and
amounts directly and does not compare the approved amount with the
claimed amount.
"""

from __future__ import annotations

from flask import current_app

from ..extensions import db
from ..models import Booking, Claim, Profile
from ..validation import (
    ConflictError,
    NotFoundError,
    ValidationError,
    parse_cents_field,
    parse_int_field,
    validate_choice,
    validate_text,
)
from .tenant_service import require_record_access, scope_query
from warebnb.time_utils import utcnow


CLAIM_TYPES = ("damage", "loss", "delay", "other")
CLAIM_STATUSES = ("submitted", "under-review", "approved", "rejected", "paid")
REVIEW_DECISIONS = ("approve", "reject")


def _claim_scope(query, profile: Profile):
    return scope_query(
        query.filter(Claim.deleted_at.is_(None)),
        profile,
        customer_column=Claim.customer_id,
        booking_column=Claim.booking_id,
    )


def list_claims(profile: Profile, status: str | None = None, booking_id: int | None = None) -> list[Claim]:
    query = _claim_scope(db.session.query(Claim), profile)
    if status:
        validate_choice(status, CLAIM_STATUSES, "status")
        query = query.filter(Claim.status == status)
    if booking_id:
        query = query.filter(Claim.booking_id == booking_id)
    return query.order_by(Claim.created_at.desc(), Claim.id.desc()).all()


def get_claim(profile: Profile, claim_id: int) -> Claim:
    claim = db.session.get(Claim, claim_id)
    if claim is None or claim.deleted_at is not None:
        raise NotFoundError("Claim not found")
    booking = db.session.get(Booking, claim.booking_id)
    return require_record_access(
        profile,
        claim,
        "Claim",
        customer_id=claim.customer_id,
        warehouse_id=booking.warehouse_id if booking else None,
    )


def submit_claim(profile: Profile, data: dict) -> Claim:
    """File a claim against one of the profile's own bookings."""
    booking_id = parse_int_field(data.get("booking_id"), "booking_id")
    claim_type = validate_choice(data.get("type"), CLAIM_TYPES, "type")
    description = validate_text(data.get("description"), "description", min_length=1, max_length=2000)

    if data.get("amount_cents") in (None, ""):
        raise ValidationError("amount_cents required")
    amount = parse_int_field(data.get("amount_cents"), "amount_cents")
    if amount <= 0:
        raise ValidationError("Claim amount must be greater than zero")

    booking = db.session.get(Booking, booking_id)
    if booking is None or booking.customer_id != profile.id:
        raise NotFoundError("Booking not found")

    evidence = data.get("evidence") or []
    if not isinstance(evidence, list) or not all(isinstance(url, str) for url in evidence):
        raise ValidationError("evidence must be a list of URLs")

    claim = Claim(
        customer_id=profile.id,
        booking_id=booking.id,
        type=claim_type,
        description=description,
        amount_cents=amount,
        status="submitted",
        evidence=evidence,
    )
    db.session.add(claim)
    db.session.commit()

    current_app.logger.info("Claim %s submitted for booking %s", claim.id, booking.id)
    return claim


def start_review(profile: Profile, claim_id: int) -> Claim:
    claim = get_claim(profile, claim_id)
    if claim.status != "submitted":
        raise ConflictError("Only submitted claims can be moved to review")
    claim.status = "under-review"
    claim.reviewed_by = profile.id
    db.session.commit()
    return claim


def review_claim(profile: Profile, claim_id: int, data: dict) -> Claim:
    """
    Approve or reject a claim.

    approve: approved_amount_cents defaults to the claimed amount; it must
    be positive and not above the claimed amount.
    """
    claim = get_claim(profile, claim_id)
    if claim.status not in ("submitted", "under-review"):
        raise ConflictError("Claim is not awaiting review")

    decision = validate_choice(data.get("decision"), REVIEW_DECISIONS, "decision")
    resolution = validate_text(data.get("resolution"), "resolution", max_length=2000)

    if decision == "approve":
        raw = data.get("approved_amount_cents")
        approved = claim.amount_cents if raw in (None, "") else parse_int_field(raw, "approved_amount_cents")
        if approved <= 0:
            raise ValidationError("Approved amount must be greater than zero")
        if approved > claim.amount_cents:
            raise ValidationError("Approved amount cannot exceed claimed amount")
        claim.status = "approved"
        claim.approved_amount_cents = approved
    else:
        claim.status = "rejected"
        claim.approved_amount_cents = None

    claim.resolution = resolution
    claim.resolved_at = utcnow()
    claim.reviewed_by = profile.id
    db.session.commit()

    current_app.logger.info("Claim %s %s by profile %s", claim.id, claim.status, profile.id)
    return claim


def process_payment(profile: Profile, claim_id: int) -> Claim:
    claim = get_claim(profile, claim_id)
    if claim.status != "approved":
        raise ConflictError("Only approved claims can be paid")
    claim.status = "paid"
    db.session.commit()
    return claim


def update_claim(profile: Profile, claim_id: int, data: dict) -> Claim:
    """
    Claims edit form: status, notes, amount_cents, approved_amount_cents.

    Amounts must be positive. The approved amount is stored as entered.
    """
    claim = get_claim(profile, claim_id)

    unknown = set(data) - {"status", "notes", "amount_cents", "approved_amount_cents", "resolution"}
    if unknown:
        raise ValidationError(f"Field not allowed: {sorted(unknown)[0]}")

    if "status" in data:
        claim.status = validate_choice(data["status"], CLAIM_STATUSES, "status")
        if claim.status in ("approved", "rejected") and claim.resolved_at is None:
            claim.resolved_at = utcnow()
    if "notes" in data:
        claim.notes = validate_text(data["notes"], "notes", max_length=2000)
    if "resolution" in data:
        claim.resolution = validate_text(data["resolution"], "resolution", max_length=2000)
    if "amount_cents" in data:
        claim.amount_cents = parse_cents_field(data["amount_cents"], "amount_cents", positive=True)
    if data.get("approved_amount_cents") is not None:
        claim.approved_amount_cents = parse_cents_field(
            data["approved_amount_cents"], "approved_amount_cents", positive=True
        )

    db.session.commit()
    return claim


def delete_claim(profile: Profile, claim_id: int) -> None:
    """Soft delete: the claim disappears from listings."""
    claim = get_claim(profile, claim_id)
    claim.deleted_at = utcnow()
    db.session.commit()
