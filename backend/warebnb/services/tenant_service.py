"""
Multi-Tenant Service: Record Scoping Helpers

Every list and lookup of customer data goes through these helpers:

1. root sees every record
2. warehouse admin, supervisor and staff see records for warehouses
   owned by their company (and nothing if they have no company)
3. everyone else sees only records where they are the customer

Out-of-scope lookups are reported as "not found" so that record ids
from other tenants are not revealed. They are logged as security events.

USAGE:
    from warebnb.services.tenant_service import scope_query, require_record_access

    query = scope_query(db.session.query(Booking), profile,
                        customer_column=Booking.customer_id,
                        warehouse_column=Booking.warehouse_id)
"""

from flask import has_request_context, request
from sqlalchemy import false, select

from ..extensions import db
from ..models import Booking, Profile, Warehouse
from ..permissions.roles import ROOT, WAREHOUSE_OPERATOR_ROLES
from ..validation import NotFoundError
from .permission_service import log_security_event
from .role_service import profile_role


def is_root(profile: Profile) -> bool:
    return profile_role(profile) == ROOT


def is_warehouse_operator(profile: Profile) -> bool:
    return profile_role(profile) in WAREHOUSE_OPERATOR_ROLES


def company_warehouse_ids(company_id: int):
    """Select of warehouse ids owned by a company (usable inside IN clauses)."""
    return select(Warehouse.id).where(Warehouse.company_id == company_id)


def scope_query(query, profile: Profile, *, customer_column=None, warehouse_column=None, booking_column=None):
    """
    Restrict a query to the records the profile may see.

    warehouse_column or booking_column locates the owning warehouse;
    customer_column identifies the customer's own rows.
    """
    if is_root(profile):
        return query

    if is_warehouse_operator(profile):
        if not profile.company_id:
            return query.filter(false())
        warehouse_ids = company_warehouse_ids(profile.company_id)
        if warehouse_column is not None:
            return query.filter(warehouse_column.in_(warehouse_ids))
        if booking_column is not None:
            booking_ids = select(Booking.id).where(Booking.warehouse_id.in_(warehouse_ids))
            return query.filter(booking_column.in_(booking_ids))
        return query.filter(false())

    if customer_column is None:
        return query.filter(false())
    return query.filter(customer_column == profile.id)


def can_access(profile: Profile, *, customer_id: int | None, warehouse_id: int | None) -> bool:
    if is_root(profile):
        return True
    if is_warehouse_operator(profile):
        if not profile.company_id or warehouse_id is None:
            return False
        warehouse = db.session.get(Warehouse, warehouse_id)
        return warehouse is not None and warehouse.company_id == profile.company_id
    return customer_id is not None and customer_id == profile.id


def require_record_access(profile: Profile, record, label: str, *, customer_id=None, warehouse_id=None):
    """
    Return record if the profile may see it, else raise NotFoundError.

    The denial is logged; the message does not reveal that the record exists.
    """
    if record is None:
        raise NotFoundError(f"{label} not found")

    if not can_access(profile, customer_id=customer_id, warehouse_id=warehouse_id):
        log_security_event(
            profile_id=profile.id,
            event_type="CROSS_TENANT_ACCESS_DENIED",
            success=False,
            resource=request.path if has_request_context() else None,
            action=label.upper(),
            reason=f"{label} {getattr(record, 'id', '?')} outside caller scope",
            ip_address=request.remote_addr if has_request_context() else None,
            company_id=profile.company_id,
        )
        raise NotFoundError(f"{label} not found")

    return record


def require_warehouse(profile: Profile, warehouse_id, *, manage: bool = False) -> Warehouse:
    """
    Load a warehouse for the profile.

    Any profile may read an active warehouse. manage=True additionally
    requires root, or an operator whose company owns the warehouse.
    """
    warehouse = db.session.get(Warehouse, warehouse_id) if warehouse_id is not None else None
    if warehouse is None or (not warehouse.is_active and not manage):
        raise NotFoundError("Warehouse not found")

    if manage:
        require_record_access(profile, warehouse, "Warehouse", warehouse_id=warehouse.id)

    return warehouse
