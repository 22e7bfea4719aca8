# Overview: Service-layer operations for the company profile ("My Company").

from __future__ import annotations

from ..extensions import db
from ..models import Company, Profile
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    enforce_rules_company,
    validate_payload,
)
from .permission_service import PermissionDeniedError
from .role_service import is_company_admin
from .tenant_service import is_root


COMPANY_POLICY = ModelValidationPolicy(
    writable_fields={
        "name",
        "logo_url",
        "address_line",
        "city",
        "postal_code",
        "country",
        "vat_number",
    },
    required_on_create={"name"},
)


def get_company_for(profile: Profile, company_id: int | None = None) -> Company:
    """The profile's own company; root may name any company."""
    target = company_id if company_id is not None and is_root(profile) else profile.company_id
    company = db.session.get(Company, target) if target else None
    if company is None:
        raise NotFoundError("Company not found")
    return company


def create_company(data: dict) -> Company:
    patch = validate_payload(model=Company, payload=data, policy=COMPANY_POLICY, partial=False)
    enforce_rules_company(patch)
    company = Company(**patch)
    db.session.add(company)
    db.session.commit()
    return company


def update_company(profile: Profile, data: dict, company_id: int | None = None) -> Company:
    company = get_company_for(profile, company_id)
    if not (is_root(profile) or (is_company_admin(profile) and profile.company_id == company.id)):
        raise PermissionDeniedError("Only company admins can edit the company")

    patch = validate_payload(model=Company, payload=data, policy=COMPANY_POLICY, partial=True)
    enforce_rules_company(patch)
    for key, value in patch.items():
        setattr(company, key, value)
    db.session.commit()
    return company
