# Overview: Service-layer operations for the signed-in profile's settings form.

from __future__ import annotations

from ..extensions import db
from ..models import Profile
from ..validation import (
    ModelValidationPolicy,
    enforce_rules_profile,
    validate_payload,
)
from .navigation_service import resolve_storage_url


PROFILE_POLICY = ModelValidationPolicy(
    writable_fields={"name", "phone", "avatar_url"},
)


def serialize_profile(profile: Profile) -> dict:
    data = profile.to_dict()
    data["avatar_public_url"] = resolve_storage_url(profile.avatar_url)
    return data


def update_profile(profile: Profile, data: dict) -> Profile:
    """Settings form: name, phone and avatar path. Role and company are not writable."""
    patch = validate_payload(model=Profile, payload=data, policy=PROFILE_POLICY, partial=True)
    enforce_rules_profile(patch)
    for key, value in patch.items():
        setattr(profile, key, value or None)
    db.session.commit()
    return profile
