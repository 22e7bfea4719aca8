# Overview: Service-layer operations for role resolution; canonical roles, effective role and landing paths.

"""
Role Resolution

A profile's stored role may use the current names or one of the older
names (super_admin, warehouse_owner, customer, ...). Everything outside
this module sees canonical names only.

Root profiles may preview the dashboard as another role. The preview
("test role") changes menus, themes and landing pages. It never changes
authorization: permission checks always use the stored role.
"""

from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import Profile
from ..signals import role_changed
from ..permissions.roles import (
    ALL_ROLES,
    COMPANY_ADMIN_ROLES,
    DEFAULT_ROLE,
    LEGACY_ROLE_ALIASES,
    ROLE_LABELS,
    ROOT,
    WAREHOUSE_STAFF,
)


# Browser-side storage names kept for the dashboard front end
TEST_ROLE_SESSION_KEY = "root-role-selector"
TEST_ROLE_COOKIE = "root-test-role"


def canonical_role(role: str | None) -> str | None:
    """Map a stored role (current or legacy name) to its canonical name."""
    if not role:
        return None
    role = role.strip()
    if role in ALL_ROLES:
        return role
    return LEGACY_ROLE_ALIASES.get(role)


def is_valid_role(role: str | None) -> bool:
    return role in ALL_ROLES


def role_label(role: str | None) -> str:
    return ROLE_LABELS.get(role or "", "User")


def resolve_profile_role(profile_id: int | None) -> str:
    """
    Load a profile's role with a single best-effort query.

    Falls back to the baseline role when the query fails, when no profile
    exists, or when the stored role is empty or unknown. Never retries.
    """
    if profile_id is None:
        return DEFAULT_ROLE

    try:
        stored = db.session.query(Profile.role).filter(Profile.id == profile_id).scalar()
    except SQLAlchemyError:
        current_app.logger.exception("Failed to load role for profile %s", profile_id)
        db.session.rollback()
        return DEFAULT_ROLE

    role = canonical_role(stored)
    if role is None:
        if stored:
            current_app.logger.warning("Unknown role %r on profile %s", stored, profile_id)
        return DEFAULT_ROLE
    return role


def profile_role(profile: Profile | None) -> str:
    """Canonical role for an already-loaded profile."""
    if profile is None:
        return DEFAULT_ROLE
    return canonical_role(profile.role) or DEFAULT_ROLE


def effective_role(actual_role: str, override: str | None) -> str:
    """
    Role used for menus and themes.

    Only root may be overridden, and only by one of the known roles.
    """
    if actual_role == ROOT and override and is_valid_role(override):
        return override
    return actual_role


def landing_path(role: str) -> str:
    """Where the dashboard sends a profile after sign-in or a role switch."""
    if role == ROOT:
        return "/admin"
    if role == WAREHOUSE_STAFF:
        return "/warehouse"
    return "/dashboard"


def is_company_admin(profile: Profile | None) -> bool:
    if profile is None or not profile.company_id:
        return False
    return profile_role(profile) in COMPANY_ADMIN_ROLES


class RoleSwitchError(Exception):
    """Raised when a test-role switch is not allowed or names an unknown role."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.status = status


def stored_test_role(session_store, cookies) -> str | None:
    """
    Preview role saved for the current browser.

    The server session wins over the cookie; unknown values are ignored.
    """
    role = session_store.get(TEST_ROLE_SESSION_KEY) or cookies.get(TEST_ROLE_COOKIE)
    return role if is_valid_role(role) else None


def switch_test_role(profile: Profile, role: str | None, session_store) -> str:
    """
    Save a root preview role and announce it.

    Returns the landing path for the new role.
    Raises RoleSwitchError (403) for non-root profiles, (400) for unknown roles.
    """
    from .permission_service import log_security_event

    if profile_role(profile) != ROOT:
        raise RoleSwitchError("Only root can switch test roles", status=403)
    if not is_valid_role(role):
        raise RoleSwitchError(f"Unknown role: {role}")

    session_store[TEST_ROLE_SESSION_KEY] = role
    redirect = landing_path(role)

    log_security_event(
        profile_id=profile.id,
        event_type="TEST_ROLE_SWITCHED",
        success=True,
        action=role,
        reason=f"Previewing dashboard as {role}",
    )
    current_app.logger.info("Profile %s previewing role %s", profile.id, role)
    role_changed.send(profile.id, role=role, redirect=redirect)
    return redirect


def clear_test_role(profile: Profile | None, session_store) -> str:
    """Forget the preview role. Returns the landing path for the stored role."""

    had_role = session_store.pop(TEST_ROLE_SESSION_KEY, None)
    actual = profile_role(profile)
    redirect = landing_path(actual)
    if profile is not None and had_role:
        role_changed.send(profile.id, role=None, redirect=redirect)
    return redirect
