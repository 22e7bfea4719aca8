# Overview: Service-layer operations for permission; encapsulates business logic and database work.

"""
Permission Checking and Security Event Logging

Permissions derive from the profile's stored (canonical) role through
DEFAULT_ROLE_PERMISSIONS. A root preview role never grants or removes
permissions.

DESIGN PRINCIPLES:
- Fail closed: unknown roles get the baseline role's permissions
- Log denials only: permission grants are not logged
"""

from ..extensions import db
from ..models import Profile, SecurityEvent
from ..permissions import DEFAULT_ROLE, DEFAULT_ROLE_PERMISSIONS, get_permission_definition
from .role_service import profile_role
from warebnb.time_utils import utcnow


class PermissionDeniedError(Exception):
    """Raised when a profile lacks required permission."""
    pass


def log_security_event(
    profile_id: int | None,
    event_type: str,
    success: bool,
    resource: str | None = None,
    action: str | None = None,
    reason: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
    company_id: int | None = None,
) -> SecurityEvent:
    """
    Log security event to audit trail.

    event_type examples:
    - PERMISSION_DENIED
    - LOGIN
    - LOGIN_FAILED
    - LOGOUT
    - PROFILE_REGISTERED
    - TEST_ROLE_SWITCHED
    - TEST_ROLE_CLEARED
    """
    event = SecurityEvent(
        profile_id=profile_id,
        company_id=company_id,
        event_type=event_type,
        resource=resource,
        action=action,
        success=success,
        reason=reason,
        ip_address=ip_address,
        user_agent=user_agent,
        occurred_at=utcnow()
    )

    db.session.add(event)
    db.session.commit()

    return event


def get_role_permissions(role: str) -> set[str]:
    return set(DEFAULT_ROLE_PERMISSIONS.get(role, DEFAULT_ROLE_PERMISSIONS[DEFAULT_ROLE]))


def get_profile_permissions(profile: Profile) -> set[str]:
    """
    Get all permission codes for a profile.

    Returns set of permission codes (e.g., {"VIEW_BOOKINGS", "SUBMIT_CLAIM"}).
    """
    return get_role_permissions(profile_role(profile))


def profile_has_permission(profile: Profile, permission_code: str) -> bool:
    return permission_code in get_profile_permissions(profile)


def describe_profile_permissions(profile: Profile) -> dict[str, list[dict]]:
    """The profile's permission definitions grouped by category, for settings screens."""
    grouped: dict[str, list[dict]] = {}
    for code in sorted(get_profile_permissions(profile)):
        definition = get_permission_definition(code)
        grouped.setdefault(definition["category"], []).append(definition)
    return grouped


def require_any_permission(
    profile: Profile,
    permission_codes: tuple[str, ...],
    resource: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> None:
    """
    Raise PermissionDeniedError unless the profile holds one of the codes.

    Denials are written to security_events; the action is the single code,
    or ANY_OF:<codes> when several would do.
    """
    granted = get_profile_permissions(profile)
    if any(code in granted for code in permission_codes):
        return

    if len(permission_codes) == 1:
        action = permission_codes[0]
        reason = f"Missing permission: {action}"
    else:
        action = f"ANY_OF:{','.join(permission_codes)}"
        reason = f"Missing any of: {', '.join(permission_codes)}"

    log_security_event(
        profile_id=profile.id,
        event_type="PERMISSION_DENIED",
        success=False,
        resource=resource,
        action=action,
        reason=reason,
        ip_address=ip_address,
        user_agent=user_agent,
        company_id=profile.company_id,
    )
    raise PermissionDeniedError(f"Permission denied: {' or '.join(permission_codes)}")
