# Overview: Permission system package.
# Re-exports all public APIs for convenient imports.

from .categories import PermissionCategory
from .definitions import (
    PERMISSION_DEFINITIONS,
    BOOKING_PERMISSIONS,
    BILLING_PERMISSIONS,
    CLAIM_PERMISSIONS,
    ORDER_PERMISSIONS,
    OPERATIONS_PERMISSIONS,
    WAREHOUSE_PERMISSIONS,
    ORGANIZATION_PERMISSIONS,
    SYSTEM_PERMISSIONS,
)
from .roles import (
    ALL_ROLES,
    COMPANY_ADMIN_ROLES,
    DEFAULT_ROLE,
    DEFAULT_ROLE_PERMISSIONS,
    LEGACY_ROLE_ALIASES,
    ROLE_LABELS,
    WAREHOUSE_OPERATOR_ROLES,
)
from .helpers import (
    get_all_permission_codes,
    get_permission_definition,
    validate_permission_code,
)

__all__ = [
    "PermissionCategory",
    "PERMISSION_DEFINITIONS",
    "BOOKING_PERMISSIONS",
    "BILLING_PERMISSIONS",
    "CLAIM_PERMISSIONS",
    "ORDER_PERMISSIONS",
    "OPERATIONS_PERMISSIONS",
    "WAREHOUSE_PERMISSIONS",
    "ORGANIZATION_PERMISSIONS",
    "SYSTEM_PERMISSIONS",
    "ALL_ROLES",
    "COMPANY_ADMIN_ROLES",
    "DEFAULT_ROLE",
    "DEFAULT_ROLE_PERMISSIONS",
    "LEGACY_ROLE_ALIASES",
    "ROLE_LABELS",
    "WAREHOUSE_OPERATOR_ROLES",
    "get_all_permission_codes",
    "get_permission_definition",
    "validate_permission_code",
]
