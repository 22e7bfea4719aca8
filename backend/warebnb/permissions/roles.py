# Overview: Role names, legacy aliases, display labels and default role permissions.

from .helpers import get_all_permission_codes


ROOT = "root"
WAREHOUSE_ADMIN = "warehouse_admin"
WAREHOUSE_SUPERVISOR = "warehouse_supervisor"
WAREHOUSE_CLIENT = "warehouse_client"
WAREHOUSE_STAFF = "warehouse_staff"
WAREHOUSE_FINDER = "warehouse_finder"
WAREHOUSE_BROKER = "warehouse_broker"
END_DELIVERY_PARTY = "end_delivery_party"
LOCAL_TRANSPORT = "local_transport"
INTERNATIONAL_TRANSPORT = "international_transport"

ALL_ROLES = (
    ROOT,
    WAREHOUSE_ADMIN,
    WAREHOUSE_SUPERVISOR,
    WAREHOUSE_CLIENT,
    WAREHOUSE_STAFF,
    WAREHOUSE_FINDER,
    WAREHOUSE_BROKER,
    END_DELIVERY_PARTY,
    LOCAL_TRANSPORT,
    INTERNATIONAL_TRANSPORT,
)

# Baseline for missing or unreadable profiles
DEFAULT_ROLE = WAREHOUSE_CLIENT

# Older role names still present in long-lived rows
LEGACY_ROLE_ALIASES = {
    "super_admin": ROOT,
    "warehouse_owner": WAREHOUSE_ADMIN,
    "company_admin": WAREHOUSE_SUPERVISOR,
    "customer": WAREHOUSE_CLIENT,
    "member": WAREHOUSE_CLIENT,
    "reseller": WAREHOUSE_BROKER,
    "worker": WAREHOUSE_STAFF,
}

ROLE_LABELS = {
    ROOT: "Root Admin",
    WAREHOUSE_ADMIN: "Warehouse Admin",
    WAREHOUSE_SUPERVISOR: "Warehouse Supervisor",
    WAREHOUSE_CLIENT: "Warehouse Client",
    WAREHOUSE_STAFF: "Warehouse Staff",
    WAREHOUSE_FINDER: "Warehouse Finder",
    WAREHOUSE_BROKER: "Warehouse Broker",
    END_DELIVERY_PARTY: "End Delivery Party",
    LOCAL_TRANSPORT: "Local Transport",
    INTERNATIONAL_TRANSPORT: "International Transport",
}

# Roles that operate warehouses owned by their company
WAREHOUSE_OPERATOR_ROLES = frozenset({WAREHOUSE_ADMIN, WAREHOUSE_SUPERVISOR, WAREHOUSE_STAFF})

# Roles that administer their company profile
COMPANY_ADMIN_ROLES = frozenset({WAREHOUSE_ADMIN, WAREHOUSE_SUPERVISOR})


_CLIENT_PERMISSIONS = [
    "VIEW_BOOKINGS",
    "CREATE_BOOKING",
    "VIEW_INVOICES",
    "VIEW_CLAIMS",
    "SUBMIT_CLAIM",
    "VIEW_ORDERS",
    "CREATE_ORDER",
    "VIEW_INVENTORY",
    "VIEW_WAREHOUSES",
]

_STAFF_PERMISSIONS = [
    "VIEW_BOOKINGS",
    "MANAGE_BOOKINGS",
    "VIEW_INVOICES",
    "VIEW_CLAIMS",
    "VIEW_ORDERS",
    "MANAGE_ORDERS",
    "VIEW_ACCESS_LOGS",
    "MANAGE_ACCESS_LOGS",
    "VIEW_INVENTORY",
    "MANAGE_INVENTORY",
    "VIEW_WAREHOUSES",
]

_SUPERVISOR_PERMISSIONS = _STAFF_PERMISSIONS + [
    "MANAGE_INVOICES",
    "REVIEW_CLAIMS",
    "EDIT_CLAIMS",
    "DELETE_CLAIMS",
    "MANAGE_COMPANY",
]

_ADMIN_PERMISSIONS = _SUPERVISOR_PERMISSIONS + [
    "MANAGE_WAREHOUSES",
    "MANAGE_PRICING",
]

_PARTNER_PERMISSIONS = [
    "VIEW_WAREHOUSES",
    "VIEW_ORDERS",
]


DEFAULT_ROLE_PERMISSIONS = {
    ROOT: get_all_permission_codes(),
    WAREHOUSE_ADMIN: _ADMIN_PERMISSIONS,
    WAREHOUSE_SUPERVISOR: _SUPERVISOR_PERMISSIONS,
    WAREHOUSE_STAFF: _STAFF_PERMISSIONS,
    WAREHOUSE_CLIENT: _CLIENT_PERMISSIONS,
    WAREHOUSE_FINDER: ["VIEW_WAREHOUSES"],
    WAREHOUSE_BROKER: ["VIEW_WAREHOUSES"],
    END_DELIVERY_PARTY: _PARTNER_PERMISSIONS,
    LOCAL_TRANSPORT: _PARTNER_PERMISSIONS,
    INTERNATIONAL_TRANSPORT: _PARTNER_PERMISSIONS,
}
