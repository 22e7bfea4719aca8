# Overview: All permission definitions organized by category.
# Each permission is defined as: (code, name, description, category)

from .categories import PermissionCategory


# -- BOOKINGS --

BOOKING_PERMISSIONS = [
    (
        "VIEW_BOOKINGS",
        "View Bookings",
        "View bookings within the caller's scope",
        PermissionCategory.BOOKINGS,
    ),
    (
        "CREATE_BOOKING",
        "Create Booking",
        "Book pallet storage or area rental space",
        PermissionCategory.BOOKINGS,
    ),
    (
        "MANAGE_BOOKINGS",
        "Manage Bookings",
        "Confirm, activate, complete bookings and propose start times",
        PermissionCategory.BOOKINGS,
    ),
]


# -- BILLING --

BILLING_PERMISSIONS = [
    (
        "VIEW_INVOICES",
        "View Invoices",
        "View invoices within the caller's scope",
        PermissionCategory.BILLING,
    ),
    (
        "MANAGE_INVOICES",
        "Manage Invoices",
        "Generate invoices and change invoice status",
        PermissionCategory.BILLING,
    ),
]


# -- CLAIMS --

CLAIM_PERMISSIONS = [
    (
        "VIEW_CLAIMS",
        "View Claims",
        "View claims within the caller's scope",
        PermissionCategory.CLAIMS,
    ),
    (
        "SUBMIT_CLAIM",
        "Submit Claim",
        "File a damage, loss or delay claim against an own booking",
        PermissionCategory.CLAIMS,
    ),
    (
        "REVIEW_CLAIMS",
        "Review Claims",
        "Start review, approve, reject and pay out claims",
        PermissionCategory.CLAIMS,
    ),
    (
        "EDIT_CLAIMS",
        "Edit Claims",
        "Edit claim status, notes and amounts from the claims form",
        PermissionCategory.CLAIMS,
    ),
    (
        "DELETE_CLAIMS",
        "Delete Claims",
        "Remove claims from listings",
        PermissionCategory.CLAIMS,
    ),
]


# -- ORDERS --

ORDER_PERMISSIONS = [
    (
        "VIEW_ORDERS",
        "View Service Orders",
        "View service orders within the caller's scope",
        PermissionCategory.ORDERS,
    ),
    (
        "CREATE_ORDER",
        "Create Service Order",
        "Order warehouse services",
        PermissionCategory.ORDERS,
    ),
    (
        "MANAGE_ORDERS",
        "Manage Service Orders",
        "Change order status and priority for any scoped order",
        PermissionCategory.ORDERS,
    ),
]


# -- OPERATIONS --

OPERATIONS_PERMISSIONS = [
    (
        "VIEW_ACCESS_LOGS",
        "View Access Logs",
        "View gate check-in/check-out records",
        PermissionCategory.OPERATIONS,
    ),
    (
        "MANAGE_ACCESS_LOGS",
        "Manage Access Logs",
        "Check visitors and vehicles in and out",
        PermissionCategory.OPERATIONS,
    ),
    (
        "VIEW_INVENTORY",
        "View Inventory",
        "View stored pallets",
        PermissionCategory.OPERATIONS,
    ),
    (
        "MANAGE_INVENTORY",
        "Manage Inventory",
        "Check pallets in and mark them shipped",
        PermissionCategory.OPERATIONS,
    ),
]


# -- WAREHOUSES --

WAREHOUSE_PERMISSIONS = [
    (
        "VIEW_WAREHOUSES",
        "View Warehouses",
        "Browse warehouses, services and price quotes",
        PermissionCategory.WAREHOUSES,
    ),
    (
        "MANAGE_WAREHOUSES",
        "Manage Warehouses",
        "Create and edit warehouses and their services",
        PermissionCategory.WAREHOUSES,
    ),
    (
        "MANAGE_PRICING",
        "Manage Pricing",
        "Set warehouse-specific pallet and area pricing",
        PermissionCategory.WAREHOUSES,
    ),
]


# -- ORGANIZATION --

ORGANIZATION_PERMISSIONS = [
    (
        "MANAGE_COMPANY",
        "Manage Company",
        "Edit the company profile, logo and address",
        PermissionCategory.ORGANIZATION,
    ),
]


# -- SYSTEM --

SYSTEM_PERMISSIONS = [
    (
        "SWITCH_TEST_ROLE",
        "Switch Test Role",
        "Preview the dashboard as another role",
        PermissionCategory.SYSTEM,
    ),
    (
        "VIEW_SECURITY_EVENTS",
        "View Security Events",
        "Read the security audit trail",
        PermissionCategory.SYSTEM,
    ),
    (
        "SYSTEM_ADMIN",
        "System Administration",
        "Unscoped access to every tenant",
        PermissionCategory.SYSTEM,
    ),
]


PERMISSION_DEFINITIONS = (
    BOOKING_PERMISSIONS
    + BILLING_PERMISSIONS
    + CLAIM_PERMISSIONS
    + ORDER_PERMISSIONS
    + OPERATIONS_PERMISSIONS
    + WAREHOUSE_PERMISSIONS
    + ORGANIZATION_PERMISSIONS
    + SYSTEM_PERMISSIONS
)
