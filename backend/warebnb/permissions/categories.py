# Overview: Permission category constants for grouping related permissions.


class PermissionCategory:
    """Permission categories for organization and UI display."""
    BOOKINGS = "BOOKINGS"
    BILLING = "BILLING"
    CLAIMS = "CLAIMS"
    ORDERS = "ORDERS"
    OPERATIONS = "OPERATIONS"
    WAREHOUSES = "WAREHOUSES"
    ORGANIZATION = "ORGANIZATION"
    SYSTEM = "SYSTEM"
