from .tenancy import Company, Warehouse, WarehousePricing, WarehouseService
from .auth import Profile, SessionToken
from .security import SecurityEvent
from .bookings import Booking, InventoryItem
from .orders import ServiceOrder, ServiceOrderItem
from .billing import Invoice, Claim
from .access import AccessLog

__all__ = [
    'Company', 'Warehouse', 'WarehousePricing', 'WarehouseService',
    'Profile', 'SessionToken', 'SecurityEvent',
    'Booking', 'InventoryItem',
    'ServiceOrder', 'ServiceOrderItem',
    'Invoice', 'Claim',
    'AccessLog',
]
