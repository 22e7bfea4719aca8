"""Python client for the Warebnb API: toast-aware HTTP wrapper, query cache and page resources."""

from .api_client import ApiClient, ApiResult
from .notifications import Notification, NotificationCenter, Notifier, NullNotifier
from .query_cache import QueryCache
from .resources import ClaimsResource, DashboardFeed, DashboardData

__all__ = [
    "ApiClient",
    "ApiResult",
    "Notification",
    "NotificationCenter",
    "Notifier",
    "NullNotifier",
    "QueryCache",
    "ClaimsResource",
    "DashboardFeed",
    "DashboardData",
]
