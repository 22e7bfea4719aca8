# Overview: Service-layer operations for dashboard navigation; menu tables, badges, themes and branding.

"""
Dashboard Navigation

Selects the sidebar menu and colour theme for the effective role.
Partner roles (finder, broker, delivery and transport) get their own
menus; every other role gets the base menu filtered by the roles each
item lists. Root has no entry in the base menu, so a root profile
without a preview role sees an empty sidebar and works from /admin.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from flask import current_app

from ..extensions import db
from ..models import Booking, Claim, Company, Profile
from ..permissions.roles import (
    COMPANY_ADMIN_ROLES,
    END_DELIVERY_PARTY,
    INTERNATIONAL_TRANSPORT,
    LOCAL_TRANSPORT,
    ROLE_LABELS,
    ROOT,
    WAREHOUSE_ADMIN,
    WAREHOUSE_BROKER,
    WAREHOUSE_CLIENT,
    WAREHOUSE_FINDER,
    WAREHOUSE_STAFF,
    WAREHOUSE_SUPERVISOR,
)
from . import role_service
from .tenant_service import scope_query


DEFAULT_BRAND_NAME = "Warebnb"
MY_COMPANY_HREF = "/dashboard/my-company"


@dataclass(frozen=True)
class NavItem:
    name: str
    href: str
    icon: str
    roles: frozenset = field(default_factory=frozenset)
    badge: int | None = None


_DASHBOARD_ROLES = frozenset({WAREHOUSE_CLIENT, WAREHOUSE_ADMIN, WAREHOUSE_SUPERVISOR, WAREHOUSE_STAFF})
_OPERATOR_ROLES = frozenset({WAREHOUSE_ADMIN, WAREHOUSE_SUPERVISOR, WAREHOUSE_STAFF})


BASE_NAVIGATION = (
    NavItem("Dashboard", "/dashboard", "layout-dashboard", _DASHBOARD_ROLES),
    NavItem("Warehouses", "/dashboard/warehouses", "warehouse", _OPERATOR_ROLES),
    NavItem("Services", "/dashboard/services", "wrench", _OPERATOR_ROLES),
    NavItem("Orders", "/dashboard/orders", "shopping-cart", _OPERATOR_ROLES),
    NavItem("Bookings", "/dashboard/bookings", "package", _DASHBOARD_ROLES),
    NavItem("Calendar", "/dashboard/calendar", "calendar", _DASHBOARD_ROLES),
    NavItem("Invoices", "/dashboard/invoices", "file-text", _OPERATOR_ROLES),
    NavItem("Claims", "/dashboard/claims", "alert-circle", _DASHBOARD_ROLES),
    NavItem("Notifications", "/dashboard/notifications", "bell", _DASHBOARD_ROLES, badge=2),
    NavItem("Membership", "/dashboard/membership", "award", _OPERATOR_ROLES),
    NavItem("Settings", "/dashboard/settings", "settings", _DASHBOARD_ROLES),
)

FINDER_NAVIGATION = (
    NavItem("Dashboard", "/dashboard/warehouse-finder", "layout-dashboard"),
    NavItem("Map", "/dashboard/warehouse-finder/map", "map"),
    NavItem("Contacts", "/dashboard/warehouse-finder/contacts", "users"),
    NavItem("Visits", "/dashboard/warehouse-finder/visits", "map-pin"),
    NavItem("Performance", "/dashboard/warehouse-finder/performance", "trending-up"),
    NavItem("Settings", "/dashboard/settings", "settings"),
)

BROKER_NAVIGATION = (
    NavItem("Dashboard", "/dashboard", "layout-dashboard"),
    NavItem("Leads", "/dashboard/broker/leads", "users"),
    NavItem("Communications", "/dashboard/broker/communications", "message-square"),
    NavItem("Proposals", "/dashboard/broker/proposals", "file-text"),
    NavItem("Performance", "/dashboard/broker/performance", "trending-up"),
    NavItem("Settings", "/dashboard/settings", "settings"),
)

END_DELIVERY_NAVIGATION = (
    NavItem("Dashboard", "/dashboard/end-delivery", "layout-dashboard"),
    NavItem("Shipments", "/dashboard/end-delivery/shipments", "package"),
    NavItem("History", "/dashboard/end-delivery/history", "history"),
    NavItem("Settings", "/dashboard/end-delivery/settings", "settings"),
)

LOCAL_TRANSPORT_NAVIGATION = (
    NavItem("Dashboard", "/dashboard/local-transport", "layout-dashboard"),
    NavItem("Jobs", "/dashboard/local-transport/jobs", "briefcase"),
    NavItem("Drivers", "/dashboard/local-transport/drivers", "users"),
    NavItem("Vehicles", "/dashboard/local-transport/vehicles", "truck"),
    NavItem("Schedule", "/dashboard/local-transport/schedule", "calendar"),
    NavItem("Settings", "/dashboard/local-transport/settings", "settings"),
)

INTERNATIONAL_TRANSPORT_NAVIGATION = (
    NavItem("Dashboard", "/dashboard/international-transport", "layout-dashboard"),
    NavItem("Shipments", "/dashboard/international-transport/shipments", "ship"),
    NavItem("Customs", "/dashboard/international-transport/customs", "file-check"),
    NavItem("Documents", "/dashboard/international-transport/documents", "folder"),
    NavItem("Settings", "/dashboard/international-transport/settings", "settings"),
)

# Partner menus are shown whole; no per-item role filter
ROLE_NAVIGATION = {
    WAREHOUSE_FINDER: FINDER_NAVIGATION,
    WAREHOUSE_BROKER: BROKER_NAVIGATION,
    END_DELIVERY_PARTY: END_DELIVERY_NAVIGATION,
    LOCAL_TRANSPORT: LOCAL_TRANSPORT_NAVIGATION,
    INTERNATIONAL_TRANSPORT: INTERNATIONAL_TRANSPORT_NAVIGATION,
}


_SIDEBAR_SUFFIX = "backdrop-blur-sm shadow-md"

SIDEBAR_THEMES = {
    ROOT: "bg-red-50/95 dark:bg-red-950/95 border-r border-red-200 dark:border-red-900",
    WAREHOUSE_ADMIN: "bg-emerald-50/95 dark:bg-emerald-950/95 border-r border-emerald-200 dark:border-emerald-900",
    WAREHOUSE_SUPERVISOR: "bg-blue-50/95 dark:bg-blue-950/95 border-r border-blue-200 dark:border-blue-900",
    WAREHOUSE_CLIENT: "bg-violet-50/95 dark:bg-violet-950/95 border-r border-violet-200 dark:border-violet-900",
    WAREHOUSE_STAFF: "bg-slate-100/95 dark:bg-slate-900/95 border-r border-slate-300 dark:border-slate-800",
    WAREHOUSE_FINDER: "bg-amber-50/95 dark:bg-amber-950/95 border-r border-amber-200 dark:border-amber-900",
    WAREHOUSE_BROKER: "bg-indigo-50/95 dark:bg-indigo-950/95 border-r border-indigo-200 dark:border-indigo-900",
    END_DELIVERY_PARTY: "bg-cyan-50/95 dark:bg-cyan-950/95 border-r border-cyan-200 dark:border-cyan-900",
    LOCAL_TRANSPORT: "bg-orange-50/95 dark:bg-orange-950/95 border-r border-orange-200 dark:border-orange-900",
    INTERNATIONAL_TRANSPORT: "bg-sky-50/95 dark:bg-sky-950/95 border-r border-sky-200 dark:border-sky-900",
}
DEFAULT_SIDEBAR_THEME = "bg-slate-200/90 dark:bg-slate-950/98 border-r border-slate-300 dark:border-slate-800"

ROOT_HEADER_THEME = "bg-red-50/95 dark:bg-red-950/95 border-b border-red-200 dark:border-red-900"
DEFAULT_HEADER_THEME = "bg-card border-b"


def navigation_for_role(role: str) -> list[NavItem]:
    """Menu items visible to a role."""
    if role in ROLE_NAVIGATION:
        return list(ROLE_NAVIGATION[role])
    return [item for item in BASE_NAVIGATION if role in item.roles]


def is_active(href: str, pathname: str | None) -> bool:
    """
    /dashboard is active only on an exact match; other items also match
    their sub-paths.
    """
    if not pathname:
        return False
    if href == "/dashboard":
        return pathname == href
    return pathname == href or pathname.startswith(href + "/")


def sidebar_theme(role: str) -> str:
    return f"{SIDEBAR_THEMES.get(role, DEFAULT_SIDEBAR_THEME)} {_SIDEBAR_SUFFIX}"


def header_theme(actual_role: str) -> str:
    return ROOT_HEADER_THEME if actual_role == ROOT else DEFAULT_HEADER_THEME


def show_my_company(profile: Profile | None, role: str) -> bool:
    return role in COMPANY_ADMIN_ROLES or role_service.is_company_admin(profile)


def display_name(profile: Profile | None) -> str:
    if profile is None:
        return "User"
    if profile.name:
        return profile.name
    if profile.email:
        return profile.email.split("@", 1)[0]
    return "User"


def resolve_storage_url(path: str | None, folder: str = "avatar") -> str | None:
    """
    Turn a stored object path into a public URL.

    Absolute http(s) and data: URLs pass through. Paths already under
    avatar/ or logo/ keep their folder.
    """
    if not path:
        return None
    if path.startswith(("http://", "https://", "data:")):
        return path
    path = path.lstrip("/")
    if not path.startswith(("avatar/", "logo/")):
        path = f"{folder}/{path}"
    base = current_app.config["STORAGE_PUBLIC_URL"].rstrip("/")
    return f"{base}/{path}"


def badge_counts(profile: Profile) -> dict[str, int]:
    """Live badge counts for the Bookings and Claims menu items."""
    pending_bookings = scope_query(
        db.session.query(Booking).filter(Booking.status == "pending"),
        profile,
        customer_column=Booking.customer_id,
        warehouse_column=Booking.warehouse_id,
    ).count()

    claims_in_review = scope_query(
        db.session.query(Claim).filter(Claim.status == "under-review", Claim.deleted_at.is_(None)),
        profile,
        customer_column=Claim.customer_id,
        booking_column=Claim.booking_id,
    ).count()

    return {
        "/dashboard/bookings": pending_bookings,
        "/dashboard/claims": claims_in_review,
    }


def branding(profile: Profile | None) -> dict:
    company = db.session.get(Company, profile.company_id) if profile and profile.company_id else None
    if company is None:
        return {"name": DEFAULT_BRAND_NAME, "logo_url": None}
    return {
        "name": company.name or DEFAULT_BRAND_NAME,
        "logo_url": resolve_storage_url(company.logo_url, folder="logo"),
    }


def build_navigation(profile: Profile, pathname: str | None, test_role: str | None) -> dict:
    """
    Full sidebar/header state for a profile viewing pathname.

    test_role is the stored root preview role; it is ignored for non-root
    profiles.
    """
    actual = role_service.profile_role(profile)
    role = role_service.effective_role(actual, test_role)
    items = navigation_for_role(role)

    live_badges = badge_counts(profile) if items else {}

    menu = []
    for item in items:
        badge = live_badges.get(item.href, item.badge)
        menu.append({
            "name": item.name,
            "href": item.href,
            "icon": item.icon,
            "badge": badge or None,
            "active": is_active(item.href, pathname),
        })

    my_company = None
    if show_my_company(profile, role):
        my_company = {
            "name": "My Company",
            "href": MY_COMPANY_HREF,
            "active": is_active(MY_COMPANY_HREF, pathname),
        }

    preview = role if actual == ROOT and role != ROOT else None

    return {
        "role": actual,
        "effective_role": role,
        "is_root": actual == ROOT,
        "test_role": preview,
        "indicator": f"Root → {ROLE_LABELS[preview]}" if preview else None,
        "items": menu,
        "my_company": my_company,
        "theme": {
            "sidebar": sidebar_theme(role),
            "header": header_theme(actual),
        },
        "branding": branding(profile),
        "profile": {
            "name": display_name(profile),
            "email": profile.email,
            "avatar_url": resolve_storage_url(profile.avatar_url),
            "membership_tier": profile.membership_tier or "bronze",
            "role_label": ROLE_LABELS.get(role, "User"),
        },
        "landing_path": role_service.landing_path(role),
    }
