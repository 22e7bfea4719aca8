# Overview: Date and time helpers shared by models and services.

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def utcnow() -> datetime:
    """Current UTC time as a naive datetime; every DateTime column stores this form."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Gate entry/exit times arrive as ISO-8601 strings from the browser.

    Offsets (including a trailing Z) are folded into UTC; a value without
    an offset is already UTC. Malformed input raises ValueError.
    """
    if _blank(value):
        return None
    parsed = date_parser.isoparse(str(value).strip())
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """YYYY-MM-DD booking dates. Blank means not given."""
    if _blank(value):
        return None
    return date.fromisoformat(str(value).strip())


def add_months(start: date, months: int) -> date:
    """
    Rental end date. The day is clamped to the target month's last day,
    so 2026-01-31 + 1 month is 2026-02-28.
    """
    return start + relativedelta(months=months)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    # Stored values are naive UTC; API output uses whole seconds and a Z suffix
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.replace(microsecond=0).isoformat() + "Z"


def to_iso_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None
