from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from dataclasses import dataclass
from typing import Any, Iterable

from sqlalchemy import Boolean, Date, Integer, String, Text, DateTime
from sqlalchemy.orm import DeclarativeMeta

from warebnb.time_utils import parse_iso_date, parse_iso_datetime


# Maximum amount: $9,999,999.99 (999,999,999 cents)
MAX_AMOUNT_CENTS = 999_999_999


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """409-level business rule conflict (e.g., order no longer editable)."""


class NotFoundError(LookupError):
    """404-level missing or out-of-scope record."""


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: what clients are allowed to set (security boundary)
    - required_on_create: fields required for POST
    """
    writable_fields: set[str]
    required_on_create: set[str] = None  # type: ignore


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _coerce_integer(col, value: Any) -> int:
    # JSON numbers or plain digit strings only; 1.0, "1.5" and "1e3" are refused
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise ValidationError(f"{col.key} must be an integer")


def _coerce_value(col, value: Any):
    coltype = col.type

    if isinstance(coltype, Integer):
        return _coerce_integer(col, value)
    if isinstance(coltype, Boolean):
        return value if isinstance(value, bool) else bool(value)
    if isinstance(coltype, DateTime):
        if isinstance(value, datetime):
            return value
        try:
            parsed = parse_iso_datetime(value) if isinstance(value, str) else None
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValidationError(f"{col.key} must be an ISO-8601 datetime")
        return parsed
    if isinstance(coltype, Date):
        return parse_date_field(value, col.key)
    if isinstance(coltype, (String, Text)):
        return str(value).strip()
    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Check a create (partial=False) or patch (partial=True) body against a
    model and its policy, returning the cleaned values.

    Keys outside policy.writable_fields are refused outright rather than
    dropped, so a client sending `total_cents` or `customer_id` learns
    that the server owns those. Values are coerced by column type; NOT
    NULL columns refuse null and blank strings; String lengths are
    enforced.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    if not partial:
        missing = sorted(set(policy.required_on_create or ()) - set(payload))
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    columns = _columns_by_key(model)
    patch: dict = {}

    for key, raw in payload.items():
        if key not in policy.writable_fields:
            raise ValidationError(f"Field not allowed: {key}")
        col = columns.get(key)
        if col is None:
            raise ValidationError(f"Unknown field: {key}")

        if raw is None:
            if not col.nullable:
                raise ValidationError(f"{key} cannot be null")
            patch[key] = None
            continue

        value = _coerce_value(col, raw)
        if isinstance(value, str):
            if value == "" and not col.nullable:
                raise ValidationError(f"{key} cannot be blank")
            length = getattr(col.type, "length", None)
            if length and len(value) > length:
                raise ValidationError(f"{key} exceeds max length {length}")
        patch[key] = value

    return patch


# -- Field helpers used by per-form validation --

def validate_choice(value: Any, choices: Iterable[str], field: str) -> str:
    if value not in choices:
        raise ValidationError(f"{field} must be one of: {', '.join(choices)}")
    return value


def validate_text(value: Any, field: str, *, max_length: int, min_length: int = 0) -> str | None:
    if value is None:
        if min_length:
            raise ValidationError(f"{field} is required")
        return None
    text = str(value).strip()
    if len(text) < min_length:
        raise ValidationError(f"{field} is required")
    if len(text) > max_length:
        raise ValidationError(f"{field} exceeds max length {max_length}")
    return text


def parse_date_field(value: Any, field: str) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a date (YYYY-MM-DD)")


def parse_int_field(value: Any, field: str, *, minimum: int | None = None) -> int:
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{field} must be an integer")
        value = int(value)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}")
    return number


def parse_cents_field(value: Any, field: str, *, positive: bool = False) -> int:
    """
    Parse an integer cents amount.

    positive=True rejects zero and negatives.
    """
    cents = parse_int_field(value, field)
    if positive and cents <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    if cents < 0:
        raise ValidationError(f"{field} must be >= 0")
    if cents > MAX_AMOUNT_CENTS:
        raise ValidationError(f"{field} cannot exceed {MAX_AMOUNT_CENTS}")
    return cents


def to_cents(amount: Decimal | int | float | str) -> int:
    """Round a currency amount (in dollars) to integer cents, half-up."""
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValidationError("amount must be numeric")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def enforce_rules_company(patch: dict) -> None:
    if "name" in patch and not patch["name"]:
        raise ValidationError("name cannot be blank")
    vat = patch.get("vat_number")
    if vat and not vat.replace(" ", "").isalnum():
        raise ValidationError("vat_number must be alphanumeric")


def enforce_rules_profile(patch: dict) -> None:
    phone = patch.get("phone")
    if phone and not all(ch.isdigit() or ch in "+-() " for ch in phone):
        raise ValidationError("phone contains invalid characters")
