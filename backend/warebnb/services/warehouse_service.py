# Overview: Service-layer operations for warehouses, their price lists and add-on services.

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..extensions import db
from ..models import Profile, Warehouse, WarehousePricing, WarehouseService
from ..validation import (
    ConflictError,
    ModelValidationPolicy,
    ValidationError,
    parse_cents_field,
    parse_int_field,
    validate_choice,
    validate_payload,
)
from .order_service import SERVICE_UNIT_TYPES
from .tenant_service import is_root, require_warehouse


PRICING_TYPES = ("pallet", "area")
PRICING_UNITS = {
    "pallet": ("per_pallet_per_month",),
    "area": ("per_sqft_per_month", "per_sqft_per_year"),
}

WAREHOUSE_POLICY = ModelValidationPolicy(
    writable_fields={
        "name",
        "address",
        "city",
        "total_sq_ft",
        "total_pallet_capacity",
        "min_area_sq_ft",
        "is_active",
    },
    required_on_create={"name", "city"},
)

SERVICE_POLICY = ModelValidationPolicy(
    writable_fields={
        "code",
        "name",
        "category",
        "unit_type",
        "base_price_cents",
        "min_quantity",
        "is_active",
    },
    required_on_create={"code", "name", "base_price_cents"},
)


def _check_capacity_fields(patch: dict) -> None:
    for key in ("total_sq_ft", "total_pallet_capacity", "min_area_sq_ft"):
        if patch.get(key) is not None and patch[key] < 0:
            raise ValidationError(f"{key} must be >= 0")


def list_warehouses(city: str | None = None) -> list[Warehouse]:
    query = db.session.query(Warehouse).filter(Warehouse.is_active.is_(True))
    if city:
        query = query.filter(db.func.lower(Warehouse.city) == city.strip().lower())
    return query.order_by(Warehouse.name).all()


def create_warehouse(profile: Profile, data: dict) -> Warehouse:
    """Create a warehouse owned by the profile's company (root may pass company_id)."""
    data = dict(data or {})
    company_id = data.pop("company_id", None)
    if not is_root(profile):
        company_id = profile.company_id
    if not company_id:
        raise ValidationError("A company is required to own the warehouse")

    patch = validate_payload(model=Warehouse, payload=data, policy=WAREHOUSE_POLICY, partial=False)
    _check_capacity_fields(patch)
    warehouse = Warehouse(company_id=company_id, **patch)
    db.session.add(warehouse)
    db.session.commit()
    return warehouse


def update_warehouse(profile: Profile, warehouse_id: int, data: dict) -> Warehouse:
    warehouse = require_warehouse(profile, warehouse_id, manage=True)
    patch = validate_payload(model=Warehouse, payload=data, policy=WAREHOUSE_POLICY, partial=True)
    _check_capacity_fields(patch)
    for key, value in patch.items():
        setattr(warehouse, key, value)
    db.session.commit()
    return warehouse


def _parse_volume_discounts(raw) -> dict | None:
    if raw in (None, {}):
        return None
    if not isinstance(raw, dict):
        raise ValidationError("volume_discounts must be an object of threshold: percent")
    cleaned = {}
    for threshold, percent in raw.items():
        count = parse_int_field(threshold, "volume_discounts threshold", minimum=1)
        try:
            value = Decimal(str(percent))
        except InvalidOperation:
            raise ValidationError("volume_discounts percent must be numeric")
        if value < 0 or value > 100:
            raise ValidationError("volume_discounts percent must be between 0 and 100")
        cleaned[str(count)] = float(value)
    return cleaned


def set_pricing(profile: Profile, warehouse_id: int, data: dict) -> WarehousePricing:
    """Create or replace the warehouse price list for one pricing type."""
    warehouse = require_warehouse(profile, warehouse_id, manage=True)

    pricing_type = validate_choice(data.get("pricing_type"), PRICING_TYPES, "pricing_type")
    unit = validate_choice(data.get("unit"), PRICING_UNITS[pricing_type], "unit")
    base_price = parse_cents_field(data.get("base_price_cents"), "base_price_cents", positive=True)
    min_quantity = None
    if data.get("min_quantity") not in (None, ""):
        min_quantity = parse_int_field(data["min_quantity"], "min_quantity", minimum=1)

    pricing = db.session.query(WarehousePricing).filter_by(
        warehouse_id=warehouse.id, pricing_type=pricing_type
    ).first()
    if pricing is None:
        pricing = WarehousePricing(warehouse_id=warehouse.id, pricing_type=pricing_type)
        db.session.add(pricing)

    pricing.unit = unit
    pricing.base_price_cents = base_price
    pricing.min_quantity = min_quantity
    pricing.volume_discounts = _parse_volume_discounts(data.get("volume_discounts")) if pricing_type == "pallet" else None
    pricing.is_active = bool(data.get("is_active", True))

    db.session.commit()
    return pricing


def list_pricing(warehouse_id: int) -> list[WarehousePricing]:
    return db.session.query(WarehousePricing).filter_by(warehouse_id=warehouse_id).all()


def list_services(warehouse_id: int, include_inactive: bool = False) -> list[WarehouseService]:
    query = db.session.query(WarehouseService).filter_by(warehouse_id=warehouse_id)
    if not include_inactive:
        query = query.filter(WarehouseService.is_active.is_(True))
    return query.order_by(WarehouseService.name).all()


def create_service(profile: Profile, warehouse_id: int, data: dict) -> WarehouseService:
    warehouse = require_warehouse(profile, warehouse_id, manage=True)
    patch = validate_payload(model=WarehouseService, payload=data, policy=SERVICE_POLICY, partial=False)

    validate_choice(patch.get("unit_type") or "per-item", SERVICE_UNIT_TYPES, "unit_type")
    if patch["base_price_cents"] < 0:
        raise ValidationError("base_price_cents must be >= 0")
    if patch.get("min_quantity") is not None and patch["min_quantity"] < 1:
        raise ValidationError("min_quantity must be at least 1")

    existing = db.session.query(WarehouseService.id).filter_by(
        warehouse_id=warehouse.id, code=patch["code"]
    ).first()
    if existing:
        raise ConflictError(f"Service code already exists: {patch['code']}")

    service = WarehouseService(warehouse_id=warehouse.id, **patch)
    db.session.add(service)
    db.session.commit()
    return service
