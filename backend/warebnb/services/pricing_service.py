# Overview: Service-layer operations for pricing; pallet and area-rental quotes with discounts.

"""
Pricing Calculation

Pallet storage:
    base = pallets x pallet-in fee + pallets x storage rate x months
    volume discount on base, chosen by total pallets held (existing + new)
    membership discount on the amount left after the volume discount

Area rental:
    base = sq ft x (yearly rate / 12) x months
    membership discount only; no volume discount

A warehouse price list (warehouse_pricing) replaces the platform
defaults. With a pallet price list the pallet-in fee is not charged.

All arithmetic uses Decimal; results are integer cents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from ..extensions import db
from ..models import Warehouse, WarehousePricing
from ..validation import ValidationError, to_cents


PALLET_IN_PRICE = Decimal("5.00")
STORAGE_PER_PALLET_PER_MONTH = Decimal("17.50")
AREA_RENTAL_PER_SQFT_PER_YEAR = Decimal("20.00")
AREA_RENTAL_MIN_SQFT = 40000

# (pallet threshold, percent), highest matching threshold wins
VOLUME_DISCOUNTS = (
    (50, Decimal("10")),
    (100, Decimal("15")),
    (250, Decimal("20")),
)

MEMBERSHIP_DISCOUNTS = {
    "bronze": Decimal("0"),
    "silver": Decimal("5"),
    "gold": Decimal("10"),
    "platinum": Decimal("15"),
}

MEMBERSHIP_TIERS = tuple(MEMBERSHIP_DISCOUNTS)

HUNDRED = Decimal("100")


@dataclass
class PricingResult:
    base_amount_cents: int
    volume_discount_cents: int
    volume_discount_percent: Decimal
    membership_discount_cents: int
    membership_discount_percent: Decimal
    final_amount_cents: int
    breakdown: list[dict] = field(default_factory=list)

    @property
    def subtotal_cents(self) -> int:
        return self.base_amount_cents

    @property
    def total_discount_cents(self) -> int:
        return self.volume_discount_cents + self.membership_discount_cents

    def to_dict(self) -> dict:
        return {
            "base_amount_cents": self.base_amount_cents,
            "subtotal_cents": self.subtotal_cents,
            "volume_discount_cents": self.volume_discount_cents,
            "volume_discount_percent": float(self.volume_discount_percent),
            "membership_discount_cents": self.membership_discount_cents,
            "membership_discount_percent": float(self.membership_discount_percent),
            "total_discount_cents": self.total_discount_cents,
            "final_amount_cents": self.final_amount_cents,
            "breakdown": self.breakdown,
        }


def get_warehouse_pricing(warehouse_id: int | None, pricing_type: str) -> WarehousePricing | None:
    if warehouse_id is None:
        return None
    return db.session.query(WarehousePricing).filter_by(
        warehouse_id=warehouse_id,
        pricing_type=pricing_type,
        is_active=True,
    ).first()


def volume_discount_percent(pallet_count: int, tiers=VOLUME_DISCOUNTS) -> Decimal:
    for threshold, percent in sorted(tiers, key=lambda t: t[0], reverse=True):
        if pallet_count >= threshold:
            return Decimal(percent)
    return Decimal("0")


def membership_discount_percent(tier: str | None) -> Decimal:
    return MEMBERSHIP_DISCOUNTS.get(tier or "bronze", Decimal("0"))


def _volume_tiers(pricing: WarehousePricing | None):
    if pricing is None or not pricing.volume_discounts:
        return VOLUME_DISCOUNTS
    return tuple(
        (int(threshold), Decimal(str(percent)))
        for threshold, percent in pricing.volume_discounts.items()
    )


def _months_label(months: int) -> str:
    return f"{months} month{'s' if months > 1 else ''}"


def calculate_pallet_pricing(
    *,
    warehouse_id: int | None,
    pallet_count: int,
    months: int = 1,
    membership_tier: str | None = None,
    existing_pallet_count: int = 0,
) -> PricingResult:
    if not pallet_count or pallet_count < 1:
        raise ValidationError("Pallet count is required for pallet bookings")
    months = months or 1

    pricing = get_warehouse_pricing(warehouse_id, "pallet")
    if pricing is not None:
        storage_rate = Decimal(pricing.base_price_cents) / HUNDRED
        pallet_in_total = Decimal("0")
    else:
        storage_rate = STORAGE_PER_PALLET_PER_MONTH
        pallet_in_total = pallet_count * PALLET_IN_PRICE

    storage_total = pallet_count * storage_rate * months
    base = pallet_in_total + storage_total

    volume_percent = volume_discount_percent(existing_pallet_count + pallet_count, _volume_tiers(pricing))
    volume_discount = base * volume_percent / HUNDRED

    member_percent = membership_discount_percent(membership_tier)
    member_discount = (base - volume_discount) * member_percent / HUNDRED

    breakdown = []
    if pallet_in_total > 0:
        breakdown.append({
            "item": "Pallet In",
            "quantity": pallet_count,
            "unit_price_cents": to_cents(PALLET_IN_PRICE),
            "total_cents": to_cents(pallet_in_total),
        })
    breakdown.append({
        "item": f"Storage ({_months_label(months)})",
        "quantity": pallet_count,
        "unit_price_cents": to_cents(storage_rate * months),
        "total_cents": to_cents(storage_total),
    })

    return _result(base, volume_discount, volume_percent, member_discount, member_percent, breakdown)


def area_minimum(warehouse_id: int | None, pricing: WarehousePricing | None = None) -> int:
    """Smallest rentable area: price list minimum, else warehouse minimum, else platform minimum."""
    if pricing is not None and pricing.min_quantity:
        return pricing.min_quantity
    warehouse = db.session.get(Warehouse, warehouse_id) if warehouse_id is not None else None
    if warehouse is not None and warehouse.min_area_sq_ft:
        return warehouse.min_area_sq_ft
    return AREA_RENTAL_MIN_SQFT


def calculate_area_rental_pricing(
    *,
    warehouse_id: int | None,
    area_sq_ft: int,
    months: int = 1,
    membership_tier: str | None = None,
) -> PricingResult:
    if not area_sq_ft:
        raise ValidationError("Area square footage is required for area rental bookings")
    months = months or 1

    pricing = get_warehouse_pricing(warehouse_id, "area")
    minimum = area_minimum(warehouse_id, pricing)
    if area_sq_ft < minimum:
        raise ValidationError(f"Minimum area rental is {minimum} sq ft")

    if pricing is not None:
        rate = Decimal(pricing.base_price_cents) / HUNDRED
        monthly_rate = rate / 12 if "per_year" in pricing.unit else rate
    else:
        monthly_rate = AREA_RENTAL_PER_SQFT_PER_YEAR / 12

    base = area_sq_ft * monthly_rate * months

    member_percent = membership_discount_percent(membership_tier)
    member_discount = base * member_percent / HUNDRED

    breakdown = [{
        "item": f"Area Rental ({_months_label(months)})",
        "quantity": 1,
        "unit_price_cents": to_cents(base),
        "total_cents": to_cents(base),
    }]

    return _result(base, Decimal("0"), Decimal("0"), member_discount, member_percent, breakdown)


def calculate_booking_pricing(
    *,
    booking_type: str,
    warehouse_id: int | None,
    pallet_count: int | None = None,
    area_sq_ft: int | None = None,
    months: int = 1,
    membership_tier: str | None = None,
    existing_pallet_count: int = 0,
) -> PricingResult:
    if booking_type == "pallet":
        return calculate_pallet_pricing(
            warehouse_id=warehouse_id,
            pallet_count=pallet_count,
            months=months,
            membership_tier=membership_tier,
            existing_pallet_count=existing_pallet_count,
        )
    if booking_type == "area-rental":
        return calculate_area_rental_pricing(
            warehouse_id=warehouse_id,
            area_sq_ft=area_sq_ft,
            months=months,
            membership_tier=membership_tier,
        )
    raise ValidationError("Invalid booking type")


def _result(base, volume_discount, volume_percent, member_discount, member_percent, breakdown) -> PricingResult:
    base_cents = to_cents(base)
    volume_cents = to_cents(volume_discount)
    member_cents = to_cents(member_discount)
    return PricingResult(
        base_amount_cents=base_cents,
        volume_discount_cents=volume_cents,
        volume_discount_percent=volume_percent,
        membership_discount_cents=member_cents,
        membership_discount_percent=member_percent,
        final_amount_cents=max(0, base_cents - volume_cents - member_cents),
        breakdown=breakdown,
    )
