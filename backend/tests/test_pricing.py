"""
Pricing calculation tests.

Platform defaults: $5.00 pallet-in, $17.50 per pallet per month,
$20.00 per sq ft per year for area rental with a 40,000 sq ft minimum.
"""

from decimal import Decimal

import pytest

from warebnb.models import WarehousePricing
from warebnb.services.pricing_service import (
    calculate_area_rental_pricing,
    calculate_booking_pricing,
    calculate_pallet_pricing,
    volume_discount_percent,
)
from warebnb.validation import ValidationError


class TestPalletPricing:

    def test_default_rates(self, db_session):
        result = calculate_pallet_pricing(warehouse_id=None, pallet_count=10, months=1)
        assert result.base_amount_cents == 22500
        assert result.final_amount_cents == 22500
        assert [line["item"] for line in result.breakdown] == ["Pallet In", "Storage (1 month)"]

    def test_volume_discount(self, db_session):
        result = calculate_pallet_pricing(warehouse_id=None, pallet_count=60, months=1)
        assert result.base_amount_cents == 135000
        assert result.volume_discount_cents == 13500
        assert result.final_amount_cents == 121500

    def test_membership_applies_after_volume(self, db_session):
        result = calculate_pallet_pricing(
            warehouse_id=None, pallet_count=60, months=1, membership_tier="gold",
        )
        assert result.membership_discount_cents == 12150
        assert result.final_amount_cents == 109350
        assert result.total_discount_cents == 25650

    def test_existing_pallets_count_toward_volume(self, db_session):
        result = calculate_pallet_pricing(
            warehouse_id=None, pallet_count=10, months=1, existing_pallet_count=45,
        )
        assert result.volume_discount_percent == Decimal("10")
        assert result.final_amount_cents == 20250

    def test_warehouse_price_list_drops_pallet_in(self, db_session, warehouse_a):
        db_session.add(WarehousePricing(
            warehouse_id=warehouse_a.id, pricing_type="pallet",
            base_price_cents=2000, unit="per_pallet_per_month",
        ))
        db_session.commit()

        result = calculate_pallet_pricing(warehouse_id=warehouse_a.id, pallet_count=10, months=2)
        assert result.base_amount_cents == 40000
        assert [line["item"] for line in result.breakdown] == ["Storage (2 months)"]

    def test_warehouse_volume_tiers(self, db_session, warehouse_a):
        db_session.add(WarehousePricing(
            warehouse_id=warehouse_a.id, pricing_type="pallet",
            base_price_cents=2000, unit="per_pallet_per_month",
            volume_discounts={"5": 50},
        ))
        db_session.commit()

        result = calculate_pallet_pricing(warehouse_id=warehouse_a.id, pallet_count=10, months=1)
        assert result.volume_discount_cents == 10000
        assert result.final_amount_cents == 10000

    def test_inactive_price_list_ignored(self, db_session, warehouse_a):
        db_session.add(WarehousePricing(
            warehouse_id=warehouse_a.id, pricing_type="pallet",
            base_price_cents=1, unit="per_pallet_per_month", is_active=False,
        ))
        db_session.commit()

        result = calculate_pallet_pricing(warehouse_id=warehouse_a.id, pallet_count=10, months=1)
        assert result.base_amount_cents == 22500

    def test_pallet_count_required(self, db_session):
        with pytest.raises(ValidationError):
            calculate_pallet_pricing(warehouse_id=None, pallet_count=0)

    @pytest.mark.parametrize(
        "count,percent",
        [(49, "0"), (50, "10"), (99, "10"), (100, "15"), (250, "20"), (1000, "20")],
    )
    def test_volume_thresholds(self, count, percent):
        assert volume_discount_percent(count) == Decimal(percent)


class TestAreaPricing:

    def test_default_rate(self, db_session):
        result = calculate_area_rental_pricing(warehouse_id=None, area_sq_ft=40000, months=3)
        assert result.base_amount_cents == 20000000
        assert result.volume_discount_cents == 0

    def test_membership_discount(self, db_session):
        result = calculate_area_rental_pricing(
            warehouse_id=None, area_sq_ft=40000, months=3, membership_tier="silver",
        )
        assert result.final_amount_cents == 19000000

    def test_minimum_area(self, db_session):
        with pytest.raises(ValidationError, match="Minimum area rental is 40000 sq ft"):
            calculate_area_rental_pricing(warehouse_id=None, area_sq_ft=39999, months=1)

    def test_warehouse_minimum(self, db_session, warehouse_a):
        warehouse_a.min_area_sq_ft = 1000
        db_session.commit()

        result = calculate_area_rental_pricing(warehouse_id=warehouse_a.id, area_sq_ft=1200, months=1)
        assert result.base_amount_cents == 200000

    def test_monthly_price_list(self, db_session, warehouse_a):
        db_session.add(WarehousePricing(
            warehouse_id=warehouse_a.id, pricing_type="area",
            base_price_cents=100, unit="per_sqft_per_month", min_quantity=5000,
        ))
        db_session.commit()

        result = calculate_area_rental_pricing(warehouse_id=warehouse_a.id, area_sq_ft=5000, months=2)
        assert result.base_amount_cents == 1000000

    def test_invalid_booking_type(self, db_session):
        with pytest.raises(ValidationError):
            calculate_booking_pricing(booking_type="shelf", warehouse_id=None)


class TestQuoteRoute:

    def test_quote_uses_membership_tier(self, client, db_session, client_user, client_headers):
        client_user.membership_tier = "gold"
        db_session.commit()

        resp = client.post(
            "/api/v1/warehouses/quote",
            json={"type": "pallet", "pallet_count": 60, "months": 1},
            headers=client_headers,
        )
        assert resp.status_code == 200
        assert resp.get_json()["data"]["final_amount_cents"] == 109350

    def test_quote_below_area_minimum(self, client, db_session, client_headers):
        resp = client.post(
            "/api/v1/warehouses/quote",
            json={"type": "area-rental", "area_sq_ft": 100, "months": 1},
            headers=client_headers,
        )
        assert resp.status_code == 400
        assert "Minimum area rental" in resp.get_json()["error"]

    def test_quote_unknown_warehouse(self, client, db_session, client_headers):
        resp = client.post(
            "/api/v1/warehouses/quote",
            json={"type": "pallet", "pallet_count": 5, "warehouse_id": 99999},
            headers=client_headers,
        )
        assert resp.status_code == 404
