from datetime import date

import pytest

from syncworks import config
from syncworks.domain.pricing.calculator import (
    calculate_cargo_price,
    calculate_discount_amount,
    calculate_discount_rate,
    calculate_distance_price,
    calculate_estimate,
    calculate_option_price,
    calculate_tax,
    calculate_time_surcharge,
    compare_estimates,
    format_price_jpy,
    get_base_price,
)
from syncworks.domain.pricing.schemas import CargoItem, TimeBandSurcharge, WorkOption
from syncworks.domain.season_rules.schemas import SeasonRuleOut
from syncworks.domain.truck_types.schemas import TruckTypeOut
from syncworks.domain.truck_types.service import recommend_truck_types

TRUCK_TYPES = [
    TruckTypeOut(id="1", name="2t", basePrice=30000, maxPoints=100, sortOrder=10),
    TruckTypeOut(id="2", name="4t", basePrice=50000, maxPoints=200, sortOrder=20),
    TruckTypeOut(id="3", name="4t+", basePrice=80000, maxPoints=400, sortOrder=30),
]


@pytest.fixture(autouse=True)
def pricing_config(monkeypatch):
    monkeypatch.setattr(config, "POINT_UNIT_PRICE", 500)
    monkeypatch.setattr(config, "DISTANCE_PRICE_PER_KM", 50)
    monkeypatch.setattr(config, "BASE_DISTANCE_KM", 10)
    monkeypatch.setattr(config, "TAX_RATE", 0.1)


class TestComponents:
    def test_base_price_lookup(self):
        assert get_base_price("4t", TRUCK_TYPES) == 50000
        assert get_base_price(" 4t ", TRUCK_TYPES) == 50000
        assert get_base_price("10t", TRUCK_TYPES) == 0
        assert get_base_price("", TRUCK_TYPES) == 0
        assert get_base_price(None, TRUCK_TYPES) == 0

    def test_cargo_price_uses_points_times_quantity(self):
        items = [CargoItem(name="sofa", points=10, quantity=2), CargoItem(name="box", points=1.5, quantity=3)]
        assert calculate_cargo_price(items) == 12250

    def test_option_price_counts_selected_only(self):
        options = [
            WorkOption(name="packing", price=10000),
            WorkOption(name="piano", price=20000, selected=False),
        ]
        assert calculate_option_price(options) == 10000

    def test_distance_within_base_is_free(self):
        assert calculate_distance_price(0) == 0
        assert calculate_distance_price(10) == 0

    def test_distance_beyond_base_charges_each_started_km(self):
        assert calculate_distance_price(12) == 100
        assert calculate_distance_price(12.2) == 150

    def test_time_surcharge_rate_and_fixed(self):
        surcharges = [
            TimeBandSurcharge(kind="rate", value=1.2),
            TimeBandSurcharge(kind="fixed", value=3000),
        ]
        assert calculate_time_surcharge(10000, surcharges) == 5000

    def test_tax_rounds_half_up(self):
        assert calculate_tax(1005) == 101
        assert calculate_tax(1000, 0.08) == 80

    def test_discount_helpers(self):
        assert calculate_discount_rate(10000, 8500) == 15
        assert calculate_discount_rate(0, 0) == 0
        assert calculate_discount_amount(12345, 10) == 1235

    def test_format_price(self):
        assert format_price_jpy(1234567) == "¥1,234,567"
        assert format_price_jpy(0) == "¥0"
        assert format_price_jpy(-500) == "-¥500"


class TestRecommendation:
    def test_recommends_fitting_type_and_next_size(self):
        assert recommend_truck_types(80, TRUCK_TYPES) == ["2t", "4t"]
        assert recommend_truck_types(100, TRUCK_TYPES) == ["2t", "4t"]
        assert recommend_truck_types(150, TRUCK_TYPES) == ["4t", "4t+"]

    def test_largest_type_only_at_the_top(self):
        assert recommend_truck_types(300, TRUCK_TYPES) == ["4t+"]
        assert recommend_truck_types(1000, TRUCK_TYPES) == ["4t+"]

    def test_empty_catalogue(self):
        assert recommend_truck_types(10, []) == []


class TestEstimate:
    def test_full_estimate(self):
        result = calculate_estimate(
            truck_type="4t",
            items=[CargoItem(name="sofa", points=10, quantity=2)],
            options=[WorkOption(name="packing", price=10000)],
            truck_types=TRUCK_TYPES,
            distance=20,
        )
        assert result.basePrice == 50000
        assert result.cargoPrice == 10000
        assert result.optionPrice == 10000
        assert result.distancePrice == 500
        assert result.timeSurcharge == 0
        assert result.seasonAdjustment == 0
        assert result.subtotal == 70500
        assert result.tax == 7050
        assert result.total == 77550
        assert result.totalPoints == 20
        assert result.recommendedTruckTypes == ["2t", "4t"]

    def test_unknown_truck_type_has_zero_base(self):
        result = calculate_estimate("unknown", [], [], TRUCK_TYPES)
        assert result.basePrice == 0
        assert result.total == 0

    def test_time_and_season_use_pre_surcharge_subtotal(self):
        rule = SeasonRuleOut(
            id="r1",
            name="weekend",
            startDate=date(2025, 1, 1),
            endDate=date(2025, 12, 31),
            priceType="percentage",
            price=10,
            isRecurring=True,
            recurringType="weekly",
            recurringPattern={"weekdays": [0, 6]},
        )
        result = calculate_estimate(
            truck_type="2t",
            items=[],
            options=[],
            truck_types=TRUCK_TYPES,
            time_surcharges=[TimeBandSurcharge(kind="rate", value=1.5)],
            move_date=date(2025, 6, 7),
            season_rules=[rule],
        )
        assert result.timeSurcharge == 15000
        assert result.seasonAdjustment == 3000
        assert result.seasonDetails[0].name == "weekend"
        assert result.subtotal == 48000
        assert result.tax == 4800
        assert result.total == 52800

    def test_custom_tax_rate(self):
        result = calculate_estimate("2t", [], [], TRUCK_TYPES, tax_rate=0.08)
        assert result.tax == 2400
        assert result.total == 32400


class TestCompare:
    def test_compare_picks_extremes_and_average(self):
        estimates = [
            calculate_estimate("4t", [], [], TRUCK_TYPES),
            calculate_estimate("2t", [], [], TRUCK_TYPES),
            calculate_estimate("4t+", [], [], TRUCK_TYPES),
        ]
        comparison = compare_estimates(estimates)
        assert comparison.cheapest.total == 33000
        assert comparison.mostExpensive.total == 88000
        assert comparison.averagePrice == 58667

    def test_compare_requires_estimates(self):
        with pytest.raises(ValueError):
            compare_estimates([])
