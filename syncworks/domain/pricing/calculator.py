"""
Estimate calculation for moving jobs.

All amounts are yen. Rounding follows the quote screen: halves round up.
"""

import math
from datetime import date
from typing import Iterable, Optional

from ... import config
from ...shared.numbers import format_price_jpy, round_half_up
from ..season_rules.matching import calculate_season_adjustment
from ..season_rules.schemas import SeasonRuleOut
from ..truck_types.schemas import TruckTypeOut
from ..truck_types.service import recommend_truck_types
from .schemas import (
    CargoItem,
    EstimateComparison,
    EstimateResult,
    SeasonDetail,
    TimeBandSurcharge,
    WorkOption,
)

__all__ = [
    "calculate_cargo_price",
    "calculate_discount_amount",
    "calculate_discount_rate",
    "calculate_distance_price",
    "calculate_estimate",
    "calculate_option_price",
    "calculate_tax",
    "calculate_time_surcharge",
    "calculate_total_points",
    "calculate_total_weight",
    "compare_estimates",
    "format_price_jpy",
    "get_base_price",
]


def get_base_price(truck_type: Optional[str], truck_types: Iterable[TruckTypeOut]) -> int:
    """Base price of a truck type, 0 when the type is empty or unknown"""
    if not truck_type or not isinstance(truck_type, str):
        return 0
    name = truck_type.strip()
    for candidate in truck_types:
        if candidate.name == name:
            return candidate.basePrice or 0
    return 0


def calculate_total_points(items: Iterable[CargoItem]) -> float:
    return sum(item.points * item.quantity for item in items)


def calculate_total_weight(items: Iterable[CargoItem]) -> float:
    return sum((item.weight or 0) * item.quantity for item in items)


def calculate_cargo_price(items: Iterable[CargoItem]) -> int:
    return round_half_up(calculate_total_points(items) * config.POINT_UNIT_PRICE)


def calculate_option_price(options: Iterable[WorkOption]) -> int:
    return sum(option.price for option in options if option.selected)


def calculate_distance_price(distance: float, base_distance: Optional[float] = None) -> int:
    """Distance within the base distance is free; each started km beyond it is charged"""
    if base_distance is None:
        base_distance = config.BASE_DISTANCE_KM
    if distance <= base_distance:
        return 0
    return math.ceil(distance - base_distance) * config.DISTANCE_PRICE_PER_KM


def calculate_time_surcharge(base_amount: float, surcharges: Iterable[TimeBandSurcharge]) -> int:
    total = 0.0
    for surcharge in surcharges:
        if surcharge.kind == "rate":
            # 1.5 means 50% on top of the base amount
            total += base_amount * (surcharge.value - 1)
        else:
            total += surcharge.value
    return round_half_up(total)


def calculate_tax(amount: float, rate: Optional[float] = None) -> int:
    if rate is None:
        rate = config.TAX_RATE
    return round_half_up(amount * rate)


def calculate_estimate(
    truck_type: Optional[str],
    items: list[CargoItem],
    options: list[WorkOption],
    truck_types: list[TruckTypeOut],
    distance: float = 0,
    time_surcharges: Optional[list[TimeBandSurcharge]] = None,
    tax_rate: Optional[float] = None,
    move_date: Optional[date] = None,
    season_rules: Optional[list[SeasonRuleOut]] = None,
) -> EstimateResult:
    """
    Combine every price component into a tax-inclusive estimate.

    The time surcharge and the season adjustment are both computed on the
    subtotal before surcharges; tax is computed on the adjusted subtotal.
    """
    base_price = get_base_price(truck_type, truck_types)
    cargo_price = calculate_cargo_price(items)
    option_price = calculate_option_price(options)
    distance_price = calculate_distance_price(distance)

    subtotal_before_surcharge = base_price + cargo_price + option_price + distance_price
    time_surcharge = calculate_time_surcharge(subtotal_before_surcharge, time_surcharges or [])

    season_total = 0
    season_details: list[SeasonDetail] = []
    if move_date is not None:
        adjustment = calculate_season_adjustment(
            move_date, subtotal_before_surcharge, season_rules or []
        )
        season_total = adjustment.total
        season_details = [SeasonDetail(**d.model_dump()) for d in adjustment.details]

    subtotal = subtotal_before_surcharge + time_surcharge + season_total
    tax = calculate_tax(subtotal, tax_rate)
    total_points = calculate_total_points(items)

    return EstimateResult(
        basePrice=base_price,
        cargoPrice=cargo_price,
        optionPrice=option_price,
        distancePrice=distance_price,
        timeSurcharge=time_surcharge,
        seasonAdjustment=season_total,
        seasonDetails=season_details,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
        totalPoints=total_points,
        totalWeight=calculate_total_weight(items),
        recommendedTruckTypes=recommend_truck_types(total_points, truck_types),
    )


def calculate_discount_rate(original_price: float, discounted_price: float) -> int:
    """Discount as a whole percentage"""
    if original_price == 0:
        return 0
    return round_half_up((original_price - discounted_price) / original_price * 100)


def calculate_discount_amount(original_price: float, discount_rate: float) -> int:
    return round_half_up(original_price * discount_rate / 100)


def compare_estimates(estimates: list[EstimateResult]) -> EstimateComparison:
    """
    Raises:
        ValueError: If no estimates are given
    """
    if not estimates:
        raise ValueError("No estimates to compare")

    ordered = sorted(estimates, key=lambda e: e.total)
    average = round_half_up(sum(e.total for e in estimates) / len(estimates))
    return EstimateComparison(cheapest=ordered[0], mostExpensive=ordered[-1], averagePrice=average)
