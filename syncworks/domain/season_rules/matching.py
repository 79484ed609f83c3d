"""
Season rule date matching and price adjustment.

Rules are evaluated against a calendar date. Weekday numbers follow the
pricing screen's convention: 0 is Sunday, 6 is Saturday.
"""

import math
from datetime import date
from typing import Iterable, Union

from ...shared.numbers import round_half_up
from ...shared.validators import parse_date_string
from .schemas import AdjustmentDetail, SeasonAdjustment, SeasonRuleOut

DateLike = Union[str, date]


def sunday_based_weekday(d: date) -> int:
    return (d.weekday() + 1) % 7


def week_of_month(d: date) -> int:
    return math.ceil(d.day / 7)


def _month_day(d: date) -> int:
    return d.month * 100 + d.day


def _in_period(rule: SeasonRuleOut, target: date) -> bool:
    return rule.startDate <= target <= rule.endDate


def rule_matches(rule: SeasonRuleOut, target: date) -> bool:
    """Check whether a single rule applies to the target date"""
    if rule.recurringEndYear is not None and target.year > rule.recurringEndYear:
        return False

    if not rule.isRecurring:
        return _in_period(rule, target)

    pattern = rule.recurringPattern

    if rule.recurringType == "specific":
        return bool(pattern and pattern.specificDates and target.isoformat() in pattern.specificDates)

    if rule.recurringType == "weekly":
        return bool(pattern and pattern.weekdays and sunday_based_weekday(target) in pattern.weekdays)

    if rule.recurringType == "monthly":
        start = rule.startDate
        if pattern and pattern.monthlyPattern == "date":
            return target.day == start.day
        return (
            sunday_based_weekday(target) == sunday_based_weekday(start)
            and week_of_month(target) == week_of_month(start)
        )

    if rule.recurringType == "yearly":
        target_md = _month_day(target)
        start_md = _month_day(rule.startDate)
        end_md = _month_day(rule.endDate)
        if start_md <= end_md:
            return start_md <= target_md <= end_md
        # Range wraps the year end, e.g. 12/25 - 01/05
        return target_md >= start_md or target_md <= end_md

    return _in_period(rule, target)


def get_season_rules_for_date(target: DateLike, rules: Iterable[SeasonRuleOut]) -> list[SeasonRuleOut]:
    """
    Return the rules that apply to a date, ordered by priority then name.

    Raises:
        ValueError: If the date cannot be parsed
    """
    target_date = parse_date_string(target)
    matched = [rule for rule in rules if rule_matches(rule, target_date)]
    return sorted(matched, key=lambda r: (r.priority, r.name))


def rule_adjustment(rule: SeasonRuleOut, base_price: float) -> int:
    if rule.priceType == "percentage":
        return round_half_up(base_price * rule.price / 100)
    # Fixed prices are whole yen and added as-is
    return int(rule.price)


def calculate_season_adjustment(
    target: DateLike, base_price: float, rules: Iterable[SeasonRuleOut]
) -> SeasonAdjustment:
    """
    Sum the adjustments of every rule matching the date.

    Negative prices are discounts and reduce the total.
    """
    details = [
        AdjustmentDetail(name=rule.name, adjustment=rule_adjustment(rule, base_price))
        for rule in get_season_rules_for_date(target, rules)
    ]
    return SeasonAdjustment(total=sum(d.adjustment for d in details), details=details)
