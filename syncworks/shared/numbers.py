import math


def round_half_up(value: float) -> int:
    """Round to the nearest yen with halves going up (-2.5 -> -2, 2.5 -> 3)"""
    return int(math.floor(value + 0.5))


def format_price_jpy(amount: float) -> str:
    """Format an amount as yen, e.g. 12345 -> ¥12,345 and -500 -> -¥500"""
    rounded = round_half_up(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}¥{abs(rounded):,}"
