import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half toward positive infinity (2.5 -> 3, -2.5 -> -2)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_one_decimal(value: float) -> float:
    return round_half_up(value, 1)


def percentage(part: float, whole: float) -> float:
    """part / whole * 100, or 0 when whole is zero."""
    if whole <= 0:
        return 0.0
    return part / whole * 100
