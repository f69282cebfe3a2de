import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence, Tuple


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))


def safe_ratio(numerator: float, denominator: float, default: float) -> float:
    if denominator <= 0:
        return default
    return numerator / denominator


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; currency amounts round .5 upwards
    return int(math.floor(value + 0.5))


def round_places(value: float, places: int) -> float:
    """Round to a fixed number of decimals, exact ties away from zero (0.125 -> 0.13)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def interpolate(value: float, points: Sequence[Tuple[float, float]]) -> float:
    """Piecewise-linear lookup over ascending x breakpoints, flat beyond both ends."""
    first_x, first_y = points[0]
    last_x, last_y = points[-1]
    if value <= first_x:
        return first_y
    if value >= last_x:
        return last_y
    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        if value <= x2:
            return y1 + (value - x1) / (x2 - x1) * (y2 - y1)
    return last_y
