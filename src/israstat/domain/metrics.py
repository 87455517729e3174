from __future__ import annotations

import math
from typing import Sequence


def round_half_up(x: float) -> int:
    """
    Round to the nearest whole unit, ties toward +inf (2.5 -> 3, -2.5 -> -2).

    Python's round() is banker's rounding; the published figures use half-up,
    and with integer price/sqm * integer sqm ties do happen.
    """
    return int(math.floor(x + 0.5))


def upper_median(values: Sequence[float]) -> float:
    """
    Element at index n // 2 of the ascending-sorted values.

    For even n this is the upper of the two middle elements, NOT their mean.
    """
    if not values:
        raise ValueError("upper_median of empty sequence")
    ordered = sorted(values)
    return ordered[len(ordered) // 2]


def mean(values: Sequence[float]) -> float:
    # left-to-right sum, no pairwise/compensated summation
    total = 0.0
    for v in values:
        total += v
    return total / len(values)
