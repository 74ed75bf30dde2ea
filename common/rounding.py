"""Rounding helpers shared by scoring and the published artifacts."""

import math


def round_half_up(value: float, places: int) -> float:
    """
    Round *value* to *places* decimals, halves away from zero for positives.

    ``round()`` uses banker's rounding, which would make 4.25 stars come out
    as 4.2; published artifacts expect 4.3.
    """
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor
