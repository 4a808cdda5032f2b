"""Rounding helpers shared by the scoring and analytics layers."""

from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals with ties going toward positive infinity.

    Python's ``round`` uses banker's rounding, which disagrees with the
    published tables on values like 2.5 or 0.125.

    Args:
        value: Number to round
        digits: Decimal places to keep

    Returns:
        Rounded value, or the input unchanged if it is NaN or infinite
    """
    if not math.isfinite(value):
        return value

    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor
