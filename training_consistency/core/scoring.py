"""
Shared Scoring Primitives

Piecewise-linear curves and rounding helpers used by the score composer.
Every curve is monotonic and bounded to [0, 1] so each component can be
scaled by its point budget.
"""

import math
from decimal import ROUND_HALF_UP, Decimal


def linear_clamp(x: float, low: float, high: float) -> float:
    """Linear interpolation 0->1 clamped at [low, high].

    Args:
        x: Input value.
        low: Value at which output is 0.
        high: Value at which output is 1.
    """
    if high <= low:
        return 1.0 if x >= high else 0.0
    if x <= low:
        return 0.0
    if x >= high:
        return 1.0
    return (x - low) / (high - low)


def inverse_linear_clamp(x: float, low: float, high: float) -> float:
    """Linear decay 1->0 clamped at [low, high].

    Args:
        x: Input value.
        low: Value at or below which output is 1.
        high: Value at or above which output is 0.
    """
    if high <= low:
        return 1.0 if x <= low else 0.0
    if x <= low:
        return 1.0
    if x >= high:
        return 0.0
    return (high - x) / (high - low)


def round_half_up(x: float) -> int:
    """Round to the nearest integer with halves rounding up (2.5 -> 3)."""
    return int(math.floor(x + 0.5))


def clamp(x: float, low: float, high: float) -> float:
    return max(low, min(high, x))


def format_half_up(x: float, places: int = 1) -> str:
    """Fixed-point string of the exact binary value, ties rounded up.

    format_half_up(2.25) -> "2.3", where f"{2.25:.1f}" gives "2.2".
    """
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(x).quantize(quantum, rounding=ROUND_HALF_UP))
