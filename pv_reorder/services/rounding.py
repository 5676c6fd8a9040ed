from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

"""Decimal helpers shared by the calculator, the result totals and the exports.

Cell values arrive as binary floats ("1,1" becomes 1.1); going through their
shortest repr keeps 1.1 * 3 equal to 3.3.
"""

__all__ = [
    "as_decimal",
    "round_half_up",
]


def as_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def round_half_up(value: float, digits: int) -> float:
    q = Decimal(1).scaleb(-digits)
    return float(as_decimal(value).quantize(q, rounding=ROUND_HALF_UP))
