from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..models.config_models import (
    DEFAULT_COVERAGE_DAYS,
    DEFAULT_COVERAGE_WEEKS,
    PACK_SIZE,
    UNIT_WEIGHT_KG,
)
from .rounding import as_decimal, round_half_up

"""Reorder calculator (pure functions, no I/O).

TAB rule: weekly sales x coverage weeks is the demand for the current week
plus the forward weeks; whatever current stock does not cover is ordered in
whole packs and converted to kilograms.

G&V rule: weekly sales are scaled to the requested days plus one delivery
day, and packed by the per-item conversion factor.
"""

__all__ = [
    "OrderQuantity",
    "GvOrderQuantity",
    "compute_order",
    "compute_gv_order",
    "resolve_coverage_weeks",
    "resolve_coverage_days",
    "resolve_tab_coverage_days",
    "is_blank_row",
    "order_value",
    "round_half_up",
]

logger = logging.getLogger(__name__)

MIN_WEEKS, MAX_WEEKS = 1, 4
MIN_DAYS, MAX_DAYS = 1, 7
MAX_TAB_DAYS = 21
GV_LEAD_TIME_DAYS = 1


@dataclass(frozen=True)
class OrderQuantity:
    theoretical: int  # shortfall rounded up to whole pieces
    order_quantity: int  # multiple of pack size
    weight_kg: float


@dataclass(frozen=True)
class GvOrderQuantity:
    theoretical: int
    order_quantity: int
    order_packs: int


def _as_finite(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        n = float(value)
    except (TypeError, ValueError):
        return None
    return n if math.isfinite(n) else None


def resolve_coverage_weeks(value: Any) -> int:
    """Clamp the coverage window into 1..4 weeks.

    Unusable input (missing, non-numeric, NaN/inf) falls back to 4 weeks
    instead of failing the request.
    """
    n = _as_finite(value)
    if n is None:
        if value is not None:
            logger.warning(f"coverage weeks {value!r} not usable -> {DEFAULT_COVERAGE_WEEKS}")
        return DEFAULT_COVERAGE_WEEKS
    weeks = max(MIN_WEEKS, min(MAX_WEEKS, math.trunc(n)))
    if weeks != n:
        logger.warning(f"coverage weeks {value!r} clamped -> {weeks}")
    return weeks


def resolve_coverage_days(value: Any) -> int:
    """Clamp the G&V coverage into 1..7 days; exactly 0 or unusable -> 7."""
    n = _as_finite(value)
    if n is None or n == 0:
        if value is not None:
            logger.warning(f"coverage days {value!r} not usable -> {DEFAULT_COVERAGE_DAYS}")
        return DEFAULT_COVERAGE_DAYS
    return max(MIN_DAYS, min(MAX_DAYS, math.trunc(n)))


def resolve_tab_coverage_days(value: Any) -> int | None:
    """Day-based TAB coverage, 1..21 days; None keeps the weekly window.

    Missing or blank input means "not requested"; other unusable input is
    logged and ignored.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    n = _as_finite(value)
    if n is None:
        logger.warning(f"coverage days {value!r} not usable -> weekly coverage")
        return None
    days = max(MIN_DAYS, min(MAX_TAB_DAYS, math.trunc(n)))
    if days != n:
        logger.warning(f"coverage days {value!r} clamped -> {days}")
    return days


def compute_order(
    quantity_sold: float,
    current_stock: float,
    coverage_weeks: int,
    *,
    coverage_days: int | None = None,
    pack_size: int = PACK_SIZE,
    unit_weight_kg: float = UNIT_WEIGHT_KG,
) -> OrderQuantity:
    """Quantity to reorder for one TAB row.

    A positive ``coverage_days`` replaces the weekly multiplier with
    ``days / 7`` (days clamped into 1..21).

    >>> compute_order(5, 10, 4)
    OrderQuantity(theoretical=10, order_quantity=10, weight_kg=0.2)
    """
    sold = as_decimal(quantity_sold)
    if coverage_days is not None and coverage_days > 0:
        days = min(max(as_decimal(coverage_days), Decimal(MIN_DAYS)), Decimal(MAX_TAB_DAYS))
        demand = sold * days / 7
    else:
        demand = sold * coverage_weeks
    theoretical = max(0, math.ceil(demand - as_decimal(current_stock)))
    if theoretical == 0:
        return OrderQuantity(theoretical=0, order_quantity=0, weight_kg=0.0)
    qty = math.ceil(theoretical / pack_size) * pack_size
    return OrderQuantity(
        theoretical=theoretical,
        order_quantity=qty,
        weight_kg=round_half_up(qty * unit_weight_kg, 1),
    )


def compute_gv_order(
    quantity_sold: float,
    current_stock: float,
    pack_factor: int,
    coverage_days: int,
    *,
    lead_time_days: int = GV_LEAD_TIME_DAYS,
) -> GvOrderQuantity:
    """Quantity to reorder for one G&V row.

    A non-positive pack factor orders the theoretical quantity loose.
    """
    # weekly sales scaled to the covered days
    demand = as_decimal(quantity_sold) * (coverage_days + lead_time_days) / 7
    theoretical = max(0, math.ceil(demand - as_decimal(current_stock)))
    if theoretical == 0:
        return GvOrderQuantity(theoretical=0, order_quantity=0, order_packs=0)
    if pack_factor > 0:
        packs = math.ceil(theoretical / pack_factor)
        return GvOrderQuantity(theoretical, packs * pack_factor, packs)
    return GvOrderQuantity(theoretical, theoretical, 0)


def order_value(sales_value: float, quantity_sold: float, quantity: int) -> float:
    """Value of the order at the average selling price of the period."""
    if quantity <= 0 or quantity_sold <= 0:
        return 0.0
    unit = sales_value / quantity_sold
    if unit <= 0:
        return 0.0
    return round_half_up(unit * quantity, 2)


def is_blank_row(item_code: str, description: str, quantity_sold: float, current_stock: float) -> bool:
    return not item_code and not description and quantity_sold == 0 and current_stock == 0
