from __future__ import annotations

from dataclasses import dataclass

from ..services.rounding import round_half_up
from .column_map import ColumnMap, GvColumnMap
from .reorder_line import GvReorderLine, ReorderLine

"""Pipeline results: output bytes plus the materialized rows."""

__all__ = [
    "PREVIEW_ROWS",
    "ReorderTotals",
    "ReorderResult",
    "GvReorderResult",
]

PREVIEW_ROWS = 20


@dataclass(frozen=True)
class ReorderTotals:
    quantity_sold: float
    current_stock: float
    theoretical_quantity: int
    order_quantity: int
    order_value: float
    weight_kg: float


@dataclass(frozen=True)
class ReorderResult:
    """Outcome of a TAB reorder run.

    ``xlsx`` is the source workbook with the order columns filled in;
    ``rows`` holds every non-blank line in source order.
    """
    xlsx: bytes
    rows: tuple[ReorderLine, ...]
    header_row: int
    column_map: ColumnMap
    coverage_weeks: int
    pv_label: str
    sheet_name: str = ""
    coverage_days: int | None = None  # set when demand was scaled by days

    def preview(self, limit: int = PREVIEW_ROWS) -> list[ReorderLine]:
        return list(self.rows[: max(0, limit)])

    def totals(self) -> ReorderTotals:
        return ReorderTotals(
            quantity_sold=sum(r.quantity_sold for r in self.rows),
            current_stock=sum(r.current_stock for r in self.rows),
            theoretical_quantity=sum(r.theoretical_quantity for r in self.rows),
            order_quantity=sum(r.order_quantity for r in self.rows),
            order_value=round_half_up(sum(r.order_value for r in self.rows), 2),
            weight_kg=round_half_up(sum(r.weight_kg for r in self.rows), 1),
        )


@dataclass(frozen=True)
class GvReorderResult:
    """Outcome of a G&V reorder run (clean export workbook + rows)."""
    xlsx: bytes
    rows: tuple[GvReorderLine, ...]
    header_row: int
    column_map: GvColumnMap
    coverage_days: int
    pv_label: str

    def preview(self, limit: int = PREVIEW_ROWS) -> list[GvReorderLine]:
        return list(self.rows[: max(0, limit)])
