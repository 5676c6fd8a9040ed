from __future__ import annotations

from dataclasses import dataclass

"""Column maps: semantic field -> zero-based column index.

Built once per workbook by the column resolver and never mutated.
"""

__all__ = [
    "ColumnMap",
    "GvColumnMap",
]


@dataclass(frozen=True)
class ColumnMap:
    """Resolved columns of a tobacco (TAB) reorder sheet.

    ``order_quantity`` and ``order_weight_kg`` are write targets: they must
    already exist as headers in the source workbook.
    """
    item_code: int
    description: int
    quantity_sold: int
    current_stock: int
    order_quantity: int  # output
    order_weight_kg: int  # output
    sales_value: int | None = None  # optional, enables order value

    def as_dict(self) -> dict[str, int | None]:
        return {
            "item_code": self.item_code,
            "description": self.description,
            "quantity_sold": self.quantity_sold,
            "current_stock": self.current_stock,
            "order_quantity": self.order_quantity,
            "order_weight_kg": self.order_weight_kg,
            "sales_value": self.sales_value,
        }


@dataclass(frozen=True)
class GvColumnMap:
    """Resolved columns of a scratch-card (G&V) template."""
    item_code: int
    description: int
    quantity_sold: int
    sales_value: int
    current_stock: int  # giacenza BAR
    pack_factor: int  # FATTCONV, may come from a row above the header
