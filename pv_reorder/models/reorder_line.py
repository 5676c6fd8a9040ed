from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

"""Row-level domain models for the reorder computation.

SourceRow is what the reader hands to the calculator after coercion;
ReorderLine / GvReorderLine are the computed, immutable output units.
"""

__all__ = [
    "SourceRow",
    "ReorderLine",
    "GvReorderLine",
]


@dataclass(frozen=True)
class SourceRow:
    """Typed values of one data row (missing numbers -> 0, missing text -> "")."""
    row_number: int  # Excel row number
    item_code: str
    description: str
    quantity_sold: float
    current_stock: float
    sales_value: float = 0


@dataclass(frozen=True)
class ReorderLine:
    """Computed reorder for one tobacco (TAB) item.

    ``order_quantity`` is always a multiple of ``pack_size``; ``weight_kg`` is
    derived from it and rounded to one decimal.
    """
    item_code: str
    description: str
    quantity_sold: float
    current_stock: float
    order_quantity: int
    weight_kg: float
    row_number: int = 0
    theoretical_quantity: int = 0  # shortfall before packing
    pack_size: int = 10
    sales_value: float = 0
    order_value: float = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class GvReorderLine:
    """Computed reorder for one scratch-card (G&V) item."""
    item_code: str
    description: str
    quantity_sold: float
    sales_value: float
    current_stock: float  # giacenza BAR
    pack_factor: int  # FATTCONV, 0 when unknown
    order_quantity: int  # pieces
    order_packs: int  # confezioni, 0 when ordered loose
    order_value: float
    row_number: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
