from __future__ import annotations

from collections.abc import Iterable

from ..models.reorder_line import ReorderLine
from .calculator import is_blank_row

"""Result materializer.

Keeps source order; drops blank rows only. No dedupe, no sorting.
"""

__all__ = [
    "materialize",
]


def materialize(lines: Iterable[ReorderLine]) -> tuple[ReorderLine, ...]:
    return tuple(
        line
        for line in lines
        if not is_blank_row(line.item_code, line.description, line.quantity_sold, line.current_stock)
    )
