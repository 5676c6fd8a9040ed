from __future__ import annotations

import logging
from collections.abc import Mapping
from io import BytesIO

from openpyxl import load_workbook

from ..models.column_map import ColumnMap
from ..models.reorder_line import ReorderLine
from .errors import WorkbookWriteError

"""Write pass: fill the order columns of the original workbook.

The source bytes are loaded again with formulas intact (the reader works on
cached values), only the two target columns and four header labels are
touched, and the workbook is serialized back to bytes.
"""

__all__ = [
    "CANONICAL_HEADERS",
    "write_reorder_columns",
]

logger = logging.getLogger(__name__)

# Rewritten after the data pass: some exports carry formula artifacts in the
# header cells that show up once the file is re-saved.
CANONICAL_HEADERS: dict[str, str] = {
    "quantity_sold": "Qtà Venduta",
    "current_stock": "Giacenza",
    "order_quantity": "Qtà da ordinare",
    "order_weight_kg": "Qtà in peso (kg)",
}

QTY_FORMAT = "0"
WEIGHT_FORMAT = "0.0"


def write_reorder_columns(
    data: bytes,
    header_row: int,
    column_map: ColumnMap,
    computed: Mapping[int, ReorderLine],
) -> bytes:
    """Return ``data`` with order quantity and weight written per data row.

    ``computed`` is keyed by Excel row number. Every row from
    ``header_row + 1`` to the last row gets both cells written; rows without
    an entry get zeros.
    """
    try:
        wb = load_workbook(BytesIO(data))
    except Exception as e:
        raise WorkbookWriteError(f"cannot reopen workbook for writing: {e}") from e

    ws = wb.worksheets[0]
    qty_col = column_map.order_quantity + 1
    weight_col = column_map.order_weight_kg + 1
    written = 0
    try:
        for r in range(header_row + 1, ws.max_row + 1):
            line = computed.get(r)
            qty_cell = ws.cell(row=r, column=qty_col)
            weight_cell = ws.cell(row=r, column=weight_col)
            qty_cell.value = line.order_quantity if line is not None else 0
            weight_cell.value = line.weight_kg if line is not None else 0
            qty_cell.number_format = QTY_FORMAT
            weight_cell.number_format = WEIGHT_FORMAT
            written += 1

        columns = column_map.as_dict()
        for field_name, label in CANONICAL_HEADERS.items():
            ws.cell(row=header_row, column=columns[field_name] + 1).value = label
    except AttributeError as e:
        # merged ranges expose read-only MergedCell objects
        wb.close()
        raise WorkbookWriteError(f"cell not writable in sheet '{ws.title}': {e}") from e

    out = BytesIO()
    try:
        wb.save(out)
    except Exception as e:
        raise WorkbookWriteError(f"cannot serialize workbook: {e}") from e
    finally:
        wb.close()
    logger.debug(f"write pass: sheet={ws.title} rows={written}")
    return out.getvalue()
