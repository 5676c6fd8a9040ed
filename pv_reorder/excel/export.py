from __future__ import annotations

from collections.abc import Sequence
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, Side
from openpyxl.utils import get_column_letter

from ..models.reorder_line import GvReorderLine, ReorderLine
from ..services.rounding import round_half_up
from .errors import WorkbookWriteError

"""Clean summary workbooks built from computed lines.

Unlike the write pass these start from an empty workbook: store label in a
merged title cell, headers on row 3, one row per line, a TOTALI row and thin
borders around the table.
"""

__all__ = [
    "build_reorder_xlsx",
    "build_gv_xlsx",
]

HEADER_ROW = 3
EURO_FORMAT = "€ #,##0.00"
QTY_FORMAT = "0"
WEIGHT_FORMAT = "0.0"

_THIN = Side(style="thin")
_BORDER = Border(top=_THIN, left=_THIN, bottom=_THIN, right=_THIN)

TAB_COLUMNS: list[tuple[str, int, str | None]] = [
    ("Cod. Articolo", 16, None),
    ("Descrizione", 52, None),
    ("Qtà Venduta", 14, QTY_FORMAT),
    ("Giacenza", 12, QTY_FORMAT),
    ("Qtà teorica", 12, QTY_FORMAT),
    ("Conf. da", 10, QTY_FORMAT),
    ("Qtà da ordinare", 16, QTY_FORMAT),
    ("Valore da ordinare", 18, EURO_FORMAT),
    ("Qtà in peso (kg)", 12, WEIGHT_FORMAT),
]

GV_COLUMNS: list[tuple[str, int, str | None]] = [
    ("Cod. Articolo", 16, None),
    ("Descrizione", 48, None),
    ("Qtà Venduta", 14, QTY_FORMAT),
    ("Valore Venduto", 16, EURO_FORMAT),
    ("Giacenza BAR", 14, QTY_FORMAT),
    ("Qtà da ordinare BAR", 18, QTY_FORMAT),
    ("Qtà Conf.", 10, QTY_FORMAT),
    ("Valore da ordinare", 20, EURO_FORMAT),
]


def _start_sheet(title: str, pv_label: str, columns: list[tuple[str, int, str | None]]):
    wb = Workbook()
    ws = wb.active
    ws.title = title
    last_letter = get_column_letter(len(columns))
    ws.merge_cells(f"A1:{last_letter}1")
    ws["A1"] = pv_label
    ws["A1"].font = Font(bold=True, size=14)
    ws["A1"].alignment = Alignment(vertical="center", horizontal="left")
    for idx, (label, width, _fmt) in enumerate(columns, start=1):
        cell = ws.cell(row=HEADER_ROW, column=idx, value=label)
        cell.font = Font(bold=True)
        ws.column_dimensions[get_column_letter(idx)].width = width
    return wb, ws


def _write_row(ws, row: int, values: Sequence[object], columns: list[tuple[str, int, str | None]]) -> None:
    for idx, value in enumerate(values, start=1):
        cell = ws.cell(row=row, column=idx, value=value)
        fmt = columns[idx - 1][2]
        if fmt:
            cell.number_format = fmt


def _finish(wb: Workbook, ws, last_row: int, ncols: int) -> bytes:
    for r in range(HEADER_ROW, last_row + 1):
        for c in range(1, ncols + 1):
            ws.cell(row=r, column=c).border = _BORDER
    out = BytesIO()
    try:
        wb.save(out)
    except Exception as e:
        raise WorkbookWriteError(f"cannot serialize summary workbook: {e}") from e
    return out.getvalue()


def build_reorder_xlsx(pv_label: str, lines: Sequence[ReorderLine]) -> bytes:
    wb, ws = _start_sheet("RIORDINO TAB", pv_label, TAB_COLUMNS)
    r = HEADER_ROW + 1
    for line in lines:
        _write_row(
            ws,
            r,
            [
                line.item_code,
                line.description,
                line.quantity_sold,
                line.current_stock,
                line.theoretical_quantity,
                line.pack_size,
                line.order_quantity,
                line.order_value,
                line.weight_kg,
            ],
            TAB_COLUMNS,
        )
        r += 1

    total_row = r + 1
    ws.cell(row=total_row, column=2, value="TOTALI")
    totals: list[object] = [
        None,
        None,
        sum(line.quantity_sold for line in lines),
        sum(line.current_stock for line in lines),
        sum(line.theoretical_quantity for line in lines),
        None,
        sum(line.order_quantity for line in lines),
        round_half_up(sum(line.order_value for line in lines), 2),
        round_half_up(sum(line.weight_kg for line in lines), 1),
    ]
    for idx, value in enumerate(totals, start=1):
        if value is None:
            continue
        cell = ws.cell(row=total_row, column=idx, value=value)
        cell.number_format = TAB_COLUMNS[idx - 1][2] or QTY_FORMAT
    for c in range(1, len(TAB_COLUMNS) + 1):
        ws.cell(row=total_row, column=c).font = Font(bold=True)
    return _finish(wb, ws, total_row, len(TAB_COLUMNS))


def build_gv_xlsx(pv_label: str, lines: Sequence[GvReorderLine]) -> bytes:
    wb, ws = _start_sheet("RIORDINO G&V", pv_label, GV_COLUMNS)
    r = HEADER_ROW + 1
    for line in lines:
        _write_row(
            ws,
            r,
            [
                line.item_code,
                line.description,
                line.quantity_sold,
                line.sales_value,
                line.current_stock,
                line.order_quantity,
                line.order_packs,
                line.order_value,
            ],
            GV_COLUMNS,
        )
        r += 1

    total_row = r + 1
    start, end = HEADER_ROW + 1, r - 1
    ws.cell(row=total_row, column=2, value="TOTALI")
    for c in range(3, len(GV_COLUMNS) + 1):
        letter = get_column_letter(c)
        cell = ws.cell(row=total_row, column=c, value=f"=SUM({letter}{start}:{letter}{end})")
        fmt = GV_COLUMNS[c - 1][2]
        if fmt == EURO_FORMAT:
            cell.number_format = fmt
    for c in range(1, len(GV_COLUMNS) + 1):
        ws.cell(row=total_row, column=c).font = Font(bold=True)
    return _finish(wb, ws, total_row, len(GV_COLUMNS))
