from __future__ import annotations

import logging
import math
from typing import Any

from ..excel.columns import (
    GV_HEADER_TOKENS,
    TAB_HEADER_TOKENS,
    resolve_column_map,
    resolve_gv_column_map,
)
from ..excel.export import build_gv_xlsx
from ..excel.reader import (
    SheetGrid,
    find_header_row,
    find_pv_label,
    load_sheet_grid,
    normalize_text,
    to_number,
    to_text,
)
from ..excel.writer import write_reorder_columns
from ..models.column_map import ColumnMap, GvColumnMap
from ..models.config_models import ReorderSettings
from ..models.reorder_line import GvReorderLine, ReorderLine, SourceRow
from ..models.reorder_result import GvReorderResult, ReorderResult
from .calculator import (
    compute_gv_order,
    compute_order,
    order_value,
    resolve_coverage_days,
    resolve_coverage_weeks,
    resolve_tab_coverage_days,
)
from .materializer import materialize

"""Reorder pipeline: workbook bytes in, filled workbook + rows out.

Single linear pass per invocation:

1. load the first worksheet (cached values)
2. locate the header row by content
3. resolve the ColumnMap (fails before any row is processed)
4. extract typed SourceRows
5. compute one ReorderLine per data row
6. write pass on the original bytes
7. materialize non-blank rows in source order

Any stage error aborts the run; nothing partial is returned. Each call owns
its workbook objects, so concurrent calls share no state.
"""

__all__ = [
    "process_reorder_workbook",
    "process_gv_workbook",
    "extract_rows",
    "compute_lines",
]

logger = logging.getLogger(__name__)

GV_HEADER_SCAN_ROWS = 40


def extract_rows(grid: SheetGrid, header_row: int, column_map: ColumnMap) -> list[SourceRow]:
    """Typed values for every row below the header, blank rows included."""
    rows: list[SourceRow] = []
    for r in range(header_row + 1, grid.max_row + 1):
        sales = 0
        if column_map.sales_value is not None:
            sales = to_number(grid.cell(r, column_map.sales_value))
        rows.append(
            SourceRow(
                row_number=r,
                item_code=to_text(grid.cell(r, column_map.item_code)),
                description=to_text(grid.cell(r, column_map.description)),
                quantity_sold=to_number(grid.cell(r, column_map.quantity_sold)),
                current_stock=to_number(grid.cell(r, column_map.current_stock)),
                sales_value=sales,
            )
        )
    return rows


def compute_lines(
    rows: list[SourceRow],
    coverage_weeks: int,
    settings: ReorderSettings,
    coverage_days: int | None = None,
) -> list[ReorderLine]:
    lines: list[ReorderLine] = []
    for row in rows:
        q = compute_order(
            row.quantity_sold,
            row.current_stock,
            coverage_weeks,
            coverage_days=coverage_days,
            pack_size=settings.pack_size,
            unit_weight_kg=settings.unit_weight_kg,
        )
        lines.append(
            ReorderLine(
                item_code=row.item_code,
                description=row.description,
                quantity_sold=row.quantity_sold,
                current_stock=row.current_stock,
                order_quantity=q.order_quantity,
                weight_kg=q.weight_kg,
                row_number=row.row_number,
                theoretical_quantity=q.theoretical,
                pack_size=settings.pack_size,
                sales_value=row.sales_value,
                order_value=order_value(row.sales_value, row.quantity_sold, q.order_quantity),
            )
        )
    return lines


def process_reorder_workbook(
    data: bytes,
    coverage_weeks: Any = 4,
    *,
    coverage_days: Any = None,
    settings: ReorderSettings | None = None,
) -> ReorderResult:
    """Run the TAB reorder pipeline on an .xlsx payload.

    Parameters
    ----------
    data: raw workbook bytes (first worksheet is used)
    coverage_weeks: 1..4; unusable values fall back to 4, others are clamped
    coverage_days: optional 1..21; when given, demand is sold x days / 7 and
        the weekly window is ignored
    settings: pack size, unit weight, scan bound and extra column candidates

    Raises
    ------
    WorkbookReadError, HeaderNotFoundError, ColumnNotFoundError, WorkbookWriteError
    """
    settings = settings or ReorderSettings()
    weeks = resolve_coverage_weeks(coverage_weeks)
    days = resolve_tab_coverage_days(coverage_days)

    grid = load_sheet_grid(data)
    header = find_header_row(grid, TAB_HEADER_TOKENS, settings.header_scan_rows)
    logger.debug(f"header row {header.row_number} in sheet '{grid.sheet_name}'")
    column_map = resolve_column_map(header.headers, settings.column_candidates)
    logger.debug(f"column map {column_map.as_dict()}")

    source_rows = extract_rows(grid, header.row_number, column_map)
    lines = compute_lines(source_rows, weeks, settings, days)

    xlsx = write_reorder_columns(
        data, header.row_number, column_map, {line.row_number: line for line in lines}
    )
    rows = materialize(lines)
    coverage = f"days={days}" if days is not None else f"weeks={weeks}"
    logger.info(
        f"reorder computed: sheet={grid.sheet_name} {coverage} "
        f"data_rows={len(lines)} lines={len(rows)}"
    )
    return ReorderResult(
        xlsx=xlsx,
        rows=rows,
        header_row=header.row_number,
        column_map=column_map,
        coverage_weeks=weeks,
        coverage_days=days,
        pv_label=find_pv_label(grid),
        sheet_name=grid.sheet_name,
    )


def _skip_gv_row(code: str, desc: str, sold: float, value: float, stock: float) -> bool:
    code_norm = normalize_text(code)
    desc_norm = normalize_text(desc)
    if not code and not desc:
        return True
    # header repeated on every printed page
    if "cod" in code_norm and "articolo" in code_norm:
        return True
    # "Pagina 2 di 5" footers
    if sold == 0 and value == 0 and stock == 0 and ("pagina" in code_norm or "pagina" in desc_norm):
        return True
    return not code and sold == 0 and stock == 0


def _gv_lines(grid: SheetGrid, header_row: int, cols: GvColumnMap, days: int) -> list[GvReorderLine]:
    lines: list[GvReorderLine] = []
    for r in range(header_row + 1, grid.max_row + 1):
        code = to_text(grid.cell(r, cols.item_code))
        desc = to_text(grid.cell(r, cols.description))
        sold = to_number(grid.cell(r, cols.quantity_sold))
        value = to_number(grid.cell(r, cols.sales_value))
        stock = to_number(grid.cell(r, cols.current_stock))
        if _skip_gv_row(code, desc, sold, value, stock):
            continue
        factor = math.floor(to_number(grid.cell(r, cols.pack_factor)))
        q = compute_gv_order(sold, stock, factor, days)
        lines.append(
            GvReorderLine(
                item_code=code,
                description=desc,
                quantity_sold=sold,
                sales_value=value,
                current_stock=stock,
                pack_factor=factor,
                order_quantity=q.order_quantity,
                order_packs=q.order_packs,
                order_value=order_value(value, sold, q.order_quantity),
                row_number=r,
            )
        )
    return lines


def process_gv_workbook(data: bytes, coverage_days: Any = 7) -> GvReorderResult:
    """Run the scratch-card (G&V) reorder on an .xlsx payload.

    The output is a clean summary workbook; the source file is not modified.
    """
    days = resolve_coverage_days(coverage_days)
    grid = load_sheet_grid(data)
    header = find_header_row(grid, GV_HEADER_TOKENS, GV_HEADER_SCAN_ROWS)
    cols = resolve_gv_column_map(grid, header.row_number, header.headers)
    lines = _gv_lines(grid, header.row_number, cols, days)
    pv_label = find_pv_label(grid)
    xlsx = build_gv_xlsx(pv_label, lines)
    logger.info(f"g&v reorder computed: sheet={grid.sheet_name} days={days} lines={len(lines)}")
    return GvReorderResult(
        xlsx=xlsx,
        rows=tuple(lines),
        header_row=header.row_number,
        column_map=cols,
        coverage_days=days,
        pv_label=pv_label,
    )
