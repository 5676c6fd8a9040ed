from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from io import BytesIO
from typing import Any

import pandas as pd
from openpyxl import load_workbook

from .errors import HeaderNotFoundError, WorkbookReadError

"""Workbook reader for PV sales/stock exports.

The header row is not at a fixed offset: exports from the store management
system carry a variable number of title rows (store name, period, address)
above the column titles. The first worksheet is read into a DataFrame indexed
by the Excel row number, then scanned by content.

Cell values are coerced at this boundary (`to_number`, `to_text`) so that the
calculator never sees NaN, formula strings or locale-formatted numbers.
"""

__all__ = [
    "HeaderRow",
    "SheetGrid",
    "load_sheet_grid",
    "normalize_text",
    "find_header_row",
    "find_pv_label",
    "to_number",
    "to_text",
    "row_texts",
]

HEADER_SCAN_ROWS = 30
SAMPLE_ROWS = 10
SAMPLE_WIDTH = 120
DEFAULT_PV_LABEL = "Punto vendita"
PV_LABEL_ROWS = 12
PV_LABEL_COLS = 60
PV_LABEL_MARKERS = ("gestioni", " via ", "fondi")

_ACCENTS = str.maketrans("àáèéìíòóùú", "aaeeiioouu")
_WS = re.compile(r"\s+")


@dataclass(frozen=True)
class SheetGrid:
    sheet_name: str
    frame: pd.DataFrame  # index = Excel row number (1-based), columns = 0-based

    @property
    def max_row(self) -> int:
        return int(self.frame.index.max()) if len(self.frame.index) else 0

    def row(self, row_number: int) -> list[Any]:
        if row_number not in self.frame.index:
            return []
        return self.frame.loc[row_number].tolist()

    def cell(self, row_number: int, column: int) -> Any:
        if row_number not in self.frame.index or column not in self.frame.columns:
            return None
        return self.frame.at[row_number, column]


@dataclass(frozen=True)
class HeaderRow:
    row_number: int  # 1-based
    headers: list[str]  # raw header text, one per column


def load_sheet_grid(data: bytes) -> SheetGrid:
    """Load the first worksheet of an .xlsx payload.

    Formula cells are read through their cached results (``data_only=True``).
    """
    try:
        wb = load_workbook(BytesIO(data), data_only=True, read_only=False)
    except Exception as e:
        raise WorkbookReadError(f"cannot open workbook: {e}") from e
    try:
        if not wb.worksheets:
            raise WorkbookReadError("workbook has no worksheet")
        ws = wb.worksheets[0]
        values = list(ws.iter_rows(values_only=True))
        frame = pd.DataFrame(values, index=range(1, len(values) + 1), dtype=object)
        return SheetGrid(sheet_name=ws.title, frame=frame)
    finally:
        wb.close()


def normalize_text(text: Any) -> str:
    s = to_text(text).lower()
    s = _WS.sub(" ", s)
    return s.translate(_ACCENTS).strip()


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def to_number(value: Any) -> float:
    """Coerce a cell value to a number; missing or unparseable -> 0."""
    if _is_missing(value) or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        # "1.234,5" -> 1234.5
        t = value.replace(".", "").replace(",", ".", 1)
        t = _WS.sub("", t)
        if not t:
            return 0
        try:
            n = float(t)
        except ValueError:
            return 0
        if not math.isfinite(n):
            return 0
        return int(n) if n.is_integer() else n
    return 0


def to_text(value: Any) -> str:
    """Coerce a cell value to text; missing -> ""."""
    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        # article codes stored as numbers
        return str(int(value))
    return str(value).strip()


def row_texts(values: Sequence[Any]) -> list[str]:
    return [to_text(v) for v in values]


def _row_matches(joined: str, token_groups: Sequence[Sequence[str]]) -> bool:
    return all(any(tok in joined for tok in group) for group in token_groups)


def find_header_row(
    grid: SheetGrid,
    token_groups: Sequence[Sequence[str]],
    scan_rows: int = HEADER_SCAN_ROWS,
) -> HeaderRow:
    """Return the first row (within ``scan_rows``) containing every token group.

    A token group matches when any of its tokens is a substring of the row's
    normalized, " | "-joined text.
    """
    sample: list[str] = []
    last = min(scan_rows, grid.max_row)
    for r in range(1, last + 1):
        texts = row_texts(grid.row(r))
        joined = normalize_text(" | ".join(texts))
        if _row_matches(joined, token_groups):
            return HeaderRow(row_number=r, headers=texts)
        if len(sample) < SAMPLE_ROWS:
            shown = " | ".join(t for t in texts if t)
            if shown:
                sample.append(f"row {r}: {shown[:SAMPLE_WIDTH]}")
    expected = " + ".join("/".join(g) for g in token_groups)
    raise HeaderNotFoundError(scan_rows, sample, expected)


def find_pv_label(grid: SheetGrid) -> str:
    """Best-effort store label from the title rows above the table."""
    max_row = min(PV_LABEL_ROWS, grid.max_row)
    for r in range(1, max_row + 1):
        for value in grid.row(r)[:PV_LABEL_COLS]:
            txt = to_text(value)
            if not txt:
                continue
            low = txt.lower()
            if any(m in low for m in PV_LABEL_MARKERS):
                return txt
    return DEFAULT_PV_LABEL
