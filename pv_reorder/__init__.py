"""PV reorder engine.

Reads point-of-sale sales/stock workbooks, computes reorder quantities for a
coverage window and returns the filled workbook plus the computed lines.
"""

from .excel.errors import (
    ColumnNotFoundError,
    HeaderNotFoundError,
    ReorderError,
    WorkbookReadError,
    WorkbookWriteError,
)
from .models import ReorderLine, ReorderResult
from .services.pipeline import process_gv_workbook, process_reorder_workbook

__version__ = "0.1.0"

__all__ = [
    "process_reorder_workbook",
    "process_gv_workbook",
    "ReorderLine",
    "ReorderResult",
    "ReorderError",
    "WorkbookReadError",
    "HeaderNotFoundError",
    "ColumnNotFoundError",
    "WorkbookWriteError",
]
