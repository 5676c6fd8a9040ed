"""Domain models for the PV reorder engine.

This package contains the dataclasses shared by the reader, the calculator,
the writer and the batch runner.
"""

from .column_map import ColumnMap, GvColumnMap
from .config_models import ReorderConfig, ReorderSettings
from .reorder_line import GvReorderLine, ReorderLine, SourceRow
from .reorder_result import GvReorderResult, ReorderResult, ReorderTotals

__all__ = [
    # Configuration models
    "ReorderConfig",
    "ReorderSettings",
    # Column maps
    "ColumnMap",
    "GvColumnMap",
    # Row / result models
    "SourceRow",
    "ReorderLine",
    "GvReorderLine",
    "ReorderResult",
    "GvReorderResult",
    "ReorderTotals",
]
