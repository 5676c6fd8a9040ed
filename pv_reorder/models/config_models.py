from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

"""Config dataclasses for the reorder engine.

ReorderSettings carries the numeric rules and heuristics the pipeline needs;
ReorderConfig is the root object produced by the YAML loader for the batch
runner and CLI.
"""

__all__ = [
    "PACK_SIZE",
    "UNIT_WEIGHT_KG",
    "DEFAULT_COVERAGE_WEEKS",
    "DEFAULT_COVERAGE_DAYS",
    "ReorderSettings",
    "ReorderConfig",
]

PACK_SIZE = 10  # pieces per pack
UNIT_WEIGHT_KG = 0.02  # 10 pieces = 0.2 kg
DEFAULT_COVERAGE_WEEKS = 4
DEFAULT_COVERAGE_DAYS = 7


@dataclass(frozen=True)
class ReorderSettings:
    """Rules applied by a single pipeline invocation."""
    pack_size: int = PACK_SIZE
    unit_weight_kg: float = UNIT_WEIGHT_KG
    header_scan_rows: int = 30
    preview_rows: int = 20
    # field name -> extra candidate substrings, tried after the built-in ones
    column_candidates: Mapping[str, tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class ReorderConfig:
    """Root configuration for batch processing (config/reorder.yml)."""
    source_directory: str  # directory scanned for .xlsx (non-recursive)
    output_directory: str  # filled workbooks and summaries land here
    product_line: str = "tab"  # "tab" | "gv"
    coverage_weeks: int = DEFAULT_COVERAGE_WEEKS
    # gv: 1..7, default 7; tab: optional 1..21, replaces coverage_weeks when set
    coverage_days: int | None = None
    write_summary_workbook: bool = True
    settings: ReorderSettings = field(default_factory=ReorderSettings)
