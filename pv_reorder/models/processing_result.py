from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models for batch reorder runs.

FileStat tracks a single workbook; ProcessingResult aggregates the run and
feeds the SUMMARY line.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: str  # success/failed
    rows: int  # materialized reorder lines
    order_quantity: int  # sum of ordered pieces
    weight_kg: float
    elapsed_seconds: float
    output_path: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of a batch run."""
    success_files: int
    failed_files: int
    total_rows: int
    total_order_quantity: int
    total_weight_kg: float
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
