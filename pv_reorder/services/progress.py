from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm

from ..models.processing_result import FileStat

"""Batch progress bar (tqdm, interactive terminals only).

One tick per workbook; the postfix carries the running order totals so an
operator watching a long run sees pieces and kilograms accumulate. Under
cron or with redirected output the bar is not created at all.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """File-level progress for ``process_all``."""

    def __init__(self, total_files: int, *, description: str = "Reorder") -> None:
        self.description = description
        self.files_done = 0
        self.failed = 0
        self.order_quantity = 0
        self.weight_kg = 0.0
        self.pbar: Any = None
        if is_tty_enabled():
            self.pbar = tqdm(total=total_files, desc=description, unit="file", ncols=80, ascii=True)

    @property
    def enabled(self) -> bool:
        return self.pbar is not None

    def start_file(self, name: str) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({name})")

    def finish_file(self, stat: FileStat) -> None:
        self.files_done += 1
        if stat.status == "success":
            self.order_quantity += stat.order_quantity
            self.weight_kg = round(self.weight_kg + stat.weight_kg, 1)
        else:
            self.failed += 1
        if self.pbar is None:
            return
        self.pbar.update(1)
        self.pbar.set_description(self.description)
        self.pbar.set_postfix(qty=self.order_quantity, kg=self.weight_kg, failed=self.failed)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
