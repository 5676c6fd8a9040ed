from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Per-run error log.

Failed workbooks are collected during a batch run and written once at the
end, one JSON object per line, to ``logs/errors-<UTC stamp>.log``. Runs
without failures leave no file behind.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Collects ErrorRecords; ``flush`` appends them to the run's log file."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self.logs_dir = logs_dir or LOGS_DIR
        self._pending: list[ErrorRecord] = []
        self._path: Path | None = None
        self.error_types: Counter[str] = Counter()

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._pending)

    @property
    def file_path(self) -> Path:
        # fixed at first use so repeated flushes of one run share a file
        if self._path is None:
            self._path = self.logs_dir / f"errors-{datetime.now(UTC):{TIMESTAMP_FMT}}.log"
        return self._path

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)
        self.error_types[record.error_type] += 1

    def flush(self) -> Path | None:
        if not self._pending:
            return None
        path = self.file_path
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = "".join(f"{r.to_json_line()}\n" for r in self._pending)
        with path.open("a", encoding="utf-8") as f:
            f.write(lines)
        self._pending = []
        return path
