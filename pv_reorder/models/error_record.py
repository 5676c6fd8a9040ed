from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""One line of the batch error log.

Keys are fixed: ``timestamp`` (UTC, ISO 8601 with ``Z``), ``file``, ``sheet``
(empty when the workbook never opened), ``row`` (Excel row, -1 for problems
that concern the whole workbook), ``error_type`` (the ``error_type`` of the
raised ReorderError, or IO_ERROR) and ``message``.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    timestamp: str
    file: str
    sheet: str
    row: int
    error_type: str  # UPPER_SNAKE
    message: str

    @classmethod
    def create(cls, file: str, sheet: str, row: int, error_type: str, message: str) -> ErrorRecord:
        stamp = datetime.now(UTC).isoformat(timespec="seconds").replace("+00:00", "Z")
        return cls(stamp, file, sheet, row, error_type, message)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
