from __future__ import annotations

"""Stage errors for the reorder pipeline.

Every stage aborts the whole computation on failure; there is no partial
result. Messages are meant to be shown to the operator as-is.
"""

__all__ = [
    "ReorderError",
    "WorkbookReadError",
    "HeaderNotFoundError",
    "ColumnNotFoundError",
    "WorkbookWriteError",
]


class ReorderError(Exception):
    """Base class for reorder pipeline failures."""

    error_type = "REORDER_ERROR"


class WorkbookReadError(ReorderError):
    """Raised when the uploaded bytes are not a readable workbook."""

    error_type = "WORKBOOK_READ_ERROR"


class HeaderNotFoundError(ReorderError):
    """Raised when no header row is found within the scan bound."""

    error_type = "HEADER_NOT_FOUND"

    def __init__(self, scan_rows: int, sample: list[str], expected: str) -> None:
        self.scan_rows = scan_rows
        self.sample = sample
        lines = [f"header row not found in first {scan_rows} rows (expected {expected})"]
        if sample:
            lines.append("rows scanned:")
            lines.extend(f"  {s}" for s in sample)
        else:
            lines.append("rows scanned: (all empty)")
        super().__init__("\n".join(lines))


class ColumnNotFoundError(ReorderError):
    """Raised when a required semantic field has no matching header."""

    error_type = "COLUMN_NOT_FOUND"

    def __init__(self, fields: list[str], labels: list[str], headers: list[str]) -> None:
        self.fields = fields
        self.labels = labels
        self.headers = headers
        shown = [h for h in headers if h]
        super().__init__(
            f"column not found: {', '.join(labels)} (headers found: {shown})"
        )

    @property
    def field(self) -> str:
        return self.fields[0]


class WorkbookWriteError(ReorderError):
    """Raised when the filled workbook cannot be serialized."""

    error_type = "WORKBOOK_WRITE_ERROR"
