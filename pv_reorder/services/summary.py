from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for batch runs."""


def _fmt_number(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if abs(value) < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line.

    Format::

        SUMMARY files={total}/{total} success={success} failed={failed} rows={rows}
        order_qty={qty} weight_kg={kg} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2026, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2026, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_rows=12,
        ...     total_order_quantity=80, total_weight_kg=1.6,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=1/1 success=1 failed=0 rows=12 order_qty=80 weight_kg=1.6 elapsed_sec=2'
    """
    total = result.total_files
    return (
        f"SUMMARY files={total}/{total} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"order_qty={result.total_order_quantity} "
        f"weight_kg={_fmt_number(result.total_weight_kg)} "
        f"elapsed_sec={_fmt_number(result.elapsed_seconds)}"
    )
