from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from pathlib import Path

from ..excel.errors import ReorderError
from ..excel.export import build_reorder_xlsx
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ReorderConfig
from ..models.processing_result import FileStat, ProcessingResult
from .pipeline import process_gv_workbook, process_reorder_workbook
from .progress import ProgressTracker

"""Batch orchestration: run the reorder pipeline over a directory.

Each workbook is an isolated unit of work: a failure is recorded (FileStat +
ErrorRecord) and the run continues with the next file. Directory problems
are fatal and raise ProcessingError.
"""

__all__ = [
    "ProcessingError",
    "scan_excel_files",
    "output_paths",
    "process_file",
    "process_all",
]

logger = logging.getLogger(__name__)

FILLED_SUFFIX = "_riordino"
SUMMARY_SUFFIX = "_riepilogo"


class ProcessingError(Exception):
    """Fatal batch error (source or output directory unusable)."""


def scan_excel_files(directory: Path) -> list[Path]:
    """Scan directory for .xlsx files (non-recursive, sorted by name).

    Lock files left by Excel (``~$name.xlsx``) are ignored.
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p
            for p in directory.iterdir()
            if p.is_file() and p.suffix == ".xlsx" and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def output_paths(source: Path, output_dir: Path) -> tuple[Path, Path]:
    return (
        output_dir / f"{source.stem}{FILLED_SUFFIX}.xlsx",
        output_dir / f"{source.stem}{SUMMARY_SUFFIX}.xlsx",
    )


def process_file(path: Path, config: ReorderConfig, output_dir: Path) -> FileStat:
    """Process one workbook and write its outputs.

    Raises ReorderError on pipeline failures; OSError on output write errors.
    """
    started = time.perf_counter()
    data = path.read_bytes()
    filled_path, summary_path = output_paths(path, output_dir)

    if config.product_line == "gv":
        gv = process_gv_workbook(data, config.coverage_days)
        summary_path.write_bytes(gv.xlsx)
        return FileStat(
            file_name=path.name,
            status="success",
            rows=len(gv.rows),
            order_quantity=sum(r.order_quantity for r in gv.rows),
            weight_kg=0.0,
            elapsed_seconds=time.perf_counter() - started,
            output_path=str(summary_path),
        )

    result = process_reorder_workbook(
        data,
        config.coverage_weeks,
        coverage_days=config.coverage_days,
        settings=config.settings,
    )
    filled_path.write_bytes(result.xlsx)
    if config.write_summary_workbook:
        summary_path.write_bytes(build_reorder_xlsx(result.pv_label, result.rows))
    totals = result.totals()
    for line in result.preview(config.settings.preview_rows):
        logger.debug(
            f"  {line.item_code} {line.description[:30]} sold={line.quantity_sold} "
            f"stock={line.current_stock} order={line.order_quantity} kg={line.weight_kg}"
        )
    return FileStat(
        file_name=path.name,
        status="success",
        rows=len(result.rows),
        order_quantity=totals.order_quantity,
        weight_kg=totals.weight_kg,
        elapsed_seconds=time.perf_counter() - started,
        output_path=str(filled_path),
    )


def _failed(path: Path, started: float, message: str) -> FileStat:
    return FileStat(
        file_name=path.name,
        status="failed",
        rows=0,
        order_quantity=0,
        weight_kg=0.0,
        elapsed_seconds=time.perf_counter() - started,
        error=message,
    )


def process_all(config: ReorderConfig, error_log: ErrorLogBuffer | None = None) -> ProcessingResult:
    """Process every workbook in ``config.source_directory``.

    Returns a ProcessingResult with one FileStat per workbook. Errors of a
    single workbook never abort the run.
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    file_paths = scan_excel_files(Path(config.source_directory))
    output_dir = Path(config.output_directory)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProcessingError(f"cannot create output directory {output_dir}: {e}") from e

    stats: list[FileStat] = []
    with ProgressTracker(len(file_paths)) as progress:
        for path in file_paths:
            progress.start_file(path.name)
            started = time.perf_counter()
            try:
                stat = process_file(path, config, output_dir)
            except ReorderError as e:
                logger.error(f"{path.name}: {e}")
                error_log.append(ErrorRecord.create(path.name, "", -1, e.error_type, str(e)))
                stat = _failed(path, started, str(e))
            except OSError as e:
                logger.error(f"{path.name}: {e}")
                error_log.append(ErrorRecord.create(path.name, "", -1, "IO_ERROR", str(e)))
                stat = _failed(path, started, str(e))
            else:
                logger.info(
                    f"{path.name}: lines={stat.rows} order_qty={stat.order_quantity} "
                    f"weight_kg={stat.weight_kg}"
                )
            stats.append(stat)
            progress.finish_file(stat)

    log_path = error_log.flush()
    if log_path is not None:
        counts = ", ".join(f"{k}={v}" for k, v in sorted(error_log.error_types.items()))
        logger.warning(f"error log written: {log_path} ({counts})")

    end_time = datetime.now(UTC)
    ok = [s for s in stats if s.status == "success"]
    return ProcessingResult(
        success_files=len(ok),
        failed_files=len(stats) - len(ok),
        total_rows=sum(s.rows for s in ok),
        total_order_quantity=sum(s.order_quantity for s in ok),
        total_weight_kg=round(sum(s.weight_kg for s in ok), 1),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=stats,
    )
