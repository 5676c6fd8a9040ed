from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.columns import TAB_HEADER_TOKENS, resolve_column_map
from ..excel.errors import ReorderError
from ..excel.reader import find_header_row, load_sheet_grid, to_text
from ..logging.init import log_summary, setup_logging
from ..models.config_models import ReorderConfig
from ..services.calculator import (
    resolve_coverage_days,
    resolve_coverage_weeks,
    resolve_tab_coverage_days,
)
from ..services.orchestrator import ProcessingError, process_all, scan_excel_files
from ..services.summary import render_summary_line

"""CLI entrypoint: batch reorder over a directory of PV exports.

Flow:
- Load .env (``REORDER_CONFIG`` may point to the config file)
- Load and validate config/reorder.yml
- Apply command-line overrides (coverage, product line)
- Process every .xlsx in source_directory, print the SUMMARY line

Exit codes: 0 all files ok (or none found), 2 at least one file failed,
1 fatal (config or directory).
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV_VAR = "REORDER_CONFIG"
INSPECT_ROWS = 3


def _load_env_file(path: Path) -> None:
    """Load .env without overriding variables already set in the process."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="pv_reorder", description="PV reorder computation")
    p.add_argument("--config", type=Path, default=None, help="Config file (default config/reorder.yml)")
    p.add_argument("--weeks", default=None, help="Coverage weeks for TAB (1-4, invalid -> 4)")
    p.add_argument("--days", default=None, help="Coverage days: G&V 1-7 (invalid -> 7); TAB 1-21, replaces --weeks")
    p.add_argument("--product-line", choices=["tab", "gv"], default=None)
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print header row, column map and first rows of each workbook then exit",
    )
    return p.parse_args(argv)


def _config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env = os.getenv(CONFIG_ENV_VAR)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def _apply_overrides(cfg: ReorderConfig, args: argparse.Namespace) -> ReorderConfig:
    if args.product_line is not None:
        cfg = replace(cfg, product_line=args.product_line)
    if args.weeks is not None:
        cfg = replace(cfg, coverage_weeks=resolve_coverage_weeks(args.weeks))
    if args.days is not None:
        resolve = resolve_coverage_days if cfg.product_line == "gv" else resolve_tab_coverage_days
        cfg = replace(cfg, coverage_days=resolve(args.days))
    return cfg


def _inspect_data(cfg: ReorderConfig) -> int:
    try:
        files = scan_excel_files(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            grid = load_sheet_grid(f.read_bytes())
            header = find_header_row(grid, TAB_HEADER_TOKENS, cfg.settings.header_scan_rows)
            print(f"  SHEET: {grid.sheet_name} header_row={header.row_number}")
            print(f"  headers={[h for h in header.headers if h]}")
            cmap = resolve_column_map(header.headers, cfg.settings.column_candidates)
            print(f"  columns={cmap.as_dict()}")
            last = min(grid.max_row, header.row_number + INSPECT_ROWS)
            for r in range(header.row_number + 1, last + 1):
                print(f"    row {r}: {[to_text(v) for v in grid.row(r)]}")
        except ReorderError as e:
            print(f"  error={e}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    # None -> read sys.argv; [] stays empty (tests call main([]))
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    try:
        cfg = load_config(_config_path(args))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    cfg = _apply_overrides(cfg, args)

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    if cfg.product_line == "gv":
        coverage = f"days={resolve_coverage_days(cfg.coverage_days)}"
    elif cfg.coverage_days is not None:
        coverage = f"days={cfg.coverage_days}"
    else:
        coverage = f"weeks={cfg.coverage_weeks}"
    logger.info(f"Processing files from: {directory} line={cfg.product_line} {coverage}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " prefix
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
