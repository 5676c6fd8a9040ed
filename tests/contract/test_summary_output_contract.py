from __future__ import annotations

import re

from pv_reorder.cli import main as cli_main
from pv_reorder.logging.init import reset_logging

"""SUMMARY line format contract."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"rows=([0-9]+)\s+order_qty=([0-9]+)\s+weight_kg=([0-9]+\.?[0-9]*)\s+"
    r"elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY files=2/2 success=2 failed=0 rows=8 order_qty=80 weight_kg=1.6 elapsed_sec=0.84"
    assert SUMMARY_PATTERN.match(line)


def test_summary_pattern_rejects_mismatched_totals():
    line = "SUMMARY files=2/3 success=2 failed=0 rows=8 order_qty=80 weight_kg=1.6 elapsed_sec=1"
    assert SUMMARY_PATTERN.match(line) is None


def test_cli_summary_is_last_line_and_matches(write_config, tab_files, capsys):
    reset_logging()
    cli_main([])
    lines = capsys.readouterr().out.strip().splitlines()
    m = SUMMARY_PATTERN.match(lines[-1])
    assert m, lines[-1]
    assert m.group(1) == "2"
    assert m.group(6) == "80"
