from __future__ import annotations

import json
import re
from pathlib import Path

from pv_reorder.logging.error_log import ErrorLogBuffer, ErrorRecord


def test_flush_empty_writes_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_flush_writes_json_lines(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    buf.append(ErrorRecord.create("a.xlsx", "", -1, "HEADER_NOT_FOUND", "no header"))
    buf.append(ErrorRecord.create("b.xlsx", "", -1, "WORKBOOK_READ_ERROR", "bad zip"))
    assert len(buf.records) == 2

    path = buf.flush()
    assert path is not None
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(x)["file"] for x in lines] == ["a.xlsx", "b.xlsx"]
    assert buf.records == []


def test_second_flush_appends_to_same_file(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.append(ErrorRecord.create("a.xlsx", "", -1, "IO_ERROR", "x"))
    first = buf.flush()
    buf.append(ErrorRecord.create("b.xlsx", "", -1, "IO_ERROR", "y"))
    second = buf.flush()
    assert first == second
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2


def test_error_types_are_counted(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    for kind in ["HEADER_NOT_FOUND", "COLUMN_NOT_FOUND", "HEADER_NOT_FOUND"]:
        buf.append(ErrorRecord.create("x.xlsx", "", -1, kind, "m"))
    buf.flush()
    assert buf.error_types == {"HEADER_NOT_FOUND": 2, "COLUMN_NOT_FOUND": 1}
