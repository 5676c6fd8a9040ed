# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from pv_reorder.logging.init import reset_logging
from tests.helpers import gv_rows, tab_rows, workbook_bytes


@pytest.fixture(autouse=True)
def _clean_logging():
    # handlers bound to a previous test's captured stdout
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
product_line: tab
coverage_weeks: 4
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "reorder.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def tab_workbook() -> bytes:
    return workbook_bytes(tab_rows())


@pytest.fixture()
def gv_workbook() -> bytes:
    return workbook_bytes(gv_rows())


@pytest.fixture()
def tab_files(temp_workdir: Path) -> list[Path]:
    files = []
    for name in ["pv_centrale.xlsx", "pv_stazione.xlsx"]:
        f = temp_workdir / "data" / name
        f.write_bytes(workbook_bytes(tab_rows()))
        files.append(f)
    return files
