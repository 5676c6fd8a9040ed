from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft7Validator

from ..models.config_models import (
    DEFAULT_COVERAGE_WEEKS,
    PACK_SIZE,
    UNIT_WEIGHT_KG,
    ReorderConfig,
    ReorderSettings,
)

"""Batch configuration: ``config/reorder.yml`` -> ReorderConfig.

The YAML is checked against ``config_schema.json`` (shipped next to this
module) before any default is applied, so a typo in a key name fails the run
instead of being silently ignored.
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/reorder.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


@lru_cache(maxsize=1)
def _validator() -> Draft7Validator:
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"config schema unusable ({SCHEMA_PATH}): {e}") from e
    return Draft7Validator(schema)


def _check(data: dict[str, Any]) -> None:
    errors = sorted(_validator().iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if not errors:
        return
    problems = []
    for err in errors:
        where = ".".join(str(p) for p in err.absolute_path)
        problems.append(f"{where}: {err.message}" if where else err.message)
    raise ConfigError("config validation failed: " + "; ".join(problems))


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ReorderConfig:
    if not path.is_file():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml in {path}: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")
    _check(data)

    settings = ReorderSettings(
        pack_size=data.get("pack_size", PACK_SIZE),
        unit_weight_kg=data.get("unit_weight_kg", UNIT_WEIGHT_KG),
        header_scan_rows=data.get("header_scan_rows", 30),
        preview_rows=data.get("preview_rows", 20),
        column_candidates={
            field: tuple(extra) for field, extra in data.get("column_candidates", {}).items()
        },
    )
    return ReorderConfig(
        source_directory=data["source_directory"],
        output_directory=data["output_directory"],
        product_line=data.get("product_line", "tab"),
        coverage_weeks=data.get("coverage_weeks", DEFAULT_COVERAGE_WEEKS),
        coverage_days=data.get("coverage_days"),
        write_summary_workbook=data.get("write_summary_workbook", True),
        settings=settings,
    )
