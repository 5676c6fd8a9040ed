from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from ..models.column_map import ColumnMap, GvColumnMap
from .errors import ColumnNotFoundError
from .reader import SheetGrid, normalize_text, row_texts

"""Column resolver: semantic field -> zero-based column index.

Header wording differs between store systems and export versions, so each
field carries an ordered list of candidate substrings matched against the
normalized header text. Supporting a new export variant means adding a
candidate here (or under ``column_candidates`` in the config), not code.
"""

__all__ = [
    "FieldSpec",
    "TAB_FIELDS",
    "GV_FIELDS",
    "TAB_HEADER_TOKENS",
    "GV_HEADER_TOKENS",
    "resolve_columns",
    "resolve_column_map",
    "resolve_gv_column_map",
    "find_column_in_rows",
]


@dataclass(frozen=True)
class FieldSpec:
    label: str  # shown in ColumnNotFoundError
    candidates: tuple[str, ...]
    required: bool = True


TAB_HEADER_TOKENS: tuple[tuple[str, ...], ...] = (("vend", "sold"), ("giacen", "stock"))

TAB_FIELDS: dict[str, FieldSpec] = {
    "item_code": FieldSpec(
        "item code",
        (
            "cod. articolo",
            "cod articolo",
            "codice articolo",
            "cod. art",
            "cod art",
            "articolo",
        ),
    ),
    "description": FieldSpec("description", ("descrizione", "desc", "descr")),
    "quantity_sold": FieldSpec(
        "quantity sold", ("qta venduta", "quantita venduta", "venduta", "vendite")
    ),
    "current_stock": FieldSpec("current stock", ("giacenza bar", "giacenza", "giacenze")),
    "order_quantity": FieldSpec(
        "order quantity",
        ("qta da ordinare", "quantita da ordinare", "qta ordine", "da ordinare"),
    ),
    "order_weight_kg": FieldSpec("order weight", ("qta in peso", "peso kg", "peso", "kg")),
    "sales_value": FieldSpec(
        "sales value",
        ("valore venduto", "importo venduto", "val venduto", "valore", "importo"),
        required=False,
    ),
}

GV_HEADER_TOKENS: tuple[tuple[str, ...], ...] = (
    ("cod",),
    ("articolo",),
    ("descrizione",),
    ("venduta",),
    ("valore",),
    ("venduto",),
    ("giacenza",),
    ("bar",),
)

GV_FIELDS: dict[str, FieldSpec] = {
    "item_code": FieldSpec("Cod. Articolo", ("cod. articolo", "cod articolo", "codice articolo")),
    "description": FieldSpec("Descrizione", ("descrizione",)),
    "quantity_sold": FieldSpec(
        "Qtà Venduta", ("qta venduta", "qt. venduta", "qt venduta", "quantita venduta")
    ),
    "sales_value": FieldSpec("Valore Venduto", ("valore venduto",)),
    "current_stock": FieldSpec("Giacenza BAR", ("giacenza bar",)),
}

GV_PACK_LABEL = "FATTCONV"
GV_PACK_ROWS_ABOVE = 12
GV_PACK_ROWS_BELOW = 2

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def _find_index(normalized: Sequence[str], candidates: Sequence[str]) -> int:
    for cand in candidates:
        c = normalize_text(cand)
        for idx, h in enumerate(normalized):
            if h and c in h:
                return idx
    return -1


def resolve_columns(
    headers: Sequence[str],
    fields: Mapping[str, FieldSpec],
    extra_candidates: Mapping[str, Sequence[str]] | None = None,
) -> dict[str, int]:
    """Resolve every field to a column index.

    Missing required fields are collected and raised together, before any
    data row is touched. Optional fields that do not resolve are omitted.
    """
    normalized = [normalize_text(h) for h in headers]
    resolved: dict[str, int] = {}
    missing: list[str] = []
    for name, spec in fields.items():
        candidates = list(spec.candidates)
        if extra_candidates and name in extra_candidates:
            candidates.extend(extra_candidates[name])
        idx = _find_index(normalized, candidates)
        if idx != -1:
            resolved[name] = idx
        elif spec.required:
            missing.append(name)
    if missing:
        raise ColumnNotFoundError(
            fields=missing,
            labels=[fields[m].label for m in missing],
            headers=list(headers),
        )
    return resolved


def resolve_column_map(
    headers: Sequence[str],
    extra_candidates: Mapping[str, Sequence[str]] | None = None,
) -> ColumnMap:
    idx = resolve_columns(headers, TAB_FIELDS, extra_candidates)
    return ColumnMap(
        item_code=idx["item_code"],
        description=idx["description"],
        quantity_sold=idx["quantity_sold"],
        current_stock=idx["current_stock"],
        order_quantity=idx["order_quantity"],
        order_weight_kg=idx["order_weight_kg"],
        sales_value=idx.get("sales_value"),
    )


def find_column_in_rows(
    grid: SheetGrid,
    first_row: int,
    last_row: int,
    predicate: Callable[[str], bool],
) -> int:
    """Scan rows ``first_row..last_row`` (clamped) for a header cell.

    Returns the zero-based column of the first normalized cell accepted by
    ``predicate``, or -1.
    """
    start = max(1, first_row)
    end = min(grid.max_row, last_row)
    for r in range(start, end + 1):
        for idx, text in enumerate(row_texts(grid.row(r))):
            h = normalize_text(text)
            if h and predicate(h):
                return idx
    return -1


def _is_pack_header(h: str) -> bool:
    compact = _NON_ALNUM.sub("", h)
    return "fattconv" in compact or "fattcon" in compact


def resolve_gv_column_map(grid: SheetGrid, header_row: int, headers: Sequence[str]) -> GvColumnMap:
    """Resolve the scratch-card template columns.

    The pack factor column title usually sits in a merged block above the
    table, so it is searched in a window around the header row.
    """
    missing_labels: list[str] = []
    missing_fields: list[str] = []
    try:
        idx = resolve_columns(headers, GV_FIELDS)
    except ColumnNotFoundError as e:
        idx = {}
        missing_fields.extend(e.fields)
        missing_labels.extend(e.labels)
    pack = find_column_in_rows(
        grid, header_row - GV_PACK_ROWS_ABOVE, header_row + GV_PACK_ROWS_BELOW, _is_pack_header
    )
    if pack == -1:
        missing_fields.append("pack_factor")
        missing_labels.append(GV_PACK_LABEL)
    if missing_fields:
        raise ColumnNotFoundError(fields=missing_fields, labels=missing_labels, headers=list(headers))
    return GvColumnMap(
        item_code=idx["item_code"],
        description=idx["description"],
        quantity_sold=idx["quantity_sold"],
        sales_value=idx["sales_value"],
        current_stock=idx["current_stock"],
        pack_factor=pack,
    )
