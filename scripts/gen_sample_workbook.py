#!/usr/bin/env python3
"""Sample workbook generator for manual and performance testing.

Writes a synthetic PV export laid out like the store system's files:
- Rows 1-4: title block (store label, period, blank rows)
- Row 5: header row
- Row 6+: data rows, with the occasional blank separator row

``--line tab`` produces the tobacco layout with empty order/weight columns to
be filled by the reorder run; ``--line gv`` produces the scratch-card
template with a FATTCONV column.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

TAB_HEADERS = [
    "Cod. Articolo",
    "Descrizione",
    "Qtà Venduta",
    "Valore Venduto",
    "Giacenza",
    "Qtà da ordinare",
    "Qtà in peso (kg)",
]

GV_HEADERS = [
    "Cod. Articolo",
    "Descrizione",
    "Qtà Venduta",
    "Valore Venduto",
    "Giacenza BAR",
    "FATTCONV",
]

BRANDS = ["Marlboro", "Camel", "Winston", "Chesterfield", "Lucky Strike", "Philip Morris"]
GV_GAMES = ["Turista per Sempre", "Miliardario", "Numerissimi", "Nuovo Doppia Sfida", "Maxi Miliardario"]


def generate_rows(rows: int, line: str, seed: int = 42) -> list[list[Any]]:
    """Generate data rows; every 25th row is left blank."""
    rng = np.random.default_rng(seed)
    out: list[list[Any]] = []
    for i in range(rows):
        if i and i % 25 == 0:
            out.append([None] * (len(TAB_HEADERS) if line == "tab" else len(GV_HEADERS)))
            continue
        sold = int(rng.integers(0, 80))
        stock = int(rng.integers(0, 200))
        if line == "tab":
            name = f"{rng.choice(BRANDS)} {int(rng.integers(10, 21))} pz"
            price = round(float(rng.uniform(5.0, 7.5)), 2)
            out.append([f"{1000 + i:06d}", name, sold, round(sold * price, 2), stock, None, None])
        else:
            price = float(rng.choice([2.0, 3.0, 5.0, 10.0, 20.0]))
            name = f"{rng.choice(GV_GAMES)} {price:.0f}€"
            factor = int(rng.choice([20, 30, 50, 60]))
            out.append([f"GV{500 + i:05d}", name, sold, round(sold * price, 2), stock, factor])
    return out


def create_workbook(output_path: Path, rows: int, line: str, label: str, seed: int = 42) -> None:
    headers = TAB_HEADERS if line == "tab" else GV_HEADERS
    sheet_data: list[list[Any]] = [
        [label] + [None] * (len(headers) - 1),
        ["Periodo: settimana corrente"] + [None] * (len(headers) - 1),
        [None] * len(headers),
        [None] * len(headers),
        headers,
    ]
    sheet_data.extend(generate_rows(rows, line, seed))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(sheet_data).to_excel(writer, sheet_name="Export", header=False, index=False)

    print(f"Created workbook: {output_path}")
    print(f"  Line: {line}")
    print(f"  Data rows: {rows} (header on row 5)")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a synthetic PV sales/stock workbook")
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--rows", type=int, default=500, help="Number of data rows (default: 500)")
    parser.add_argument("--line", choices=["tab", "gv"], default="tab")
    parser.add_argument("--label", default="Gestioni Bar Centrale - via Roma 1")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1

    create_workbook(args.output, args.rows, args.line, args.label, args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
