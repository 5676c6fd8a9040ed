"""Workbook builders shared by the test suites."""
from __future__ import annotations

from io import BytesIO

import pandas as pd
from openpyxl import load_workbook

TAB_HEADER = [
    "Cod. Articolo",
    "Descrizione",
    "Qtà Venduta",
    "Valore Venduto",
    "Giacenza",
    "Qtà da ordinare",
    "Qtà in peso (kg)",
]

GV_HEADER = [
    "Cod. Articolo",
    "Descrizione",
    "Qtà Venduta",
    "Valore Venduto",
    "Giacenza BAR",
    None,
]


def workbook_bytes(rows: list[list[object]], sheet_name: str = "Export") -> bytes:
    """Build an .xlsx payload, one list per Excel row starting at row 1."""
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return buf.getvalue()


def open_sheet(data: bytes):
    return load_workbook(BytesIO(data)).worksheets[0]


def tab_rows() -> list[list[object]]:
    """TAB export with 4 title rows, header on row 5, data on rows 6-10."""
    return [
        ["Gestioni Bar Centrale - via Roma 1"],
        ["Report vendite settimanali"],
        [],
        [],
        TAB_HEADER,
        ["001", "Marlboro Rosse", 5, 27.5, 10, None, None],
        ["002", "Camel Blu", 3, 16.5, 50, None, None],
        ["003", "Winston Classic", 7, 35, 0, None, None],
        [None, None, None, None, None, None, None],
        ["004", "Chesterfield", None, None, None, None, None],
    ]


def gv_rows() -> list[list[object]]:
    """G&V template: FATTCONV title above the table, header on row 3."""
    return [
        ["Gestioni Tabacchi Fondi"],
        [None, None, None, None, None, "FATTCONV"],
        GV_HEADER,
        ["GV001", "Miliardario 5€", 14, 70, 3, 10],
        ["GV002", "Turista per Sempre 10€", 2, 20, 5, 20],
        GV_HEADER,
        [None, "Pagina 1 di 2", 0, 0, 0, None],
        ["GV003", "Numerissimi 2€", 5, 10, 0, 0],
    ]
