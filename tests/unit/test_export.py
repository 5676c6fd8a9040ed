from __future__ import annotations

from pv_reorder.excel.export import build_gv_xlsx, build_reorder_xlsx
from pv_reorder.models.reorder_line import GvReorderLine, ReorderLine
from tests.helpers import open_sheet


def _lines() -> list[ReorderLine]:
    return [
        ReorderLine("001", "Marlboro Rosse", 5, 10, 10, 0.2, 6, 10, 10, 27.5, 55.0),
        ReorderLine("003", "Winston Classic", 7, 0, 30, 0.6, 8, 28, 10, 35, 150.0),
    ]


def test_reorder_summary_layout():
    ws = open_sheet(build_reorder_xlsx("Gestioni Bar Centrale", _lines()))
    assert ws.title == "RIORDINO TAB"
    assert ws["A1"].value == "Gestioni Bar Centrale"
    assert "A1:I1" in [str(r) for r in ws.merged_cells.ranges]
    assert [c.value for c in ws[3]] == [
        "Cod. Articolo",
        "Descrizione",
        "Qtà Venduta",
        "Giacenza",
        "Qtà teorica",
        "Conf. da",
        "Qtà da ordinare",
        "Valore da ordinare",
        "Qtà in peso (kg)",
    ]
    assert [c.value for c in ws[4]] == ["001", "Marlboro Rosse", 5, 10, 10, 10, 10, 55, 0.2]
    assert ws["E5"].value == 28


def test_reorder_summary_totals_row():
    ws = open_sheet(build_reorder_xlsx("PV", _lines()))
    # one empty row between the table and the totals
    assert ws["A6"].value is None
    assert ws["B7"].value == "TOTALI"
    assert ws["G7"].value == 40
    assert ws["H7"].value == 205.0
    assert ws["I7"].value == 0.8
    assert ws["F7"].value is None
    assert ws["G7"].font.bold


def test_reorder_summary_borders():
    ws = open_sheet(build_reorder_xlsx("PV", _lines()))
    assert ws["A3"].border.top.style == "thin"
    assert ws["I7"].border.right.style == "thin"
    assert ws["A1"].border.top.style is None


def test_reorder_summary_without_lines():
    ws = open_sheet(build_reorder_xlsx("PV", []))
    assert ws["B5"].value == "TOTALI"
    assert ws["G5"].value == 0


def test_gv_summary_uses_sum_formulas():
    lines = [
        GvReorderLine("GV001", "Miliardario 5€", 14, 70, 3, 10, 20, 2, 100.0, 4),
        GvReorderLine("GV003", "Numerissimi 2€", 5, 10, 0, 0, 5, 0, 10.0, 8),
    ]
    ws = open_sheet(build_gv_xlsx("Tabacchi Fondi", lines))
    assert ws.title == "RIORDINO G&V"
    assert ws["H3"].value == "Valore da ordinare"
    assert ws["G4"].value == 2
    assert ws["B7"].value == "TOTALI"
    assert ws["C7"].value == "=SUM(C4:C5)"
    assert ws["H7"].value == "=SUM(H4:H5)"
    assert ws["H7"].number_format == "€ #,##0.00"
