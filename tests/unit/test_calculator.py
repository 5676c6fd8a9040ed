from __future__ import annotations

import logging
import math

import pytest

from pv_reorder.services.calculator import (
    compute_gv_order,
    compute_order,
    is_blank_row,
    order_value,
    resolve_coverage_days,
    resolve_coverage_weeks,
    resolve_tab_coverage_days,
    round_half_up,
)


@pytest.mark.parametrize(
    "sold, stock, weeks, expected_qty, expected_kg",
    [
        (5, 10, 4, 10, 0.2),   # demand 20, shortfall 10
        (3, 50, 4, 0, 0.0),    # demand 12 covered by stock
        (7, 0, 1, 10, 0.2),    # ceil(7/10) packs
        (7, 0, 4, 30, 0.6),
        (25, 5, 2, 50, 1.0),
    ],
)
def test_compute_order_scenarios(sold, stock, weeks, expected_qty, expected_kg):
    q = compute_order(sold, stock, weeks)
    assert q.order_quantity == expected_qty
    assert q.weight_kg == expected_kg


def test_order_quantity_is_non_negative_multiple_of_pack():
    for weeks in range(1, 5):
        for sold in range(0, 40, 3):
            for stock in range(0, 130, 7):
                q = compute_order(sold, stock, weeks)
                assert q.order_quantity >= 0
                assert q.order_quantity % 10 == 0


def test_stock_covering_demand_orders_nothing():
    for weeks in range(1, 5):
        q = compute_order(6, 6 * weeks, weeks)
        assert q.order_quantity == 0
        assert q.weight_kg == 0
        assert q.theoretical == 0


def test_weight_is_derived_from_order_quantity():
    for sold in range(0, 200, 11):
        q = compute_order(sold, 3, 3)
        assert q.weight_kg == round(q.order_quantity * 0.02, 1)


def test_negative_inputs_never_produce_negative_orders():
    assert compute_order(-5, 0, 4).order_quantity == 0
    assert compute_order(0, -10, 4).order_quantity == 10
    assert compute_order(-1, -1, 1).order_quantity == 0


def test_theoretical_quantity_before_packing():
    q = compute_order(7, 1, 2)  # shortfall 13
    assert q.theoretical == 13
    assert q.order_quantity == 20


def test_fractional_sales_round_up_to_full_pack():
    q = compute_order(2.5, 0, 3)  # 7.5 -> one pack
    assert q.theoretical == 8
    assert q.order_quantity == 10


def test_decimal_inputs_compare_exactly():
    # 1.1 * 3 is 3.3000000000000003 in binary floats
    assert compute_order(1.1, 3.3, 3).order_quantity == 0
    assert compute_order(0.7, 2.1, 3).order_quantity == 0
    assert compute_order(1.1, 3.2, 3).theoretical == 1


def test_custom_pack_size_and_unit_weight():
    q = compute_order(7, 0, 1, pack_size=6, unit_weight_kg=0.025)
    assert q.order_quantity == 12
    assert q.weight_kg == 0.3


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 4),
        ("abc", 4),
        (float("nan"), 4),
        (float("inf"), 4),
        (True, 4),
        (0, 1),
        (-3, 1),
        (7, 4),
        (2.9, 2),
        ("3", 3),
        (1, 1),
        (4, 4),
    ],
)
def test_resolve_coverage_weeks_clamps_and_defaults(value, expected):
    assert resolve_coverage_weeks(value) == expected


def test_resolve_coverage_weeks_warns_on_fallback(caplog, monkeypatch):
    # the app logger stops propagation once the CLI has configured it
    monkeypatch.setattr(logging.getLogger("pv_reorder"), "propagate", True)
    with caplog.at_level("WARNING", logger="pv_reorder.services.calculator"):
        resolve_coverage_weeks("many")
    assert "not usable" in caplog.text


@pytest.mark.parametrize(
    "value, expected",
    [(None, 7), ("x", 7), (0, 7), (0.0, 7), (0.5, 1), (-0.5, 1), (1, 1), (3.6, 3), (10, 7), (-2, 1)],
)
def test_resolve_coverage_days(value, expected):
    assert resolve_coverage_days(value) == expected


def test_compute_gv_order_packs_by_factor():
    q = compute_gv_order(14, 3, 10, 6)  # 14 * 7/7 - 3 = 11
    assert q.theoretical == 11
    assert q.order_packs == 2
    assert q.order_quantity == 20


def test_compute_gv_order_without_factor_orders_loose():
    q = compute_gv_order(14, 3, 0, 6)
    assert q.order_packs == 0
    assert q.order_quantity == 11


def test_compute_gv_order_adds_delivery_day():
    q = compute_gv_order(14, 0, 1, 7)  # 14 * 8 / 7 = 16
    assert q.theoretical == 16


def test_compute_gv_order_covered_by_stock():
    q = compute_gv_order(7, 20, 10, 6)
    assert (q.theoretical, q.order_quantity, q.order_packs) == (0, 0, 0)


def test_order_value_uses_average_price():
    assert order_value(27.5, 5, 10) == 55.0
    assert order_value(10, 3, 10) == 33.33
    assert order_value(0, 5, 10) == 0
    assert order_value(20, 0, 10) == 0
    assert order_value(20, 4, 0) == 0


def test_round_half_up():
    assert round_half_up(0.25, 1) == 0.3
    assert round_half_up(2.675, 2) == 2.68
    assert math.isclose(round_half_up(0.6000000000000001, 1), 0.6)


def test_is_blank_row():
    assert is_blank_row("", "", 0, 0)
    assert not is_blank_row("001", "", 0, 0)
    assert not is_blank_row("", "Camel", 0, 0)
    assert not is_blank_row("", "", 1, 0)
    assert not is_blank_row("", "", 0, 2)


@pytest.mark.parametrize(
    "sold, stock, days, expected_theoretical, expected_qty",
    [
        (7, 0, 7, 7, 10),     # one week expressed in days
        (14, 0, 3, 6, 10),
        (10, 0, 10, 15, 20),  # 14.29 -> 15
        (10, 0, 30, 30, 30),  # capped at 21 days
        (7, 0, 0.5, 1, 10),   # floored at 1 day
        (7, 5, 7, 2, 10),
        (7, 8, 7, 0, 0),
    ],
)
def test_compute_order_with_coverage_days(sold, stock, days, expected_theoretical, expected_qty):
    q = compute_order(sold, stock, 4, coverage_days=days)
    assert q.theoretical == expected_theoretical
    assert q.order_quantity == expected_qty


def test_non_positive_coverage_days_keep_weekly_window():
    assert compute_order(7, 0, 4, coverage_days=None) == compute_order(7, 0, 4)
    assert compute_order(7, 0, 4, coverage_days=0) == compute_order(7, 0, 4)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        ("", None),
        ("  ", None),
        ("abc", None),
        (float("nan"), None),
        (0, 1),
        (10, 10),
        ("14", 14),
        (2.7, 2),
        (30, 21),
    ],
)
def test_resolve_tab_coverage_days(value, expected):
    assert resolve_tab_coverage_days(value) == expected
