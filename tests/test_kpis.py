import math

import pytest

from sales_dashboard.config import WINDOW_DAY, WINDOW_MONTH, WINDOW_WEEK
from sales_dashboard.kpis import (
    METRIC_KEYS,
    calc_metrics,
    filter_by_window,
    last_day_with_data,
    rank_by_paid,
    safe_ratio,
)
from sales_dashboard.loaders import empty_daily_frame
from sales_dashboard.simulator import generate_daily_records

from .conftest import make_records


def test_safe_ratio_guards_zero():
    assert safe_ratio(5, 0) == 0.0
    assert safe_ratio(1, 4) == 0.25


def test_empty_input_gives_all_zero_metrics():
    for records in (None, empty_daily_frame()):
        metrics = calc_metrics(records)
        assert set(metrics) == set(METRIC_KEYS)
        assert all(v == 0 for v in metrics.values())
        assert metrics["conversion_rate"] == 0.0
        assert metrics["cost_per_acquisition"] == 0.0
        assert not any(isinstance(v, float) and math.isnan(v) for v in metrics.values())


def test_calc_metrics_sums_and_ratios():
    records = make_records([
        {"day": 1, "new_leads": 10, "qualified_leads": 4, "contracts_closed": 1,
         "contracts_signed": 1, "paid": 500.0, "paid_within_5_days": 100.0,
         "contracts_value": 1299.0},
        {"day": 2, "new_leads": 6, "qualified_leads": 4, "contracts_closed": 2,
         "contracts_signed": 1, "paid": 300.0, "paid_within_5_days": 50.0,
         "contracts_value": 1994.0},
    ])
    m = calc_metrics(records)

    assert m["total_leads"] == 16
    assert m["total_qualified_leads"] == 8
    assert m["total_contracts_closed"] == 3
    assert m["total_contracts_signed"] == 2
    assert m["total_contracts_value"] == pytest.approx(3293.0)
    assert m["total_paid"] == pytest.approx(800.0)
    assert m["total_paid_within_5_days"] == pytest.approx(150.0)
    assert m["conversion_rate"] == pytest.approx(3 / 8)
    assert m["cost_per_acquisition"] == pytest.approx(400.0)


def test_ratios_zero_when_denominators_zero():
    records = make_records([{"day": 1, "contracts_closed": 2, "paid": 900.0}])
    m = calc_metrics(records)
    assert m["conversion_rate"] == 0.0
    assert m["cost_per_acquisition"] == 0.0


def test_calc_metrics_is_idempotent():
    records = generate_daily_records(30, 0.4, 0.25)
    assert calc_metrics(records) == calc_metrics(records)


def test_last_day_with_data():
    assert last_day_with_data(empty_daily_frame()) == 0
    assert last_day_with_data(make_records([{"day": 3}, {"day": 12}, {"day": 7}])) == 12


def test_day_window_keeps_latest_day_only():
    records = make_records([{"day": 3}, {"day": 12}, {"day": 12}, {"day": 7}])
    assert filter_by_window(records, WINDOW_DAY)["day"].tolist() == [12, 12]


def test_week_window_is_trailing_seven_days():
    records = make_records([{"day": d} for d in (1, 5, 6, 7, 11, 12)])
    assert filter_by_window(records, WINDOW_WEEK)["day"].tolist() == [6, 7, 11, 12]


def test_week_window_clamps_to_day_one():
    records = make_records([{"day": d} for d in (1, 2, 4)])
    assert filter_by_window(records, WINDOW_WEEK)["day"].tolist() == [1, 2, 4]


def test_windows_keep_a_fractional_latest_day():
    records = make_records([{"day": 3}, {"day": 5.5}])

    assert last_day_with_data(records) == 5.5
    assert filter_by_window(records, WINDOW_DAY)["day"].tolist() == [5.5]
    assert filter_by_window(records, WINDOW_WEEK)["day"].tolist() == [3, 5.5]


def test_month_window_returns_everything():
    records = make_records([{"day": d} for d in (9, 1, 20)])
    assert filter_by_window(records, WINDOW_MONTH)["day"].tolist() == [9, 1, 20]
    assert filter_by_window(records, "quarter")["day"].tolist() == [9, 1, 20]


def test_window_of_empty_records_is_empty():
    for window in (WINDOW_DAY, WINDOW_WEEK, WINDOW_MONTH):
        assert filter_by_window(empty_daily_frame(), window).empty


def test_window_monotonicity():
    records = generate_daily_records(25, 0.5, 0.3, days=23)
    day = filter_by_window(records, WINDOW_DAY)
    week = filter_by_window(records, WINDOW_WEEK)
    month = filter_by_window(records, WINDOW_MONTH)

    assert len(day) <= len(week) <= len(month)

    m_day, m_week, m_month = calc_metrics(day), calc_metrics(week), calc_metrics(month)
    for key in METRIC_KEYS:
        if key.startswith("total_"):
            assert m_day[key] <= m_week[key] <= m_month[key]


def test_rank_by_paid_is_stable():
    entries = [(idx, {"total_paid": paid}) for idx, paid in enumerate([100, 300, 300, 50])]
    ranked = rank_by_paid(entries)
    assert [idx for idx, _ in ranked] == [1, 2, 0, 3]


def test_rank_by_paid_empty():
    assert rank_by_paid([]) == []
