import pytest

from sales_dashboard.config import DAILY_RECORD_COLUMNS, WINDOW_DAY
from sales_dashboard.transforms import build_chart_frame, build_window_frames, merge_team_daily

from .conftest import make_records


def test_merge_sums_paid_for_shared_day(team):
    merged = merge_team_daily(sp.data for sp in team)

    day5 = merged[merged["day"] == 5].iloc[0]
    assert len(merged[merged["day"] == 5]) == 1
    assert day5["paid"] == pytest.approx(350.0)
    assert day5["new_leads"] == 20
    assert day5["qualified_leads"] == 8
    assert day5["contracts_closed"] == 3


def test_merge_output_sorted_by_day():
    a = make_records([{"day": 9}, {"day": 2}])
    b = make_records([{"day": 5}])
    merged = merge_team_daily([a, b])
    assert merged["day"].tolist() == [2, 5, 9]
    assert list(merged.columns) == DAILY_RECORD_COLUMNS


def test_merge_leaves_unsummed_fields_at_zero(team):
    merged = merge_team_daily(sp.data for sp in team)
    day5 = merged[merged["day"] == 5].iloc[0]

    assert day5["contracts_value"] == 0
    assert day5["contracts_signed"] == 0
    assert day5["paid_within_5_days"] == 0
    assert day5["day_label"] == "Quinta"


def test_merge_can_sum_every_field(team):
    merged = merge_team_daily((sp.data for sp in team), sum_all_fields=True)
    day5 = merged[merged["day"] == 5].iloc[0]

    assert day5["contracts_value"] == pytest.approx(2296.0 + 847.0)
    assert day5["contracts_signed"] == 3
    assert day5["paid_within_5_days"] == pytest.approx(100.0)


def test_merge_of_nothing_is_empty():
    assert merge_team_daily([]).empty
    assert merge_team_daily([make_records([])]).empty


def test_build_window_frames_windows_each_person(team):
    windowed = build_window_frames(team, WINDOW_DAY)
    assert [sp.id for sp in windowed] == ["ana", "bia"]
    assert windowed[0].data["day"].tolist() == [5]
    assert windowed[1].data["day"].tolist() == [5]
    # originals untouched
    assert team[0].data["day"].tolist() == [4, 5]


def test_chart_frame_labels():
    chart = build_chart_frame(make_records([{"day": 3, "new_leads": 4, "paid": 10.0}]))
    assert chart["label"].tolist() == ["Dia 3"]
    assert chart.loc[0, "new_leads"] == 4
    assert build_chart_frame(None).empty
