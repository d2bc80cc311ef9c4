"""
간략 보기 구간 선택 테스트
"""
from __future__ import annotations

from datetime import date, timedelta

import pytest

from dengue_dashboard.domain.exceptions import TimelineError, ValidationError
from dengue_dashboard.domain.models import (
    ForecastPoint,
    ForecastResponse,
    HistoryPoint,
    PendingPoint,
    TimelineRow,
)
from dengue_dashboard.planning.timeline import merge_timeline
from dengue_dashboard.planning.window import build_chart_rows, select_window

from conftest import weeks


def _timeline(anchor_count: int, forecast_count: int, *, pending_count: int = 0):
    days = weeks(date(2023, 1, 2), anchor_count + pending_count + forecast_count)
    history = [HistoryPoint(d, float(i), "observed") for i, d in enumerate(days[:anchor_count])]
    pending = [
        PendingPoint(d, 100.0 + i)
        for i, d in enumerate(days[anchor_count:anchor_count + pending_count])
    ]
    forecast = [
        ForecastPoint(d, h, 200.0 + h)
        for h, d in enumerate(days[anchor_count + pending_count:], start=1)
    ]
    return merge_timeline(history, pending, forecast)


def test_select_window_thirty_anchors():
    """30개 기준 주 → 마지막 15주 + 예측 2주"""
    rows = _timeline(30, 4)

    compact = select_window(rows, 15, 2)

    anchors = [row for row in compact if row.is_anchor]
    tail = [row for row in compact if not row.is_anchor]
    assert len(anchors) == 15
    assert anchors[-1].date == rows[29].date
    assert anchors[0].date == rows[15].date
    assert len(tail) == 2
    assert [row.forecast_value for row in tail] == [201.0, 202.0]


def test_select_window_defaults_match_config():
    rows = _timeline(30, 4)
    assert select_window(rows) == select_window(rows, 15, 2)


def test_select_window_fewer_anchors_than_window():
    rows = _timeline(5, 3)

    compact = select_window(rows, 15, 2)

    assert compact[0].date == rows[0].date
    assert len(compact) == 7


def test_select_window_counts_pending_as_anchor():
    rows = _timeline(3, 3, pending_count=2)

    compact = select_window(rows, 2, 1)

    assert [row.is_pending for row in compact] == [True, True, False]
    assert compact[-1].forecast_value == 201.0


def test_select_window_forecast_window_zero():
    rows = _timeline(10, 3)

    compact = select_window(rows, 4, 0)

    assert len(compact) == 4
    assert all(row.is_anchor for row in compact)


def test_select_window_includes_forecast_rows_inside_range():
    """구간 안에 있는 예측 전용 행도 포함"""
    days = weeks(date(2024, 1, 1), 4)
    rows = merge_timeline(
        [HistoryPoint(days[0], 1), HistoryPoint(days[2], 2)],
        [],
        [ForecastPoint(days[1], 1, 5), ForecastPoint(days[3], 2, 6)],
    )

    compact = select_window(rows, 2, 0)

    assert [row.date for row in compact] == days[:3]


def test_select_window_no_anchors_returns_all_rows():
    rows = merge_timeline([], [], [ForecastPoint(date(2024, 1, 1), 1, 3)])
    assert select_window(rows, 15, 2) == rows


def test_select_window_empty_input():
    assert select_window([], 15, 2) == []


def test_select_window_never_empty_for_nonempty_rows():
    for anchors, forecasts in [(0, 1), (1, 0), (1, 5), (20, 0)]:
        rows = _timeline(anchors, forecasts)
        if rows:
            assert select_window(rows, 3, 0)


def test_select_window_returns_new_list():
    rows = _timeline(3, 1)
    compact = select_window(rows, 15, 2)
    assert compact is not rows
    compact.clear()
    assert len(rows) == 4


def test_select_window_skips_tail_rows_without_forecast():
    days = weeks(date(2024, 1, 1), 4)
    rows = [
        TimelineRow(date=days[0], actual_value=1, has_history=True),
        TimelineRow(date=days[1], fill_value=2),
        TimelineRow(date=days[2], forecast_value=3, has_forecast=True),
        TimelineRow(date=days[3], forecast_value=4, has_forecast=True),
    ]

    compact = select_window(rows, 1, 1)

    assert [row.date for row in compact] == [days[0], days[2]]


@pytest.mark.parametrize(
    "history_window, forecast_window",
    [(0, 2), (-1, 2), (15, -1), (1.5, 2), (True, 2), ("15", 2)],
)
def test_select_window_invalid_params(history_window, forecast_window):
    with pytest.raises(ValidationError):
        select_window(_timeline(3, 1), history_window, forecast_window)


def test_select_window_rejects_unsorted_rows():
    rows = _timeline(3, 0)
    with pytest.raises(TimelineError):
        select_window(list(reversed(rows)), 15, 2)


def test_select_window_rejects_duplicate_dates():
    day = date(2024, 1, 1)
    rows = [TimelineRow(date=day, has_history=True), TimelineRow(date=day, has_history=True)]
    with pytest.raises(TimelineError):
        select_window(rows, 15, 2)


def test_build_chart_rows_full_and_compact():
    start = date(2023, 1, 2)
    response = ForecastResponse(
        district_id="bangkok_bang_rak",
        cut_date=start + timedelta(weeks=19),
        history=tuple(
            HistoryPoint(start + timedelta(weeks=i), float(i)) for i in range(20)
        ),
        forecast=(
            ForecastPoint(start + timedelta(weeks=20), 1, 21.0),
            ForecastPoint(start + timedelta(weeks=21), 2, 22.0),
            ForecastPoint(start + timedelta(weeks=22), 3, 23.0),
        ),
    )

    chart_rows = build_chart_rows(response, history_window=15, forecast_window=2)

    assert len(chart_rows.all_rows) == 23
    assert len(chart_rows.compact_rows) == 17
    assert chart_rows.for_mode("full") is chart_rows.all_rows
    assert chart_rows.for_mode("compact") is chart_rows.compact_rows
