"""
예측 차트 및 테이블 렌더링 테스트
"""
from __future__ import annotations

import math
from datetime import date

import pytest

from dengue_dashboard.data_sources.mock import build_mock_forecast
from dengue_dashboard.domain.models import (
    ForecastPoint,
    HistoryPoint,
    ManualObservation,
    PendingPoint,
)
from dengue_dashboard.planning.frames import TIMELINE_COLUMNS, timeline_frame
from dengue_dashboard.planning.timeline import merge_timeline
from dengue_dashboard.ui import tables
from dengue_dashboard.ui.charts import forecast_chart
from dengue_dashboard.ui.charts.colors import ACTUAL_COLORS, FILL_COLORS
from dengue_dashboard.ui.charts.forecast_chart import (
    TRACE_ACTUAL,
    TRACE_CONNECTOR,
    TRACE_FILL_LINE,
    TRACE_FILL_MARKERS,
    TRACE_FORECAST,
    build_forecast_figure,
)


def _capture_plot(monkeypatch):
    captured = {}

    def fake_plotly_chart(fig, *_, **__):
        captured["fig"] = fig

    monkeypatch.setattr(forecast_chart.st, "plotly_chart", fake_plotly_chart)
    monkeypatch.setattr(forecast_chart.st, "info", lambda *args, **kwargs: captured.setdefault("info", args))

    return captured


def _sample_rows():
    return merge_timeline(
        [
            HistoryPoint(date(2024, 1, 1), 3, "observed"),
            HistoryPoint(date(2024, 1, 8), 6, "manual"),
            HistoryPoint(date(2024, 1, 15), 4, "synthetic"),
        ],
        [PendingPoint(date(2024, 1, 22), 5)],
        [ForecastPoint(date(2024, 1, 29), 1, 7), ForecastPoint(date(2024, 2, 5), 2, 8)],
    )


# ============================================================
# 데이터프레임 변환
# ============================================================

def test_timeline_frame_columns_and_gaps():
    frame = timeline_frame(_sample_rows())

    assert list(frame.columns) == TIMELINE_COLUMNS
    assert str(frame["date"].dtype).startswith("datetime64")
    assert math.isnan(frame.loc[0, "forecast_value"])
    assert frame.loc[1, "connector_value"] == 6


def test_timeline_frame_empty():
    frame = timeline_frame([])
    assert frame.empty
    assert list(frame.columns) == TIMELINE_COLUMNS


# ============================================================
# 차트
# ============================================================

def test_build_forecast_figure_traces():
    fig = build_forecast_figure(_sample_rows(), title="demo")

    names = [trace.name for trace in fig.data]
    assert names == [TRACE_ACTUAL, TRACE_FILL_LINE, TRACE_FILL_MARKERS, TRACE_FORECAST, TRACE_CONNECTOR]

    actual, fill_line, fill_markers, forecast, connector = fig.data
    assert list(actual.y) == [3.0, 6.0, None, None, None, None]
    assert list(fill_markers.y) == [None, None, 4.0, 5.0, None, None]
    # 수동 입력 다음 주(synthetic)는 점선이 끊김
    assert list(fill_line.y) == [None, None, None, 5.0, None, None]
    assert list(forecast.y) == [None, None, None, None, 7.0, 8.0]
    assert list(connector.y) == [3.0, 6.0, 4.0, None, None, None]
    assert actual.connectgaps and forecast.connectgaps and connector.connectgaps
    assert list(actual.marker.color[:2]) == [ACTUAL_COLORS["observed"], ACTUAL_COLORS["manual"]]
    assert fill_markers.marker.color[3] == FILL_COLORS["pending"]


def test_build_forecast_figure_empty_rows():
    fig = build_forecast_figure([])
    assert len(fig.data) == 0


def test_render_forecast_chart_uses_plotly(monkeypatch):
    captured = _capture_plot(monkeypatch)

    forecast_chart.render_forecast_chart(_sample_rows())

    assert "fig" in captured
    assert len(captured["fig"].data) == 5


def test_render_forecast_chart_empty_shows_info(monkeypatch):
    captured = _capture_plot(monkeypatch)

    forecast_chart.render_forecast_chart([])

    assert "fig" not in captured
    assert "info" in captured


# ============================================================
# 테이블
# ============================================================

def test_format_cases():
    assert tables.format_cases(12) == "12.0명"
    assert tables.format_cases(1234.0, digits=0) == "1,234명"
    assert tables.format_cases(None) == "-"
    assert tables.format_cases(float("nan")) == "-"


def test_forecast_table_frame():
    frame = tables.forecast_table_frame(build_mock_forecast("demo").forecast)

    assert list(frame.columns) == ["주 시작일", "예측값", "실제값", "예측 구간"]
    assert frame.iloc[0].tolist() == ["2024-02-12", "9.0명", "-", "+1주"]
    assert tables.forecast_table_frame(()).empty


def test_observations_frame_newest_first():
    records = [
        ManualObservation("d1", date(2024, 1, 8), 4, "2024-01-09T10:30:00"),
        ManualObservation("d1", date(2024, 1, 29), 12),
    ]

    frame = tables.observations_frame(records)

    assert frame["ISO 주차"].tolist() == ["2024-W05", "2024-W02"]
    assert frame["저장 시각"].tolist() == ["-", "2024-01-09 10:30"]
    assert tables.latest_observation(records).week_start == date(2024, 1, 29)
    assert tables.latest_observation([]) is None


def test_render_observation_table_empty(monkeypatch):
    messages = []
    monkeypatch.setattr(tables.st, "info", lambda msg, **_: messages.append(msg))
    monkeypatch.setattr(tables.st, "dataframe", lambda *a, **k: pytest.fail("should not render"))

    tables.render_observation_table([])

    assert messages
