"""
API 없이 화면을 확인하기 위한 예시 예측 응답
"""

from __future__ import annotations

from datetime import date, timedelta

from dengue_dashboard.domain.models import ForecastPoint, ForecastResponse, HistoryPoint

_MOCK_START = date(2024, 1, 1)
_MOCK_CASES = (3, 5, 4, 7, 6, 8)
_MOCK_FORECAST = (9, 11)


def build_mock_forecast(district_id: str) -> ForecastResponse:
    """
    관측 6주(2024-01-01 ~ 2024-02-05)와 예측 2주로 이루어진 예시 응답.
    """
    history = tuple(
        HistoryPoint(date=_MOCK_START + timedelta(weeks=i), value=float(cases), source="observed")
        for i, cases in enumerate(_MOCK_CASES)
    )
    last_observed = history[-1].date
    forecast = tuple(
        ForecastPoint(
            date=last_observed + timedelta(weeks=h),
            horizon_index=h,
            predicted_value=float(value),
        )
        for h, value in enumerate(_MOCK_FORECAST, start=1)
    )

    return ForecastResponse(
        district_id=district_id,
        cut_date=last_observed,
        history=history,
        forecast=forecast,
        pending_weeks=(),
        data_available_until=last_observed,
        generated_until=forecast[-1].date,
        current_week_start=last_observed,
        forecast_start=forecast[0].date,
    )
