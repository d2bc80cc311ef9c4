"""
데이터 소스 계층

예측/저장 API 클라이언트, 예시 응답, 구 목록, 세션 상태를 제공합니다.
"""

from .client import ForecastApiClient, normalize_base_url
from .districts import districts_from_frame, load_districts
from .mock import build_mock_forecast
from .session import (
    ForecastState,
    ManualFeedback,
    ObservationsState,
    get_api_base_url,
    get_chart_mode,
    get_forecast_state,
    get_manual_feedback,
    get_observations_state,
    set_api_base_url,
    set_chart_mode,
    set_forecast_state,
    set_manual_feedback,
    set_observations_state,
    sync_selected_district,
)

__all__ = [
    # API
    "ForecastApiClient",
    "normalize_base_url",
    "build_mock_forecast",
    # 구 목록
    "districts_from_frame",
    "load_districts",
    # 세션 상태
    "ForecastState",
    "ObservationsState",
    "ManualFeedback",
    "get_api_base_url",
    "set_api_base_url",
    "sync_selected_district",
    "get_forecast_state",
    "set_forecast_state",
    "get_observations_state",
    "set_observations_state",
    "get_manual_feedback",
    "set_manual_feedback",
    "get_chart_mode",
    "set_chart_mode",
]
