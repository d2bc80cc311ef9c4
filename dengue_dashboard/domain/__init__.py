"""
도메인 계층 퍼블릭 API

이 모듈은 도메인 계층의 주요 클래스와 함수를 재수출하여
일관된 퍼블릭 API를 제공합니다.
"""
from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    DataLoadError,
    DomainError,
    ResponseFormatError,
    TimelineError,
    ValidationError,
)
from .models import (
    ChartRows,
    District,
    ForecastPoint,
    ForecastResponse,
    HistoryPoint,
    ManualObservation,
    ObservationEntry,
    PendingPoint,
    TimelineRow,
)
from .normalization import (
    parse_forecast_response,
    parse_observation_records,
    sort_observations_desc,
    to_date,
    to_numeric,
)
from .validation import (
    build_latest_override,
    count_ready_entries,
    parse_manual_entries,
    require_manual_entries,
    validate_horizon,
    validate_window_params,
)
from .weeks import date_to_iso_week, iso_week_to_date

__all__ = [
    # 예외
    "DomainError",
    "ValidationError",
    "ConfigurationError",
    "DataLoadError",
    "ResponseFormatError",
    "TimelineError",
    # 모델
    "HistoryPoint",
    "PendingPoint",
    "ForecastPoint",
    "ForecastResponse",
    "ManualObservation",
    "ObservationEntry",
    "District",
    "TimelineRow",
    "ChartRows",
    # 정규화
    "to_numeric",
    "to_date",
    "parse_forecast_response",
    "parse_observation_records",
    "sort_observations_desc",
    # 검증
    "validate_window_params",
    "validate_horizon",
    "build_latest_override",
    "parse_manual_entries",
    "count_ready_entries",
    "require_manual_entries",
    # 주차
    "iso_week_to_date",
    "date_to_iso_week",
]
