"""Configuration and constants for the dengue forecast dashboard.

차트 표시 구간, 예측 요청 범위, API 접속 정보 등 전역 설정을 제공합니다.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ============================================================
# 차트 설정
# ============================================================

@dataclass(frozen=True)
class ChartConfig:
    """예측 차트 표시 관련 설정"""

    # 간략 보기에서 보여줄 최근 기준 주(history/pending) 수
    history_window: int = 15

    # 간략 보기에서 마지막 기준 주 이후로 덧붙일 예측 주 수
    forecast_window: int = 2

    # 차트 높이 (픽셀)
    height: int = 420


# ============================================================
# 예측 요청 설정
# ============================================================

@dataclass(frozen=True)
class ForecastConfig:
    """예측 API 요청 파라미터 설정"""

    # 기본 예측 기간 (주)
    default_horizon: int = 2

    # 허용 예측 기간 범위 (주)
    min_horizon: int = 1
    max_horizon: int = 8


# ============================================================
# API 설정
# ============================================================

@dataclass(frozen=True)
class ApiConfig:
    """예측/저장 API 접속 설정"""

    # API 기본 URL (사이드바에서 변경 가능)
    base_url: str = field(
        default_factory=lambda: os.getenv("DENGUE_API_BASE_URL", "").strip()
    )

    # 요청 타임아웃 (초)
    timeout_s: float = field(
        default_factory=lambda: _env_float("DENGUE_API_TIMEOUT", 30.0)
    )

    # 이 시간을 넘긴 요청은 WARNING으로 로깅 (초)
    slow_request_s: float = 5.0


# ============================================================
# UI 설정
# ============================================================

@dataclass(frozen=True)
class UIConfig:
    """UI 표시 관련 설정"""

    # 구 목록 CSV 경로 (district_id_txt_clean, province, lat, lon)
    districts_csv: str = field(
        default_factory=lambda: os.getenv("DENGUE_DISTRICTS_CSV", "").strip()
    )

    # 수동 입력 표 최대 행 수
    max_manual_rows: int = 20

    # 테이블 기본 높이 (픽셀)
    table_height_forecast: int = 220
    table_height_observations: int = 300


@dataclass(frozen=True)
class DashboardConfig:
    """대시보드 전역 설정"""

    chart: ChartConfig = field(default_factory=ChartConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    ui: UIConfig = field(default_factory=UIConfig)


# ============================================================
# 전역 설정 인스턴스
# ============================================================

# 전역 설정 객체 (불변)
CONFIG = DashboardConfig()
