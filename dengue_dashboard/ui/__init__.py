"""
UI 레이어의 공개 API

이 모듈은 Streamlit 기반 UI 컴포넌트를 재수출합니다.
차트, 요약/테이블, 화면 패널, 어댑터를 포함합니다.
"""

from .adapters import error_message, handle_domain_errors
from .charts import build_forecast_figure, render_forecast_chart
from .panels import render_detail_panel, render_sidebar
from .tables import (
    forecast_table_frame,
    observations_frame,
    render_forecast_summary,
    render_forecast_table,
    render_observation_table,
)

__all__ = (
    # Charts
    "build_forecast_figure",
    "render_forecast_chart",
    # Tables
    "forecast_table_frame",
    "observations_frame",
    "render_forecast_summary",
    "render_forecast_table",
    "render_observation_table",
    # Panels
    "render_sidebar",
    "render_detail_panel",
    # Adapters
    "error_message",
    "handle_domain_errors",
)
