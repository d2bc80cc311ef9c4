"""차트 렌더링 모듈."""

from .colors import ACTUAL_COLORS, FILL_COLORS, FILL_LABEL, SOURCE_LABEL
from .forecast_chart import build_forecast_figure, render_forecast_chart

__all__ = [
    "build_forecast_figure",
    "render_forecast_chart",
    "ACTUAL_COLORS",
    "FILL_COLORS",
    "FILL_LABEL",
    "SOURCE_LABEL",
]
