"""핵심 설정 모듈."""

from .config import CONFIG, ApiConfig, ChartConfig, DashboardConfig, ForecastConfig, UIConfig

__all__ = [
    "CONFIG",
    "ApiConfig",
    "ChartConfig",
    "DashboardConfig",
    "ForecastConfig",
    "UIConfig",
]
