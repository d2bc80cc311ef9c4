"""차트 색상 및 범례 라벨 모듈.

데이터 출처(observed/manual/synthetic/seasonal_clone/pending)별
색상과 한글 라벨을 한곳에서 관리합니다.
"""

from __future__ import annotations

from typing import Dict, Optional

# 실제값 마커 색상 (출처별)
ACTUAL_COLORS: Dict[str, str] = {
    "observed": "#2563EB",
    "manual": "#16A34A",
}

# 채움값 마커 색상 (출처별)
FILL_COLORS: Dict[str, str] = {
    "synthetic": "#F97316",
    "seasonal_clone": "#A855F7",
    "pending": "#FBBF24",
}

# 선 색상
ACTUAL_LINE_COLOR = "#2563EB"
FILL_LINE_COLOR = "#F97316"
FORECAST_COLOR = "#EF4444"
CONNECTOR_COLOR = "#16A34A"

SOURCE_LABEL: Dict[str, str] = {
    "observed": "기존 DB 실제값",
    "manual": "사용자 입력 실제값",
    "synthetic": "주간 보간값",
    "seasonal_clone": "전년도 복사값",
}

FILL_LABEL: Dict[str, str] = {
    "synthetic": "채움값 (synthetic)",
    "seasonal_clone": "전년도 복사",
    "pending": "실제값 대기 중 임시값",
}


def actual_color(source: Optional[str]) -> str:
    """실제값 출처에 해당하는 색상. 모르는 출처는 observed 색상."""
    return ACTUAL_COLORS.get(source or "observed", ACTUAL_COLORS["observed"])


def fill_color(source: Optional[str]) -> str:
    """채움값 출처에 해당하는 색상. 모르는 출처는 synthetic 색상."""
    return FILL_COLORS.get(source or "synthetic", FILL_COLORS["synthetic"])


def source_label(source: Optional[str]) -> str:
    return SOURCE_LABEL.get(source or "", "실제값")


def fill_label(source: Optional[str]) -> str:
    return FILL_LABEL.get(source or "synthetic", FILL_LABEL["synthetic"])
