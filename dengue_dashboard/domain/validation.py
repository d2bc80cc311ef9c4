"""
입력값 검증 로직

표시 구간 파라미터, 예측 기간, 수동 입력 표를 검증합니다.
Streamlit 의존성이 없는 순수한 도메인 로직으로 동작합니다.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Tuple

import pandas as pd

from .exceptions import ValidationError
from .models import ObservationEntry
from .normalization import to_numeric
from .weeks import iso_week_to_date

logger = logging.getLogger(__name__)

MANUAL_ENTRY_COLUMNS = ["iso_week", "cases"]


def validate_window_params(history_window: object, forecast_window: object) -> Tuple[int, int]:
    """
    간략 보기 구간 파라미터를 검증합니다.

    Args:
        history_window: 최근 기준 주 수 (1 이상)
        forecast_window: 덧붙일 예측 주 수 (0 이상)

    Returns:
        (history_window, forecast_window) 정수 튜플

    Raises:
        ValidationError: 정수가 아니거나 범위를 벗어난 경우
    """
    if isinstance(history_window, bool) or not isinstance(history_window, int):
        raise ValidationError(f"history_window는 정수여야 합니다: {history_window!r}")
    if isinstance(forecast_window, bool) or not isinstance(forecast_window, int):
        raise ValidationError(f"forecast_window는 정수여야 합니다: {forecast_window!r}")

    if history_window <= 0:
        raise ValidationError("최근 표시 주 수는 1 이상이어야 합니다.")
    if forecast_window < 0:
        raise ValidationError("예측 표시 주 수는 0 이상이어야 합니다.")

    return history_window, forecast_window


def validate_horizon(horizon: object, *, min_horizon: int, max_horizon: int) -> int:
    """예측 기간(주)이 허용 범위 안의 정수인지 확인합니다."""
    value = to_numeric(horizon)
    if value is None or int(value) != value:
        raise ValidationError(f"예측 기간은 정수여야 합니다: {horizon!r}")
    value = int(value)
    if not min_horizon <= value <= max_horizon:
        raise ValidationError(
            f"예측 기간은 {min_horizon}~{max_horizon}주 사이여야 합니다."
        )
    return value


def build_latest_override(
    iso_week: object, cases: object
) -> Optional[Tuple[date, float]]:
    """
    예측 요청에 덧붙일 "최신 주 실제값"을 만듭니다.

    주차와 환자 수가 모두 유효할 때만 (주 시작일, 환자 수)를 반환하고,
    하나라도 비어 있거나 잘못되면 None (요청에서 생략).
    """
    week_start = iso_week_to_date(iso_week)
    value = to_numeric(cases)
    if week_start is None or value is None:
        return None
    return week_start, value


def _manual_row_entry(iso_week: object, cases: object) -> Optional[ObservationEntry]:
    week_start = iso_week_to_date(iso_week)
    value = to_numeric(cases)
    if week_start is None or value is None:
        return None
    return ObservationEntry(week_start=week_start, cases=value)


def parse_manual_entries(frame: Optional[pd.DataFrame]) -> List[ObservationEntry]:
    """
    수동 입력 표(iso_week, cases)에서 전송 가능한 행만 추출합니다.

    주차와 환자 수가 모두 채워진 행만 포함하며, 미완성 행은 조용히 건너뜁니다.

    Args:
        frame: st.data_editor가 돌려준 데이터프레임

    Returns:
        ObservationEntry 목록 (입력 순서 유지)
    """
    if frame is None or frame.empty:
        return []

    missing = [col for col in MANUAL_ENTRY_COLUMNS if col not in frame.columns]
    if missing:
        raise ValidationError(
            "수동 입력 표에 필요한 컬럼이 없습니다: " + ", ".join(sorted(missing))
        )

    entries: List[ObservationEntry] = []
    for iso_week, cases in zip(frame["iso_week"], frame["cases"]):
        entry = _manual_row_entry(iso_week, cases)
        if entry is not None:
            entries.append(entry)
    return entries


def count_ready_entries(frame: Optional[pd.DataFrame]) -> int:
    """전송 가능한(주차 + 환자 수가 모두 유효한) 행 수."""
    return len(parse_manual_entries(frame))


def require_manual_entries(frame: Optional[pd.DataFrame]) -> List[ObservationEntry]:
    """
    전송 가능한 행을 반환하되, 하나도 없으면 ValidationError.
    """
    entries = parse_manual_entries(frame)
    if not entries:
        logger.info("Manual submit rejected: no complete rows")
        raise ValidationError("주차와 환자 수를 모두 입력한 행이 최소 1개 필요합니다.")
    return entries
