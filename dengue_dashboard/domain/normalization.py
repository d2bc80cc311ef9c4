"""
API 페이로드 정규화 로직

이 모듈은 예측/관측 API의 JSON 응답을 도메인 모델로 변환합니다.
병합기(planning.timeline)는 여기서 검증된 타입만 받으므로,
수치가 잘못된 값(NaN, 무한대, 숫자가 아닌 문자열)은 이 경계에서
None으로 바꾸거나 항목째 제외합니다.

Streamlit 의존성이 없는 순수한 도메인 로직입니다.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from .exceptions import ResponseFormatError
from .models import (
    HISTORY_SOURCES,
    ForecastPoint,
    ForecastResponse,
    HistoryPoint,
    ManualObservation,
    PendingPoint,
)

logger = logging.getLogger(__name__)


# ============================================================
# 스칼라 변환 헬퍼
# ============================================================

def to_numeric(value: object) -> Optional[float]:
    """
    임의의 값을 유한한 float로 변환합니다. 변환할 수 없으면 None.

    숫자 문자열("12", " 3.5 ")은 숫자로 해석합니다.
    bool, 빈 문자열, NaN, 무한대는 모두 None입니다.

    Examples:
        >>> to_numeric("12")
        12.0
        >>> to_numeric(float("nan")) is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        parsed = pd.to_numeric(text, errors="coerce")
    elif isinstance(value, (int, float, np.number)):
        parsed = value
    else:
        return None

    try:
        number = float(parsed)
    except (TypeError, ValueError):
        return None

    if not np.isfinite(number):
        return None
    return number


def to_date(value: object) -> Optional[date]:
    """
    ISO 날짜 문자열("YYYY-MM-DD" 등)을 date로 변환합니다.

    date/Timestamp는 그대로 날짜 부분만 취하고,
    해석할 수 없는 값은 None을 반환합니다.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    parsed = pd.to_datetime(value.strip(), errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def _as_records(payload: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    """
    payload[key]를 레코드 목록으로 꺼냅니다.

    키가 없거나 null이면 빈 목록, 목록이 아니거나 항목이 객체가 아니면
    형식 오류로 처리합니다.
    """
    raw = payload.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ResponseFormatError(f"'{key}' 필드가 목록 형식이 아닙니다.")
    for item in raw:
        if not isinstance(item, Mapping):
            raise ResponseFormatError(f"'{key}' 항목 형식이 올바르지 않습니다.")
    return raw


# ============================================================
# /predict 응답 정규화
# ============================================================

def parse_history(records: Iterable[Mapping[str, Any]]) -> List[HistoryPoint]:
    """
    history 레코드 {ds, cases, source?}를 HistoryPoint 목록으로 변환합니다.

    source가 없으면 observed로 간주합니다.
    날짜나 환자 수가 잘못된 항목과 알 수 없는 source 항목은 제외합니다.
    """
    points: List[HistoryPoint] = []
    dropped = 0
    unknown_sources: List[str] = []
    for item in records:
        source = item.get("source") or "observed"
        if source not in HISTORY_SOURCES:
            unknown_sources.append(str(source))
            continue

        ds = to_date(item.get("ds"))
        cases = to_numeric(item.get("cases"))
        if ds is None or cases is None:
            dropped += 1
            continue
        points.append(HistoryPoint(date=ds, value=cases, source=source))

    if dropped:
        logger.warning(f"Dropped {dropped} history entries with invalid date or cases")
    if unknown_sources:
        logger.warning(
            f"Dropped {len(unknown_sources)} history entries with unknown source: "
            f"{sorted(set(unknown_sources))}"
        )
    return points


def parse_pending_weeks(records: Iterable[Mapping[str, Any]]) -> List[PendingPoint]:
    """pending_weeks 레코드 {ds, prediction}을 PendingPoint 목록으로 변환합니다."""
    points: List[PendingPoint] = []
    dropped = 0
    for item in records:
        ds = to_date(item.get("ds"))
        prediction = to_numeric(item.get("prediction"))
        if ds is None or prediction is None:
            dropped += 1
            continue
        points.append(PendingPoint(date=ds, predicted_value=prediction))

    if dropped:
        logger.warning(f"Dropped {dropped} pending entries with invalid date or prediction")
    return points


def parse_forecast(records: Iterable[Mapping[str, Any]]) -> List[ForecastPoint]:
    """
    forecast 레코드 {ds, h, prediction, actual?}를 ForecastPoint 목록으로 변환합니다.

    prediction이 잘못된 항목은 제외하고, actual이 잘못된 경우는 None으로 둡니다.
    h가 없거나 잘못된 경우 목록 내 순번(1부터)을 사용합니다.
    """
    points: List[ForecastPoint] = []
    dropped = 0
    for position, item in enumerate(records, start=1):
        ds = to_date(item.get("ds"))
        prediction = to_numeric(item.get("prediction"))
        if ds is None or prediction is None:
            dropped += 1
            continue

        horizon = to_numeric(item.get("h"))
        horizon_index = int(horizon) if horizon is not None and horizon >= 1 else position

        points.append(
            ForecastPoint(
                date=ds,
                horizon_index=horizon_index,
                predicted_value=prediction,
                actual_value=to_numeric(item.get("actual")),
            )
        )

    if dropped:
        logger.warning(f"Dropped {dropped} forecast entries with invalid date or prediction")
    return points


def parse_forecast_response(payload: object, *, district_id: str) -> ForecastResponse:
    """
    /predict JSON 응답을 ForecastResponse로 정규화합니다.

    Args:
        payload: response.json() 결과
        district_id: 요청한 구 식별자

    Returns:
        정규화된 ForecastResponse

    Raises:
        ResponseFormatError: 응답이 객체가 아니거나 목록 필드 형식이 잘못된 경우
    """
    if not isinstance(payload, Mapping):
        raise ResponseFormatError("예측 API 응답이 JSON 객체가 아닙니다.")

    history = parse_history(_as_records(payload, "history"))
    forecast = parse_forecast(_as_records(payload, "forecast"))
    pending = parse_pending_weeks(_as_records(payload, "pending_weeks"))

    logger.debug(
        "Parsed forecast response: %s history, %s pending, %s forecast",
        len(history),
        len(pending),
        len(forecast),
    )

    return ForecastResponse(
        district_id=district_id,
        cut_date=to_date(payload.get("cut_date")),
        history=tuple(history),
        forecast=tuple(forecast),
        pending_weeks=tuple(pending),
        data_available_until=to_date(payload.get("data_available_until")),
        generated_until=to_date(payload.get("generated_until")),
        current_week_start=to_date(payload.get("current_week_start")),
        forecast_start=to_date(payload.get("forecast_start")),
    )


# ============================================================
# /observations 응답 정규화
# ============================================================

def parse_observation_records(
    payload: object, *, district_id: str
) -> List[ManualObservation]:
    """
    /observations/{id} 응답 {records: [...]}를 ManualObservation 목록으로 변환합니다.

    records가 없으면 빈 목록입니다. 날짜나 환자 수가 잘못된 기록은 제외합니다.

    Raises:
        ResponseFormatError: 응답이 객체가 아니거나 records가 목록이 아닌 경우
    """
    if not isinstance(payload, Mapping):
        raise ResponseFormatError("관측 기록 API 응답이 JSON 객체가 아닙니다.")

    records: List[ManualObservation] = []
    dropped = 0
    for item in _as_records(payload, "records"):
        week_start = to_date(item.get("week_start"))
        cases = to_numeric(item.get("cases"))
        if week_start is None or cases is None:
            dropped += 1
            continue
        created_at = item.get("created_at")
        records.append(
            ManualObservation(
                district_id=str(item.get("district_id") or district_id),
                week_start=week_start,
                cases=cases,
                created_at=str(created_at) if created_at else None,
            )
        )

    if dropped:
        logger.warning(f"Dropped {dropped} observation records with invalid values")
    return records


def sort_observations_desc(records: Sequence[ManualObservation]) -> List[ManualObservation]:
    """최신 주가 먼저 오도록 수동 관측 기록을 정렬합니다."""
    return sorted(records, key=lambda record: record.week_start, reverse=True)
