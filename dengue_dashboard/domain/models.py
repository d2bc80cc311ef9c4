"""
도메인 모델: 뎅기 예측 대시보드의 핵심 데이터 구조

API 응답에서 정규화된 입력 모델(HistoryPoint, PendingPoint, ForecastPoint)은
불변(frozen) 데이터클래스로 구현되어 안전한 데이터 전달을 보장합니다.
병합 결과인 TimelineRow만은 커넥터 패스에서 제자리 갱신되므로 가변입니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal, Optional, Tuple

# ============================================================
# 소스 구분
# ============================================================

HistorySource = Literal["observed", "manual", "synthetic", "seasonal_clone"]
FillSource = Literal["synthetic", "seasonal_clone", "pending"]

HISTORY_SOURCES: Tuple[str, ...] = ("observed", "manual", "synthetic", "seasonal_clone")

# 실제값 채널로 들어가는 소스
ACTUAL_SOURCES: Tuple[str, ...] = ("observed", "manual")

# 채움값 채널로 들어가는 history 소스
FILL_HISTORY_SOURCES: Tuple[str, ...] = ("synthetic", "seasonal_clone")


# ============================================================
# 입력 모델
# ============================================================

@dataclass(frozen=True)
class HistoryPoint:
    """
    한 주의 환자 수와 그 출처.

    Attributes:
        date: 주 시작일
        value: 환자 수
        source: observed(기존 DB) / manual(사용자 입력) /
                synthetic(보간값) / seasonal_clone(전년도 복사)
    """

    date: date
    value: float
    source: HistorySource = "observed"


@dataclass(frozen=True)
class PendingPoint:
    """실제 데이터가 아직 도착하지 않은 주의 임시 예측값."""

    date: date
    predicted_value: float


@dataclass(frozen=True)
class ForecastPoint:
    """
    미래 주의 예측값.

    실제값이 뒤늦게 도착한 경우 actual_value가 함께 전달됩니다.
    """

    date: date
    horizon_index: int
    predicted_value: float
    actual_value: Optional[float] = None


@dataclass(frozen=True)
class ForecastResponse:
    """
    /predict 응답을 정규화한 결과.

    Attributes:
        district_id: 구 식별자
        cut_date: 모델 학습 기준일
        history: 과거 환자 수 (관측/수동/보간/전년 복사)
        forecast: 예측 주 목록
        pending_weeks: 실제값 대기 중인 주 목록
        data_available_until: 실제 데이터가 있는 마지막 주
        generated_until: pending + 예측을 포함한 마지막 주
        current_week_start: 기준(anchor) 주 시작일
        forecast_start: +1 주 시작일
    """

    district_id: str
    cut_date: Optional[date]
    history: Tuple[HistoryPoint, ...] = ()
    forecast: Tuple[ForecastPoint, ...] = ()
    pending_weeks: Tuple[PendingPoint, ...] = ()
    data_available_until: Optional[date] = None
    generated_until: Optional[date] = None
    current_week_start: Optional[date] = None
    forecast_start: Optional[date] = None


@dataclass(frozen=True)
class ManualObservation:
    """사용자가 저장한 주간 환자 수 기록."""

    district_id: str
    week_start: date
    cases: float
    created_at: Optional[str] = None


@dataclass(frozen=True)
class ObservationEntry:
    """/observations 에 전송할 한 주 분량의 수동 입력."""

    week_start: date
    cases: float

    def to_payload(self) -> dict[str, object]:
        return {"week_start": self.week_start.isoformat(), "cases": self.cases}


@dataclass(frozen=True)
class District:
    """대시보드에서 선택 가능한 구 정보."""

    district_id: str
    province: str = ""
    lat: Optional[float] = None
    lon: Optional[float] = None


# ============================================================
# 병합 결과 모델
# ============================================================

@dataclass
class TimelineRow:
    """
    병합된 타임라인의 한 행 (날짜당 정확히 하나).

    차트의 각 채널(actual/fill/fill_line/forecast/connector)은
    값이 없으면 None이며, 차트는 None을 건너뛰고 선을 잇습니다.

    Attributes:
        date: 주 시작일
        actual_value: observed/manual 값 (또는 예측 행에 붙은 실제값)
        actual_source: actual_value의 출처
        fill_value: synthetic/seasonal_clone/pending 값 (마커용)
        fill_line_value: 수동 보정 인접 구간을 제외한 채움값 (점선용)
        fill_source: fill_value의 출처
        forecast_value: 예측값
        has_history: history 항목 존재 여부
        has_forecast: forecast 항목 존재 여부
        is_pending: pending 주 여부
        connector_value: 수동 보정값을 이웃과 잇는 연결선 값
    """

    date: date
    actual_value: Optional[float] = None
    actual_source: Optional[HistorySource] = None
    fill_value: Optional[float] = None
    fill_line_value: Optional[float] = None
    fill_source: Optional[FillSource] = None
    forecast_value: Optional[float] = None
    has_history: bool = False
    has_forecast: bool = False
    is_pending: bool = False
    connector_value: Optional[float] = None

    @property
    def is_anchor(self) -> bool:
        """실제 또는 임시 데이터가 있는 주인지 (예측 전용 행이 아닌지)."""
        return self.has_history or self.is_pending

    @property
    def best_value(self) -> Optional[float]:
        """actual → fill → forecast 순서로 처음 존재하는 값."""
        for value in (self.actual_value, self.fill_value, self.forecast_value):
            if value is not None:
                return value
        return None


@dataclass(frozen=True)
class ChartRows:
    """
    차트 표시용 행 묶음.

    Attributes:
        all_rows: 전체 기간 행 ("전체 보기")
        compact_rows: 최근 기준 주 + 짧은 예측 꼬리 ("간략 보기")
    """

    all_rows: List[TimelineRow] = field(default_factory=list)
    compact_rows: List[TimelineRow] = field(default_factory=list)

    def for_mode(self, mode: str) -> List[TimelineRow]:
        return self.all_rows if mode == "full" else self.compact_rows
