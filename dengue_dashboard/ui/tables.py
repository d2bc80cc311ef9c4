"""
테이블/요약 렌더링 모듈

예측 요약 카드, 예측 주 테이블, 수동 입력 기록 테이블을 렌더링합니다.
표 데이터는 *_frame 함수에서 만들고, render_* 함수는 출력만 담당합니다.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import pandas as pd
import streamlit as st

from dengue_dashboard.core.config import CONFIG
from dengue_dashboard.domain.models import ForecastPoint, ForecastResponse, ManualObservation
from dengue_dashboard.domain.normalization import sort_observations_desc
from dengue_dashboard.domain.weeks import (
    date_to_iso_week,
    format_display_date,
    format_display_datetime,
)


def format_cases(value: Optional[float], *, digits: int = 1) -> str:
    """환자 수를 "12.0명" 형식으로 포맷팅합니다. 값이 없으면 "-"."""
    if value is None or pd.isna(value):
        return "-"
    return f"{float(value):,.{digits}f}명"


def forecast_table_frame(forecast: Sequence[ForecastPoint]) -> pd.DataFrame:
    """
    예측 주 목록을 표시용 데이터프레임으로 변환합니다.

    Returns:
        주 시작일, 예측값, 실제값, 예측 구간 컬럼을 가진 데이터프레임
    """
    columns = ["주 시작일", "예측값", "실제값", "예측 구간"]
    if not forecast:
        return pd.DataFrame(columns=columns)

    return pd.DataFrame(
        [
            {
                "주 시작일": format_display_date(point.date),
                "예측값": format_cases(point.predicted_value),
                "실제값": format_cases(point.actual_value),
                "예측 구간": f"+{point.horizon_index}주",
            }
            for point in forecast
        ],
        columns=columns,
    )


def observations_frame(records: Sequence[ManualObservation]) -> pd.DataFrame:
    """
    수동 입력 기록을 최신 주부터 표시용 데이터프레임으로 변환합니다.
    """
    columns = ["ISO 주차", "주 시작일", "환자 수", "저장 시각"]
    if not records:
        return pd.DataFrame(columns=columns)

    return pd.DataFrame(
        [
            {
                "ISO 주차": date_to_iso_week(record.week_start),
                "주 시작일": format_display_date(record.week_start),
                "환자 수": format_cases(record.cases, digits=0),
                "저장 시각": format_display_datetime(record.created_at),
            }
            for record in sort_observations_desc(records)
        ],
        columns=columns,
    )


def latest_observation(records: Sequence[ManualObservation]) -> Optional[ManualObservation]:
    """가장 최근 주의 수동 입력 기록."""
    ordered = sort_observations_desc(records)
    return ordered[0] if ordered else None


def render_forecast_summary(response: ForecastResponse) -> None:
    """기준 주, 예측 시작 주, 데이터 가용 기간, pending 주 수 요약."""
    cols = st.columns(4)
    cols[0].metric("기준 주 (Anchor)", format_display_date(response.current_week_start))
    cols[1].metric("예측 시작 주 (+1)", format_display_date(response.forecast_start))
    cols[2].metric("실제 데이터 마지막 주", format_display_date(response.data_available_until))
    cols[3].metric("pending 주", f"{len(response.pending_weeks)}주")
    st.caption(
        f"모델 학습 기준일: {format_display_date(response.cut_date)} · "
        f"pending + 예측 포함 마지막 주: {format_display_date(response.generated_until)}"
    )

    # +1 / +2 주 예측 카드
    head: List[ForecastPoint] = list(response.forecast[:2])
    if not head:
        return
    cards = st.columns(len(head))
    for col, point in zip(cards, head):
        delta = None
        if point.actual_value is not None:
            delta = f"실제값 {format_cases(point.actual_value, digits=0)}"
        col.metric(
            f"+{point.horizon_index}주 ({format_display_date(point.date)})",
            format_cases(point.predicted_value, digits=0),
            delta=delta,
            delta_color="off",
        )


def render_forecast_table(response: ForecastResponse) -> None:
    st.markdown("**예측 상세**")
    frame = forecast_table_frame(response.forecast)
    if frame.empty:
        st.info("예측 데이터가 없습니다.")
        return
    st.dataframe(
        frame,
        use_container_width=True,
        hide_index=True,
        height=CONFIG.ui.table_height_forecast,
    )


def render_observation_table(records: Sequence[ManualObservation]) -> None:
    frame = observations_frame(records)
    if frame.empty:
        st.info("아직 저장된 수동 입력 기록이 없습니다.")
        return
    st.dataframe(
        frame,
        use_container_width=True,
        hide_index=True,
        height=CONFIG.ui.table_height_observations,
    )
