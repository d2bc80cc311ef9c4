"""
대시보드 화면 구성 모듈

사이드바(API URL, 구 선택)와 구별 상세 패널(예측 요청, 차트,
수동 입력)을 렌더링합니다. 화면 상태는 세션 상태에 보관하고,
차트 행은 매 렌더링마다 build_chart_rows로 다시 계산합니다.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Tuple

import pandas as pd
import streamlit as st

from dengue_dashboard.core.config import CONFIG
from dengue_dashboard.data_sources.client import ForecastApiClient
from dengue_dashboard.data_sources.mock import build_mock_forecast
from dengue_dashboard.data_sources.session import (
    CHART_MODES,
    ForecastState,
    ObservationsState,
    get_api_base_url,
    get_chart_mode,
    get_forecast_state,
    get_manual_feedback,
    get_observations_state,
    manual_editor_key,
    reset_manual_editor,
    set_api_base_url,
    set_chart_mode,
    set_forecast_state,
    set_manual_feedback,
    set_observations_state,
    sync_selected_district,
)
from dengue_dashboard.domain.exceptions import DomainError
from dengue_dashboard.domain.models import District
from dengue_dashboard.domain.validation import (
    build_latest_override,
    count_ready_entries,
    require_manual_entries,
    validate_horizon,
)
from dengue_dashboard.domain.weeks import date_to_iso_week, format_display_date, format_display_datetime
from dengue_dashboard.planning.window import build_chart_rows
from dengue_dashboard.ui.adapters import error_message, handle_domain_errors
from dengue_dashboard.ui.charts import render_forecast_chart
from dengue_dashboard.ui.tables import (
    format_cases,
    latest_observation,
    render_forecast_summary,
    render_forecast_table,
    render_observation_table,
)

logger = logging.getLogger(__name__)

CHART_MODE_LABELS = {
    "compact": f"최근 {CONFIG.chart.history_window} + {CONFIG.chart.forecast_window}주",
    "full": "전체 보기",
}


# ============================================================
# API 호출 (세션 상태 갱신)
# ============================================================

def fetch_forecast(
    district_id: str,
    *,
    horizon: int,
    override: Optional[Tuple[date, float]] = None,
) -> ForecastState:
    """
    예측 API를 한 번 호출하고 결과를 세션 상태에 저장합니다.

    실패하면 이전 결과를 지우고 에러 메시지만 남깁니다.
    """
    try:
        client = ForecastApiClient(get_api_base_url())
        latest_week, latest_cases = override if override else (None, None)
        response = client.predict(
            district_id,
            horizon=horizon,
            latest_week_start=latest_week,
            latest_cases=latest_cases,
        )
        state = ForecastState(data=response, source="api")
    except DomainError as exc:
        logger.warning(f"Forecast fetch failed for {district_id}: {exc}")
        state = ForecastState(error=error_message(exc))

    set_forecast_state(state)
    return state


def load_mock_forecast(district_id: str) -> ForecastState:
    state = ForecastState(data=build_mock_forecast(district_id), source="mock")
    set_forecast_state(state)
    return state


def fetch_observations(district_id: str) -> ObservationsState:
    """수동 입력 기록을 조회해 세션 상태에 저장합니다."""
    try:
        client = ForecastApiClient(get_api_base_url())
        state = ObservationsState(records=client.list_observations(district_id), loaded=True)
    except DomainError as exc:
        logger.warning(f"Observation fetch failed for {district_id}: {exc}")
        state = ObservationsState(error=error_message(exc), loaded=True)

    set_observations_state(state)
    return state


def submit_manual_entries(
    district_id: str,
    frame: Optional[pd.DataFrame],
    *,
    horizon: int,
    override: Optional[Tuple[date, float]] = None,
) -> bool:
    """
    수동 입력을 저장하고, 성공하면 기록 목록과 예측을 다시 불러옵니다.

    Returns:
        저장 성공 여부
    """
    try:
        entries = require_manual_entries(frame)
        client = ForecastApiClient(get_api_base_url())
        client.submit_observations(district_id, entries)
    except DomainError as exc:
        set_manual_feedback(error=error_message(exc))
        return False

    set_manual_feedback(message=f"{len(entries)}건을 저장했습니다.")
    reset_manual_editor()
    fetch_observations(district_id)
    fetch_forecast(district_id, horizon=horizon, override=override)
    return True


# ============================================================
# 사이드바
# ============================================================

def render_sidebar(districts: Sequence[District]) -> Optional[District]:
    """
    API URL 설정과 구 선택을 사이드바에 렌더링합니다.

    Returns:
        선택된 구. 선택이 없으면 None.
    """
    with st.sidebar:
        st.header("API 설정")
        current_url = get_api_base_url()
        url_input = st.text_input(
            "API URL",
            value=current_url,
            placeholder="https://xxxx.ngrok-free.app",
        )
        if st.button("저장", use_container_width=True):
            set_api_base_url(url_input)
            current_url = url_input.strip()
        if current_url:
            st.success("API 연결 설정됨")
        else:
            st.info("API URL을 입력하면 예측을 요청할 수 있습니다.")

        st.divider()
        st.header("구 선택")
        if districts:
            labels = {d.district_id: d for d in districts}
            selected_id = st.selectbox(
                "구",
                options=list(labels.keys()),
                index=None,
                format_func=lambda key: f"{key} ({labels[key].province})"
                if labels[key].province
                else key,
                placeholder="구를 선택하세요",
            )
            return labels.get(selected_id) if selected_id else None

        typed = st.text_input("구 ID (district_id_txt_clean)").strip()
        return District(district_id=typed) if typed else None


# ============================================================
# 상세 패널
# ============================================================

def _render_forecast_controls(district: District) -> Tuple[int, Optional[Tuple[date, float]]]:
    cols = st.columns([1, 1, 1])
    horizon_raw = cols[0].number_input(
        "예측 기간 (주)",
        min_value=CONFIG.forecast.min_horizon,
        max_value=CONFIG.forecast.max_horizon,
        value=CONFIG.forecast.default_horizon,
        step=1,
    )
    latest_week = cols[1].text_input("최신 주 (선택, YYYY-Www)", placeholder="2024-W05")
    latest_cases = cols[2].text_input("최신 주 환자 수 (선택)")

    horizon = CONFIG.forecast.default_horizon
    with handle_domain_errors():
        horizon = validate_horizon(
            horizon_raw,
            min_horizon=CONFIG.forecast.min_horizon,
            max_horizon=CONFIG.forecast.max_horizon,
        )

    override = build_latest_override(latest_week, latest_cases)
    if (latest_week.strip() or latest_cases.strip()) and override is None:
        st.caption("최신 주 값이 완전하지 않아 요청에서 제외됩니다.")

    buttons = st.columns([1, 1, 2])
    if buttons[0].button("예측 요청", type="primary", use_container_width=True):
        with st.spinner("예측을 불러오는 중..."):
            fetch_forecast(district.district_id, horizon=horizon, override=override)
    if buttons[1].button("예시 데이터", use_container_width=True):
        load_mock_forecast(district.district_id)

    return horizon, override


def _render_forecast_result() -> None:
    state = get_forecast_state()
    if state.error:
        st.error(state.error)
        return
    if state.data is None:
        st.info("'예측 요청' 버튼을 눌러 예측 결과를 확인하세요.")
        return

    response = state.data
    if state.source == "mock":
        st.caption("예시 데이터로 표시 중입니다.")
    render_forecast_summary(response)

    mode = st.radio(
        "차트 보기",
        options=list(CHART_MODES),
        index=list(CHART_MODES).index(get_chart_mode()),
        format_func=lambda key: CHART_MODE_LABELS[key],
        horizontal=True,
    )
    set_chart_mode(mode)
    st.caption(
        f"간략 보기는 최근 {CONFIG.chart.history_window}주와 다음 "
        f"{CONFIG.chart.forecast_window}주 예측을, 전체 보기는 모든 주를 보여줍니다."
    )

    with handle_domain_errors():
        chart_rows = build_chart_rows(
            response,
            history_window=CONFIG.chart.history_window,
            forecast_window=CONFIG.chart.forecast_window,
        )
        render_forecast_chart(chart_rows.for_mode(mode))

    render_forecast_table(response)


def _manual_editor_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "iso_week": pd.Series([""], dtype="object"),
            "cases": pd.Series([None], dtype="float64"),
        }
    )


def _render_manual_section(
    district: District, *, horizon: int, override: Optional[Tuple[date, float]]
) -> None:
    st.subheader("실제 환자 수 수동 입력")
    st.caption(
        "데이터베이스에 아직 없는 주간 실제 환자 수를 입력하세요. "
        "저장하면 즉시 예측 계산에 반영됩니다."
    )

    observations = get_observations_state()
    if not observations.loaded:
        fetch_observations(district.district_id)
        observations = get_observations_state()

    last = latest_observation(observations.records)
    cols = st.columns(3)
    cols[0].metric(
        "마지막 입력 주",
        format_display_date(last.week_start) if last else "-",
        help=f"저장 시각 {format_display_datetime(last.created_at)}" if last else None,
    )

    edited = st.data_editor(
        _manual_editor_frame(),
        key=manual_editor_key(),
        num_rows="dynamic",
        use_container_width=True,
        hide_index=True,
        column_config={
            "iso_week": st.column_config.TextColumn("ISO 주차 (YYYY-Www)"),
            "cases": st.column_config.NumberColumn("환자 수", min_value=0, step=1),
        },
    )
    if len(edited) > CONFIG.ui.max_manual_rows:
        st.warning(f"한 번에 최대 {CONFIG.ui.max_manual_rows}행까지 저장할 수 있습니다.")
        edited = edited.head(CONFIG.ui.max_manual_rows)

    ready = count_ready_entries(edited)
    cols[1].metric("저장 가능한 행", f"{ready}행")
    cols[2].metric("저장된 기록", f"{len(observations.records)}건")

    if st.button("저장", type="primary", disabled=ready == 0, key="submit_manual"):
        with st.spinner("저장 중..."):
            submit_manual_entries(
                district.district_id, edited, horizon=horizon, override=override
            )
        observations = get_observations_state()

    feedback = get_manual_feedback()
    if feedback.message:
        st.success(f"✅ {feedback.message}")
    if feedback.error:
        st.warning(f"⚠️ {feedback.error}")

    header = st.columns([3, 1])
    header[0].markdown("**저장된 수동 입력 기록**")
    if header[1].button("목록 새로고침", use_container_width=True):
        observations = fetch_observations(district.district_id)

    if observations.error:
        st.error(observations.error)
        return
    render_observation_table(observations.records)


def render_detail_panel(district: Optional[District]) -> None:
    """선택한 구의 예측/수동 입력 화면을 렌더링합니다."""
    if district is None:
        st.info("사이드바에서 구를 선택하면 향후 주간 예측을 확인할 수 있습니다.")
        return

    sync_selected_district(district.district_id)

    st.subheader(district.district_id)
    location = []
    if district.province:
        location.append(district.province)
    if district.lat is not None and district.lon is not None:
        location.append(f"📍 {district.lat:.3f}, {district.lon:.3f}")
    if location:
        st.caption(" · ".join(location))

    horizon, override = _render_forecast_controls(district)
    if override:
        st.caption(
            f"요청에 포함: {date_to_iso_week(override[0])} = {format_cases(override[1], digits=0)}"
        )
    _render_forecast_result()

    st.divider()
    _render_manual_section(district, horizon=horizon, override=override)
