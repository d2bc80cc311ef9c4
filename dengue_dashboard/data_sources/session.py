"""
세션 상태 관리

이 모듈은 Streamlit 세션 상태에 화면 상태(API URL, 선택한 구,
마지막 예측 응답, 차트 보기 모드, 수동 입력 피드백)를 보관합니다.
차트 행은 저장하지 않고 매 렌더링마다 응답으로부터 다시 계산합니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import streamlit as st

from dengue_dashboard.core.config import CONFIG
from dengue_dashboard.domain.models import ForecastResponse, ManualObservation

logger = logging.getLogger(__name__)

API_URL_SESSION_KEY = "api_base_url"
DISTRICT_SESSION_KEY = "_selected_district_id"
FORECAST_SESSION_KEY = "forecast_state"
OBSERVATIONS_SESSION_KEY = "observations_state"
CHART_MODE_SESSION_KEY = "chart_mode"
MANUAL_FEEDBACK_SESSION_KEY = "manual_feedback"
MANUAL_EDITOR_VERSION_KEY = "_manual_editor_version"

CHART_MODES = ("compact", "full")


@dataclass
class ForecastState:
    """마지막 예측 요청 결과 (응답 또는 에러 메시지)."""

    data: Optional[ForecastResponse] = None
    error: Optional[str] = None
    source: Optional[str] = None  # "api" | "mock"


@dataclass
class ObservationsState:
    """수동 입력 기록 조회 결과."""

    records: List[ManualObservation] = field(default_factory=list)
    error: Optional[str] = None
    loaded: bool = False


@dataclass
class ManualFeedback:
    """수동 입력 저장 결과 메시지."""

    message: Optional[str] = None
    error: Optional[str] = None


# ============================================================
# API URL
# ============================================================

def get_api_base_url() -> str:
    """저장된 API URL. 없으면 설정(환경변수) 기본값."""
    value = st.session_state.get(API_URL_SESSION_KEY)
    if value is None:
        return CONFIG.api.base_url
    return str(value)


def set_api_base_url(url: str) -> bool:
    """
    API URL을 저장합니다.

    값이 바뀌면 수동 입력 기록을 미조회 상태로 돌려
    다음 렌더링에서 새 URL로 다시 불러오게 합니다.

    Returns:
        URL이 바뀌었으면 True
    """
    new_url = (url or "").strip()
    if new_url == get_api_base_url():
        return False

    st.session_state[API_URL_SESSION_KEY] = new_url
    st.session_state[OBSERVATIONS_SESSION_KEY] = ObservationsState()
    logger.info("API base URL updated")
    return True


# ============================================================
# 구 전환
# ============================================================

def sync_selected_district(district_id: Optional[str]) -> bool:
    """
    선택한 구가 바뀌었으면 구별 화면 상태를 초기화합니다.

    초기화 대상: 예측 결과, 수동 입력 기록, 입력 피드백, 입력 표,
    차트 보기 모드(간략 보기로 복귀)

    Returns:
        구가 바뀌어 초기화했으면 True
    """
    previous = st.session_state.get(DISTRICT_SESSION_KEY)
    if previous == district_id:
        return False

    st.session_state[DISTRICT_SESSION_KEY] = district_id
    st.session_state[FORECAST_SESSION_KEY] = ForecastState()
    st.session_state[OBSERVATIONS_SESSION_KEY] = ObservationsState()
    st.session_state[MANUAL_FEEDBACK_SESSION_KEY] = ManualFeedback()
    st.session_state[CHART_MODE_SESSION_KEY] = "compact"
    reset_manual_editor()
    logger.debug(f"District changed: {previous} -> {district_id}")
    return True


# ============================================================
# 구별 상태 접근자
# ============================================================

def get_forecast_state() -> ForecastState:
    state = st.session_state.get(FORECAST_SESSION_KEY)
    if isinstance(state, ForecastState):
        return state
    state = ForecastState()
    st.session_state[FORECAST_SESSION_KEY] = state
    return state


def set_forecast_state(state: ForecastState) -> None:
    st.session_state[FORECAST_SESSION_KEY] = state


def get_observations_state() -> ObservationsState:
    state = st.session_state.get(OBSERVATIONS_SESSION_KEY)
    if isinstance(state, ObservationsState):
        return state
    state = ObservationsState()
    st.session_state[OBSERVATIONS_SESSION_KEY] = state
    return state


def set_observations_state(state: ObservationsState) -> None:
    st.session_state[OBSERVATIONS_SESSION_KEY] = state


def get_manual_feedback() -> ManualFeedback:
    feedback = st.session_state.get(MANUAL_FEEDBACK_SESSION_KEY)
    if isinstance(feedback, ManualFeedback):
        return feedback
    return ManualFeedback()


def set_manual_feedback(*, message: Optional[str] = None, error: Optional[str] = None) -> None:
    st.session_state[MANUAL_FEEDBACK_SESSION_KEY] = ManualFeedback(message=message, error=error)


def get_chart_mode() -> str:
    mode = st.session_state.get(CHART_MODE_SESSION_KEY)
    return mode if mode in CHART_MODES else "compact"


def set_chart_mode(mode: str) -> None:
    st.session_state[CHART_MODE_SESSION_KEY] = mode if mode in CHART_MODES else "compact"


# ============================================================
# 수동 입력 표
# ============================================================

def manual_editor_key() -> str:
    """st.data_editor 위젯 키. 버전을 올리면 입력 표가 비워집니다."""
    version = int(st.session_state.get(MANUAL_EDITOR_VERSION_KEY, 0))
    return f"manual_entries_{version}"


def reset_manual_editor() -> None:
    version = int(st.session_state.get(MANUAL_EDITOR_VERSION_KEY, 0))
    st.session_state[MANUAL_EDITOR_VERSION_KEY] = version + 1
