"""
도메인 예외 → UI 에러 메시지 어댑터

이 모듈은 도메인/데이터 계층에서 발생하는 예외를 잡아서
Streamlit 사용자 친화적인 에러 메시지로 변환합니다.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator

import streamlit as st

from dengue_dashboard.domain.exceptions import (
    ConfigurationError,
    DataLoadError,
    ResponseFormatError,
    TimelineError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_message(exc: Exception) -> str:
    """
    예외를 화면에 보여줄 한 줄 메시지로 변환합니다.

    예측 결과 영역처럼 에러를 세션 상태에 보관했다가
    다시 그려야 하는 곳에서 사용합니다.
    """
    if isinstance(exc, ConfigurationError):
        return f"설정 필요: {exc}"
    if isinstance(exc, ResponseFormatError):
        return f"API 응답 형식 오류: {exc}"
    if isinstance(exc, DataLoadError):
        return f"데이터 로드 실패: {exc}"
    if isinstance(exc, ValidationError):
        return f"입력값 확인 필요: {exc}"
    if isinstance(exc, TimelineError):
        return f"타임라인 생성 실패: {exc}"
    return f"예상치 못한 오류가 발생했습니다: {type(exc).__name__}: {exc}"


@contextmanager
def handle_domain_errors() -> Generator[None, None, None]:
    """
    도메인 예외를 잡아서 Streamlit 에러 메시지로 변환하는 컨텍스트 매니저.

    Examples:
        >>> with handle_domain_errors():
        ...     rows = build_chart_rows(response)

    Notes:
        - ValidationError / ConfigurationError: 노란색 경고
        - DataLoadError / ResponseFormatError / TimelineError: 빨간색 에러
        - 그 외 예외: 상세 정보와 함께 표시
    """
    try:
        yield

    except (ValidationError, ConfigurationError) as e:
        st.warning(f"⚠️ {error_message(e)}")

    except (DataLoadError, TimelineError) as e:
        st.error(f"❌ {error_message(e)}")

    except Exception as e:
        logger.exception("Unexpected error in dashboard")
        st.error(f"❌ {error_message(e)}")
        st.exception(e)
