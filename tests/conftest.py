import os
import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def pytest_configure(config):
    """pytest 초기화 시점에 실행되어 테스트 수집 전에 환경을 준비합니다.

    이 훅은 테스트 모듈이 import되기 전에 실행되므로,
    config.py가 로드될 때 로컬 환경변수의 영향을 받지 않습니다.
    """
    for name in ("DENGUE_API_BASE_URL", "DENGUE_API_TIMEOUT", "DENGUE_DISTRICTS_CSV"):
        os.environ.pop(name, None)


@pytest.fixture
def session_state(monkeypatch):
    """st.session_state를 일반 딕셔너리로 교체합니다."""
    import streamlit as st

    state = {}
    monkeypatch.setattr(st, "session_state", state)
    return state


def weeks(start: date, count: int):
    """start부터 1주 간격의 날짜 목록."""
    return [start + timedelta(weeks=i) for i in range(count)]
