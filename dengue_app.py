"""
구별 뎅기열 주간 예측 대시보드 메인 엔트리 포인트

실행: streamlit run dengue_app.py

- 사이드바: API URL 설정, 구 선택
- 본문: 예측 요청/요약/차트, 실제 환자 수 수동 입력
"""

from __future__ import annotations

import logging

import streamlit as st

# 로깅 설정
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

from dengue_dashboard.core.config import CONFIG
from dengue_dashboard.data_sources import load_districts
from dengue_dashboard.ui import render_detail_panel, render_sidebar
from dengue_dashboard.ui.adapters import handle_domain_errors


def main() -> None:
    st.set_page_config(page_title="뎅기열 주간 예측", page_icon="🦟", layout="wide")
    st.title("🦟 구별 뎅기열 주간 예측 대시보드")

    # ========================================
    # 1단계: 구 목록 로드
    # ========================================
    districts = []
    with handle_domain_errors():
        districts = load_districts(CONFIG.ui.districts_csv)
    logger.debug(f"Loaded {len(districts)} districts")

    # ========================================
    # 2단계: 사이드바 + 상세 패널
    # ========================================
    district = render_sidebar(districts)
    render_detail_panel(district)


if __name__ == "__main__":
    main()
