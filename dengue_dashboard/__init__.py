"""
뎅기 예측 대시보드 패키지

구(district)별 주간 환자 수 시계열과 예측 API 결과를
하나의 연속 차트로 보여주는 Streamlit 대시보드입니다.
주요 구성:
- 도메인 모델과 API 페이로드 정규화 (domain)
- 타임라인 병합 및 표시 구간 선택 (planning)
- 예측/관측 API 클라이언트 (data_sources)
- 차트/테이블 렌더링 (ui)
"""

from __future__ import annotations

__version__ = "1.0.0"
