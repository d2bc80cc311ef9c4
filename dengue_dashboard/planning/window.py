"""
간략 보기(compact window) 구간 선택

병합된 타임라인에서 최근 기준 주(history/pending) N개와
그 직후의 예측 주 최대 M개를 골라 기본 차트 구간을 만듭니다.
전체 타임라인은 "전체 보기"용으로 그대로 유지됩니다.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..core.config import CONFIG
from ..domain.exceptions import TimelineError
from ..domain.models import ChartRows, ForecastResponse, TimelineRow
from ..domain.validation import validate_window_params
from .timeline import merge_timeline

logger = logging.getLogger(__name__)


def _ensure_sorted(rows: Sequence[TimelineRow]) -> None:
    for prev, curr in zip(rows, rows[1:]):
        if curr.date <= prev.date:
            raise TimelineError(
                f"타임라인 행이 날짜순이 아니거나 중복되었습니다: {prev.date} → {curr.date}"
            )


def select_window(
    rows: Sequence[TimelineRow],
    history_window: Optional[int] = None,
    forecast_window: Optional[int] = None,
) -> List[TimelineRow]:
    """
    간략 보기용 행을 선택합니다.

    처리 순서:
    1. 기준 행(has_history 또는 is_pending)만 추림. 없으면 전체 반환
    2. 마지막 기준 주와, 뒤에서 history_window번째 기준 주(구간 시작)를 구함
    3. 구간 [시작, 마지막 기준 주]에 들어가는 모든 행 (예측 전용 행 포함)
    4. 마지막 기준 주 이후 예측값이 있는 행을 최대 forecast_window개 덧붙임
    5. 결과가 비면 전체 행 반환 (빈 차트는 그리지 않음)

    Args:
        rows: merge_timeline 결과 (날짜 오름차순)
        history_window: 최근 기준 주 수 (기본값: CONFIG.chart.history_window)
        forecast_window: 예측 꼬리 주 수 (기본값: CONFIG.chart.forecast_window)

    Returns:
        선택된 행 목록 (새 리스트, 행 객체는 공유)

    Raises:
        ValidationError: 구간 파라미터가 범위를 벗어난 경우
        TimelineError: 입력 행이 날짜순이 아닌 경우

    Examples:
        >>> compact = select_window(rows, 15, 2)
        >>> len([r for r in compact if r.is_anchor]) <= 15
        True
    """
    if history_window is None:
        history_window = CONFIG.chart.history_window
    if forecast_window is None:
        forecast_window = CONFIG.chart.forecast_window
    history_window, forecast_window = validate_window_params(history_window, forecast_window)

    all_rows = list(rows)
    _ensure_sorted(all_rows)

    # ========================================
    # 1단계: 기준 행 추출
    # ========================================
    anchors = [row for row in all_rows if row.is_anchor]
    if not anchors:
        return all_rows

    # ========================================
    # 2단계: 구간 경계 계산
    # ========================================
    last_anchor_date = anchors[-1].date
    window_start = anchors[max(0, len(anchors) - history_window)].date

    # ========================================
    # 3단계: 구간 내 행 + 예측 꼬리
    # ========================================
    compact_base = [row for row in all_rows if window_start <= row.date <= last_anchor_date]

    forecast_tail: List[TimelineRow] = []
    for row in all_rows:
        if len(forecast_tail) >= forecast_window:
            break
        if row.date > last_anchor_date and row.forecast_value is not None:
            forecast_tail.append(row)

    compact = compact_base + forecast_tail
    logger.debug(
        "Compact window %s..%s: %s base rows + %s forecast rows",
        window_start,
        last_anchor_date,
        len(compact_base),
        len(forecast_tail),
    )
    return compact if compact else all_rows


def build_chart_rows(
    response: ForecastResponse,
    *,
    history_window: Optional[int] = None,
    forecast_window: Optional[int] = None,
) -> ChartRows:
    """
    예측 응답 하나로부터 전체/간략 보기 행을 한 번에 만듭니다.

    응답이 바뀌거나 구간 크기가 바뀔 때마다 처음부터 다시 계산합니다.
    """
    all_rows = merge_timeline(response.history, response.pending_weeks, response.forecast)
    compact_rows = select_window(all_rows, history_window, forecast_window)
    return ChartRows(all_rows=all_rows, compact_rows=compact_rows)
