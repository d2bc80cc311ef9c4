"""주간 환자 수 예측 차트 렌더러.

build_forecast_figure(순수 함수)와 render_forecast_chart(Streamlit 출력)를 제공합니다.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from dengue_dashboard.core.config import CONFIG
from dengue_dashboard.domain.models import TimelineRow
from dengue_dashboard.planning.frames import timeline_frame

from .colors import (
    ACTUAL_LINE_COLOR,
    CONNECTOR_COLOR,
    FILL_LINE_COLOR,
    FORECAST_COLOR,
    actual_color,
    fill_color,
    fill_label,
    source_label,
)

# 범례 이름 (trace name)
TRACE_ACTUAL = "실제값"
TRACE_FILL_LINE = "채움값/대기"
TRACE_FILL_MARKERS = "채움값 마커"
TRACE_FORECAST = "예측값"
TRACE_CONNECTOR = "수동 입력 연결선"


def _nullable(series: pd.Series) -> List[Optional[float]]:
    """NaN을 None으로 바꾼 리스트 (Plotly가 빈칸으로 처리)."""
    return [None if pd.isna(v) else float(v) for v in series]


def _hover_text(frame: pd.DataFrame) -> List[str]:
    lines: List[str] = []
    for _, row in frame.iterrows():
        parts = [row["date"].strftime("%Y-%m-%d")]
        if pd.notna(row["actual_value"]):
            parts.append(f"실제값 ({source_label(row['actual_source'])}): {row['actual_value']:.1f}명")
        if pd.notna(row["fill_value"]):
            parts.append(f"{fill_label(row['fill_source'])}: {row['fill_value']:.1f}명")
        if pd.notna(row["forecast_value"]):
            parts.append(f"예측값: {row['forecast_value']:.1f}명")
        lines.append("<br>".join(parts))
    return lines


def build_forecast_figure(
    rows: Sequence[TimelineRow],
    *,
    title: str = "",
    height: Optional[int] = None,
) -> go.Figure:
    """
    타임라인 행으로 5개 채널의 라인 차트를 만듭니다.

    채널:
    - 실제값: 실선, 마커 색상은 observed/manual 구분
    - 채움값/대기: 점선 (수동 보정 지점과 그 다음 주는 선이 끊김)
    - 채움값 마커: 선 없이 출처별 색상 사각형
    - 예측값: 빨간 점선 + 마커
    - 수동 입력 연결선: 수동 보정값과 이웃 주를 잇는 초록 실선

    모든 채널은 None을 건너뛰고 선을 잇습니다 (connectgaps).
    """
    fig = go.Figure()
    fig.update_layout(title=title or None)

    frame = timeline_frame(rows)
    if frame.empty:
        return fig

    x = frame["date"].tolist()
    hover = _hover_text(frame)

    fig.add_trace(
        go.Scatter(
            x=x,
            y=_nullable(frame["actual_value"]),
            name=TRACE_ACTUAL,
            mode="lines+markers",
            line=dict(color=ACTUAL_LINE_COLOR, width=3),
            marker=dict(
                size=9,
                color=[actual_color(s) for s in frame["actual_source"]],
                line=dict(color="#FFFFFF", width=2),
            ),
            connectgaps=True,
            text=hover,
            hovertemplate="%{text}<extra></extra>",
        )
    )

    fig.add_trace(
        go.Scatter(
            x=x,
            y=_nullable(frame["fill_line_value"]),
            name=TRACE_FILL_LINE,
            mode="lines",
            line=dict(color=FILL_LINE_COLOR, width=2, dash="dash"),
            connectgaps=True,
            hoverinfo="skip",
        )
    )

    fig.add_trace(
        go.Scatter(
            x=x,
            y=_nullable(frame["fill_value"]),
            name=TRACE_FILL_MARKERS,
            mode="markers",
            marker=dict(
                symbol="square",
                size=9,
                color=[fill_color(s) for s in frame["fill_source"]],
                line=dict(color="#FFFFFF", width=1.5),
            ),
            showlegend=False,
            text=hover,
            hovertemplate="%{text}<extra></extra>",
        )
    )

    fig.add_trace(
        go.Scatter(
            x=x,
            y=_nullable(frame["forecast_value"]),
            name=TRACE_FORECAST,
            mode="lines+markers",
            line=dict(color=FORECAST_COLOR, width=3, dash="dash"),
            marker=dict(size=9, color=FORECAST_COLOR, line=dict(color="#FFFFFF", width=2)),
            connectgaps=True,
            text=hover,
            hovertemplate="%{text}<extra></extra>",
        )
    )

    fig.add_trace(
        go.Scatter(
            x=x,
            y=_nullable(frame["connector_value"]),
            name=TRACE_CONNECTOR,
            mode="lines",
            line=dict(color=CONNECTOR_COLOR, width=2.5),
            connectgaps=True,
            hoverinfo="skip",
        )
    )

    fig.update_layout(
        hovermode="closest",
        xaxis_title="주 시작일",
        yaxis_title="환자 수 (명)",
        legend=dict(
            orientation="h",
            x=0,
            xanchor="left",
            y=-0.2,
            yanchor="top",
            bgcolor="rgba(255,255,255,0.6)",
        ),
        margin=dict(l=20, r=20, t=40, b=80),
        height=height or CONFIG.chart.height,
    )
    return fig


def render_forecast_chart(rows: Sequence[TimelineRow], *, title: str = "") -> None:
    """타임라인 행을 Streamlit에 차트로 출력합니다."""
    if not rows:
        st.info("차트에 표시할 데이터가 없습니다.")
        return

    fig = build_forecast_figure(rows, title=title)
    st.plotly_chart(fig, use_container_width=True, config={"displaylogo": False})
