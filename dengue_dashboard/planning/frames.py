"""Tabular views of merged timeline rows for charts and tables."""

from __future__ import annotations

from dataclasses import asdict
from typing import Sequence

import pandas as pd

from ..domain.models import TimelineRow

TIMELINE_COLUMNS = [
    "date",
    "actual_value",
    "actual_source",
    "fill_value",
    "fill_line_value",
    "fill_source",
    "forecast_value",
    "has_history",
    "has_forecast",
    "is_pending",
    "connector_value",
]

VALUE_COLUMNS = [
    "actual_value",
    "fill_value",
    "fill_line_value",
    "forecast_value",
    "connector_value",
]


def timeline_frame(rows: Sequence[TimelineRow]) -> pd.DataFrame:
    """Return one DataFrame row per timeline row.

    ``date`` becomes datetime64 so Plotly renders a time axis; empty value
    channels stay as NaN, which Plotly treats as gaps.
    """

    if not rows:
        return pd.DataFrame(columns=TIMELINE_COLUMNS)

    frame = pd.DataFrame([asdict(row) for row in rows], columns=TIMELINE_COLUMNS)
    frame["date"] = pd.to_datetime(frame["date"])
    for col in VALUE_COLUMNS:
        frame[col] = pd.to_numeric(frame[col], errors="coerce")
    return frame
