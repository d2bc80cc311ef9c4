"""Planning layer exports: timeline merge and chart window selection."""

from .frames import TIMELINE_COLUMNS, timeline_frame
from .timeline import TimelineMerger, link_manual_connectors, merge_timeline
from .window import build_chart_rows, select_window

__all__ = [
    "TimelineMerger",
    "merge_timeline",
    "link_manual_connectors",
    "select_window",
    "build_chart_rows",
    "timeline_frame",
    "TIMELINE_COLUMNS",
]
