"""High level orchestration for merging case-count sources into one timeline."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from ..domain.models import (
    ACTUAL_SOURCES,
    ForecastPoint,
    HistoryPoint,
    PendingPoint,
    TimelineRow,
)
from ..domain.normalization import to_numeric

logger = logging.getLogger(__name__)


class TimelineMerger:
    """Collects history, pending and forecast points into one row per date.

    Points are written into a date-keyed mapping in the fixed order
    history -> pending -> forecast, so for a single date the last
    conflicting write under that order wins.
    """

    def __init__(self) -> None:
        self._rows: Dict[date, TimelineRow] = {}

    def _row(self, day: date) -> TimelineRow:
        row = self._rows.get(day)
        if row is None:
            row = TimelineRow(date=day)
            self._rows[day] = row
        return row

    def add_history(self, points: Iterable[HistoryPoint]) -> None:
        for point in points:
            row = self._row(point.date)
            row.has_history = True
            if point.source in ACTUAL_SOURCES:
                row.actual_value = point.value
                row.actual_source = point.source
            else:
                row.fill_value = point.value
                row.fill_line_value = point.value
                row.fill_source = point.source

    def add_pending(self, points: Iterable[PendingPoint]) -> None:
        for point in points:
            row = self._row(point.date)
            row.fill_value = point.predicted_value
            row.fill_line_value = point.predicted_value
            row.fill_source = "pending"
            row.is_pending = True

    def add_forecast(self, points: Iterable[ForecastPoint]) -> None:
        for point in points:
            row = self._row(point.date)
            row.has_forecast = True
            row.forecast_value = point.predicted_value
            # observed/manual history always takes priority over a forecast's actual
            actual = to_numeric(point.actual_value)
            if row.actual_value is None and actual is not None:
                row.actual_value = actual
                row.actual_source = "observed"

    def rows(self) -> List[TimelineRow]:
        """Return the collected rows sorted by calendar date."""

        return sorted(self._rows.values(), key=lambda row: row.date)


def _claim_neighbor(neighbor: Optional[TimelineRow], *, suppress_fill_line: bool) -> None:
    if neighbor is None or neighbor.connector_value is not None:
        return
    value = neighbor.best_value
    if value is None:
        return
    neighbor.connector_value = value
    if suppress_fill_line and neighbor.fill_line_value is not None:
        neighbor.fill_line_value = None


def link_manual_connectors(rows: List[TimelineRow]) -> List[TimelineRow]:
    """Bridge every manual correction to its direct neighbours, in place.

    ``rows`` must already be sorted by date. A manual row carries its own
    value as connector and drops its dashed fill line; its predecessor and
    successor receive their best available value unless an earlier manual
    row already claimed them. Only the successor loses its dashed fill line.
    """

    for idx, row in enumerate(rows):
        if row.actual_source != "manual" or row.actual_value is None:
            continue

        row.connector_value = row.actual_value
        row.fill_line_value = None

        predecessor = rows[idx - 1] if idx > 0 else None
        successor = rows[idx + 1] if idx + 1 < len(rows) else None
        _claim_neighbor(predecessor, suppress_fill_line=False)
        _claim_neighbor(successor, suppress_fill_line=True)

    return rows


def merge_timeline(
    history: Iterable[HistoryPoint],
    pending: Iterable[PendingPoint],
    forecast: Iterable[ForecastPoint],
) -> List[TimelineRow]:
    """Merge the three point collections into one date-ordered timeline.

    Returns a freshly allocated list with exactly one row per distinct
    date; the inputs are never modified.
    """

    merger = TimelineMerger()
    merger.add_history(history)
    merger.add_pending(pending)
    merger.add_forecast(forecast)

    rows = link_manual_connectors(merger.rows())
    logger.debug("Merged timeline into %s rows", len(rows))
    return rows
