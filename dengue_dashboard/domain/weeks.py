"""
ISO 주차 변환 헬퍼

수동 입력 화면은 "2024-W05" 형식의 ISO 주차를 받고,
API는 주 시작일(월요일, YYYY-MM-DD)을 사용합니다.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

import pandas as pd

_ISO_WEEK_RE = re.compile(r"^\s*(\d{4})-W(\d{1,2})\s*$", re.IGNORECASE)


def iso_week_to_date(value: object) -> Optional[date]:
    """
    ISO 주차 문자열을 그 주의 월요일 날짜로 변환합니다.

    Args:
        value: "YYYY-Www" 형식 문자열

    Returns:
        주 시작일. 형식이 틀리거나 존재하지 않는 주차면 None.

    Examples:
        >>> iso_week_to_date("2024-W05")
        datetime.date(2024, 1, 29)
        >>> iso_week_to_date("2024-W60") is None
        True
    """
    if not isinstance(value, str):
        return None
    match = _ISO_WEEK_RE.match(value)
    if not match:
        return None

    year, week = int(match.group(1)), int(match.group(2))
    try:
        return date.fromisocalendar(year, week, 1)
    except ValueError:
        return None


def date_to_iso_week(value: object) -> str:
    """
    날짜를 "YYYY-Www" 형식의 ISO 주차로 변환합니다.

    해석할 수 없는 값은 문자열로 그대로 돌려줍니다.

    Examples:
        >>> date_to_iso_week(date(2024, 1, 1))
        '2024-W01'
    """
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return "" if value is None else str(value)
    iso_year, iso_week, _ = parsed.date().isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def format_display_date(value: Optional[date]) -> str:
    """날짜를 "2024-01-29" 형식으로 표시합니다. 값이 없으면 "-"."""
    if value is None:
        return "-"
    return value.isoformat()


def format_display_datetime(value: object) -> str:
    """저장 시각(ISO 문자열)을 "2024-01-29 14:05" 형식으로 표시합니다."""
    if value is None or value == "":
        return "-"
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return str(value)
    return parsed.strftime("%Y-%m-%d %H:%M")
