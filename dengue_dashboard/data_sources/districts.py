"""
구 목록 로더

CSV(district_id_txt_clean, province, lat, lon)에서 선택 가능한 구 목록을 읽습니다.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd
import streamlit as st

from dengue_dashboard.domain.exceptions import DataLoadError
from dengue_dashboard.domain.models import District
from dengue_dashboard.domain.normalization import to_numeric

logger = logging.getLogger(__name__)

_COLUMN_ALIASES = {
    "district_id": "district_id_txt_clean",
    "district": "district_id_txt_clean",
    "latitude": "lat",
    "longitude": "lon",
}


def districts_from_frame(frame: pd.DataFrame) -> List[District]:
    """
    데이터프레임을 District 목록으로 변환합니다.

    id가 비어 있는 행과 중복 id는 제외하며, id 기준으로 정렬합니다.

    Raises:
        DataLoadError: district_id_txt_clean 컬럼이 없는 경우
    """
    df = frame.rename(columns={k: v for k, v in _COLUMN_ALIASES.items() if k in frame.columns})
    if "district_id_txt_clean" not in df.columns:
        raise DataLoadError("구 목록에 district_id_txt_clean 컬럼이 필요합니다.")

    df = df[df["district_id_txt_clean"].notna()].copy()
    df["district_id_txt_clean"] = df["district_id_txt_clean"].astype(str).str.strip()
    df = df[df["district_id_txt_clean"].ne("") & df["district_id_txt_clean"].ne("nan")]
    df = df.drop_duplicates(subset=["district_id_txt_clean"]).sort_values("district_id_txt_clean")

    districts: List[District] = []
    for _, row in df.iterrows():
        province = row.get("province")
        districts.append(
            District(
                district_id=row["district_id_txt_clean"],
                province="" if pd.isna(province) else str(province),
                lat=to_numeric(row.get("lat")),
                lon=to_numeric(row.get("lon")),
            )
        )
    return districts


@st.cache_data(ttl=3600)
def load_districts(path: Optional[Union[str, Path]]) -> List[District]:
    """
    CSV 파일에서 구 목록을 로드합니다. 경로가 없으면 빈 목록.

    Raises:
        DataLoadError: 파일을 읽을 수 없는 경우
    """
    if not path:
        return []
    try:
        frame = pd.read_csv(path)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        logger.error(f"Failed to read districts CSV {path}: {exc}")
        raise DataLoadError(f"구 목록 파일을 읽을 수 없습니다: {exc}") from exc

    districts = districts_from_frame(frame)
    logger.info(f"Loaded {len(districts)} districts from {path}")
    return districts
