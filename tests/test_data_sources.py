"""
예시 응답 및 구 목록 로더 테스트
"""
from __future__ import annotations

from datetime import date

import pandas as pd
import pytest

from dengue_dashboard.data_sources.districts import districts_from_frame, load_districts
from dengue_dashboard.data_sources.mock import build_mock_forecast
from dengue_dashboard.domain.exceptions import DataLoadError
from dengue_dashboard.planning.window import build_chart_rows


def test_mock_forecast_shape():
    response = build_mock_forecast("demo")

    assert response.district_id == "demo"
    assert [p.value for p in response.history] == [3, 5, 4, 7, 6, 8]
    assert response.history[0].date == date(2024, 1, 1)
    assert response.cut_date == date(2024, 2, 5)
    assert [(p.date, p.predicted_value) for p in response.forecast] == [
        (date(2024, 2, 12), 9.0),
        (date(2024, 2, 19), 11.0),
    ]
    assert response.forecast_start == date(2024, 2, 12)
    assert response.generated_until == date(2024, 2, 19)


def test_mock_forecast_renders_full_timeline():
    chart_rows = build_chart_rows(build_mock_forecast("demo"))
    assert len(chart_rows.all_rows) == 8
    assert chart_rows.compact_rows == chart_rows.all_rows


def test_districts_from_frame_cleans_and_sorts():
    frame = pd.DataFrame(
        {
            "district": ["  b_district ", "a_district", "", "a_district", None],
            "province": ["Bangkok", None, "X", "Dup", "Y"],
            "latitude": ["13.7", 18.8, 1, 2, 3],
            "longitude": [100.5, "bad", 1, 2, 3],
        }
    )

    districts = districts_from_frame(frame)

    assert [d.district_id for d in districts] == ["a_district", "b_district"]
    assert districts[0].province == ""
    assert districts[0].lon is None
    assert districts[1].province == "Bangkok"
    assert districts[1].lat == pytest.approx(13.7)


def test_districts_from_frame_requires_id_column():
    with pytest.raises(DataLoadError):
        districts_from_frame(pd.DataFrame({"name": ["x"]}))


def test_load_districts_from_csv(tmp_path):
    path = tmp_path / "districts.csv"
    path.write_text(
        "district_id_txt_clean,province,lat,lon\n"
        "bangkok_bang_rak,Bangkok,13.73,100.52\n"
        "chiang_mai_mueang,Chiang Mai,18.79,98.98\n",
        encoding="utf-8",
    )

    districts = load_districts(str(path))

    assert len(districts) == 2
    assert districts[0].district_id == "bangkok_bang_rak"


def test_load_districts_without_path():
    assert load_districts("") == []


def test_load_districts_missing_file(tmp_path):
    with pytest.raises(DataLoadError):
        load_districts(str(tmp_path / "missing.csv"))
