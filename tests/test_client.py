"""
예측/저장 API 클라이언트 테스트

requests.Session 대신 가짜 세션을 주입해 요청 본문과 에러 변환을 검증합니다.
"""
from __future__ import annotations

import json
from datetime import date

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from dengue_dashboard.data_sources import client as client_module
from dengue_dashboard.data_sources.client import ForecastApiClient, normalize_base_url
from dengue_dashboard.domain.exceptions import (
    ConfigurationError,
    DataLoadError,
    ResponseFormatError,
)
from dengue_dashboard.domain.models import ObservationEntry


class FakeResponse:
    def __init__(self, status_code=200, body=None, *, text=None, content_type="application/json", reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self.ok = 200 <= status_code < 300
        self.text = text if text is not None else ("" if body is None else json.dumps(body))
        self.headers = CaseInsensitiveDict({"Content-Type": content_type})

    def json(self):
        return json.loads(self.text)


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


PREDICT_BODY = {
    "cut_date": "2024-01-29",
    "history": [{"ds": "2024-01-29", "cases": 6}],
    "forecast": [
        {"ds": "2024-02-05", "h": 1, "prediction": 8},
        {"ds": "2024-02-12", "h": 2, "prediction": 9},
    ],
    "pending_weeks": [],
}


def _client(session):
    return ForecastApiClient("https://api.example.org/", timeout_s=3, session=session)


# ============================================================
# URL 정리
# ============================================================

def test_normalize_base_url():
    assert normalize_base_url(" https://api.example.org/ ") == "https://api.example.org"
    with pytest.raises(ConfigurationError):
        normalize_base_url("")
    with pytest.raises(ConfigurationError):
        normalize_base_url(None)


def test_client_requires_base_url():
    with pytest.raises(ConfigurationError):
        ForecastApiClient("   ", session=FakeSession())


def test_client_without_session_uses_module_request(monkeypatch):
    """세션을 주입하지 않으면 Session을 만들지 않고 requests.request로 보냄"""
    fake = FakeSession(FakeResponse(body=PREDICT_BODY))
    monkeypatch.setattr(client_module.requests, "request", fake.request)
    monkeypatch.setattr(
        client_module.requests,
        "Session",
        lambda *a, **k: pytest.fail("requests.Session should not be created"),
    )

    client = ForecastApiClient("https://api.example.org", timeout_s=3)
    response = client.predict("d1")

    assert client.session is None
    assert fake.calls[0]["url"] == "https://api.example.org/predict"
    assert len(response.forecast) == 2


# ============================================================
# /predict
# ============================================================

def test_predict_sends_body_and_parses_response():
    session = FakeSession(FakeResponse(body=PREDICT_BODY))

    response = _client(session).predict("bangkok_bang_rak", horizon=2)

    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://api.example.org/predict"
    assert call["json"] == {"district_id_txt_clean": "bangkok_bang_rak", "horizon": 2}
    assert call["timeout"] == 3.0
    assert len(response.forecast) == 2
    assert response.history[0].value == 6.0


def test_predict_includes_latest_override():
    session = FakeSession(FakeResponse(body=PREDICT_BODY))

    _client(session).predict(
        "d1", horizon=3, latest_week_start=date(2024, 1, 29), latest_cases=12.0
    )

    assert session.calls[0]["json"] == {
        "district_id_txt_clean": "d1",
        "horizon": 3,
        "latest_week_start": "2024-01-29",
        "latest_cases": 12.0,
    }


def test_predict_omits_partial_override():
    session = FakeSession(FakeResponse(body=PREDICT_BODY))
    _client(session).predict("d1", latest_week_start=date(2024, 1, 29))
    assert "latest_week_start" not in session.calls[0]["json"]


def test_predict_http_error_carries_status_code():
    session = FakeSession(
        FakeResponse(500, text="internal failure", content_type="text/plain", reason="Server Error")
    )

    with pytest.raises(DataLoadError) as excinfo:
        _client(session).predict("d1")

    assert excinfo.value.status_code == 500
    assert "500" in str(excinfo.value)
    assert not isinstance(excinfo.value, ResponseFormatError)


def test_predict_network_error():
    session = FakeSession(error=requests.ConnectionError("refused"))
    with pytest.raises(DataLoadError) as excinfo:
        _client(session).predict("d1")
    assert excinfo.value.status_code is None
    assert len(session.calls) == 1


def test_predict_rejects_non_json_content_type():
    session = FakeSession(FakeResponse(text="<html>ngrok</html>", content_type="text/html"))
    with pytest.raises(ResponseFormatError):
        _client(session).predict("d1")


def test_predict_rejects_invalid_json_body():
    session = FakeSession(FakeResponse(text="{not json"))
    with pytest.raises(ResponseFormatError):
        _client(session).predict("d1")


def test_predict_rejects_wrong_shape():
    session = FakeSession(FakeResponse(body=[1, 2, 3]))
    with pytest.raises(ResponseFormatError):
        _client(session).predict("d1")


# ============================================================
# /observations
# ============================================================

def test_list_observations_quotes_district_id():
    body = {"records": [{"week_start": "2024-01-08", "cases": 4, "created_at": "2024-01-09"}]}
    session = FakeSession(FakeResponse(body=body))

    records = _client(session).list_observations("chiang mai/1")

    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "https://api.example.org/observations/chiang%20mai%2F1"
    assert records[0].district_id == "chiang mai/1"
    assert records[0].cases == 4.0


def test_submit_observations_payload():
    session = FakeSession(FakeResponse(body={"inserted": 2}))
    entries = [
        ObservationEntry(week_start=date(2024, 1, 29), cases=12.0),
        ObservationEntry(week_start=date(2024, 2, 5), cases=3.0),
    ]

    ack = _client(session).submit_observations("d1", entries)

    assert ack == {"inserted": 2}
    assert session.calls[0]["url"] == "https://api.example.org/observations"
    assert session.calls[0]["json"] == {
        "district_id_txt_clean": "d1",
        "entries": [
            {"week_start": "2024-01-29", "cases": 12.0},
            {"week_start": "2024-02-05", "cases": 3.0},
        ],
    }


def test_submit_observations_accepts_empty_body():
    session = FakeSession(FakeResponse(text="", content_type=""))
    assert _client(session).submit_observations("d1", []) == {}


def test_submit_observations_rejects_non_object_ack():
    session = FakeSession(FakeResponse(body=["ok"]))
    with pytest.raises(ResponseFormatError):
        _client(session).submit_observations("d1", [])
