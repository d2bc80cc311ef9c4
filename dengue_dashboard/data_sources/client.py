"""
예측/저장 API 클라이언트

이 모듈은 원격 예측 API와 통신합니다.
- POST /predict: 구별 과거/대기/예측 시계열
- GET /observations/{district_id}: 수동 입력 기록 조회
- POST /observations: 수동 입력 저장

모든 요청은 한 번만 시도하며(재시도 없음), 실패는 도메인 예외로 올립니다.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import requests

from dengue_dashboard.common.performance import RequestTimer
from dengue_dashboard.core.config import CONFIG
from dengue_dashboard.domain.exceptions import (
    ConfigurationError,
    DataLoadError,
    ResponseFormatError,
)
from dengue_dashboard.domain.models import (
    ForecastResponse,
    ManualObservation,
    ObservationEntry,
)
from dengue_dashboard.domain.normalization import (
    parse_forecast_response,
    parse_observation_records,
)

logger = logging.getLogger(__name__)


def normalize_base_url(base_url: Optional[str]) -> str:
    """
    API 기본 URL을 정리합니다 (앞뒤 공백, 끝의 "/" 제거).

    Raises:
        ConfigurationError: URL이 비어 있는 경우
    """
    url = (base_url or "").strip().rstrip("/")
    if not url:
        raise ConfigurationError("API URL을 먼저 설정해 주세요.")
    return url


class ForecastApiClient:
    """
    예측/저장 API에 대한 얇은 requests 래퍼.

    Attributes:
        base_url: 끝의 "/"가 제거된 API 기본 URL
        timeout_s: 요청 타임아웃 (초)
        session: 주입된 requests.Session. 없으면 요청마다 requests.request 사용

    Examples:
        >>> client = ForecastApiClient("https://xxxx.ngrok-free.app")
        >>> response = client.predict("bangkok_bang_rak", horizon=2)
        >>> len(response.forecast)
        2
    """

    def __init__(
        self,
        base_url: Optional[str],
        *,
        timeout_s: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = normalize_base_url(base_url)
        self.timeout_s = CONFIG.api.timeout_s if timeout_s is None else float(timeout_s)
        self.session = session

    # ========================================
    # 공통 요청 처리
    # ========================================
    def _request(
        self,
        method: str,
        path: str,
        *,
        payload: Optional[Dict[str, Any]] = None,
        allow_empty: bool = False,
    ) -> Any:
        url = f"{self.base_url}{path}"
        # 세션이 없으면 요청 단위 연결 (커넥션 풀을 남기지 않음)
        send = self.session.request if self.session is not None else requests.request

        try:
            with RequestTimer(f"{method} {path}", slow_threshold_s=CONFIG.api.slow_request_s):
                response = send(
                    method,
                    url,
                    json=payload,
                    headers={"Accept": "application/json"},
                    timeout=self.timeout_s,
                )
        except requests.RequestException as exc:
            logger.error(f"Request to {url} failed: {exc}")
            raise DataLoadError(f"API에 연결할 수 없습니다: {exc}") from exc

        raw = response.text or ""
        if not response.ok:
            logger.error(f"{method} {path} returned {response.status_code}")
            raise DataLoadError(
                f"API error: {response.status_code} {response.reason or ''} - {raw[:120]}".strip(),
                status_code=response.status_code,
            )

        if allow_empty and not raw.strip():
            return {}

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type.lower():
            logger.error(f"{method} {path} returned non-JSON content-type: {content_type!r}")
            raise ResponseFormatError("API가 JSON이 아닌 데이터를 보냈습니다. API URL을 확인하세요.")

        try:
            return response.json()
        except ValueError as exc:
            raise ResponseFormatError("API 응답을 JSON으로 해석할 수 없습니다.") from exc

    # ========================================
    # 엔드포인트
    # ========================================
    def predict(
        self,
        district_id: str,
        *,
        horizon: int = 2,
        latest_week_start: Optional[date] = None,
        latest_cases: Optional[float] = None,
    ) -> ForecastResponse:
        """
        구별 예측을 요청합니다.

        latest_week_start와 latest_cases가 모두 있을 때만
        "최신 주 실제값"을 함께 보냅니다.
        """
        body: Dict[str, Any] = {"district_id_txt_clean": district_id, "horizon": int(horizon)}
        if latest_week_start is not None and latest_cases is not None:
            body["latest_week_start"] = latest_week_start.isoformat()
            body["latest_cases"] = latest_cases

        logger.info(f"Requesting forecast for {district_id} (horizon={horizon})")
        payload = self._request("POST", "/predict", payload=body)
        return parse_forecast_response(payload, district_id=district_id)

    def list_observations(self, district_id: str) -> List[ManualObservation]:
        """구의 수동 입력 기록을 조회합니다."""
        path = f"/observations/{quote(district_id, safe='')}"
        payload = self._request("GET", path)
        return parse_observation_records(payload, district_id=district_id)

    def submit_observations(
        self, district_id: str, entries: Sequence[ObservationEntry]
    ) -> Dict[str, Any]:
        """
        수동 입력을 저장합니다.

        Returns:
            API 확인 응답 (본문이 비어 있으면 빈 딕셔너리)
        """
        body = {
            "district_id_txt_clean": district_id,
            "entries": [entry.to_payload() for entry in entries],
        }
        logger.info(f"Submitting {len(entries)} manual observations for {district_id}")
        ack = self._request("POST", "/observations", payload=body, allow_empty=True)
        if not isinstance(ack, dict):
            raise ResponseFormatError("저장 API 응답이 JSON 객체가 아닙니다.")
        return ack
