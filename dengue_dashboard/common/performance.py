"""
요청 소요 시간 측정 유틸리티

API 호출처럼 느려질 수 있는 구간의 실행 시간을 로깅합니다.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

logger = logging.getLogger(__name__)


class RequestTimer:
    """
    코드 블록의 실행 시간을 측정하는 컨텍스트 매니저.

    실패하면 ERROR, slow_threshold_s를 넘기면 WARNING,
    그 외에는 INFO로 소요 시간을 남깁니다.

    Attributes:
        operation_name: 측정할 작업 이름
        slow_threshold_s: 느린 요청 기준 (초)
        elapsed: 경과 시간 (초)

    Examples:
        >>> with RequestTimer("POST /predict", slow_threshold_s=5.0):
        ...     response = session.post(url, json=body)
        INFO - POST /predict completed in 0.84s
    """

    def __init__(self, operation_name: str, *, slow_threshold_s: float = 5.0) -> None:
        self.operation_name = operation_name
        self.slow_threshold_s = slow_threshold_s
        self.elapsed: float = 0.0
        self._start: Optional[float] = None

    def __enter__(self) -> "RequestTimer":
        self._start = time.perf_counter()
        logger.debug(f"Starting: {self.operation_name}")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.elapsed = time.perf_counter() - (self._start or time.perf_counter())

        if exc_type is not None:
            logger.error(f"{self.operation_name} failed after {self.elapsed:.2f}s")
        elif self.elapsed >= self.slow_threshold_s:
            logger.warning(
                f"SLOW: {self.operation_name} took {self.elapsed:.2f}s "
                f"(threshold: {self.slow_threshold_s:.0f}s)"
            )
        else:
            logger.info(f"{self.operation_name} completed in {self.elapsed:.2f}s")
