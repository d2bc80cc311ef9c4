"""
도메인 계층 예외 정의

이 모듈은 뎅기 예측 대시보드의 도메인/데이터 계층에서 발생할 수 있는
예외를 정의합니다. UI 계층은 이 예외들을 잡아서
사용자 친화적인 에러 메시지로 변환합니다.
"""

from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """
    도메인 계층의 기본 예외 클래스.

    모든 도메인 예외는 이 클래스를 상속합니다.
    """

    pass


class ValidationError(DomainError):
    """
    입력값 검증 실패 시 발생하는 예외.

    예: 표시 구간 길이가 0 이하, 수동 입력 행이 하나도 완성되지 않음 등
    """

    pass


class ConfigurationError(DomainError):
    """
    필수 설정이 없을 때 발생하는 예외.

    예: API URL이 설정되지 않은 상태에서 요청을 보내려는 경우
    """

    pass


class DataLoadError(DomainError):
    """
    API 호출 실패 시 발생하는 예외.

    네트워크 오류나 2xx가 아닌 응답 상태를 나타냅니다.

    Attributes:
        status_code: HTTP 응답 코드 (네트워크 오류면 None)
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResponseFormatError(DataLoadError):
    """
    API 응답 형식이 잘못된 경우 발생하는 예외.

    JSON이 아니거나, content-type이 application/json이 아니거나,
    필드 구조가 계약과 다를 때 사용합니다. 이 경우 병합은 시도하지 않습니다.
    """

    pass


class TimelineError(DomainError):
    """
    타임라인 병합/구간 선택 실패 시 발생하는 예외.
    """

    pass
