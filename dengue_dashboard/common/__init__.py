"""공통 유틸리티 모듈."""

from .performance import RequestTimer

__all__ = ["RequestTimer"]
