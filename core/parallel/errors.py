"""
core/parallel/errors.py - 에러 분류 및 수집

병렬 실행 중 발생하는 예외를 ErrorCategory로 분류하고,
부수적인 API 호출 실패를 기본값으로 대체하면서 수집하는 유틸리티입니다.

주요 구성 요소:
- categorize_error / get_error_code: 예외 분류
- ErrorSeverity: 에러 심각도
- CollectedError / ErrorCollector: 스레드 세이프 에러 수집기
- try_or_default: 실패 시 기본값 반환 헬퍼

Example:
    collector = ErrorCollector("heroku")

    sizes = try_or_default(
        client.list_dyno_sizes,
        default=[],
        collector=collector,
        operation="list_dyno_sizes",
        severity=ErrorSeverity.WARNING,
    )

    for error in collector.errors:
        print(error.error_message)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

import requests

from core.exceptions import APICallError, is_access_denied, is_not_found, is_throttling

from .types import ErrorCategory

logger = logging.getLogger(__name__)

T = TypeVar("T")


def categorize_error(error: BaseException) -> ErrorCategory:
    """예외 객체를 분석하여 ErrorCategory로 분류

    HTTP 상태 코드가 있으면 상태 코드로, 없으면 예외 타입으로 분류합니다.

    Args:
        error: 분류할 예외

    Returns:
        에러 카테고리
    """
    if isinstance(error, Exception):
        if is_throttling(error):
            return ErrorCategory.THROTTLING
        if is_access_denied(error):
            return ErrorCategory.ACCESS_DENIED
        if is_not_found(error):
            return ErrorCategory.NOT_FOUND

    if isinstance(error, APICallError):
        if error.status_code is not None:
            if error.status_code >= 500:
                return ErrorCategory.SERVICE_ERROR
            if error.status_code in (400, 422):
                return ErrorCategory.INVALID_REQUEST
        if error.cause is not None:
            return categorize_error(error.cause)

    # 타임아웃은 ConnectionError보다 먼저 확인 (ConnectTimeout은 둘 다 상속)
    if isinstance(error, (requests.Timeout, TimeoutError)):
        return ErrorCategory.TIMEOUT
    if isinstance(error, (requests.ConnectionError, ConnectionError, OSError)):
        return ErrorCategory.NETWORK

    return ErrorCategory.UNKNOWN


def get_error_code(error: BaseException) -> str:
    """예외 객체에서 에러 코드 문자열 추출

    Heroku 에러 응답이면 error id (예: "not_found"),
    그 외에는 예외 클래스명을 반환합니다.
    """
    if isinstance(error, APICallError):
        if error.error_id:
            return error.error_id
        if error.status_code is not None:
            return f"HTTP{error.status_code}"
        if error.cause is not None:
            return error.cause.__class__.__name__
    return error.__class__.__name__


class ErrorSeverity(Enum):
    """에러 심각도 분류"""

    CRITICAL = "critical"  # 핵심 기능 실패
    WARNING = "warning"  # 부분 실패 - 계속 진행
    INFO = "info"
    DEBUG = "debug"


@dataclass
class CollectedError:
    """수집된 에러 상세 정보

    Attributes:
        scope: 에러가 발생한 범위 (조직, 앱 이름 등)
        service: 서비스 이름
        operation: API 작업 이름 (예: "list_dyno_sizes")
        error_code: 에러 코드
        error_message: 에러 메시지
        severity: 에러 심각도
        category: 에러 카테고리
    """

    scope: str
    service: str
    operation: str
    error_code: str
    error_message: str
    severity: ErrorSeverity
    category: ErrorCategory

    def __str__(self) -> str:
        loc = f"{self.scope}/" if self.scope else ""
        return f"[{self.severity.value.upper()}] {loc}{self.service}.{self.operation}: {self.error_code}"


class ErrorCollector:
    """스레드 세이프 에러 수집기"""

    def __init__(self, service: str):
        self.service = service
        self._errors: list[CollectedError] = []
        self._lock = threading.Lock()

    def collect(
        self,
        error: BaseException,
        operation: str,
        scope: str = "",
        severity: ErrorSeverity = ErrorSeverity.WARNING,
    ) -> CollectedError:
        """예외를 수집하고 로깅

        권한 없음(ACCESS_DENIED)은 심각도를 INFO로 다운그레이드합니다.
        """
        category = categorize_error(error)
        if category == ErrorCategory.ACCESS_DENIED:
            severity = ErrorSeverity.INFO

        collected = CollectedError(
            scope=scope,
            service=self.service,
            operation=operation,
            error_code=get_error_code(error),
            error_message=str(error),
            severity=severity,
            category=category,
        )

        with self._lock:
            self._errors.append(collected)

        log_msg = f"{collected}"
        if severity == ErrorSeverity.CRITICAL:
            logger.error(log_msg)
        elif severity == ErrorSeverity.WARNING:
            logger.warning(log_msg)
        elif severity == ErrorSeverity.INFO:
            logger.info(log_msg)
        else:
            logger.debug(log_msg)

        return collected

    @property
    def errors(self) -> list[CollectedError]:
        """수집된 모든 에러의 복사본"""
        with self._lock:
            return list(self._errors)


def try_or_default(
    func: Callable[[], T],
    default: T,
    collector: ErrorCollector | None = None,
    operation: str = "",
    scope: str = "",
    severity: ErrorSeverity = ErrorSeverity.DEBUG,
) -> T:
    """함수 실행, 실패 시 기본값 반환 + 에러 수집

    부수적인 API 호출(dyno 크기 조회 등)에서 실패해도 전체 로직을
    중단하지 않고 기본값으로 대체합니다.

    Args:
        func: 실행할 함수 (인자 없음)
        default: 실패 시 반환할 기본값
        collector: ErrorCollector 인스턴스 (None이면 로깅만)
        operation: API 작업 이름
        scope: 에러 범위
        severity: 에러 심각도 (기본: DEBUG)

    Returns:
        함수 실행 결과 또는 실패 시 default 값
    """
    try:
        return func()
    except Exception as e:
        if collector:
            collector.collect(e, operation, scope=scope, severity=severity)
        elif severity in (ErrorSeverity.CRITICAL, ErrorSeverity.WARNING):
            logger.warning(f"[{scope}] {operation}: {e}")
        return default
