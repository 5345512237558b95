"""
core/parallel/types.py - 병렬 실행 결과 타입

Fan-out 작업 하나하나의 결과(TaskResult)와 전체 실행 결과
(ParallelExecutionResult, AggregationResult)를 정의합니다.

작업 결과는 성공(data) 또는 실패(error) 중 하나이며,
배리어 이후 한 번에 모아 "첫 번째 에러 또는 전체 레코드"로 축약합니다.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCategory(Enum):
    """에러 카테고리"""

    THROTTLING = "throttling"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    NETWORK = "network"
    TIMEOUT = "timeout"
    EXPIRED_TOKEN = "expired_token"
    INVALID_REQUEST = "invalid_request"
    SERVICE_ERROR = "service_error"
    UNKNOWN = "unknown"


@dataclass
class TaskError:
    """작업 실패 정보

    Attributes:
        identifier: 실패한 엔티티 식별자 (앱 이름, 스페이스 이름 등)
        scope: 상위 엔티티 (조직 이름, 팀 이름 등)
        category: 에러 카테고리
        error_code: 에러 코드 (Heroku error id 또는 예외 클래스명)
        message: 에러 메시지
        original_exception: 원본 예외
        recorded_at: 기록 시각 (time.monotonic, 에러 정렬 기준)
    """

    identifier: str
    scope: str
    category: ErrorCategory
    error_code: str
    message: str
    original_exception: BaseException | None = None
    recorded_at: float = field(default_factory=time.monotonic)

    def __str__(self) -> str:
        return f"[{self.scope}/{self.identifier}] {self.error_code}: {self.message}"


@dataclass
class TaskResult(Generic[T]):
    """단일 작업 결과"""

    identifier: str
    scope: str
    success: bool
    data: T | None = None
    error: TaskError | None = None
    duration_ms: float = 0.0

    def __str__(self) -> str:
        status = "OK" if self.success else "FAIL"
        return f"[{self.scope}/{self.identifier}] {status} ({self.duration_ms:.0f}ms)"


@dataclass
class ParallelExecutionResult(Generic[T]):
    """패스 안에서 제출된 작업들의 결과

    results는 작업이 완료된 순서입니다 (제출 순서와 무관).
    """

    results: list[TaskResult[T]] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def error_count(self) -> int:
        return len(self.results) - self.success_count

    def get_errors(self) -> list[TaskError]:
        return [r.error for r in self.results if r.error is not None]


@dataclass
class AggregationResult(Generic[T]):
    """집계 패스 결과

    실패한 작업이 있어도 성공한 작업의 레코드는 records에 남아 있습니다.
    errors는 기록된 순서(recorded_at)로 정렬되며, 가장 먼저 기록된
    에러가 error입니다.

    Attributes:
        records: 집계된 레코드
        errors: 수집된 모든 에러 (기록 순서)
    """

    records: list[T] = field(default_factory=list)
    errors: list[TaskError] = field(default_factory=list)

    @property
    def error(self) -> TaskError | None:
        """첫 번째 에러 (없으면 None)"""
        return self.errors[0] if self.errors else None

    @property
    def ok(self) -> bool:
        return not self.errors

    def errors_by_category(self) -> dict[ErrorCategory, list[TaskError]]:
        """카테고리별 에러 (카테고리 안에서는 기록 순서)"""
        by_category: dict[ErrorCategory, list[TaskError]] = {}
        for error in self.errors:
            by_category.setdefault(error.category, []).append(error)
        return by_category
