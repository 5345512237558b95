"""
core/parallel/executor.py - Fan-out/Fan-in 실행기

상위 엔티티 목록(조직, 팀)에서 하위 엔티티(앱, 스페이스)를 조회한 뒤,
하위 엔티티마다 작업을 하나씩 띄워 중첩 API 호출(dyno, add-on, NAT)을
병렬로 수행하고 결과를 모읍니다.

ThreadPoolExecutor 기반이며 워커 수는 rate limiter와 독립적으로 제한됩니다.

주요 구성 요소:
- ParallelConfig: 병렬 실행 설정 (워커 수, Rate limit)
- AggregationPass: 집계 패스 1회분의 공유 상태 (워커 풀, rate limiter, 레코드, lock)
- FanOutExecutor: 패스 생성 및 단일 단계 fan-out(map)

Example:
    executor = FanOutExecutor(ParallelConfig(max_workers=20))

    with executor.start_pass("apps") as agg:
        for org in orgs:
            for app in client.list_organization_apps(org.id):
                agg.submit(fetch_app, app, identifier=app.name, scope=org.name)

    result = agg.result()
    if result.error:
        print(result.error)
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from .errors import categorize_error, get_error_code
from .rate_limiter import RateLimiterConfig, TokenBucketRateLimiter, create_pass_rate_limiter
from .types import AggregationResult, ErrorCategory, ParallelExecutionResult, TaskError, TaskResult

if TYPE_CHECKING:
    from cli.ui.progress import ParallelTracker

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")
R = TypeVar("R")


def _clear_exception_chain(e: BaseException) -> None:
    """traceback + chained exception 메모리 누수 방지"""
    e.__traceback__ = None
    if e.__context__ is not None:
        e.__context__.__traceback__ = None
    if e.__cause__ is not None:
        e.__cause__.__traceback__ = None


def _task_error(identifier: str, scope: str, error: BaseException) -> TaskError:
    _clear_exception_chain(error)
    return TaskError(
        identifier=identifier,
        scope=scope,
        category=categorize_error(error),
        error_code=get_error_code(error),
        message=str(error),
        original_exception=error,
    )


@dataclass
class ParallelConfig:
    """병렬 실행 설정

    Attributes:
        max_workers: 최대 동시 스레드 수 (1~100)
        rate_limiter_config: Rate limiter 설정 (None이면 Heroku 기본값 40 req/s)
    """

    max_workers: int = 20
    rate_limiter_config: RateLimiterConfig | None = None

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > 100:
            self.max_workers = 100


class AggregationPass(Generic[R]):
    """집계 패스 1회분의 공유 상태

    패스마다 워커 풀, rate limiter, 결과 컨테이너와 lock을 새로 가지므로
    패스 사이에 상태가 남지 않습니다.

    - submit()된 작업은 rate limiter를 통과한 뒤 중첩 호출을 수행합니다.
    - 성공한 작업만 lock을 잡고 레코드를 추가합니다 (네트워크 I/O 중에는 lock 미보유).
    - 실패한 작업은 레코드를 남기지 않고 TaskError만 남깁니다.
    - 한 작업의 실패가 다른 작업을 취소하지 않습니다.
    - join()은 배리어입니다. 제출된 모든 작업이 끝날 때까지 대기합니다.
    """

    def __init__(
        self,
        config: ParallelConfig | None = None,
        name: str = "aggregation",
        rate_limiter: TokenBucketRateLimiter | None = None,
        progress_tracker: ParallelTracker | None = None,
    ):
        self.config = config or ParallelConfig()
        self.name = name
        self.rate_limiter = rate_limiter or create_pass_rate_limiter(self.config.rate_limiter_config)
        self._progress_tracker = progress_tracker

        self._pool = ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix=f"pass-{name}",
        )
        self._futures: list[Future[TaskResult[R]]] = []
        self._records: list[R] = []
        self._lock = threading.Lock()
        self._listing_errors: list[TaskError] = []
        self._execution: ParallelExecutionResult[R] | None = None
        self._start_time = time.monotonic()

    def __enter__(self) -> AggregationPass[R]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.join()

    @property
    def records(self) -> list[R]:
        """현재까지 추가된 레코드의 복사본"""
        with self._lock:
            return list(self._records)

    def add(self, record: R) -> None:
        """레코드 추가 (lock 보유 구간은 append 한 번)"""
        with self._lock:
            self._records.append(record)

    def submit(
        self,
        func: Callable[[ItemT], R],
        item: ItemT,
        identifier: str,
        scope: str = "",
    ) -> None:
        """하위 엔티티 하나에 대한 작업 제출

        Args:
            func: item -> 레코드. 예외를 던지면 실패로 기록
            item: 하위 엔티티
            identifier: 로깅/에러용 식별자 (앱 이름 등)
            scope: 상위 엔티티 이름 (조직 이름 등)
        """
        if self._execution is not None:
            raise RuntimeError(f"aggregation pass '{self.name}' is already joined")

        if self._progress_tracker:
            self._progress_tracker.add_total(1)

        future = self._pool.submit(self._execute_single, func, item, identifier, scope)
        self._futures.append(future)

    def fail(self, identifier: str, scope: str, error: BaseException) -> TaskError:
        """하위 엔티티 목록 조회 단계의 실패 기록

        Returns:
            기록된 TaskError
        """
        task_error = _task_error(identifier, scope, error)
        with self._lock:
            self._listing_errors.append(task_error)
        logger.debug(f"[{self.name}] 목록 조회 실패 {task_error}")
        return task_error

    def join(self) -> ParallelExecutionResult[R]:
        """배리어: 제출된 모든 작업이 끝날 때까지 대기"""
        if self._execution is not None:
            return self._execution

        results: list[TaskResult[R]] = []
        try:
            for future in as_completed(self._futures):
                result = future.result()
                results.append(result)
                if self._progress_tracker:
                    self._progress_tracker.on_complete(result.success)
        except BaseException:
            # KeyboardInterrupt 등: 시작 전 작업은 취소, 실행 중인 작업은 대기
            self._pool.shutdown(wait=True, cancel_futures=True)
            raise
        self._pool.shutdown(wait=True)

        self._execution = ParallelExecutionResult(results=results)
        total_time = (time.monotonic() - self._start_time) * 1000
        logger.info(
            f"[{self.name}] 병렬 실행 완료: 성공 {self._execution.success_count}, "
            f"실패 {self._execution.error_count}, 총 {total_time:.0f}ms"
        )
        return self._execution

    def result(self) -> AggregationResult[R]:
        """배리어 이후 레코드와 에러를 하나의 결과로 축약

        에러는 기록 순서(recorded_at, monotonic)로 정렬되며, 첫 번째가 AggregationResult.error입니다.
        """
        execution = self.join()
        errors = sorted(
            [*self._listing_errors, *execution.get_errors()],
            key=lambda e: e.recorded_at,
        )
        return AggregationResult(records=self.records, errors=errors)

    def _execute_single(
        self,
        func: Callable[[ItemT], R],
        item: ItemT,
        identifier: str,
        scope: str,
    ) -> TaskResult[R]:
        """단일 작업 실행 (워커 스레드 내에서 호출, 예외를 던지지 않음)"""
        start_time = time.monotonic()

        if not self.rate_limiter.acquire():
            return TaskResult(
                identifier=identifier,
                scope=scope,
                success=False,
                error=TaskError(
                    identifier=identifier,
                    scope=scope,
                    category=ErrorCategory.THROTTLING,
                    error_code="RateLimitTimeout",
                    message="Rate limiter timeout",
                ),
                duration_ms=(time.monotonic() - start_time) * 1000,
            )

        try:
            record = func(item)
        except Exception as e:
            task_error = _task_error(identifier, scope, e)
            logger.debug(f"[{self.name}] 작업 실패 {task_error}")
            return TaskResult(
                identifier=identifier,
                scope=scope,
                success=False,
                error=task_error,
                duration_ms=(time.monotonic() - start_time) * 1000,
            )

        self.add(record)
        return TaskResult(
            identifier=identifier,
            scope=scope,
            success=True,
            data=record,
            duration_ms=(time.monotonic() - start_time) * 1000,
        )


class FanOutExecutor:
    """Fan-out/Fan-in 실행기

    Example:
        executor = FanOutExecutor()
        result = executor.map(
            spaces,
            fetch_nat,
            identify=lambda s: s.name,
            scope=lambda s: s.team_name,
        )
        items = result.records
    """

    def __init__(self, config: ParallelConfig | None = None):
        self.config = config or ParallelConfig()

    def start_pass(
        self,
        name: str = "aggregation",
        progress_tracker: ParallelTracker | None = None,
    ) -> AggregationPass:
        """새 집계 패스 시작 (rate limiter도 새로 생성)"""
        logger.info(f"[{name}] 집계 패스 시작: max_workers={self.config.max_workers}")
        return AggregationPass(
            self.config,
            name=name,
            progress_tracker=progress_tracker,
        )

    def map(
        self,
        items: Iterable[ItemT],
        func: Callable[[ItemT], R],
        identify: Callable[[ItemT], str],
        scope: Callable[[ItemT], str] | None = None,
        name: str = "aggregation",
        progress_tracker: ParallelTracker | None = None,
    ) -> AggregationResult[R]:
        """단일 단계 fan-out: 항목마다 작업 하나

        Args:
            items: 하위 엔티티 목록
            func: item -> 레코드
            identify: item -> 식별자
            scope: item -> 상위 엔티티 이름
            name: 패스 이름 (로깅용)
            progress_tracker: 진행 상황 추적기 (선택사항)

        Returns:
            AggregationResult
        """
        with self.start_pass(name, progress_tracker=progress_tracker) as agg:
            for item in items:
                agg.submit(func, item, identify(item), scope(item) if scope else "")
        return agg.result()
