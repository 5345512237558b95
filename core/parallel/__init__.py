"""
core/parallel - 병렬 처리 모듈

조직/팀 단위 Heroku API 조회를 Fan-out/Fan-in 패턴으로 병렬 처리합니다.

주요 구성 요소:
- FanOutExecutor / AggregationPass: 패스 단위 병렬 집계
- TokenBucketRateLimiter: API 쓰로틀링 방지 (패스마다 새로 생성)
- AggregationResult: 부분 결과 + 첫 번째 에러

Example:
    from core.parallel import FanOutExecutor, ParallelConfig

    executor = FanOutExecutor(ParallelConfig(max_workers=20))

    with executor.start_pass("apps") as agg:
        for app in apps:
            agg.submit(fetch_app, app, identifier=app.name, scope=org.name)

    result = agg.result()
    print(f"수집: {len(result.records)}, 실패: {len(result.errors)}")
"""

from .errors import (
    CollectedError,
    ErrorCollector,
    ErrorSeverity,
    categorize_error,
    get_error_code,
    try_or_default,
)
from .executor import AggregationPass, FanOutExecutor, ParallelConfig
from .rate_limiter import (
    HEROKU_RATE_LIMIT,
    RateLimiterConfig,
    TokenBucketRateLimiter,
    create_pass_rate_limiter,
)
from .types import (
    AggregationResult,
    ErrorCategory,
    ParallelExecutionResult,
    TaskError,
    TaskResult,
)

__all__: list[str] = [
    # Executor
    "FanOutExecutor",
    "AggregationPass",
    "ParallelConfig",
    # Error handling
    "ErrorCollector",
    "ErrorSeverity",
    "CollectedError",
    "categorize_error",
    "get_error_code",
    "try_or_default",
    # Rate Limiter
    "TokenBucketRateLimiter",
    "RateLimiterConfig",
    "HEROKU_RATE_LIMIT",
    "create_pass_rate_limiter",
    # Types
    "ErrorCategory",
    "TaskError",
    "TaskResult",
    "ParallelExecutionResult",
    "AggregationResult",
]
