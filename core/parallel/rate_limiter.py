"""
core/parallel/rate_limiter.py - Token Bucket Rate Limiter

Heroku Platform API의 (문서화되지 않은) 초당 요청 제한에 걸리지 않도록
호출 속도를 제어합니다.

집계 패스(pass)마다 새 limiter를 생성합니다. 프로세스 전역 싱글톤을 두지 않으므로
이전 패스의 토큰 상태가 다음 패스로 이어지지 않습니다.

Example:
    limiter = create_pass_rate_limiter()

    for app in apps:
        limiter.acquire()  # 토큰이 생길 때까지 대기
        client.list_dynos(app.id)
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class RateLimiterConfig:
    """Rate limiter 설정

    Attributes:
        requests_per_second: 초당 토큰 리필 속도
        burst_size: 버킷 최대 토큰 수 (초기 토큰 수)
        wait_timeout: acquire() 최대 대기 시간 (초). None이면 무한 대기
    """

    requests_per_second: float = 10.0
    burst_size: int = 20
    wait_timeout: float | None = 30.0

    def __post_init__(self) -> None:
        if self.requests_per_second <= 0:
            raise ValueError(f"requests_per_second must be > 0, got {self.requests_per_second}")
        if self.burst_size < 1:
            raise ValueError(f"burst_size must be >= 1, got {self.burst_size}")


# Heroku: 초당 40회. 버스트 1로 두어 요청 간격을 1/40초로 고르게 유지
HEROKU_RATE_LIMIT = RateLimiterConfig(
    requests_per_second=40.0,
    burst_size=1,
    wait_timeout=None,
)


class TokenBucketRateLimiter:
    """스레드 세이프 Token Bucket

    토큰은 requests_per_second 속도로 리필되며 burst_size를 넘지 않습니다.
    wait_timeout이 None이면 acquire()는 실패하지 않고 대기만 합니다.
    """

    def __init__(self, config: RateLimiterConfig | None = None):
        self.config = config or RateLimiterConfig()
        self._tokens = float(self.config.burst_size)
        self._last_refill = time.monotonic()
        self._lock = threading.Lock()

    def _refill(self) -> None:
        """경과 시간만큼 토큰 리필 (lock 보유 상태에서 호출)"""
        now = time.monotonic()
        elapsed = now - self._last_refill
        self._tokens = min(
            float(self.config.burst_size),
            self._tokens + elapsed * self.config.requests_per_second,
        )
        self._last_refill = now

    def acquire(self, tokens: int = 1) -> bool:
        """토큰을 획득할 때까지 대기

        Args:
            tokens: 획득할 토큰 수

        Returns:
            획득 성공 여부. wait_timeout 초과 시 False
        """
        timeout = self.config.wait_timeout
        deadline = None if timeout is None else time.monotonic() + timeout

        while True:
            with self._lock:
                self._refill()
                if self._tokens >= tokens:
                    self._tokens -= tokens
                    return True
                wait = (tokens - self._tokens) / self.config.requests_per_second

            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    logger.debug(f"Rate limiter 대기 시간 초과 ({timeout}s)")
                    return False
                wait = min(wait, remaining)

            time.sleep(wait)


def create_pass_rate_limiter(config: RateLimiterConfig | None = None) -> TokenBucketRateLimiter:
    """집계 패스 전용 rate limiter 생성

    Args:
        config: Rate limiter 설정 (None이면 HEROKU_RATE_LIMIT)

    Returns:
        새 TokenBucketRateLimiter 인스턴스
    """
    return TokenBucketRateLimiter(config or HEROKU_RATE_LIMIT)
