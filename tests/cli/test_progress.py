# tests/cli/test_progress.py
"""
cli/ui/progress 모듈 단위 테스트

Progress tracking components for parallel execution.
"""

import io
from concurrent.futures import ThreadPoolExecutor

import pytest
from rich.console import Console
from rich.progress import Progress

from cli.ui.progress import ParallelTracker, parallel_progress
from core.parallel import FanOutExecutor, ParallelConfig, RateLimiterConfig


def _quiet_console():
    return Console(file=io.StringIO(), width=120)


# =============================================================================
# ParallelTracker 테스트
# =============================================================================


class TestParallelTracker:
    """ParallelTracker 단위 테스트"""

    @pytest.fixture
    def progress(self):
        return Progress(console=_quiet_console())

    @pytest.fixture
    def tracker(self, progress):
        task_id = progress.add_task("test", total=None)
        return ParallelTracker(progress, task_id, "test")

    def test_initial_stats(self, tracker):
        assert tracker.stats == (0, 0, 0)

    def test_add_total(self, tracker, progress):
        """제출될 때마다 total 증가"""
        tracker.add_total()
        tracker.add_total(3)

        assert tracker.stats == (0, 0, 4)
        assert progress.tasks[0].total == 4

    def test_on_complete(self, tracker, progress):
        tracker.add_total(3)

        tracker.on_complete(success=True)
        tracker.on_complete(success=True)
        tracker.on_complete(success=False)

        assert tracker.stats == (2, 1, 3)
        assert progress.tasks[0].completed == 3

    def test_thread_safety(self, tracker):
        """여러 스레드에서 동시에 on_complete 호출"""
        tracker.add_total(200)

        with ThreadPoolExecutor(max_workers=10) as pool:
            for i in range(200):
                pool.submit(tracker.on_complete, i % 4 != 0)

        assert tracker.stats == (150, 50, 200)


# =============================================================================
# parallel_progress 테스트
# =============================================================================


class TestParallelProgress:
    def test_yields_tracker(self):
        with parallel_progress("앱 수집", console=_quiet_console()) as tracker:
            assert isinstance(tracker, ParallelTracker)

    def test_final_description(self):
        console = _quiet_console()
        with parallel_progress("앱 수집", console=console) as tracker:
            tracker.add_total(2)
            tracker.on_complete(True)
            tracker.on_complete(False)

        assert "앱 수집 완료 (1개 실패)" in console.file.getvalue()

    def test_with_aggregation_pass(self):
        """집계 패스가 제출/완료를 tracker에 보고"""
        executor = FanOutExecutor(
            ParallelConfig(
                max_workers=4,
                rate_limiter_config=RateLimiterConfig(requests_per_second=10000.0, burst_size=100, wait_timeout=None),
            )
        )

        def fetch(n):
            if n == 3:
                raise ValueError("boom")
            return n

        with parallel_progress("test", console=_quiet_console()) as tracker:
            executor.map(range(5), fetch, identify=str, progress_tracker=tracker)

        assert tracker.stats == (4, 1, 5)
