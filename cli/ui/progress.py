"""
cli/ui/progress.py - Progress tracking components for parallel execution

Thread-safe progress tracker with success/failure separation for
fan-out aggregation passes. Progress is drawn on stderr so that
JSON/YAML output on stdout stays clean.

Example:
    from cli.ui.progress import parallel_progress

    with parallel_progress("앱 수집") as tracker:
        result = listing.list_apps_by_organization(progress_tracker=tracker)

    success, failed, total = tracker.stats
"""

from __future__ import annotations

import threading
from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    ProgressColumn,
    SpinnerColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

from cli.i18n import t

if TYPE_CHECKING:
    from rich.console import Console

from .console import err_console as default_console


class SuccessFailColumn(ProgressColumn):
    """Custom column showing success/fail counts: '40✓ 10✗'"""

    def __init__(self, tracker: ParallelTracker) -> None:
        super().__init__()
        self._tracker = tracker

    def render(self, task: Task) -> Text:
        success, failed, _ = self._tracker.stats
        text = Text()
        text.append(f"{success}", style="green")
        text.append("✓ ", style="green")
        text.append(f"{failed}", style="red")
        text.append("✗", style="red")
        return text


class ParallelTracker:
    """Thread-safe parallel execution progress tracker.

    The total grows as the aggregation pass submits tasks (add_total),
    since dependents are discovered while seeds are listed.

    Thread-safety:
        All public methods are thread-safe via internal locking.
        Safe to call on_complete() from multiple worker threads.
    """

    def __init__(self, progress: Progress, task_id: TaskID, description: str) -> None:
        self._progress = progress
        self._task_id = task_id
        self._description = description
        self._lock = threading.Lock()
        self._success = 0
        self._failed = 0
        self._total = 0

    def add_total(self, count: int = 1) -> None:
        """Increase the expected task count (called on each submit)."""
        with self._lock:
            self._total += count
            self._progress.update(self._task_id, total=self._total)

    def on_complete(self, success: bool) -> None:
        """Record task completion (thread-safe)."""
        with self._lock:
            if success:
                self._success += 1
            else:
                self._failed += 1
            self._progress.update(self._task_id, completed=self._success + self._failed)

    @property
    def stats(self) -> tuple[int, int, int]:
        """(success_count, failed_count, total_count)"""
        with self._lock:
            return (self._success, self._failed, self._total)


@contextmanager
def parallel_progress(
    description: str,
    console: Console | None = None,
) -> Generator[ParallelTracker, None, None]:
    """Context manager for parallel execution progress.

    Args:
        description: Description for the progress bar
        console: Rich Console to use (default: stderr console)

    Yields:
        ParallelTracker passed to the aggregation pass
    """
    cons = console or default_console

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TextColumn(""),  # SuccessFailColumn 자리
        TextColumn("/"),
        MofNCompleteColumn(),
        BarColumn(bar_width=40),
        TimeElapsedColumn(),
        console=cons,
        expand=False,
        transient=False,
    )

    with progress:
        task_id = progress.add_task(f"[cyan]{description}", total=None)
        tracker = ParallelTracker(progress, task_id, description)

        progress.columns = (
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            SuccessFailColumn(tracker),
            TextColumn("/"),
            MofNCompleteColumn(),
            BarColumn(bar_width=40),
            TimeElapsedColumn(),
        )

        try:
            yield tracker
        finally:
            _success, failed, total = tracker.stats
            if total > 0:
                if failed == 0:
                    final_desc = f"[green]{t('cli.progress_done', name=description)}"
                else:
                    final_desc = f"[yellow]{t('cli.progress_done_failed', name=description, count=failed)}"
                progress.update(task_id, description=final_desc)
