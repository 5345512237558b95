# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 및 진행 상황 표시 모듈
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    err_console,
    get_console,
    print_error,
    print_error_tree,
    print_success,
    print_warning,
)
from .progress import ParallelTracker, SuccessFailColumn, parallel_progress

__all__: list[str] = [
    "err_console",
    "get_console",
    # 표준 출력 심볼
    "SYMBOL_SUCCESS",
    "SYMBOL_ERROR",
    "SYMBOL_WARNING",
    # 메시지 출력
    "print_success",
    "print_error",
    "print_warning",
    "print_error_tree",
    # Progress tracking
    "ParallelTracker",
    "SuccessFailColumn",
    "parallel_progress",
]
