"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들

- err_console: 상태/에러/진행 메시지용 (stderr, JSON/YAML 출력과 섞이지 않음)
"""

from __future__ import annotations

import logging
import platform

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from cli.i18n import t

# urllib3 재시도 로그 제한
logging.getLogger("urllib3.connectionpool").setLevel(logging.ERROR)


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=stderr,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
err_console = get_console(stderr=True)


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

# 상태 심볼
SYMBOL_SUCCESS = "✓"  # 완료
SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)

    Args:
        message: 출력할 메시지
    """
    err_console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)

    Args:
        message: 출력할 메시지
    """
    err_console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    err_console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")



def print_error_tree(errors: list[tuple[str, list[str]]], title: str | None = None) -> None:
    """에러를 카테고리별 계층 트리로 출력

    Args:
        errors: (category, [detail_items]) 튜플 리스트
        title: 트리 루트 제목

    Example:
        print_error_tree([
            ("not_found", ["org-a/app-1: HTTP404"]),
            ("throttling", ["org-b/app-2: rate_limit"]),
        ])
    """
    tree = Tree(f"[bold yellow]{title or t('cli.error_summary')}[/bold yellow]")
    for category, items in errors:
        branch = tree.add(f"[red]{category}[/red] ({t('cli.count', count=len(items))})")
        for item in items[:3]:
            branch.add(f"[dim]{escape(item)}[/dim]")
        if len(items) > 3:
            branch.add(f"[dim]{t('cli.more_items', count=len(items) - 3)}[/dim]")
    err_console.print(tree)
