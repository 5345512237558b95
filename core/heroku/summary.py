"""
core/heroku/summary.py - 집계 후 요약 함수

앱 단위 dyno/add-on 목록을 타입별 개수로 묶고,
두 요약 목록을 표 출력용 행으로 합칩니다. 모두 순수 함수입니다.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from typing import TypeVar

from .types import AddOn, Dyno, TypeCount

T = TypeVar("T")


def count_by_type(items: Iterable[T], key: Callable[[T], str]) -> dict[str, int]:
    """key 함수 기준 항목 개수"""
    return dict(Counter(key(item) for item in items))


def summary_list(counts: Mapping[str, int]) -> list[TypeCount]:
    """개수 매핑 -> TypeCount 목록 (key 오름차순)"""
    return [TypeCount(key=k, total=counts[k]) for k in sorted(counts)]


def count_dyno_types(dynos: Iterable[Dyno]) -> list[TypeCount]:
    """dyno size별 개수"""
    return summary_list(count_by_type(dynos, lambda d: d.size))


def count_addon_types(addons: Iterable[AddOn]) -> list[TypeCount]:
    """add-on 서비스별 개수"""
    return summary_list(count_by_type(addons, lambda a: a.service_name))


def merge_parallel(left: list[TypeCount], right: list[TypeCount]) -> list[tuple[str, str]]:
    """두 요약 목록을 인덱스별로 나란히 합침

    행 수는 긴 쪽 목록의 길이이며, 짧은 쪽은 빈 문자열로 채웁니다.
    두 목록 모두 비어 있으면 빈 목록을 반환합니다.

    Example:
        >>> merge_parallel([TypeCount("standard-1x", 2)], [TypeCount("redis", 1), TypeCount("papertrail", 1)])
        [('standard-1x 2', 'redis 1'), ('', 'papertrail 1')]
    """
    rows: list[tuple[str, str]] = []
    for i in range(max(len(left), len(right))):
        left_cell = str(left[i]) if i < len(left) else ""
        right_cell = str(right[i]) if i < len(right) else ""
        rows.append((left_cell, right_cell))
    return rows


def total_unit_cost(summary: Iterable[TypeCount], units_by_size: Mapping[str, int]) -> int:
    """요약의 dyno unit 합계 (매핑에 없는 size는 0)"""
    return sum(entry.total * units_by_size.get(entry.key, 0) for entry in summary)
