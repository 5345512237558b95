"""
core/output/base.py - 렌더러 추상 기본 클래스
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, TextIO

from core.heroku.types import HerokuOrganization


def organizations_to_data(organizations: Sequence[HerokuOrganization]) -> list[dict[str, Any]]:
    """렌더러용 직렬화 가능한 트리"""
    return [org.to_dict() for org in organizations]


class Renderer(ABC):
    """조직/앱 집계 결과 렌더러"""

    @abstractmethod
    def render_apps(
        self,
        organizations: Sequence[HerokuOrganization],
        stream: TextIO,
        dyno_sizes: Mapping[str, int] | None = None,
        dyno_unit_price: int = 0,
    ) -> None:
        """집계 결과를 stream에 출력

        Args:
            organizations: 앱이 채워진 조직 목록
            stream: 출력 스트림
            dyno_sizes: dyno size -> dyno unit (표 출력에서만 사용)
            dyno_unit_price: dyno unit 1개의 월 단가 (표 출력에서만 사용)
        """
