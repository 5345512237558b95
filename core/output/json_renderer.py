"""
core/output/json_renderer.py - JSON 렌더러
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import TextIO

from core.heroku.types import HerokuOrganization

from .base import Renderer, organizations_to_data


class JsonRenderer(Renderer):
    """JSON 렌더러 (pretty=True면 2칸 들여쓰기)"""

    def __init__(self, pretty: bool = False):
        self.pretty = pretty

    def dumps(self, organizations: Sequence[HerokuOrganization]) -> str:
        return json.dumps(
            organizations_to_data(organizations),
            ensure_ascii=False,
            indent=2 if self.pretty else None,
            default=str,
        )

    def render_apps(
        self,
        organizations: Sequence[HerokuOrganization],
        stream: TextIO,
        dyno_sizes: Mapping[str, int] | None = None,
        dyno_unit_price: int = 0,
    ) -> None:
        stream.write(self.dumps(organizations))
        stream.write("\n")
