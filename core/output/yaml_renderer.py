"""
core/output/yaml_renderer.py - YAML 렌더러
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TextIO

import yaml

from core.heroku.types import HerokuOrganization

from .base import Renderer, organizations_to_data


class YamlRenderer(Renderer):
    def render_apps(
        self,
        organizations: Sequence[HerokuOrganization],
        stream: TextIO,
        dyno_sizes: Mapping[str, int] | None = None,
        dyno_unit_price: int = 0,
    ) -> None:
        yaml.safe_dump(
            organizations_to_data(organizations),
            stream,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
