"""
core/output - 집계 결과 렌더러

OutputFormat에 맞는 렌더러를 반환합니다.

    tab          -> TableRenderer (rich 표, dyno 비용 포함)
    json         -> JsonRenderer
    pretty-json  -> JsonRenderer(pretty=True)
    yaml         -> YamlRenderer

Usage:
    from core.output import get_renderer

    renderer = get_renderer(OutputFormat.TAB)
    renderer.render_apps(organizations, sys.stdout, dyno_sizes, dyno_unit_price=25)
"""

from __future__ import annotations

from core.config import OutputFormat

from .base import Renderer, organizations_to_data
from .json_renderer import JsonRenderer
from .table import TableRenderer, app_rows, format_price
from .yaml_renderer import YamlRenderer


def get_renderer(output_format: OutputFormat | str) -> Renderer:
    """출력 형식에 맞는 렌더러 생성

    Raises:
        ConfigError: 지원하지 않는 형식 문자열
    """
    if isinstance(output_format, str):
        output_format = OutputFormat.from_string(output_format)

    if output_format is OutputFormat.JSON:
        return JsonRenderer()
    if output_format is OutputFormat.PRETTY_JSON:
        return JsonRenderer(pretty=True)
    if output_format is OutputFormat.YAML:
        return YamlRenderer()
    return TableRenderer()


__all__: list[str] = [
    "Renderer",
    "TableRenderer",
    "JsonRenderer",
    "YamlRenderer",
    "get_renderer",
    "app_rows",
    "format_price",
    "organizations_to_data",
]
