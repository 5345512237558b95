"""
core/output/table.py - rich 표 렌더러

앱마다 요약 행 하나를 출력하고, 그 아래에 dyno size / add-on 개수를
나란히 붙인 행을 이어서 출력합니다.

    Name     Released    Updated     Dynos         d.units   Addons     Stack
    my-app   2024-01-02  2024-03-04                4 (100$)             heroku-22
                                     standard-1x 2           redis 1
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import TextIO

from rich import box
from rich.console import Console
from rich.measure import Measurement
from rich.table import Table

from core.heroku.summary import count_addon_types, count_dyno_types, merge_parallel, total_unit_cost
from core.heroku.types import HerokuApp, HerokuOrganization

from .base import Renderer

HEADERS = ["Name", "Released", "Updated", "Dynos", "d.units", "Addons", "Stack"]
STATUS_NOT_RUNNING = "NOT RUNNING"
DATE_FORMAT = "%Y-%m-%d"
MAX_MEASURE_WIDTH = 10_000


def format_price(total_units: int, unit_price: int) -> str:
    """dyno unit 합계와 월 비용 (unit이 0이면 빈 문자열)"""
    if total_units == 0:
        return ""
    return f"{total_units} ({total_units * unit_price}$)"


def _format_date(value: datetime | None) -> str:
    return value.strftime(DATE_FORMAT) if value else ""


def app_rows(
    heroku_app: HerokuApp,
    dyno_sizes: Mapping[str, int],
    dyno_unit_price: int,
) -> list[list[str]]:
    """앱 하나의 표 행 (요약 행 + dyno/add-on 행)"""
    dyno_summary = count_dyno_types(heroku_app.dynos)
    addon_summary = count_addon_types(heroku_app.addons)
    price = format_price(total_unit_cost(dyno_summary, dyno_sizes), dyno_unit_price)
    status = "" if heroku_app.is_running else STATUS_NOT_RUNNING

    app = heroku_app.app
    rows = [
        [
            app.name,
            _format_date(app.released_at),
            _format_date(app.updated_at),
            status,
            price,
            "",
            app.stack,
        ]
    ]
    for dyno_cell, addon_cell in merge_parallel(dyno_summary, addon_summary):
        rows.append(["", "", "", dyno_cell, "", addon_cell, ""])
    return rows


def _is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def table_width(console: Console, table: Table) -> int:
    """줄바꿈 없이 표를 그리는 데 필요한 너비"""
    options = console.options.update_width(MAX_MEASURE_WIDTH)
    return Measurement.get(console, options, table).maximum


class TableRenderer(Renderer):
    """rich Table 렌더러

    터미널이 아닌 스트림에는 표 전체 너비로 출력하고,
    좁은 터미널에서는 셀 내용을 줄바꿈하여 잘리지 않게 합니다.

    Args:
        width: 콘솔 너비 (None이면 터미널 너비 또는 표 너비)
    """

    def __init__(self, width: int | None = None):
        self.width = width

    def build_table(
        self,
        organizations: Sequence[HerokuOrganization],
        dyno_sizes: Mapping[str, int] | None = None,
        dyno_unit_price: int = 0,
    ) -> Table:
        table = Table(
            box=box.SIMPLE_HEAD,
            show_header=True,
            header_style="bold",
            caption=(
                f"Price by dyno is {dyno_unit_price} a month. "
                "Total price is for a full time running dyno."
            ),
        )
        for header in HEADERS:
            table.add_column(header, overflow="fold")

        sizes = dyno_sizes or {}
        for org in organizations:
            for heroku_app in org.apps:
                if not heroku_app.name:
                    continue
                for row in app_rows(heroku_app, sizes, dyno_unit_price):
                    table.add_row(*row)
        return table

    def render_apps(
        self,
        organizations: Sequence[HerokuOrganization],
        stream: TextIO,
        dyno_sizes: Mapping[str, int] | None = None,
        dyno_unit_price: int = 0,
    ) -> None:
        console = Console(file=stream, width=self.width, highlight=False, soft_wrap=False)
        table = self.build_table(organizations, dyno_sizes, dyno_unit_price)
        if self.width is None and not _is_tty(stream):
            # 파이프/리다이렉트: 셀이 잘리지 않도록 표의 최대 너비로 출력
            console.width = max(console.width, table_width(console, table))
        console.print(table)
