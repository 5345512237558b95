"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    heroku-listing --version
    heroku-listing [자격 증명 옵션] cloud [-f tab|json|pretty-json|yaml] [--heroku.dyno-unit-price N]
    heroku-listing [자격 증명 옵션] ips [-o ips-listing.yml]
    heroku-listing [자격 증명 옵션] rate-limit

자격 증명 옵션 (환경 변수로도 지정 가능):
    --heroku.username   HEROKU_USERNAME
    --heroku.password   HEROKU_PASSWORD
    -t, --heroku.token  HEROKU_AUTH_TOKEN (있으면 Basic 인증 무시)

종료 코드:
    0: 성공
    1: API 호출/집계/파일 출력 실패
    2: 사용법 오류 (자격 증명 누락 등)
    130: 사용자 중단 (Ctrl-C)

Usage:
    $ heroku-listing -t $TOKEN cloud --heroku.dyno-unit-price 25
    $ heroku-listing -t $TOKEN ips -o ips.yml
    $ python -m cli.app --help
"""

from __future__ import annotations

import contextlib
import logging
import sys
from collections.abc import Generator

import click
from click import Context

from cli.i18n import t
from cli.ui.console import err_console, print_error, print_error_tree, print_success, print_warning
from cli.ui.progress import ParallelTracker, parallel_progress
from core.config import (
    DEFAULT_IP_LIST_DESCRIPTION,
    DEFAULT_IP_LIST_FILE,
    DEFAULT_IP_LIST_NAME,
    DEFAULT_MAX_WORKERS,
    HerokuCredentials,
    OutputFormat,
    get_version,
)
from core.exceptions import APICallError, ConfigError, ExportError, format_error_for_user
from core.heroku import HerokuClient, HerokuListing, write_ip_list
from core.heroku.client import DEFAULT_MAX_POOL_CONNECTIONS
from core.output import TableRenderer, get_renderer
from core.parallel import AggregationResult, FanOutExecutor, ParallelConfig

# WARNING 레벨로 설정하여 INFO 로그가 출력에 섞이지 않도록 함
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

VERSION = get_version()

EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


@click.group(help=t("cli.help_intro"))
@click.version_option(VERSION, prog_name="heroku-listing")
@click.option("--heroku.username", "username", envvar="HEROKU_USERNAME", help="Heroku 사용자 이름")
@click.option("--heroku.password", "password", envvar="HEROKU_PASSWORD", help="Heroku 비밀번호")
@click.option(
    "-t",
    "--heroku.token",
    "token",
    envvar="HEROKU_AUTH_TOKEN",
    help="Heroku 인증 토큰 (있으면 Basic 인증 무시)",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    envvar="HEROKU_LISTING_WORKERS",
    default=DEFAULT_MAX_WORKERS,
    show_default=True,
    help="병렬 워커 수 (최대 100)",
)
@click.option(
    "--lang",
    type=click.Choice(["ko", "en"]),
    default="ko",
    help="UI 언어 설정 / UI language (ko: 한국어, en: English)",
)
@click.option("--debug", is_flag=True, help="DEBUG 로그 출력")
@click.option("-q", "--quiet", is_flag=True, help="진행 상황 표시 안 함")
@click.pass_context
def cli(
    ctx: Context,
    username: str | None,
    password: str | None,
    token: str | None,
    workers: int,
    lang: str,
    debug: bool,
    quiet: bool,
) -> None:
    """heroku-listing - Heroku 자산 조회 CLI"""
    from cli.i18n import set_lang

    set_lang(lang)

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["lang"] = lang
    ctx.obj["quiet"] = quiet
    ctx.obj["workers"] = workers
    ctx.obj["credentials"] = HerokuCredentials(
        username=username or None,
        password=password or None,
        token=token or None,
    )


# =============================================================================
# 공통 헬퍼
# =============================================================================


def _create_listing(ctx: Context) -> HerokuListing:
    """자격 증명 검증 후 HerokuListing 생성 (자격 증명 누락 시 UsageError)"""
    credentials: HerokuCredentials = ctx.obj["credentials"]
    try:
        credentials.validate()
    except ConfigError as e:
        raise click.UsageError(t("cli.credentials_required"), ctx=ctx) from e

    config = ParallelConfig(max_workers=ctx.obj["workers"])
    client = HerokuClient.from_credentials(
        credentials,
        max_pool_connections=max(config.max_workers, DEFAULT_MAX_POOL_CONNECTIONS),
    )
    return HerokuListing(client, FanOutExecutor(config))


@contextlib.contextmanager
def _progress(ctx: Context, description: str) -> Generator[ParallelTracker | None, None, None]:
    if ctx.obj.get("quiet"):
        yield None
        return
    with parallel_progress(description) as tracker:
        yield tracker


@contextlib.contextmanager
def _interruptible(ctx: Context) -> Generator[None, None, None]:
    try:
        yield
    except KeyboardInterrupt:
        err_console.print(f"\n[dim]{t('common.interrupted')}[/dim]")
        ctx.exit(EXIT_INTERRUPTED)


def _print_aggregation_errors(result: AggregationResult) -> None:
    """첫 번째 에러 + (2건 이상이면) 카테고리별 요약 트리"""
    print_error(t("cli.aggregation_failed", count=len(result.errors), error=str(result.error)))

    if len(result.errors) > 1:
        print_error_tree(
            [
                (category.value, [f"{e.scope}/{e.identifier}: {e.error_code}" for e in errors])
                for category, errors in result.errors_by_category().items()
            ]
        )


# =============================================================================
# 명령어
# =============================================================================


@cli.command("cloud")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(OutputFormat.choices()),
    envvar="OUTPUT_FORMAT",
    default=OutputFormat.TAB.value,
    show_default=True,
    help="출력 형식",
)
@click.option(
    "--heroku.dyno-unit-price",
    "dyno_unit_price",
    type=click.IntRange(min=0),
    envvar="HEROKU_DYNO_PRICE",
    default=0,
    show_default=True,
    help="dyno unit 1개의 월 단가 ($)",
)
@click.pass_context
def cloud_command(ctx: Context, output_format: str, dyno_unit_price: int) -> None:
    """조직별 앱/dyno/add-on 목록 출력"""
    listing = _create_listing(ctx)

    with _interruptible(ctx):
        try:
            with _progress(ctx, t("cli.collecting_apps")) as tracker:
                result = listing.list_apps_by_organization(progress_tracker=tracker)
        except APICallError as e:
            print_error(t("cli.organizations_failed", error=format_error_for_user(e)))
            ctx.exit(EXIT_ERROR)

    if not result.ok:
        _print_aggregation_errors(result)
        ctx.exit(EXIT_ERROR)

    renderer = get_renderer(output_format)

    dyno_sizes: dict[str, int] = {}
    if isinstance(renderer, TableRenderer):
        dyno_sizes = listing.get_dyno_sizes_or_empty()
        for error in listing.error_collector.errors:
            print_warning(t("cli.dyno_sizes_failed", error=error.error_message))

    renderer.render_apps(result.records, sys.stdout, dyno_sizes, dyno_unit_price)


@cli.command("ips")
@click.option(
    "-o",
    "--output",
    "output",
    type=click.Path(dir_okay=False),
    default=DEFAULT_IP_LIST_FILE,
    show_default=True,
    help="출력 파일 경로",
)
@click.option("--name", default=DEFAULT_IP_LIST_NAME, show_default=True, help="IP 목록 이름")
@click.option("--description", default=DEFAULT_IP_LIST_DESCRIPTION, show_default=True, help="IP 목록 설명")
@click.pass_context
def ips_command(ctx: Context, output: str, name: str, description: str) -> None:
    """enterprise 팀 스페이스의 NAT IP 목록을 YAML로 저장"""
    listing = _create_listing(ctx)

    with _interruptible(ctx):
        try:
            with _progress(ctx, t("cli.collecting_spaces")) as tracker:
                result = listing.get_ip_list(name, description, progress_tracker=tracker)
        except APICallError as e:
            print_error(t("cli.spaces_failed", error=format_error_for_user(e)))
            ctx.exit(EXIT_ERROR)

    if not result.ok:
        _print_aggregation_errors(result)
        print_error(t("cli.ips_not_written"))
        ctx.exit(EXIT_ERROR)

    ip_list = result.records[0]
    try:
        path = write_ip_list(ip_list, output)
    except ExportError as e:
        print_error(str(e))
        ctx.exit(EXIT_ERROR)

    print_success(t("cli.ips_created", path=path, count=len(ip_list.items)))


@cli.command("rate-limit")
@click.pass_context
def rate_limit_command(ctx: Context) -> None:
    """남은 API 호출 횟수 출력"""
    listing = _create_listing(ctx)

    try:
        remaining = listing.get_rate_limit_remaining()
    except APICallError as e:
        print_error(t("cli.rate_limit_failed", error=format_error_for_user(e)))
        ctx.exit(EXIT_ERROR)

    click.echo(t("cli.rate_limit_remaining", count=remaining))


if __name__ == "__main__":
    cli()
