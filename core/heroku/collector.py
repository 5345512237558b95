"""
core/heroku/collector.py - Heroku 자산 수집기

두 가지 Fan-out/Fan-in 집계를 수행합니다.

1. Organization -> App -> {Dyno, AddOn}
   조직마다 앱 목록을 조회하고, 앱마다 작업 하나를 띄워 dyno/add-on을 조회
2. Enterprise Team -> Space -> NAT
   enterprise 팀이 소유한 스페이스마다 작업 하나를 띄워 NAT 소스 IP를 조회

두 집계 모두 패스마다 새 rate limiter(40 req/s)와 결과 컨테이너를 사용하고,
실패한 작업이 있어도 성공한 레코드는 그대로 반환합니다 (롤백 없음).

Example:
    listing = HerokuListing(client, FanOutExecutor(ParallelConfig(max_workers=20)))

    result = listing.list_apps_by_organization()
    for org in result.records:
        for app in org.apps:
            print(org.name, app.name, len(app.dynos))
    if result.error:
        print(result.error)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from core.exceptions import APICallError
from core.parallel import AggregationResult, ErrorCollector, FanOutExecutor, try_or_default

from .client import HerokuClient
from .types import App, HerokuApp, HerokuOrganization, IPList, IPListItem, Organization, Space, Team

if TYPE_CHECKING:
    from cli.ui.progress import ParallelTracker

logger = logging.getLogger(__name__)


class HerokuListing:
    """Heroku 계정의 조직/앱/스페이스 자산 수집

    Args:
        client: Heroku API 클라이언트
        executor: Fan-out 실행기 (None이면 기본 설정)
    """

    def __init__(self, client: HerokuClient, executor: FanOutExecutor | None = None):
        self.client = client
        self.executor = executor or FanOutExecutor()
        self.error_collector = ErrorCollector("heroku")

    # =========================================================================
    # Organization -> App -> {Dyno, AddOn}
    # =========================================================================

    def list_apps_by_organization(
        self,
        progress_tracker: ParallelTracker | None = None,
    ) -> AggregationResult[HerokuOrganization]:
        """모든 조직의 앱과 각 앱의 dyno/add-on 수집

        Raises:
            APICallError: 조직 목록 조회 실패
        """
        organizations = self.client.list_organizations()
        logger.debug(f"조직 {len(organizations)}개 조회")
        return self.aggregate_organizations(organizations, progress_tracker=progress_tracker)

    def aggregate_organizations(
        self,
        organizations: Iterable[Organization],
        progress_tracker: ParallelTracker | None = None,
    ) -> AggregationResult[HerokuOrganization]:
        """조직 목록을 시드로 앱 단위 Fan-out 집계

        조직의 앱 목록 조회가 실패하면 이후 조직은 시작하지 않고,
        이미 시작된 앱 작업은 끝까지 기다린 뒤 부분 결과와 에러를 반환합니다.
        앱은 조직별로 이름순 정렬됩니다.
        """
        listed: list[HerokuOrganization] = []

        with self.executor.start_pass("apps", progress_tracker=progress_tracker) as agg:
            for organization in organizations:
                try:
                    apps = self.client.list_organization_apps(organization.id)
                except APICallError as e:
                    agg.fail(organization.name, "organizations", e)
                    break

                listed.append(HerokuOrganization(organization=organization))
                for app in apps:
                    agg.submit(
                        self._fetch_app,
                        (organization, app),
                        identifier=app.name,
                        scope=organization.name,
                    )

        result = agg.result()

        by_id = {org.organization.id: org for org in listed}
        for organization_id, heroku_app in result.records:
            by_id[organization_id].apps.append(heroku_app)
        for org in listed:
            org.sort_apps()

        return AggregationResult(records=listed, errors=result.errors)

    def _fetch_app(self, item: tuple[Organization, App]) -> tuple[str, HerokuApp]:
        """앱 하나의 dyno와 add-on 조회 (둘 중 하나라도 실패하면 레코드 없음)"""
        organization, app = item
        dynos = self.client.list_dynos(app.id)
        addons = self.client.list_addons(app.id)
        return organization.id, HerokuApp(app=app, dynos=dynos, addons=addons)

    def get_dyno_sizes(self) -> dict[str, int]:
        """dyno size 이름 -> dyno unit 매핑

        Raises:
            APICallError: dyno size 목록 조회 실패
        """
        return {size.name: size.dyno_units for size in self.client.list_dyno_sizes()}

    def get_dyno_sizes_or_empty(self) -> dict[str, int]:
        """dyno size 매핑 (실패 시 빈 매핑, 에러는 error_collector에 기록)"""
        return try_or_default(
            self.get_dyno_sizes,
            default={},
            collector=self.error_collector,
            operation="list_dyno_sizes",
        )

    # =========================================================================
    # Enterprise Team -> Space -> NAT
    # =========================================================================

    def get_enterprise_teams(self) -> list[Team]:
        """enterprise 등급 팀만 반환"""
        teams = self.client.list_teams()
        enterprise = [team for team in teams if team.is_enterprise]
        logger.debug(f"팀 {len(teams)}개 중 enterprise {len(enterprise)}개")
        return enterprise

    def get_spaces_from_teams(self, teams: Iterable[Team]) -> list[Space]:
        """주어진 팀들이 소유한 스페이스만 반환"""
        team_ids = {team.id for team in teams}
        if not team_ids:
            return []
        return [space for space in self.client.list_spaces() if space.team_id in team_ids]

    def build_ip_list(
        self,
        name: str,
        description: str,
        spaces: Iterable[Space],
        progress_tracker: ParallelTracker | None = None,
    ) -> AggregationResult[IPList]:
        """스페이스마다 NAT 정보를 병렬 조회해 IP 목록 생성

        records는 IPList 하나이며, 항목은 이름순 정렬됩니다.
        """
        result = self.executor.map(
            spaces,
            self._fetch_ip_list_item,
            identify=lambda space: space.name,
            scope=lambda space: space.team_name,
            name="spaces",
            progress_tracker=progress_tracker,
        )

        items = sorted(result.records, key=lambda item: item.name)
        ip_list = IPList(name=name, description=description, items=items)
        return AggregationResult(records=[ip_list], errors=result.errors)

    def _fetch_ip_list_item(self, space: Space) -> IPListItem:
        nat = self.client.get_space_nat(space.id)
        return IPListItem.from_space(space, nat)

    def get_ip_list(
        self,
        name: str,
        description: str,
        progress_tracker: ParallelTracker | None = None,
    ) -> AggregationResult[IPList]:
        """enterprise 팀의 모든 스페이스 NAT IP 목록

        Raises:
            APICallError: 팀 또는 스페이스 목록 조회 실패
        """
        teams = self.get_enterprise_teams()
        spaces = self.get_spaces_from_teams(teams)
        logger.debug(f"스페이스 {len(spaces)}개에서 NAT 조회")
        return self.build_ip_list(name, description, spaces, progress_tracker=progress_tracker)

    # =========================================================================
    # Account
    # =========================================================================

    def get_rate_limit_remaining(self) -> int:
        return self.client.get_rate_limit_remaining()
