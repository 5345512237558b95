"""
tests/conftest.py - pytest 공통 픽스처

Heroku API 클라이언트 모킹과 테스트용 엔티티 팩토리를 제공합니다.

Usage:
    def test_something(fake_client):
        fake_client.list_organizations.return_value = [make_org("org-a")]
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.heroku.types import AddOn, App, Dyno, Organization, Space, SpaceNAT, Team  # noqa: E402

HEROKU_ENV_VARS = (
    "HEROKU_USERNAME",
    "HEROKU_PASSWORD",
    "HEROKU_AUTH_TOKEN",
    "OUTPUT_FORMAT",
    "HEROKU_DYNO_PRICE",
    "HEROKU_LISTING_WORKERS",
)


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def clean_heroku_env(monkeypatch):
    """실제 자격 증명/설정 환경 변수가 테스트에 섞이지 않도록 제거"""
    for name in HEROKU_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    from cli.i18n import set_lang

    set_lang("ko")
    yield


# =============================================================================
# 엔티티 팩토리
# =============================================================================


def make_org(name: str) -> Organization:
    return Organization(id=f"{name}-id", name=name)


def make_app(name: str, stack: str = "heroku-22") -> App:
    return App(
        id=f"{name}-id",
        name=name,
        released_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        updated_at=datetime(2024, 3, 4, 5, 6, 7, tzinfo=timezone.utc),
        stack=stack,
    )


def make_dyno(name: str, size: str = "standard-1x") -> Dyno:
    return Dyno(id=f"{name}-id", name=name, size=size, type=name.split(".")[0], state="up")


def make_addon(name: str, service: str) -> AddOn:
    return AddOn(id=f"{name}-id", name=name, service_name=service, plan_name=f"{service}:mini")


def make_team(name: str, type: str = "enterprise") -> Team:
    return Team(id=f"{name}-id", name=name, type=type)


def make_space(name: str, team: Team) -> Space:
    return Space(id=f"{name}-id", name=name, team_id=team.id, team_name=team.name)


# =============================================================================
# Heroku 클라이언트 모킹
# =============================================================================


@pytest.fixture
def fake_client():
    """HerokuClient 모킹

    기본 시나리오:
        org-a: app-1 (standard-1x x2, redis x1)
        org-b: 앱 없음
    """
    client = MagicMock()

    orgs = {"org-a-id": [make_app("app-1")], "org-b-id": []}
    dynos = {"app-1-id": [make_dyno("web.1"), make_dyno("web.2")]}
    addons = {"app-1-id": [make_addon("redis-cubic-1", "heroku-redis")]}

    client.list_organizations.return_value = [make_org("org-a"), make_org("org-b")]
    client.list_organization_apps.side_effect = lambda org_id: orgs[org_id]
    client.list_dynos.side_effect = lambda app_id: dynos.get(app_id, [])
    client.list_addons.side_effect = lambda app_id: addons.get(app_id, [])
    client.list_dyno_sizes.return_value = []
    client.list_teams.return_value = []
    client.list_spaces.return_value = []
    client.get_space_nat.return_value = SpaceNAT(sources=[], state="enabled")
    client.get_rate_limit_remaining.return_value = 4500

    return client
