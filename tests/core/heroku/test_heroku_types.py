"""
tests/core/heroku/test_heroku_types.py - API 응답 파싱 테스트
"""

from datetime import datetime, timezone

from conftest import make_app, make_space, make_team

from core.heroku.types import (
    AddOn,
    App,
    Dyno,
    DynoSize,
    HerokuApp,
    HerokuOrganization,
    IPListItem,
    Organization,
    Space,
    SpaceNAT,
    Team,
)


class TestFromApi:
    def test_app(self):
        app = App.from_api(
            {
                "id": "01234567-89ab",
                "name": "example",
                "released_at": "2012-01-01T12:00:00Z",
                "updated_at": "2012-01-02T12:00:00Z",
                "stack": {"id": "s", "name": "heroku-22"},
                "region": {"id": "r", "name": "us"},
            }
        )

        assert app.name == "example"
        assert app.released_at == datetime(2012, 1, 1, 12, tzinfo=timezone.utc)
        assert app.stack == "heroku-22"
        assert app.region == "us"

    def test_app_never_released(self):
        """released_at이 null이거나 잘못된 값이면 None"""
        assert App.from_api({"id": "x", "name": "x", "released_at": None}).released_at is None
        assert App.from_api({"id": "x", "name": "x", "released_at": "not-a-date"}).released_at is None

    def test_dyno(self):
        dyno = Dyno.from_api({"id": "d", "name": "web.1", "size": "Standard-1X", "type": "web", "state": "up"})

        assert dyno.size == "Standard-1X"
        assert dyno.type == "web"

    def test_addon(self):
        addon = AddOn.from_api(
            {
                "id": "a",
                "name": "redis-cubic-1",
                "addon_service": {"id": "s", "name": "heroku-redis"},
                "plan": {"id": "p", "name": "heroku-redis:mini"},
            }
        )

        assert addon.service_name == "heroku-redis"
        assert addon.plan_name == "heroku-redis:mini"

    def test_addon_without_service(self):
        assert AddOn.from_api({"id": "a", "name": "x", "addon_service": None}).service_name == ""

    def test_dyno_size(self):
        assert DynoSize.from_api({"name": "performance-l", "dyno_units": 8}).dyno_units == 8
        assert DynoSize.from_api({"name": "eco", "dyno_units": None}).dyno_units == 0

    def test_team(self):
        assert Team.from_api({"id": "t", "name": "acme", "type": "enterprise"}).is_enterprise
        assert not Team.from_api({"id": "t", "name": "small", "type": "team"}).is_enterprise

    def test_space(self):
        space = Space.from_api(
            {
                "id": "s",
                "name": "prod",
                "team": {"id": "t", "name": "acme"},
                "region": {"id": "r", "name": "virginia"},
                "state": "allocated",
            }
        )

        assert space.team_id == "t"
        assert space.composite_name == "acme/prod"
        assert space.region == "virginia"

    def test_space_nat(self):
        nat = SpaceNAT.from_api({"sources": ["1.1.1.1", "2.2.2.2"], "state": "enabled"})

        assert nat.sources == ["1.1.1.1", "2.2.2.2"]
        assert SpaceNAT.from_api({"sources": None}).sources == []


class TestHerokuApp:
    def test_is_running(self):
        assert not HerokuApp(app=make_app("idle")).is_running
        assert HerokuApp(app=make_app("busy"), dynos=[Dyno(id="d", name="web.1", size="basic")]).is_running

    def test_to_dict(self):
        data = HerokuApp(app=make_app("app-1")).to_dict()

        assert data["application"]["name"] == "app-1"
        assert data["application"]["released_at"] == "2024-01-02T03:04:05+00:00"
        assert data["application_dynos"] == []
        assert data["application_addons"] == []


class TestHerokuOrganization:
    def test_sort_apps(self):
        org = HerokuOrganization(
            organization=Organization(id="o", name="org"),
            apps=[HerokuApp(app=make_app(n)) for n in ("b", "c", "a")],
        )

        org.sort_apps()

        assert [a.name for a in org.apps] == ["a", "b", "c"]

    def test_to_dict(self):
        org = HerokuOrganization(organization=Organization(id="o", name="org"))

        assert org.to_dict() == {"organization": {"id": "o", "name": "org"}, "organization_applications": []}


def test_ip_list_item_from_space():
    item = IPListItem.from_space(make_space("prod", make_team("acme")), SpaceNAT(sources=["1.2.3.4"]))

    assert item.name == "acme/prod"
    assert item.description == "IP list from `acme > prod`"
    assert item.ips == ["1.2.3.4"]
