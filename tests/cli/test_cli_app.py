# tests/cli/test_cli_app.py
"""
cli/app.py 단위 테스트

Heroku 클라이언트를 모킹하고 CliRunner로 명령어를 실행합니다.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner
from conftest import make_app, make_space, make_team

from cli.app import cli
from core.exceptions import APICallError
from core.heroku.types import DynoSize, SpaceNAT

TOKEN_ARGS = ["-t", "test-token", "-q"]
WIDE_ENV = {"COLUMNS": "200"}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def client_cls(fake_client):
    """HerokuClient.from_credentials가 fake_client를 반환하도록 패치"""
    with patch("cli.app.HerokuClient") as mock_cls:
        mock_cls.from_credentials.return_value = fake_client
        yield mock_cls


# =============================================================================
# CLI 그룹
# =============================================================================


class TestCLI:
    """CLI 그룹 테스트"""

    def test_version_option(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "heroku-listing" in result.output

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("cloud", "ips", "rate-limit"):
            assert command in result.output

    @pytest.mark.parametrize("command", ["cloud", "ips", "rate-limit"])
    def test_missing_credentials(self, runner, command):
        """자격 증명이 없으면 사용법 오류 (exit 2)"""
        result = runner.invoke(cli, [command])

        assert result.exit_code == 2
        assert "--heroku.token" in result.output

    def test_username_without_password(self, runner):
        result = runner.invoke(cli, ["--heroku.username", "me@example.com", "cloud"])

        assert result.exit_code == 2

    def test_credentials_from_env(self, runner, client_cls):
        result = runner.invoke(cli, ["-q", "rate-limit"], env={"HEROKU_AUTH_TOKEN": "env-token"})

        assert result.exit_code == 0
        credentials = client_cls.from_credentials.call_args.args[0]
        assert credentials.token == "env-token"

    def test_basic_credentials(self, runner, client_cls):
        result = runner.invoke(
            cli,
            ["--heroku.username", "me@example.com", "--heroku.password", "pw", "-q", "rate-limit"],
        )

        assert result.exit_code == 0
        credentials = client_cls.from_credentials.call_args.args[0]
        assert credentials.username == "me@example.com"
        assert not credentials.uses_token

    def test_pool_size_follows_workers(self, runner, client_cls):
        runner.invoke(cli, [*TOKEN_ARGS, "--workers", "40", "rate-limit"])

        assert client_cls.from_credentials.call_args.kwargs["max_pool_connections"] == 40

    def test_invalid_workers(self, runner):
        result = runner.invoke(cli, [*TOKEN_ARGS, "--workers", "0", "cloud"])

        assert result.exit_code == 2


# =============================================================================
# cloud
# =============================================================================


class TestCloudCommand:
    """cloud 명령어 테스트"""

    def test_table_output(self, runner, client_cls, fake_client):
        fake_client.list_dyno_sizes.return_value = [DynoSize("standard-1x", 1)]

        result = runner.invoke(cli, [*TOKEN_ARGS, "cloud", "--heroku.dyno-unit-price", "25"], env=WIDE_ENV)

        assert result.exit_code == 0
        assert "app-1" in result.output
        assert "2 (50$)" in result.output
        assert "standard-1x 2" in result.output
        assert "heroku-redis 1" in result.output

    def test_json_output(self, runner, client_cls):
        result = runner.invoke(cli, [*TOKEN_ARGS, "cloud", "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [o["organization"]["name"] for o in data] == ["org-a", "org-b"]
        assert data[1]["organization_applications"] == []

    def test_json_does_not_fetch_dyno_sizes(self, runner, client_cls, fake_client):
        runner.invoke(cli, [*TOKEN_ARGS, "cloud", "-f", "pretty-json"])

        fake_client.list_dyno_sizes.assert_not_called()

    def test_format_from_env(self, runner, client_cls):
        result = runner.invoke(cli, [*TOKEN_ARGS, "cloud"], env={"OUTPUT_FORMAT": "yaml"})

        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout)[0]["organization"]["name"] == "org-a"

    def test_invalid_format(self, runner, client_cls):
        result = runner.invoke(cli, [*TOKEN_ARGS, "cloud", "-f", "xml"])

        assert result.exit_code == 2

    def test_negative_price(self, runner, client_cls):
        result = runner.invoke(cli, [*TOKEN_ARGS, "cloud", "--heroku.dyno-unit-price", "-1"])

        assert result.exit_code == 2

    def test_dyno_sizes_failure_warns(self, runner, client_cls, fake_client):
        """dyno size 조회 실패: 경고 후 비용 0으로 출력"""
        fake_client.list_dyno_sizes.side_effect = APICallError("list_dyno_sizes", status_code=503)

        result = runner.invoke(cli, [*TOKEN_ARGS, "cloud"], env=WIDE_ENV)

        assert result.exit_code == 0
        assert "dyno size 조회 실패" in result.output
        assert "app-1" in result.output

    def test_organizations_failure(self, runner, client_cls, fake_client):
        fake_client.list_organizations.side_effect = APICallError("list_organizations", status_code=401)

        result = runner.invoke(cli, [*TOKEN_ARGS, "cloud"])

        assert result.exit_code == 1
        assert "조직 목록 조회 실패" in result.output

    def test_nested_failure(self, runner, client_cls, fake_client):
        """중첩 호출 실패: 에러 보고 + exit 1"""
        fake_client.list_dynos.side_effect = APICallError("list_dynos", status_code=404, error_id="not_found")

        result = runner.invoke(cli, [*TOKEN_ARGS, "cloud", "-f", "json"])

        assert result.exit_code == 1
        assert "1개 작업 실패" in result.output
        assert "org-a/app-1" in result.output

    def test_multiple_failures_summary(self, runner, client_cls, fake_client):
        """에러가 2건 이상이면 카테고리별 요약 트리 출력"""
        apps = {"org-a-id": [make_app("app-1"), make_app("app-2")], "org-b-id": []}
        failures = {
            "app-1-id": APICallError("list_dynos", status_code=404, error_id="not_found"),
            "app-2-id": APICallError("list_dynos", status_code=503),
        }

        def list_dynos(app_id):
            raise failures[app_id]

        fake_client.list_organization_apps.side_effect = lambda org_id: apps[org_id]
        fake_client.list_dynos.side_effect = list_dynos

        result = runner.invoke(cli, [*TOKEN_ARGS, "cloud", "-f", "json"], env=WIDE_ENV)

        assert result.exit_code == 1
        assert "2개 작업 실패" in result.output
        assert "오류 요약" in result.output
        assert "not_found" in result.output
        assert "service_error" in result.output
        assert "org-a/app-2: HTTP503" in result.output

    def test_interrupted(self, runner, client_cls, fake_client):
        fake_client.list_organizations.side_effect = KeyboardInterrupt

        result = runner.invoke(cli, [*TOKEN_ARGS, "cloud"])

        assert result.exit_code == 130

    def test_english_messages(self, runner, client_cls, fake_client):
        fake_client.list_organizations.side_effect = APICallError("list_organizations", status_code=500)

        result = runner.invoke(cli, [*TOKEN_ARGS, "--lang", "en", "cloud"])

        assert "Failed to list organizations" in result.output


# =============================================================================
# ips
# =============================================================================


class TestIpsCommand:
    """ips 명령어 테스트"""

    @pytest.fixture
    def spaces(self, fake_client):
        team = make_team("acme")
        fake_client.list_teams.return_value = [team, make_team("small", type="team")]
        fake_client.list_spaces.return_value = [make_space("prod", team), make_space("dev", team)]
        fake_client.get_space_nat.side_effect = lambda space_id: SpaceNAT(sources=[f"{space_id}-ip"])

    def test_writes_file(self, runner, client_cls, spaces, tmp_path):
        output = tmp_path / "ips.yml"

        result = runner.invoke(cli, [*TOKEN_ARGS, "ips", "-o", str(output)])

        assert result.exit_code == 0
        assert "파일 생성 완료" in result.output
        data = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert data["name"] == "heroku-ips-listing"
        assert data["description"] == "ips from heroku spaces"
        assert [item["name"] for item in data["items"]] == ["acme/dev", "acme/prod"]
        assert data["items"][1]["ips"] == ["prod-id-ip"]

    def test_default_path(self, runner, client_cls, spaces):
        with runner.isolated_filesystem() as fs:
            result = runner.invoke(cli, [*TOKEN_ARGS, "ips"])

            assert result.exit_code == 0
            assert Path(fs, "ips-listing.yml").exists()

    def test_custom_name(self, runner, client_cls, spaces, tmp_path):
        output = tmp_path / "ips.yml"

        runner.invoke(cli, [*TOKEN_ARGS, "ips", "-o", str(output), "--name", "vpn", "--description", "allow"])

        data = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert (data["name"], data["description"]) == ("vpn", "allow")

    def test_nat_failure_no_file(self, runner, client_cls, fake_client, spaces, tmp_path):
        """NAT 조회 실패가 하나라도 있으면 파일을 만들지 않음"""
        fake_client.get_space_nat.side_effect = APICallError("get_space_nat", status_code=404)
        output = tmp_path / "ips.yml"

        result = runner.invoke(cli, [*TOKEN_ARGS, "ips", "-o", str(output)])

        assert result.exit_code == 1
        assert not output.exists()
        assert "파일을 생성하지 않았습니다" in result.output

    def test_teams_failure(self, runner, client_cls, fake_client, tmp_path):
        fake_client.list_teams.side_effect = APICallError("list_teams", status_code=403)

        result = runner.invoke(cli, [*TOKEN_ARGS, "ips", "-o", str(tmp_path / "ips.yml")])

        assert result.exit_code == 1
        assert "팀/스페이스 목록 조회 실패" in result.output

    def test_unwritable_path(self, runner, client_cls, spaces, tmp_path):
        result = runner.invoke(cli, [*TOKEN_ARGS, "ips", "-o", str(tmp_path / "missing" / "ips.yml")])

        assert result.exit_code == 1
        assert "파일 출력 오류" in result.output


# =============================================================================
# rate-limit
# =============================================================================


class TestRateLimitCommand:
    def test_remaining(self, runner, client_cls):
        result = runner.invoke(cli, [*TOKEN_ARGS, "rate-limit"])

        assert result.exit_code == 0
        assert "4500" in result.stdout

    def test_failure(self, runner, client_cls, fake_client):
        fake_client.get_rate_limit_remaining.side_effect = APICallError("get_rate_limit_remaining", status_code=401)

        result = runner.invoke(cli, [*TOKEN_ARGS, "rate-limit"])

        assert result.exit_code == 1
