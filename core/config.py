"""
core/config.py - 중앙 설정 관리

버전 정보, 출력 형식, Heroku 자격 증명을 관리합니다.
CLI 옵션이 없으면 click이 아래 환경 변수에서 값을 읽습니다 (cli/app.py).

환경 변수:
    HEROKU_USERNAME / HEROKU_PASSWORD: Basic 인증
    HEROKU_AUTH_TOKEN: Bearer 토큰 (있으면 Basic 인증 무시)
    OUTPUT_FORMAT: cloud 출력 형식 (tab, json, pretty-json, yaml)
    HEROKU_DYNO_PRICE: dyno unit 1개의 월 단가 ($)
    HEROKU_LISTING_WORKERS: 병렬 워커 수

Usage:
    from core.config import HerokuCredentials, OutputFormat

    credentials = HerokuCredentials(token=os.environ["HEROKU_AUTH_TOKEN"])
    credentials.validate()
    output_format = OutputFormat.from_string("pretty-json")
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from core.exceptions import ConfigError

PROJECT_ROOT = Path(__file__).resolve().parent.parent
VERSION_FILE = PROJECT_ROOT / "version.txt"

DEFAULT_IP_LIST_FILE = "ips-listing.yml"
DEFAULT_IP_LIST_NAME = "heroku-ips-listing"
DEFAULT_IP_LIST_DESCRIPTION = "ips from heroku spaces"
DEFAULT_MAX_WORKERS = 20


def get_version() -> str:
    """version.txt에서 버전 문자열 반환 (없으면 "0.0.0")"""
    try:
        return VERSION_FILE.read_text(encoding="utf-8").strip() or "0.0.0"
    except OSError:
        return "0.0.0"


class OutputFormat(Enum):
    """cloud 명령 출력 형식"""

    TAB = "tab"
    JSON = "json"
    PRETTY_JSON = "pretty-json"
    YAML = "yaml"

    @classmethod
    def choices(cls) -> list[str]:
        return [f.value for f in cls]

    @classmethod
    def from_string(cls, value: str) -> OutputFormat:
        """문자열에서 OutputFormat 생성

        Raises:
            ConfigError: 지원하지 않는 형식
        """
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            raise ConfigError("format", f"지원하지 않는 형식 '{value}' ({', '.join(cls.choices())})", e) from e


@dataclass
class HerokuCredentials:
    """Heroku API 자격 증명

    token이 있으면 Basic 인증(username/password)은 무시됩니다.
    """

    username: str | None = None
    password: str | None = None
    token: str | None = None

    @property
    def uses_token(self) -> bool:
        return bool(self.token)

    def validate(self) -> None:
        """자격 증명 검증

        Raises:
            ConfigError: 토큰도 username/password 쌍도 없는 경우
        """
        if self.token:
            return
        if not self.username or not self.password:
            raise ConfigError(
                "credentials",
                "--heroku.token 또는 --heroku.username/--heroku.password가 필요합니다",
            )

    def __repr__(self) -> str:
        # 비밀번호/토큰은 노출하지 않음
        return f"HerokuCredentials(username={self.username!r}, uses_token={self.uses_token})"

