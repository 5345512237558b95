"""
core/heroku/client.py - Heroku Platform API 클라이언트

Retry + 타임아웃 + 연결 풀이 설정된 requests.Session으로
Heroku Platform API v3의 목록 조회 엔드포인트를 호출합니다.

- 인증: Bearer 토큰 (있으면 우선) 또는 Basic 인증
- 페이지네이션: Range 헤더 + 206 Partial Content / Next-Range
- 재시도: 429/5xx 응답은 urllib3 Retry가 Retry-After를 존중하며 재시도
- 에러: 2xx가 아닌 응답과 전송 오류는 APICallError로 변환

Example:
    from core.config import HerokuCredentials
    from core.heroku.client import HerokuClient

    client = HerokuClient.from_credentials(HerokuCredentials(token="..."))
    for org in client.list_organizations():
        apps = client.list_organization_apps(org.id)
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from core.config import HerokuCredentials, get_version
from core.exceptions import APICallError

from .types import AddOn, App, Dyno, DynoSize, Organization, Space, SpaceNAT, Team

logger = logging.getLogger(__name__)

API_URL = "https://api.heroku.com"
ACCEPT_HEADER = "application/vnd.heroku+json; version=3"

# 기본 retry / 연결 설정
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BACKOFF_FACTOR = 0.5
DEFAULT_CONNECT_TIMEOUT = 10  # 초
DEFAULT_READ_TIMEOUT = 30  # 초
DEFAULT_MAX_POOL_CONNECTIONS = 25  # max_workers(20) 이상 권장
DEFAULT_PAGE_SIZE = 1000

RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


def create_session(
    credentials: HerokuCredentials,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
) -> requests.Session:
    """인증 헤더와 Retry가 적용된 requests.Session 생성

    Args:
        credentials: Heroku 자격 증명 (token 우선)
        max_attempts: 최대 시도 횟수 (첫 시도 포함)
        max_pool_connections: HTTP 연결 풀 크기 (워커 수 이상 권장)

    Returns:
        requests.Session
    """
    credentials.validate()

    retry = Retry(
        total=max(max_attempts - 1, 0),
        backoff_factor=DEFAULT_BACKOFF_FACTOR,
        status_forcelist=RETRY_STATUS_CODES,
        allowed_methods=frozenset({"GET"}),
        respect_retry_after_header=True,
        raise_on_status=False,
    )
    adapter = HTTPAdapter(
        max_retries=retry,
        pool_connections=max_pool_connections,
        pool_maxsize=max_pool_connections,
    )

    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(
        {
            "Accept": ACCEPT_HEADER,
            "User-Agent": f"heroku-listing/{get_version()}",
        }
    )

    if credentials.token:
        session.headers["Authorization"] = f"Bearer {credentials.token}"
    else:
        session.auth = (credentials.username or "", credentials.password or "")

    return session


class HerokuClient:
    """Heroku Platform API 목록 조회 클라이언트

    requests.Session을 공유하므로 여러 워커 스레드에서 동시에 호출해도 됩니다.
    """

    def __init__(
        self,
        session: requests.Session,
        base_url: str = API_URL,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = (connect_timeout, read_timeout)
        self.page_size = page_size

    @classmethod
    def from_credentials(
        cls,
        credentials: HerokuCredentials,
        max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
        **kwargs: Any,
    ) -> HerokuClient:
        """자격 증명으로 세션을 만들어 클라이언트 생성"""
        session = create_session(credentials, max_pool_connections=max_pool_connections)
        return cls(session, **kwargs)

    # =========================================================================
    # HTTP
    # =========================================================================

    def _request(self, operation: str, path: str, headers: dict[str, str] | None = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise APICallError(operation, cause=e) from e

        if response.status_code >= 400:
            raise APICallError.from_response(operation, response)
        return response

    @staticmethod
    def _json(operation: str, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise APICallError(
                operation,
                status_code=response.status_code,
                error_message="잘못된 JSON 응답",
                cause=e,
            ) from e

    def _get(self, operation: str, path: str) -> dict[str, Any]:
        """단일 객체 조회 (본문이 null이면 빈 dict)"""
        response = self._request(operation, path)
        data = self._json(operation, response)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise APICallError(
                operation,
                status_code=response.status_code,
                error_message="객체 응답이 아닙니다",
            )
        return data

    def _list(self, operation: str, path: str, range_field: str = "id") -> list[dict[str, Any]]:
        """Range 헤더 기반 페이지네이션으로 전체 목록 조회

        206 응답의 Next-Range 헤더가 없어질 때까지 다음 페이지를 요청합니다.
        """
        items: list[dict[str, Any]] = []
        next_range: str | None = f"{range_field} ..; max={self.page_size}"
        page = 0

        while next_range:
            page += 1
            logger.debug(f"GET {path} (page {page}, Range: {next_range})")
            response = self._request(operation, path, headers={"Range": next_range})
            data = self._json(operation, response)
            if not isinstance(data, list):
                raise APICallError(
                    operation,
                    status_code=response.status_code,
                    error_message="목록 응답이 배열이 아닙니다",
                )
            if not all(isinstance(item, dict) for item in data):
                raise APICallError(
                    operation,
                    status_code=response.status_code,
                    error_message="목록 항목이 객체가 아닙니다",
                )
            items.extend(data)

            next_range = response.headers.get("Next-Range") if response.status_code == 206 else None

        return items

    # =========================================================================
    # Organization / App
    # =========================================================================

    def list_organizations(self) -> list[Organization]:
        data = self._list("list_organizations", "/organizations", range_field="name")
        return [Organization.from_api(d) for d in data]

    def list_organization_apps(self, organization_id: str) -> list[App]:
        data = self._list(
            "list_organization_apps",
            f"/organizations/{organization_id}/apps",
            range_field="name",
        )
        return [App.from_api(d) for d in data]

    def list_dynos(self, app_id: str) -> list[Dyno]:
        data = self._list("list_dynos", f"/apps/{app_id}/dynos", range_field="name")
        return [Dyno.from_api(d) for d in data]

    def list_addons(self, app_id: str) -> list[AddOn]:
        data = self._list("list_addons", f"/apps/{app_id}/addons", range_field="name")
        return [AddOn.from_api(d) for d in data]

    def list_dyno_sizes(self) -> list[DynoSize]:
        data = self._list("list_dyno_sizes", "/dyno-sizes")
        return [DynoSize.from_api(d) for d in data]

    # =========================================================================
    # Team / Space / NAT
    # =========================================================================

    def list_teams(self) -> list[Team]:
        data = self._list("list_teams", "/teams")
        return [Team.from_api(d) for d in data]

    def list_spaces(self) -> list[Space]:
        data = self._list("list_spaces", "/spaces")
        return [Space.from_api(d) for d in data]

    def get_space_nat(self, space_id: str) -> SpaceNAT:
        data = self._get("get_space_nat", f"/spaces/{space_id}/nat")
        return SpaceNAT.from_api(data)

    # =========================================================================
    # Account
    # =========================================================================

    def get_rate_limit_remaining(self) -> int:
        """남은 API 호출 횟수"""
        data = self._get("get_rate_limit_remaining", "/account/rate-limits")
        return int(data.get("remaining", 0))
