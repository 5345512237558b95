# core/__init__.py
"""
core - Heroku 자산 조회 인프라

아키텍처:
    core/
    ├── parallel/       # 병렬 처리 (executor, rate limiter, 에러 수집)
    ├── heroku/         # Heroku API 클라이언트, 수집기, 요약, YAML 출력
    ├── output/         # 표/JSON/YAML 렌더러
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.config import HerokuCredentials
    from core.heroku import HerokuClient, HerokuListing

    credentials = HerokuCredentials(token="...")
    listing = HerokuListing(HerokuClient.from_credentials(credentials))
    result = listing.list_apps_by_organization()
"""

from core import config, exceptions, heroku, output, parallel

__all__: list[str] = [
    # 서브패키지
    "parallel",
    "heroku",
    "output",
    # 모듈
    "config",
    "exceptions",
]
