"""
core/heroku/export.py - IP 목록 YAML 출력

출력 형식:
    name: heroku-ips-listing
    description: ips from heroku spaces
    items:
    - name: team/space
      description: IP list from `team > space`
      ips:
      - 1.2.3.4/32
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

import yaml

from core.exceptions import ExportError

from .types import IPList

logger = logging.getLogger(__name__)


def dump_ip_list(ip_list: IPList, stream: IO[str] | None = None) -> str | None:
    """IP 목록을 YAML로 직렬화

    Args:
        ip_list: IP 목록
        stream: 출력 스트림 (None이면 문자열 반환)
    """
    return yaml.safe_dump(
        ip_list.to_dict(),
        stream,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def write_ip_list(ip_list: IPList, path: str | Path) -> Path:
    """IP 목록을 YAML 파일로 저장

    Returns:
        저장된 파일 경로

    Raises:
        ExportError: 파일 생성/쓰기 실패
    """
    output_path = Path(path)
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            dump_ip_list(ip_list, f)
    except OSError as e:
        raise ExportError(str(output_path), e.strerror or str(e), e) from e

    logger.debug(f"IP 목록 저장: {output_path} ({len(ip_list.items)}개 항목)")
    return output_path
