"""
cli/i18n/messages/cli_commands.py - CLI Command Messages

Contains translations for the heroku-listing commands and their results.
"""

from __future__ import annotations

CLI_MESSAGES = {
    # =========================================================================
    # Help Text
    # =========================================================================
    "help_intro": {
        "ko": "Heroku 조직/앱/dyno/add-on 자산과\nenterprise 스페이스의 NAT IP 목록을 조회하는 CLI 도구입니다.",
        "en": "A CLI tool that lists Heroku organizations, apps, dynos and add-ons,\nand the NAT IPs of enterprise spaces.",
    },
    # =========================================================================
    # Credentials
    # =========================================================================
    "credentials_required": {
        "ko": "--heroku.token 또는 --heroku.username/--heroku.password가 필요합니다",
        "en": "--heroku.token or --heroku.username/--heroku.password is required",
    },
    # =========================================================================
    # cloud
    # =========================================================================
    "collecting_apps": {
        "ko": "앱 수집",
        "en": "Collecting apps",
    },
    "organizations_failed": {
        "ko": "조직 목록 조회 실패: {error}",
        "en": "Failed to list organizations: {error}",
    },
    "aggregation_failed": {
        "ko": "{count}개 작업 실패: {error}",
        "en": "{count} task(s) failed: {error}",
    },
    "dyno_sizes_failed": {
        "ko": "dyno size 조회 실패, 비용을 0으로 표시합니다: {error}",
        "en": "Failed to get dyno sizes, rendering zero cost: {error}",
    },
    # =========================================================================
    # ips
    # =========================================================================
    "collecting_spaces": {
        "ko": "스페이스 NAT 수집",
        "en": "Collecting space NATs",
    },
    "spaces_failed": {
        "ko": "팀/스페이스 목록 조회 실패: {error}",
        "en": "Failed to list teams/spaces: {error}",
    },
    "ips_not_written": {
        "ko": "에러가 있어 파일을 생성하지 않았습니다",
        "en": "File was not created because of errors",
    },
    "ips_created": {
        "ko": "파일 생성 완료: {path} ({count}개 스페이스)",
        "en": "Success! Created file: {path} ({count} spaces)",
    },
    # =========================================================================
    # rate-limit
    # =========================================================================
    "rate_limit_remaining": {
        "ko": "남은 API 호출 횟수: {count}",
        "en": "Remaining API calls: {count}",
    },
    "rate_limit_failed": {
        "ko": "API 호출 한도 조회 실패: {error}",
        "en": "Failed to get rate limit: {error}",
    },
    # =========================================================================
    # Progress / Errors
    # =========================================================================
    "progress_done": {
        "ko": "{name} 완료",
        "en": "{name} done",
    },
    "progress_done_failed": {
        "ko": "{name} 완료 ({count}개 실패)",
        "en": "{name} done ({count} failed)",
    },
    "error_summary": {
        "ko": "오류 요약",
        "en": "Error summary",
    },
    "count": {
        "ko": "{count}건",
        "en": "{count}",
    },
    "more_items": {
        "ko": "... 외 {count}건",
        "en": "... and {count} more",
    },
}
