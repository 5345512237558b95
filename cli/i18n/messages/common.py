"""
cli/i18n/messages/common.py - Common Messages
"""

from __future__ import annotations

COMMON_MESSAGES = {
    "interrupted": {
        "ko": "사용자에 의해 중단되었습니다",
        "en": "Interrupted by user",
    },
    "error": {
        "ko": "오류: {error}",
        "en": "Error: {error}",
    },
}
