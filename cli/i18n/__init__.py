"""
cli/i18n/__init__.py - Internationalization (i18n) Module

Korean (ko) is the default language, with English (en) as an option.
The language is chosen once per invocation with `--lang`.

Usage:
    from cli.i18n import t, set_lang

    set_lang("en")
    print(t("cli.ips_created", path="ips-listing.yml", count=3))
    # "Success! Created file: ips-listing.yml (3 spaces)"
"""

from __future__ import annotations

import contextlib
from contextvars import ContextVar
from typing import Any

_current_lang: ContextVar[str] = ContextVar("lang", default="ko")

# Supported languages
SUPPORTED_LANGS = ("ko", "en")
DEFAULT_LANG = "ko"


def get_lang() -> str:
    """Get current language from context variable."""
    return _current_lang.get()


def set_lang(lang: str) -> None:
    """Set current language (unsupported codes fall back to Korean)."""
    if lang not in SUPPORTED_LANGS:
        lang = DEFAULT_LANG
    _current_lang.set(lang)


def t(key: str, lang: str | None = None, **kwargs: Any) -> str:
    """Translate a message key to the current language.

    Args:
        key: Message key in namespace.key format (e.g., "cli.ips_created")
        lang: Optional language override
        **kwargs: Format string arguments for interpolation

    Returns:
        Translated string, or key if translation not found
    """
    from cli.i18n.messages import MESSAGES

    if lang is None or lang not in SUPPORTED_LANGS:
        lang = get_lang()

    msg_dict = MESSAGES.get(key)
    if msg_dict is None:
        return key

    text = msg_dict.get(lang) or msg_dict.get(DEFAULT_LANG, key)

    if kwargs:
        with contextlib.suppress(KeyError, ValueError, IndexError):
            text = text.format(**kwargs)

    return text


__all__ = [
    "t",
    "get_lang",
    "set_lang",
    "SUPPORTED_LANGS",
    "DEFAULT_LANG",
]
