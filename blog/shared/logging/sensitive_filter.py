# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_MASK = "***REDACTED***"


def _keyed(name: str, value: str, *, flags: int = re.IGNORECASE) -> re.Pattern[str]:
    # matches `name=value`, `name: value` and quoted variants
    return re.compile(rf"((?:{name})\s*[:=]\s*['\"]?)({value})(['\"]?)", flags)


_KEYED_SECRETS: tuple[re.Pattern[str], ...] = (
    _keyed(r"pass(?:word|wd)?|pwd", r"[^'\"\s,]+"),
    _keyed(r"session[_-]?id|token", r"[A-Za-z0-9_\-.+/=]{8,}"),
    _keyed(r"csrf[_-]?token", r"[A-Za-z0-9_\-.]{20,}"),
    _keyed(r"(?:password_)?salt", r"[A-Za-z0-9+/=]{8,}"),
    _keyed(r"(?:password_)?hash", r"[A-Za-z0-9+/=]{16,}"),
    _keyed(r"authorization", r"[^'\"]{10,}"),
)

# cookie headers carry the session token as `<CookieName>=<token>`
_SESSION_COOKIE = re.compile(r"((?:BlogSession|session)=)([^;\s]+)", re.IGNORECASE)
_DB_CREDENTIALS = re.compile(r"([a-z][a-z0-9+]*://[^:/@\s]+:)([^@\s]+)(@)", re.IGNORECASE)
_EMAIL = re.compile(r"[A-Za-z0-9._%+-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})")


def sanitize_message(message: str) -> str:
    for pattern in _KEYED_SECRETS:
        message = pattern.sub(rf"\g<1>{_MASK}\g<3>", message)
    message = _SESSION_COOKIE.sub(rf"\g<1>{_MASK}", message)
    message = _DB_CREDENTIALS.sub(rf"\g<1>{_MASK}\g<3>", message)
    return _EMAIL.sub(r"***@\1", message)


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru filter that scrubs secrets from the rendered message in place."""
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["sanitize_message", "sanitize_record"]
