"""
Redact credentials from values before they reach logs or error reports.
"""

import re
from typing import Any

REDACTED = "[REDACTED]"

SENSITIVE_KEYS = (
    "password",
    "passwd",
    "token",
    "secret",
    "apikey",
    "api_key",
    "authorization",
)

SENSITIVE_PATTERNS = [
    re.compile(r"password[\"\s:=]+([^\s\"]+)", re.IGNORECASE),
    re.compile(r"token[\"\s:=]+([^\s\"]+)", re.IGNORECASE),
    re.compile(r"bearer\s+([^\s\"]+)", re.IGNORECASE),
]


def is_sensitive_key(key: Any) -> bool:
    lowered = str(key).lower()
    return any(sensitive in lowered for sensitive in SENSITIVE_KEYS)


def _redact_match(match: re.Match) -> str:
    prefix_length = match.start(1) - match.start(0)
    return match.group(0)[:prefix_length] + REDACTED


def sanitize_for_log(value: Any) -> Any:
    """
    Return a copy of `value` with secrets replaced.
    Mapping entries whose key looks sensitive are dropped wholesale; strings are
    scanned for `password=...`, `token: ...` and `Bearer ...` fragments.
    """
    if isinstance(value, str):
        for pattern in SENSITIVE_PATTERNS:
            value = pattern.sub(_redact_match, value)
        return value

    if isinstance(value, dict):
        return {
            key: REDACTED if is_sensitive_key(key) else sanitize_for_log(item)
            for key, item in value.items()
        }

    if isinstance(value, (list, tuple)):
        return type(value)(sanitize_for_log(item) for item in value)

    return value
