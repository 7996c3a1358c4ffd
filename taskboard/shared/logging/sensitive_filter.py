# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redaction of credentials and personal data before log records are written."""

from __future__ import annotations

import re
from typing import Any, NamedTuple


class _Redaction(NamedTuple):
    pattern: re.Pattern[str]
    replacement: str


def _rule(pattern: str, replacement: str, flags: int = re.IGNORECASE) -> _Redaction:
    return _Redaction(re.compile(pattern, flags), replacement)


_QUOTED_VALUE = r"(\s*[:=]\s*['\"]?)"

REDACTIONS: tuple[_Redaction, ...] = (
    # a raw JWT anywhere in the text, before the key=value rules cut it apart
    _rule(r"\beyJ[\w-]+\.[\w-]+\.[\w-]+", "***JWT***", 0),
    _rule(r"(bearer\s+)[\w.\-]{20,}", r"\1***REDACTED***"),
    _rule(r"(authorization\s*:\s*['\"]?)[^'\"\s]{10,}", r"\1***REDACTED***"),
    _rule(rf"((?:jwt[_-]?)?secret(?:[_-]?key)?{_QUOTED_VALUE})[^'\"\s]{{8,}}", r"\1***REDACTED***"),
    _rule(rf"((?:auth[_-]?)?token{_QUOTED_VALUE})[\w.\-]{{20,}}", r"\1***REDACTED***"),
    _rule(rf"((?:password|passwd|pwd){_QUOTED_VALUE})[^'\"\s]{{6,}}", r"\1***REDACTED***"),
    _rule(
        r"((?:postgres(?:ql)?|mysql)(?:\+\w+)?://[^:/\s]+:)[^@\s]+@",
        r"\1***REDACTED***@",
    ),
    _rule(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[a-z]{2,})", r"***@\1"),
)


def sanitize_message(message: str) -> str:
    for rule in REDACTIONS:
        message = rule.pattern.sub(rule.replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru sink filter: scrub the message in place and always keep the record."""

    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["REDACTIONS", "sanitize_message", "sanitize_record"]
