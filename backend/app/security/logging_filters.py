"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+|requester_id\"?\s*[:=]\s*\"?[\w:\.-]+\"?|did:privy:\w+)",
    re.IGNORECASE,
)


def redact(value: str) -> str:
    """Return ``value`` with bearer tokens and requester ids masked."""
    return _SENSITIVE_PATTERN.sub("**REDACTED**", value)


class SensitiveFilter(logging.Filter):
    """Replace sensitive tokens in log messages with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


__all__ = ["SensitiveFilter", "redact"]
