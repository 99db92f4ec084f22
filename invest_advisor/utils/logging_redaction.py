"""
Logging redaction helpers.
Redacts API keys and tokens from log messages.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable


_PATTERNS: Iterable[tuple[re.Pattern, str]] = (
    # Query-string API key: ...&apikey=<key>
    (re.compile(r"(?i)([?&]api_?key=)([^&\s'\"]+)"), r"\1[REDACTED]"),
    # Authorization: Bearer <token>
    (re.compile(r"(Bearer\s+)([A-Za-z0-9\-\._]+)"), r"\1[REDACTED]"),
    # Key/value pairs in config dumps
    (re.compile(r"(?i)(quote_api_key|api[_-]?key|access_token)\s*[:=]\s*([A-Za-z0-9\-\._]+)"), r"\1=[REDACTED]"),
)


def redact_message(message: str) -> str:
    redacted = message
    for pattern, replacement in _PATTERNS:
        redacted = pattern.sub(replacement, redacted)
    return redacted


class RedactingFilter(logging.Filter):
    """Filter that redacts sensitive data from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed %-args; let logging report it as usual
            return True
        record.msg = redact_message(message)
        record.args = ()
        return True


def install_redaction_filter() -> None:
    """
    Attach the filter to the root logger's handlers.

    Logger-level filters do not see records propagated from child
    loggers, so handlers are where redaction has to happen.
    """
    root = logging.getLogger()
    targets = [root, *root.handlers]
    for target in targets:
        if any(isinstance(existing, RedactingFilter) for existing in target.filters):
            continue
        target.addFilter(RedactingFilter())
