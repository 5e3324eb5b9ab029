"""Logging setup shared by the stdio and HTTP entrypoints.

Everything goes to stderr: the stdio transport owns stdout for MCP messages.
"""

from __future__ import annotations

import logging
import re
import sys

_SECRET_PATTERNS = [
    re.compile(r"(?i)(bearer\s+)[a-zA-Z0-9._\-]{8,}"),
    re.compile(r"(?i)((?:x-api-key|api_key|authorization|token)[=:]\s*)[^\s,'\"]{8,}"),
]

_REDACTED = "***REDACTED***"


class _SecretFilter(logging.Filter):
    """Redact credentials from log messages and exception text."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact(str(record.msg))
        if isinstance(record.args, tuple):
            record.args = tuple(redact(a) if isinstance(a, str) else a for a in record.args)
        if record.exc_text:
            record.exc_text = redact(record.exc_text)
        return True


def redact(text: str) -> str:
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(lambda m: m.group(1) + _REDACTED, text)
    return text


def setup_logging(log_level: str | None = None) -> None:
    """Configure the root logger with a single redacting stderr handler."""
    level = (log_level or "INFO").upper()

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(_SecretFilter())
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request line at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
