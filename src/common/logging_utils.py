"""Centralized logging helpers.

All diagnostics go to stderr so that stdout stays reserved for fetched file
content and JSON payloads. Structured fields are attached through
``extra=extra_context(...)`` and rendered as ``key=value`` pairs.
"""
from __future__ import annotations

import logging
import os
import re
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

# Record attributes produced by extra_context(); rendered in this order.
CONTEXT_FIELDS = (
    "event",
    "component",
    "action",
    "outcome",
    "package",
    "repo",
    "ref",
    "target",
    "path",
    "bytes",
    "status_code",
    "count",
    "duration_ms",
    "source",
    "error",
)

_CREDENTIALS_RE = re.compile(r"(//)[^/@\s]+@")
_SECRET_PARAM_RE = re.compile(r"(?i)([?&](?:access_token|token|key|auth)=)[^&#\s]+")


class ContextFormatter(logging.Formatter):
    """Formatter that appends structured context fields to the message."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        pairs = [
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        ]
        if not pairs:
            return base
        return f"{base} " + " ".join(pairs)


def configure_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    """Configure the root logger once for CLI use.

    Args:
        level: Level name; falls back to DEPFETCH_LOG_LEVEL, then INFO.
        logfile: Optional path for an additional file handler.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = ContextFormatter(Constants.LOG_FORMAT)
    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(formatter)
    root.addHandler(stream)

    if logfile:
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(
            ContextFormatter("%(asctime)s " + Constants.LOG_FORMAT)
        )
        root.addHandler(file_handler)

    root.setLevel(level_value)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for logger calls, dropping empty values."""
    return {key: value for key, value in fields.items() if value is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by this logger."""
    return logger.isEnabledFor(logging.DEBUG)


def safe_url(url: str) -> str:
    """Redact embedded credentials and token-like query parameters."""
    if not url:
        return url
    redacted = _CREDENTIALS_RE.sub(r"\1[REDACTED]@", url)
    return _SECRET_PARAM_RE.sub(r"\1[REDACTED]", redacted)


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
