"""Logging configuration and helpers for release-prep.

This module configures process-wide logging and supports two formats:

* human-readable console logs, and
* structured JSON logs for CI log ingestion.

It also exposes :func:`log_context` for building consistent ``extra`` payloads.

Everything uses the standard :mod:`logging` library. Logs go to stderr and are
independent of the messages the command line prints for the user.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import PurePath
from typing import Any

from .settings import Settings

SERVICE_NAME = "release-prep"

# Attributes that are already handled by logging and should not be copied into
# the extra key=value list.
_STANDARD_ATTRS: set[str] = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "asctime",
    "taskName",
}

_CONFIGURED_FLAG = "_release_prep_configured"


class ConsoleLogFormatter(logging.Formatter):
    """Render log records as single-line console output.

    Example line:

        2026-03-01T09:14:02.118Z INFO  release_prep.program promotion.file.promoted
        path=CHANGELOG.md version=1.1.0
    """

    _time_format = "%Y-%m-%dT%H:%M:%S"

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s %(levelname)-5s %(name)s %(message)s", datefmt=self._time_format)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return _format_timestamp(record, datefmt or self._time_format)

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - std signature
        base = super().format(record)
        extras = [
            f"{key}={_format_extra_value(value)}"
            for key, value in sorted(_record_extras(record).items())
        ]
        if extras:
            return f"{base} " + " ".join(extras)
        return base


class JsonLogFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    _time_format = "%Y-%m-%dT%H:%M:%S"

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return _format_timestamp(record, datefmt or self._time_format)

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - std signature
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self._time_format),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_record_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_json_default, separators=(",", ":"))


def setup_logging(settings: Settings) -> None:
    """Configure root logging for the release-prep process.

    Installs a single stderr ``StreamHandler`` with the formatter selected by
    ``settings.log_format`` and sets the root level from ``settings.log_level``.
    Calling it again reconfigures the same handler instead of adding another.
    """
    root_logger = logging.getLogger()
    level = getattr(logging, settings.log_level)

    configured = getattr(root_logger, _CONFIGURED_FLAG, False)
    if not configured or not root_logger.handlers:
        root_logger.handlers = [logging.StreamHandler()]
        setattr(root_logger, _CONFIGURED_FLAG, True)
    else:
        root_logger.handlers = [root_logger.handlers[0]]

    handler = root_logger.handlers[0]
    handler.setFormatter(build_formatter(settings.log_format))
    root_logger.setLevel(level)


def log_context(
    *,
    path: PurePath | str | None = None,
    version: object | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a consistent ``extra`` payload for structured logs.

    Example:
        logger.info(
            "promotion.file.promoted",
            extra=log_context(path=path, version=release.version, kind=kind.value),
        )
    """
    ctx: dict[str, Any] = {}

    if path is not None:
        ctx["path"] = PurePath(path).as_posix()
    if version is not None:
        ctx["version"] = str(version)

    for key, value in extra.items():
        ctx[key] = value

    return ctx


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonLogFormatter()
    return ConsoleLogFormatter()


def _format_timestamp(record: logging.LogRecord, pattern: str) -> str:
    dt = datetime.fromtimestamp(record.created, tz=UTC)
    return f"{dt.strftime(pattern)}.{int(record.msecs):03d}Z"


def _format_extra_value(value: Any) -> str:
    """Format an ``extra`` value for console output."""
    if value is None:
        return "null"
    return str(value)


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    extras: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_ATTRS or key.startswith("_"):
            continue
        extras[key] = value
    return extras


def _json_default(value: Any) -> str:
    return str(value)


__all__ = [
    "ConsoleLogFormatter",
    "JsonLogFormatter",
    "SERVICE_NAME",
    "build_formatter",
    "log_context",
    "setup_logging",
]
