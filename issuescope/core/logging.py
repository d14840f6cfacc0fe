"""Structured logging configuration — structlog + stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os
import sys
from collections.abc import Mapping
from typing import Any

import structlog

REDACTED = "***"
_SECRET_KEYS = frozenset({"apikey", "api_key"})


def _redact(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            k: REDACTED if str(k).lower() in _SECRET_KEYS else _redact(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [_redact(v) for v in value]
    return value


def redact_secrets(
    _logger: Any, _method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Mask the Pleasanter API key wherever it appears in an event.

    Request payloads carry ``ApiKey`` alongside the query, so nested mappings
    are walked too.
    """
    return {
        key: REDACTED if key.lower() in _SECRET_KEYS else _redact(value)
        for key, value in event_dict.items()
    }


def _resolve_format(fmt: str) -> str:
    if fmt == "auto":
        return "console" if sys.stdout.isatty() else "json"
    return fmt


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog and stdlib logging.

    Arguments override the environment:
        ISSUESCOPE_LOG_LEVEL       — business log level (default: INFO)
        ISSUESCOPE_LOG_FORMAT      — console | json | auto (default: console)
        ISSUESCOPE_HTTP_LOG_LEVEL  — httpx / httpcore traffic (default: WARNING)
    """
    log_level = (level or os.environ.get("ISSUESCOPE_LOG_LEVEL", "INFO")).upper()
    log_format = _resolve_format(
        (fmt or os.environ.get("ISSUESCOPE_LOG_FORMAT", "console")).lower()
    )
    http_level = os.environ.get("ISSUESCOPE_HTTP_LOG_LEVEL", "WARNING").upper()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_secrets,
        structlog.processors.format_exc_info,
    ]

    renderer: structlog.types.Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["default"], "level": log_level},
            "loggers": {
                "issuescope": {"level": log_level},
                "uvicorn.error": {"level": "INFO"},
                # the request-id middleware logs every request already
                "uvicorn.access": {"level": "WARNING"},
                "httpx": {"level": http_level},
                "httpcore": {"level": http_level},
            },
        }
    )
