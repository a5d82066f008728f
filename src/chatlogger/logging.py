from __future__ import annotations

import logging
import re
from typing import Any

import structlog

_WEBHOOK_TOKEN_RE = re.compile(r"(/webhooks/\d+/)[A-Za-z0-9._\-]+")


def _redact_text(value: str) -> str:
    return _WEBHOOK_TOKEN_RE.sub(r"\1[REDACTED]", value)


def _redact_value(value: Any) -> Any:
    if isinstance(value, str):
        return _redact_text(value)
    if isinstance(value, dict):
        return {key: _redact_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(_redact_value(item) for item in value)
    return value


def redact_webhook_tokens(
    _logger: Any, _method: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    return {key: _redact_value(value) for key, value in event_dict.items()}


def setup_logging(*, debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            redact_webhook_tokens,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name)
