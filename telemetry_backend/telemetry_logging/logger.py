"""
Structured logging for the telemetry backend.

Every module does `logger = get_logger(__name__)` at import and logs a
snake_case event name plus keyword fields. Lines carry level, ISO timestamp,
logger name, the request context bound by bind_request(), and the event
renamed to event_type.

Level and renderer come from Settings: the app and main.py call
configure_structlog(settings.log_level, settings.log_format) at startup.
Until then the defaults below apply. Loggers are resolved on every call
(no first-use cache), so module-level loggers follow a later reconfigure.

No telemetry_backend imports here, so any module can import it.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog._config import BoundLoggerLazyProxy

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "json"


def _renderer(fmt: str) -> Any:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_structlog(level: str = DEFAULT_LEVEL, fmt: str = DEFAULT_FORMAT) -> None:
    """(Re)configure structlog. fmt "json" renders JSON lines; anything else the console renderer."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.EventRenamer("event_type"),
            _renderer(fmt.strip().lower()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.strip().upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> Any:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("batch_ingested", kind="wakuMessages", received=10, persisted=10)

    Output (JSON): {"logger": "module.name", "kind": "wakuMessages", ..., "level": "info", "event_type": "batch_ingested"}
    """
    return BoundLoggerLazyProxy(None, initial_values={"logger": name})


def bind_request(method: str, path: str) -> None:
    """Bind method/path to the current context so every log line in the request carries them."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=method, path=path)
