"""Structured logging for node runs.

Run events come from the dispatcher's ``structlog`` logger; client and API
modules log through stdlib ``logging``. Both end up on one stream: stdout for
the HTTP server, stderr for ``solrnode run`` whose stdout carries the output
JSON.
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from solrnode.config.settings import ObservabilitySettings

# httpx logs every request at INFO; one line per item drowns the run events.
HTTP_LOGGERS = ("httpx", "httpcore")


def setup_logging(settings: ObservabilitySettings | None = None, *, stream: IO[str] | None = None) -> None:
    """Configure structlog and route it through the standard library.

    Args:
        settings: Observability settings. Uses defaults if None.
        stream: Destination for log lines. Defaults to stdout.
    """
    log_level = settings.log_level.upper() if settings else "INFO"
    log_format = settings.log_format if settings else "json"
    level = getattr(logging, log_level, logging.INFO)

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=level,
    )

    http_level = level if level <= logging.DEBUG else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


@contextmanager
def run_context(**values: Any) -> Iterator[str]:
    """Bind a fresh ``run_id`` (plus ``values``) to every structlog event in the block.

    Yields:
        The run id.
    """
    run_id = uuid.uuid4().hex[:12]
    with structlog.contextvars.bound_contextvars(run_id=run_id, **values):
        yield run_id
