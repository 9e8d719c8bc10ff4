"""Console logging via structlog.

Configures structlog once per process. Library modules log through the
stdlib (`logging.getLogger(__name__)`), which is bridged to stdout with a
bare message format so status lines read as plain console output. The CLI
uses `structlog.get_logger()` for the structured run summary.

Renderer selection:
  json_logs=False — `ConsoleRenderer` for humans.
  json_logs=True  — `JSONRenderer` for CI logs.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_structlog(debug: bool = False, json_logs: bool = False) -> None:
    """Configure structlog and the stdlib bridge.

    Calling multiple times is safe; the last call wins.
    """
    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    level = logging.DEBUG if debug else logging.INFO

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    logging.getLogger().setLevel(level)
