# src/statsd_transport/logging.py
"""Opt-in log output for statsd-transport.

Connections log through structlog.get_logger(), so by default their lines go
wherever the host application already sends structlog output. Nothing here
runs on import.

configure_logging() is for processes the library owns (the CLI) or for
applications that want the library's lines on stderr without setting up a
pipeline themselves. It only touches the "statsd_transport" logger:

- root handlers and the root level are left alone
- a structlog configuration made by the host application is kept
- calling it again replaces the handler it installed earlier, never one
  added by someone else
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

PACKAGE_LOGGER = "statsd_transport"

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
]


class _PackageHandler(logging.StreamHandler):
    """stderr handler installed by configure_logging()."""


def _drop_formatter_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def _formatter(json_output: bool) -> ProcessorFormatter:
    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
        processors = [_drop_formatter_bookkeeping, structlog.processors.format_exc_info, renderer]
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        processors = [_drop_formatter_bookkeeping, renderer]
    return ProcessorFormatter(processors=processors, foreign_pre_chain=_SHARED_PROCESSORS)


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
) -> logging.Logger:
    """Send statsd-transport log lines to stderr.

    Args:
        json_output: Render JSON lines instead of console output.
        level: Level for the package logger (DEBUG shows every sent message).

    Returns:
        The configured package logger.
    """
    if not structlog.is_configured():
        structlog.configure(
            processors=[*_SHARED_PROCESSORS, ProcessorFormatter.wrap_for_formatter],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            # Tests reconfigure between cases
            cache_logger_on_first_use=False,
        )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if isinstance(handler, _PackageHandler):
            package_logger.removeHandler(handler)

    handler = _PackageHandler(sys.stderr)
    handler.setFormatter(_formatter(json_output))
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level.upper()))
    # Lines are rendered here; keep them out of the host's root handlers.
    package_logger.propagate = False
    return package_logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound structlog logger, e.g. get_logger(__name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
