"""structlog setup shared by the API server and the CLI."""

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from stockcalc.config import Settings

# httpx logs every request URL at INFO
_QUIET_LOGGERS = ("httpx", "httpcore")


def _renderer_chain(env: str) -> list[structlog.types.Processor]:
    chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if env == "development":
        chain.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        chain += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return chain


def setup_logging(settings: "Settings", stream: TextIO = sys.stdout) -> None:
    """Configure structlog and stdlib logging to write to ``stream``.

    The server logs to stdout. ``stockcalc lookup`` passes stderr so its
    printed result stays machine-readable.
    """
    level = getattr(logging, settings.log_level)

    structlog.configure(
        processors=_renderer_chain(settings.env),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=[logging.StreamHandler(stream)],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
