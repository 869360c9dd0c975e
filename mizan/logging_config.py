"""Structured logging for the Mizan engines.

The engines only emit events (``unclassified_rows``, ``estimated_detail_buckets``,
``zakat_computed``, ``cash_flow_built``); an embedding application decides where
they go by calling :func:`configure_logging` once at start-up.
"""

import logging
import os
import sys
from typing import IO, Literal

import structlog
from dotenv import load_dotenv

PACKAGE_LOGGER = "mizan"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        # أسماء الحسابات عربية: لا نحولها إلى \uXXXX
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(
        colors=False,
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    level: LogLevel | None = None,
    format: LogFormat | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Route engine events to ``stream`` (stdout by default).

    Args:
        level: Log level. Defaults to MIZAN_LOG_LEVEL (read from the
            environment or a .env file), then INFO.
        format: ``json`` or ``console``. Defaults to MIZAN_LOG_FORMAT, then
            console.
        stream: Text stream for the handler.
    """
    load_dotenv()
    log_level = (level or os.getenv("MIZAN_LOG_LEVEL") or "INFO").upper()
    log_format = format or os.getenv("MIZAN_LOG_FORMAT") or "console"

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    # فقط مسجل الحزمة: لا نلمس إعدادات التطبيق المضيف
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.handlers = [handler]
    pkg_logger.setLevel(getattr(logging, log_level, logging.INFO))
    pkg_logger.propagate = False

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _renderer(log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # module-level loggers must pick up a later reconfiguration
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
