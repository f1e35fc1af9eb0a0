"""
Structured logging configuration for underbar.

Library modules only call logging.getLogger(__name__); applications that
want underbar's JSON logs call setup_logging() once at startup.

Usage:
    from underbar.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="job-42")
    logger.info("Scheduler drained", extra={"calls": 3})
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from .config import UnderbarSettings


def setup_logging(settings: Optional[UnderbarSettings] = None) -> None:
    """
    Configure root logger with structured logging.

    Reads UNDERBAR_LOG_LEVEL / UNDERBAR_LOG_FORMAT when settings is None.
    Replaces any handlers already on the root logger.
    """
    settings = settings or UnderbarSettings.from_env()
    level = getattr(logging, settings.log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(TraceIDFilter())

    if settings.log_format == "json":
        formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID for correlating logs

    Returns:
        LoggerAdapter with trace_id in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Records from plain library loggers (no LoggerAdapter) get "N/A".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True
