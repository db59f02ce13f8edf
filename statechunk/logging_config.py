"""
Structured logging configuration for statechunk.

Library modules only create loggers; the CLI calls setup_logging().
Compiler logs carry the location string as trace_id so every message about
one slice of state can be correlated.

Environment Variables:
    STATECHUNK_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    STATECHUNK_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from statechunk.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="example.nested1")
    logger.info("Compiled leaf reducer")
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure root logger with structured logging.

    Arguments override the environment:
    - STATECHUNK_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    - STATECHUNK_LOG_FORMAT: json, text (default: json)
    """
    log_level = (level or os.getenv("STATECHUNK_LOG_LEVEL", "INFO")).upper()
    fmt = (log_format or os.getenv("STATECHUNK_LOG_FORMAT", "json")).lower()
    resolved = LEVELS.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stderr keeps CLI output on stdout machine readable
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.addFilter(TraceIDFilter())

    if fmt == "json":
        formatter: logging.Formatter = JsonFormatter(
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
        trace_id: Trace ID for correlating logs (typically a location string)

    Example:
        logger = get_logger(__name__, trace_id="example.nested4")
        logger.debug("Compiled reducer boundary")
        # Output (JSON): {"timestamp": "...", "level": "DEBUG", "message": "...", "trace_id": "example.nested4"}
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})
