"""
Logging Configuration

Optional handler setup for the msethash logger, in plain text or JSON.
The library itself only emits records; applications call setup_logging()
if they want msethash to configure output.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from .config import Settings, get_settings

PACKAGE_LOGGER = "msethash"


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter with timestamp, level and package fields."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        log_record["package"] = PACKAGE_LOGGER
        log_record["version"] = _package_version()

        if not log_record.get("level"):
            log_record["level"] = record.levelname


def _package_version() -> str:
    from . import __version__

    return __version__


def setup_logging(settings: Optional[Settings] = None, stream=None) -> logging.Logger:
    """
    Configure the msethash logger.

    Replaces any handler previously installed by this function; other
    loggers are left alone.

    Args:
        settings: Settings to read level and format from (default: get_settings())
        stream: Output stream (default: sys.stdout)

    Returns:
        logging.Logger: The configured package logger
    """
    settings = settings or get_settings()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    log_level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    package_logger.setLevel(log_level)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)

    if settings.log_format == "json":
        formatter = CustomJsonFormatter(fmt="%(timestamp)s %(level)s %(name)s %(message)s")
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    package_logger.addHandler(handler)
    package_logger.propagate = False

    package_logger.debug(f"Logging configured - level: {settings.log_level}, format: {settings.log_format}")
    return package_logger

