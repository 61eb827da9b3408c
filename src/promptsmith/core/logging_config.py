"""Logging configuration for promptsmith.

The library itself only attaches a ``NullHandler`` to the package logger.
Applications (and the CLI) call :func:`setup_logging` to get output.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import LoggingSettings, get_settings
from .exceptions import ConfigurationError

PACKAGE_LOGGER = "promptsmith"

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _json_formatter() -> logging.Formatter:
    """Render stdlib records as one JSON object per line."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )


def setup_logging(
    settings: Optional[LoggingSettings] = None,
    stream=None
) -> logging.Logger:
    """
    Configure the package logger from settings.

    Args:
        settings: Logging settings (defaults to the global settings)
        stream: Output stream (defaults to stderr)

    Returns:
        The configured package logger

    Raises:
        ConfigurationError: If the level or format is unknown
    """
    settings = settings or get_settings().logging

    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level: {settings.level}",
            config_key="PS_LOG_LEVEL"
        )

    if settings.format == "json":
        formatter: logging.Formatter = _json_formatter()
    elif settings.format == "text":
        formatter = logging.Formatter(fmt=TEXT_FORMAT, datefmt=DATE_FORMAT)
    else:
        raise ConfigurationError(
            f"Unknown log format: {settings.format}",
            config_key="PS_LOG_FORMAT"
        )

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Replace handlers from a previous call, keep the NullHandler
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
