"""Logging configuration for SwiftBank services.

Everything under the ``swiftbank`` logger goes to the console. With
``log_to_file`` enabled the package log and the audit trail of denied
access checks are also written to separate rotating files in ``log_dir``.
"""

import logging
import logging.handlers
import os

from swiftbank.core.config import Settings

PACKAGE_LOGGER_NAME = "swiftbank"
AUDIT_LOGGER_SUFFIX = "audit"

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"  # ISO 8601
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def _rotating_handler(log_dir: str, filename: str, formatter: logging.Formatter) -> logging.Handler:
    os.makedirs(log_dir, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        os.path.join(log_dir, filename),
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
    )
    handler.setFormatter(formatter)
    return handler


def configure_logging(settings: Settings, name: str = PACKAGE_LOGGER_NAME) -> logging.Logger:
    """Configure the package logger and its audit child from settings.

    Handlers are attached on the first call only; later calls just apply
    the configured level.

    Raises:
        ValueError: If ``settings.log_level`` is not a standard level name
    """
    level = settings.log_level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {settings.log_level}. Must be one of: {', '.join(LOG_LEVELS)}"
        )

    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if settings.log_to_file:
        logger.addHandler(_rotating_handler(settings.log_dir, f"{name}.log", formatter))
        # Denials also land in the package log through propagation
        audit = logger.getChild(AUDIT_LOGGER_SUFFIX)
        audit.addHandler(_rotating_handler(settings.log_dir, "audit.log", formatter))

    return logger
