"""Logging configuration for reprendpoint.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides where the ``reprendpoint`` logger tree writes to and how exceptions
are rendered.
"""

import logging
import traceback

from fastapi import HTTPException

from reprendpoint.exceptions import OperationCancelledError

PACKAGE_LOGGER = "reprendpoint"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _is_client_error(exc_type, exc_value) -> bool:
    """Check if an exception is a client error (4xx) or a cancellation.

    Args:
        exc_type: Exception type
        exc_value: Exception value

    Returns:
        True if no stack trace is needed for the exception
    """
    if exc_type is None:
        return False
    if isinstance(exc_value, HTTPException):
        return exc_value.status_code < 500
    return isinstance(exc_value, OperationCancelledError)


class KnownErrorFormatter(logging.Formatter):
    """Formatter that omits stack traces for client errors and cancellations."""

    def formatException(self, ei) -> str:  # noqa: N802
        exc_type, exc_value, exc_tb = ei
        if _is_client_error(exc_type, exc_value):
            return ""

        result = super().formatException(ei)
        if result:
            return result
        return "".join(traceback.format_exception(exc_type, exc_value, exc_tb))


class LoggingConfigurator:
    """Configures the ``reprendpoint`` logger tree."""

    @staticmethod
    def configure(level: str = "info") -> logging.Logger:
        """Set the package log level and install a stream handler once.

        Args:
            level: Level name, case-insensitive

        Returns:
            The package logger
        """
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(level.upper())

        if not any(
            isinstance(h.formatter, KnownErrorFormatter) for h in package_logger.handlers
        ):
            handler = logging.StreamHandler()
            handler.setFormatter(KnownErrorFormatter(DEFAULT_FORMAT))
            package_logger.addHandler(handler)

        return package_logger


__all__ = [
    "DEFAULT_FORMAT",
    "KnownErrorFormatter",
    "LoggingConfigurator",
    "PACKAGE_LOGGER",
]
