"""Context logging utilities.

Loggers accept keyword context next to the message so that task names,
request ids and image sizes end up in every line in the same shape.
"""

import logging
import sys
from typing import Any

from docscan.config import get_settings


class ContextLogger:
    """Logger wrapper that appends keyword context to each message.

    Usage:
        logger = get_logger(__name__)
        logger.info("Task complete", task="grayscale", width=640, height=480)
        logger.error("Task failed", error=str(e))

    Pixel data is never logged; log dimensions and task ids instead.
    """

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)
        self._setup_handler()

    def _setup_handler(self) -> None:
        """Set up the stdout handler with an environment-specific format."""
        if not self._logger.handlers:
            settings = get_settings()

            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(settings.log_level)

            # Use JSON-like format for production, readable format for dev
            if settings.is_production:
                fmt = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
            else:
                fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

            handler.setFormatter(logging.Formatter(fmt))
            self._logger.addHandler(handler)
            self._logger.setLevel(settings.log_level)

    def _format_kwargs(self, kwargs: dict[str, Any]) -> str:
        """Format keyword arguments for logging."""
        if not kwargs:
            return ""
        return " | " + " ".join(f"{k}={v}" for k, v in kwargs.items())

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._logger.debug(f"{message}{self._format_kwargs(kwargs)}")

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._logger.info(f"{message}{self._format_kwargs(kwargs)}")

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._logger.warning(f"{message}{self._format_kwargs(kwargs)}")

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self._logger.error(f"{message}{self._format_kwargs(kwargs)}")

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._logger.exception(f"{message}{self._format_kwargs(kwargs)}")


def get_logger(name: str) -> ContextLogger:
    """Get a context logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        ContextLogger instance

    Example:
        logger = get_logger(__name__)
        logger.info("Dispatching task", task="enhanceBAndW", request_id="abc123")
    """
    return ContextLogger(name)
