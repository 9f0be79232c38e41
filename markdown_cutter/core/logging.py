"""Logging helpers for Markdown Cutter.

The library only attaches handlers when ``configure_logging`` is called;
importing the package leaves logging untouched.

Features:
    - Plain ``asctime - name - level - message`` format
    - JSON structured logging format
    - ``preview`` helper that shortens long text before it reaches a record
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

LOGGER_NAME = "markdown_cutter"

PREVIEW_LENGTH = 60


def preview(text: str | None, length: int = PREVIEW_LENGTH) -> str:
    """Shorten *text* for log output, keeping its head and total length."""
    if text is None:
        return "<none>"
    if len(text) <= length:
        return repr(text)
    return f"{text[:length]!r}...(+{len(text) - length} chars)"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single JSON object.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log message.
        """
        log_data: dict[str, str] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
) -> logging.Logger:
    """Configure the ``markdown_cutter`` logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to
            ``log_level`` from settings.
        json_format: Use JSON format for structured logging. Defaults to
            ``log_json`` from settings.

    Returns:
        The configured package logger.
    """
    if level is None or json_format is None:
        # Import here to avoid circular imports
        from markdown_cutter.config import get_settings

        settings = get_settings()
        level = settings.log_level if level is None else level
        json_format = settings.log_json if json_format is None else json_format

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(level)

    # Remove existing handlers
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)
    return package_logger
