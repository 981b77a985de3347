"""Logging configuration for the link shortener."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional


LOGGER_NAME = "shortlink"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

# Per-request chatter from the HTTP client drowns out our own lines
NOISY_LOGGERS = ("httpx", "httpcore")


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the ``shortlink`` logger tree.

    Calling it again replaces the handlers, so tests and the CLI can
    reconfigure freely.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Also append to this file when given
        json_format: Emit JSON lines instead of plain text

    Returns:
        The ``shortlink`` logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = (
        JsonFormatter()
        if json_format
        else logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Logger under the ``shortlink`` tree."""
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
