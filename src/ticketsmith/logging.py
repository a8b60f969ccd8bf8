"""Logging setup shared by every ticketsmith component.

All component loggers hang off the ``ticketsmith`` logger, so a single call to
:func:`setup_logging` routes prompt, provider and persistence diagnostics to the
same rotating log file.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "ticketsmith"

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "ticketsmith.log"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_SECRET_PATTERNS = [
    (re.compile(r"sk-[A-Za-z0-9_\-]{8,}"), "[OPENAI_KEY]"),
    (re.compile(r"Bearer [A-Za-z0-9._\-]+"), "Bearer [REDACTED]"),
    (re.compile(r"api_key=[A-Za-z0-9._\-]+"), "api_key=[REDACTED]"),
]


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``ticketsmith`` logger.

    Args:
        log_dir: Directory for log files. Falls back to TICKETSMITH_LOG_DIR,
                 then to 'logs' in the current directory.
        log_file: Log file name.
        max_bytes: File size that triggers rotation.
        backup_count: Number of rotated files to keep.
        level: Log level name. Falls back to TICKETSMITH_LOG_LEVEL, then INFO.
        console: Also log to stderr.

    Returns:
        The configured root ticketsmith logger.
    """
    if log_dir is None:
        log_dir = os.environ.get("TICKETSMITH_LOG_DIR", DEFAULT_LOG_DIR)
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    if level is None:
        level = os.environ.get("TICKETSMITH_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)

    # Repeated setup replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    log_path = log_dir / log_file
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.info("ticketsmith logging initialized (level=%s, file=%s)", level, log_path)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a component, prefixed with 'ticketsmith.'."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def truncate_output(output: str, max_length: int = 500) -> str:
    """Shorten a provider body or prompt excerpt before it is logged."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Redact API keys and bearer tokens from text about to be logged."""
    result = text
    for pattern, replacement in _SECRET_PATTERNS:
        result = pattern.sub(replacement, result)
    return result
