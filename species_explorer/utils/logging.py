"""
Logging configuration utilities for Species Explorer.

Provides configurable logging with file rotation support.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from ..config import DEFAULT_LOG_FORMAT, ExplorerConfig


def setup_logging(config: Optional[ExplorerConfig] = None, level: Optional[str] = None) -> None:
    """
    Configure logging based on ExplorerConfig settings.

    Args:
        config: ExplorerConfig instance. If None, uses sensible defaults.
        level: Optional level name overriding the configured one
            (the CLI passes DEBUG for --debug).

    Example:
        config = ExplorerConfig.load("config.yaml")
        setup_logging(config)
    """
    if config is None:
        level_name = "INFO"
        log_format = DEFAULT_LOG_FORMAT
        log_file = None
        max_bytes = 10485760
        backup_count = 3
    else:
        level_name = config.log_level
        log_format = config.log_format
        log_file = config.log_file or None
        max_bytes = config.log_max_bytes
        backup_count = config.log_backup_count

    if level:
        level_name = level
    resolved = getattr(logging, level_name.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)
    root_logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    # stderr keeps stdout free for command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(resolved)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(resolved, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
