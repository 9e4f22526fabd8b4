# Copyright (c) The mountinfo authors.
# All rights reserved.
"""Logging setup shared by the mountinfo commands."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Tuple

DEFAULT_FORMATTER = logging.Formatter(
    "[%(asctime)s] - [%(levelname)s] - [%(name)s] - %(message)s"
)


def init_logger(
    logger_name: str,
    log_level: int = logging.WARNING,
    log_dir: Optional[str] = None,
    log_name: Optional[str] = None,
    log_formatter: Optional[logging.Formatter] = DEFAULT_FORMATTER,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 2,
) -> Tuple[logging.Logger, logging.Handler]:
    """Set up logging for a mountinfo run.

    Logs go to stderr, or to {log_dir}/{log_name} when a log directory is given.
    stdout is left to the command output.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    handler: logging.Handler
    if log_dir is None:
        handler = logging.StreamHandler(sys.stderr)
    else:
        file_path = os.path.join(log_dir, log_name or logger_name + ".log")
        os.makedirs(os.path.dirname(file_path), exist_ok=True)
        handler = RotatingFileHandler(
            file_path, mode="a", maxBytes=max_bytes, backupCount=backup_count
        )

    if log_formatter:
        handler.setFormatter(log_formatter)
    logger.addHandler(handler)

    return logger, handler
