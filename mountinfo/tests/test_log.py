# Copyright (c) The mountinfo authors.
# All rights reserved.
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from mountinfo.utils.log import init_logger


def test_init_logger_stderr() -> None:
    logger, handler = init_logger("test_init_logger_stderr", log_level=logging.DEBUG)
    try:
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr
        assert logger.level == logging.DEBUG
        assert handler in logger.handlers
    finally:
        logger.removeHandler(handler)


def test_init_logger_file(tmp_path: Path) -> None:
    log_dir = tmp_path / "logs"
    logger, handler = init_logger("test_init_logger_file", log_dir=str(log_dir))
    try:
        logger.warning("disk is not mounted")
        handler.flush()

        assert isinstance(handler, RotatingFileHandler)
        contents = (log_dir / "test_init_logger_file.log").read_text()
        assert "[WARNING] - [test_init_logger_file] - disk is not mounted" in contents
    finally:
        logger.removeHandler(handler)
        handler.close()
