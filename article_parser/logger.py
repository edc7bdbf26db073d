"""
Package logging for article_parser.

One "article_parser" logger owns the handlers; modules log through children
such as "article_parser.classifier", so a line shows which stage wrote it.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "article_parser"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _set_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install the stdout handler (and a file handler when ``log_file`` is given).

    Runs once at import with INFO. run_transform.py calls it again with the
    configured level; that call re-levels the existing handlers instead of
    stacking new ones, and adds the file handler if it was not there yet.
    """
    logger = logging.getLogger(name)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if not logger.handlers:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        logger.addHandler(console)

    has_file = any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    if log_file and not has_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _set_level(logger, level)
    return logger


logger = setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """Child logger for one module, e.g. get_module_logger("store")."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{module_name}")
