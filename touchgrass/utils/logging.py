"""Simple logging utilities for touchgrass."""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "touchgrass"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    verbose: bool = False, log_file: Optional[Path] = None, enabled: bool = True
) -> logging.Logger:
    """Configure the package logger.

    The CLI logs to stderr. While the TUI owns the terminal, pass a
    ``log_file`` so output goes there instead of corrupting the screen.

    Args:
        verbose: Log at DEBUG instead of WARNING
        log_file: Optional file to write to instead of stderr
        enabled: When False, package records are dropped

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handler: logging.Handler
    if not enabled:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.WARNING)
        return logger
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    level = logging.DEBUG if verbose else logging.WARNING
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
