"""Debug/logging utility for picshelf.

Provides a debug() helper on the shared package logger.
Debug output is controlled by the PICSHELF_DEBUG environment variable.
"""

import logging
import os
from typing import Optional

LOGGER_NAME = "picshelf"

_logger: Optional[logging.Logger] = None


def debug_enabled() -> bool:
    """Return True when PICSHELF_DEBUG=1 is set."""
    return os.getenv("PICSHELF_DEBUG", "0") == "1"


def setup_logger() -> logging.Logger:
    """Configure and return the package logger.

    Module loggers (``picshelf.core.scanner`` and friends) propagate here, so
    one handler covers the whole package.
    """
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)
    _logger = logger
    return logger


def debug(msg: str) -> None:
    """Log a debug message if debugging is enabled."""
    if debug_enabled():
        setup_logger().debug(msg)

