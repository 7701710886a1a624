"""Universal debug/logging utility for AppGather.

Configures the package logger and provides the debug() helper used by the CLI.
Debug output is controlled by the APPGATHER_DEBUG environment variable (or
enable_debug()).
"""

import logging
import os
from typing import Optional

DEBUG_ON = os.getenv("APPGATHER_DEBUG", "0") == "1"

_logger: Optional[logging.Logger] = None


def setup_logger() -> logging.Logger:
    """Configure and return the "appgather" logger (idempotent)."""
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger("appgather")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if DEBUG_ON else logging.INFO)
    _logger = logger
    return logger


def enable_debug() -> None:
    """Switch the package logger (and module loggers below it) to DEBUG."""
    setup_logger().setLevel(logging.DEBUG)


def debug(msg: str) -> None:
    """Log a debug message."""
    setup_logger().debug(msg)

