"""Debug logging for MediaScan.

Setting ``MEDIASCAN_DEBUG=1`` lowers the ``mediascan`` logger to DEBUG so the
scan options, scan counts and every skipped entry are written to stderr.
Module loggers (``logging.getLogger(__name__)``) are children of that logger
and share its handler.
"""

import logging
import os
import sys
from typing import Optional

DEBUG_ON = os.getenv("MEDIASCAN_DEBUG", "0") == "1"

_logger: Optional[logging.Logger] = None


def setup_logger() -> logging.Logger:
    """Configure the package logger once and return it."""
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger("mediascan")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if DEBUG_ON else logging.WARNING)
    _logger = logger
    return logger


def debug(msg: str) -> None:
    """Log a debug message if debugging is enabled."""
    if DEBUG_ON:
        setup_logger().debug(msg)
