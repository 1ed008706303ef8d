# File: app/core/logging.py

"""
Logging configuration.

Modules log through ``logging.getLogger(__name__)``; ``setup_logging`` wires
the root logger once, at process start.
"""

import logging
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger. Later calls only adjust the level."""
    global _initialized
    root = logging.getLogger()
    root.setLevel(level.upper())
    if _initialized:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root.addHandler(handler)
    _initialized = True
