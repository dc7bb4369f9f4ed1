"""
utils/logger.py
---------------
Root logger setup for the API process. Handlers are attached once, on the
first `get_logger` call; the app factory then applies LOG_LEVEL.
"""

import logging
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def _init_logging() -> None:
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)
    _initialized = True


def set_level(level: str) -> None:
    """Apply a level name such as "DEBUG" to the root logger."""
    _init_logging()
    logging.getLogger().setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    """Logger for a module of this API; pass ``__name__``."""
    _init_logging()
    return logging.getLogger(name)
