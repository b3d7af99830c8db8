"""Logging setup for the request_cache package logger.

Modules log through logging.getLogger(__name__), so every record lands
under LIBRARY_LOGGER_NAME. The library never configures handlers or
levels for the host application; it only attaches a NullHandler so that
debug HIT/MISS lines are dropped unless the host enables them.
"""

import logging

LIBRARY_LOGGER_NAME = "request_cache"


def install_null_handler() -> logging.Logger:
    """Attach a NullHandler to the package logger once.

    Safe to call repeatedly; a second call leaves the handlers unchanged.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    return logger
