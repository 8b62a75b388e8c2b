"""Logging setup for the ``mapblock`` package.

Modules log through ``logging.getLogger(__name__)``; this module attaches a
single colored stream handler to the package logger so library users that
configure logging themselves are left alone until ``setup_logging`` is
called.
"""

import logging

import colorlog

LOGGER_NAME = "mapblock"

_FORMAT = (
    "%(log_color)s%(asctime)s%(reset)s - %(name)s - "
    "%(log_color)s%(levelname)s%(reset)s - %(message)s"
)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the package logger with a colored stream handler.

    Calling this more than once replaces the handler instead of stacking
    another one.

    Args:
        level: Level name such as "DEBUG" or "INFO". Unknown names fall back
            to INFO.

    Returns:
        The configured ``mapblock`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            _FORMAT,
            reset=True,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )
    )
    logger.addHandler(handler)

    levels = logging.getLevelNamesMapping()
    logger.setLevel(levels.get(level.upper(), logging.INFO))
    return logger
