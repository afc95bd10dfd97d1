"""
Logging utilities for KontaFlow.
"""
import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Loggers inherit the root configuration set by ``configure_logging``;
    a stdout handler is attached only when nothing is configured yet.

    Args:
        name: Logger name, typically __name__
        level: Optional explicit logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        logger.addHandler(handler)

    if level is not None:
        logger.setLevel(level)

    return logger


def configure_logging(level: Union[int, str] = logging.INFO, format_string: Optional[str] = None):
    """
    Configure the root logger.

    Args:
        level: Logging level (int or name such as "DEBUG")
        format_string: Custom format string
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=format_string or DEFAULT_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stdout
    )
    logging.getLogger("kontaflow").setLevel(level)
