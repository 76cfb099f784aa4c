"""
Logging utilities for dirwatch

Library modules only call get_logger(); nothing is printed unless the
application (or the dirwatch CLI) calls setup_logger().
"""

import logging
import sys
from typing import IO, Optional


ROOT_LOGGER = 'dirwatch'
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVELS = ('debug', 'info', 'warning', 'error', 'critical')


def parse_level(level: str) -> int:
    """Map a configured level name to its logging constant.

    Raises:
        ValueError: For names outside LOG_LEVELS
    """
    if level.lower() not in LOG_LEVELS:
        raise ValueError(f"Unknown log level '{level}' (expected one of: {', '.join(LOG_LEVELS)})")
    return getattr(logging, level.upper())


def setup_logger(name: str = ROOT_LOGGER, level: str = 'info', format_string: Optional[str] = None,
                 stream: Optional[IO[str]] = None) -> logging.Logger:
    """Send a dirwatch logger's records to a stream, stdout by default.

    Calling it again replaces the handler installed by the previous call, so
    the CLI can reconfigure after reading the config file.
    """
    logger = get_logger(name)
    numeric_level = parse_level(level)
    
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
    
    logger.setLevel(numeric_level)
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    logger.addHandler(handler)
    
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the dirwatch namespace."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + '.'):
        name = f'{ROOT_LOGGER}.{name}'
    return logging.getLogger(name)


# Silence "no handlers" warnings for applications that never configure logging
get_logger(ROOT_LOGGER).addHandler(logging.NullHandler())
