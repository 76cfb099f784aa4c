"""Utility functions for dirwatch."""

from .path_utils import (
    platform_max_path_length,
    display_path,
    encode_watch_path,
)
from .logging_utils import setup_logger, get_logger

__all__ = [
    # Path utilities
    'platform_max_path_length',
    'display_path',
    'encode_watch_path',
    # Logging utilities
    'setup_logger',
    'get_logger',
]
