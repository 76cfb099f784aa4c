"""
CLI commands package for dirwatch
"""

from .watch import watch_command
from .init_config import init_config_command
from .backends import backends_command

__all__ = [
    'watch_command',
    'init_config_command',
    'backends_command',
]
