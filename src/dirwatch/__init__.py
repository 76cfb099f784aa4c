"""
dirwatch - Poll-driven notifications when a directory's contents change
"""

__version__ = "0.1.0"
__description__ = "Get a callback when the contents of a directory change, on any platform."

from .core import (
    BackendKind,
    Config,
    DirectoryListener,
    DirectoryWatcher,
    PathEncodingError,
    SubscriptionError,
    WatchError,
    load_config,
    load_default_config,
)

__all__ = [
    'BackendKind',
    'Config',
    'DirectoryListener',
    'DirectoryWatcher',
    'PathEncodingError',
    'SubscriptionError',
    'WatchError',
    'load_config',
    'load_default_config',
]
