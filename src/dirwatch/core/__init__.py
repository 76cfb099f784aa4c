"""Core functionality for dirwatch."""

from .errors import WatchError, PathEncodingError, SubscriptionError
from .config import Config, load_config, load_default_config
from .listener import DirectoryListener
from .backends import (
    BackendKind,
    ChangeBackend,
    NativeBackend,
    NullBackend,
    WatchTarget,
    create_backend,
    native_supported,
    resolve_backend_kind,
)
from .watcher import DirectoryWatcher

__all__ = [
    'WatchError', 'PathEncodingError', 'SubscriptionError',
    'Config', 'load_config', 'load_default_config',
    'DirectoryListener',
    'BackendKind', 'ChangeBackend', 'NativeBackend', 'NullBackend', 'WatchTarget',
    'create_backend', 'native_supported', 'resolve_backend_kind',
    'DirectoryWatcher',
]
