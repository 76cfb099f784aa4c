"""
Directory watcher facade
"""

import logging
from typing import Optional, Union

from .backends import BackendKind, ChangeBackend, ObserverFactory, create_backend
from .config import Config
from .errors import WatchError
from .listener import Listener, ListenerRef, make_listener_ref
from ..utils import path_utils
from ..utils.logging_utils import get_logger


class DirectoryWatcher:
    """Watch a directory and receive a notification when anything in it has changed.

    The backend is chosen once, when the watcher is built. Nothing runs in the
    background on the caller's behalf: call process() from your own loop, at
    whatever interval suits you, and the listener is invoked from inside that
    call.

    The watcher only keeps a weak reference to the listener. Keeping the
    listener alive is the caller's job; a collected listener is treated as
    if none had been set.

    Example:
        watcher = DirectoryWatcher()
        watcher.set_callback(reloader)
        watcher.watch('assets')
        while running:
            watcher.process()
            time.sleep(2)
    """
    
    def __init__(self, backend: Union[BackendKind, str] = BackendKind.AUTO, *,
                 max_path_length: Optional[int] = None,
                 observer_factory: Optional[ObserverFactory] = None,
                 logger: Optional[logging.Logger] = None):
        """Initialize the watcher
        
        Args:
            backend: Backend to use; 'auto' picks the native one where the
                platform supports it and the null one elsewhere
            max_path_length: Longest accepted path in encoded bytes
            observer_factory: watchdog observer class or factory for the
                native backend
            logger: Where watch failures and dropped notifications are reported
        """
        options = {}
        if max_path_length:
            options['max_path_length'] = max_path_length
        if observer_factory is not None:
            options['observer_factory'] = observer_factory
        
        self._backend: ChangeBackend = create_backend(backend, **options)
        self._listener_ref: Optional[ListenerRef] = None
        self._last_error: Optional[WatchError] = None
        self.logger = logger or get_logger('dirwatch.watcher')
    
    @classmethod
    def from_config(cls, config: Config, **kwargs) -> 'DirectoryWatcher':
        """Create a watcher from a loaded configuration"""
        return cls(backend=config.backend, max_path_length=config.max_path_length or None, **kwargs)
    
    @property
    def backend_kind(self) -> BackendKind:
        return self._backend.kind
    
    @property
    def watched_path(self) -> Optional[str]:
        target = self._backend.target
        return target.path if target else None
    
    @property
    def is_watching(self) -> bool:
        return self._backend.is_watching
    
    @property
    def last_error(self) -> Optional[WatchError]:
        """The error from the most recent failed watch(), cleared on success"""
        return self._last_error
    
    def set_callback(self, listener: Listener) -> None:
        """Set the object that receives a callback when the directory has changed.

        Replaces any previous listener without notifying it.
        """
        self._listener_ref = make_listener_ref(listener)
    
    def watch(self, path: path_utils.PathInput) -> bool:
        """Cancel any existing watch and watch the directory at ``path``.

        Failures are logged and kept in ``last_error``; the watcher is left
        not watching anything.

        Returns:
            True if the watch was established
        """
        try:
            self._backend.watch(path)
        except WatchError as e:
            self._last_error = e
            self.logger.error("Could not watch directory (%s): %s", type(e).__name__, e)
            return False
        
        self._last_error = None
        return True
    
    def unwatch(self) -> None:
        """Stop watching; process() becomes a no-op until the next watch()"""
        self._backend.close()
    
    def process(self) -> bool:
        """Check once for changes and notify the listener.

        Several changes between two calls produce a single notification.
        Never blocks and never raises.

        Returns:
            True if the listener was notified
        """
        target = self._backend.target
        if target is None or not self._backend.poll():
            return False
        
        notify = self._listener_ref() if self._listener_ref else None
        if notify is None:
            self.logger.debug("Change in %s dropped, no listener registered", target.path)
            return False
        
        try:
            notify(target.path)
        except Exception:
            self.logger.exception("Listener raised while handling a change in %s", target.path)
            return False
        return True
    
    def close(self) -> None:
        """Release the native subscription"""
        self._backend.close()
    
    def __enter__(self) -> 'DirectoryWatcher':
        return self
    
    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
    
    def __repr__(self) -> str:
        return f"<DirectoryWatcher backend={self.backend_kind.value} path={self.watched_path!r}>"
