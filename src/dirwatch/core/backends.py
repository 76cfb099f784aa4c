"""
Change backends: the platform side of the directory watcher

A backend owns at most one native subscription for one directory and turns
it into a non-blocking "has anything changed" check. ``NativeBackend`` is
built on watchdog's platform observer, ``NullBackend`` stands in wherever no
native primitive exists so callers never have to branch on the platform.
"""

import os
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver, ObservedWatch
from watchdog.observers.polling import PollingObserver

from .errors import SubscriptionError, WatchError
from ..utils import path_utils
from ..utils.logging_utils import get_logger

logger = get_logger('dirwatch.backends')

# Created, deleted, renamed and last-write changes; opened/closed are ignored
WATCHED_EVENT_TYPES = frozenset({
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MOVED,
    EVENT_TYPE_MODIFIED,
})

ObserverFactory = Callable[[], BaseObserver]


class BackendKind(str, Enum):
    """Which backend a watcher is built with"""
    AUTO = 'auto'
    NATIVE = 'native'
    NULL = 'null'


@dataclass(frozen=True)
class WatchTarget:
    """The directory under observation"""
    path: str
    native_path: bytes
    recursive: bool = False


def native_supported() -> bool:
    """Check whether watchdog has a native observer on this platform.

    watchdog only falls back to its polling observer when the platform has
    no change-notification primitive it knows how to use.
    """
    return not issubclass(Observer, PollingObserver)


def resolve_backend_kind(kind: Union[BackendKind, str]) -> BackendKind:
    """Turn a configured backend name into a concrete kind, resolving 'auto'"""
    try:
        kind = BackendKind(kind.lower() if isinstance(kind, str) else kind)
    except ValueError:
        choices = ', '.join(k.value for k in BackendKind)
        raise ValueError(f"Unknown backend '{kind}' (expected one of: {choices})") from None
    
    if kind is BackendKind.AUTO:
        return BackendKind.NATIVE if native_supported() else BackendKind.NULL
    return kind


class ChangeBackend(ABC):
    """Common contract for all backends"""
    
    kind: BackendKind
    
    @abstractmethod
    def watch(self, path: path_utils.PathInput) -> WatchTarget:
        """Start observing ``path``, retiring any previous subscription first.

        Raises:
            WatchError: If the watch could not be established. The backend
                is idle afterwards.
        """
    
    @abstractmethod
    def poll(self) -> bool:
        """Return True if the directory changed since the last poll. Never blocks."""
    
    @abstractmethod
    def close(self) -> None:
        """Release the native subscription, if any"""
    
    @property
    @abstractmethod
    def target(self) -> Optional[WatchTarget]:
        """The live watch target, or None while idle"""
    
    @property
    def is_watching(self) -> bool:
        return self.target is not None


class NullBackend(ChangeBackend):
    """Backend for platforms without change notifications. Never reports a change."""
    
    kind = BackendKind.NULL
    
    def watch(self, path: path_utils.PathInput) -> WatchTarget:
        logger.debug("Null backend ignoring watch request for %s", path_utils.display_path(path))
        return WatchTarget(path=path_utils.display_path(path), native_path=b'')
    
    def poll(self) -> bool:
        return False
    
    def close(self) -> None:
        pass
    
    @property
    def target(self) -> Optional[WatchTarget]:
        return None


class ChangeSignalHandler(FileSystemEventHandler):
    """Raises a flag when a watched kind of event arrives

    watchdog reports metadata-only changes (inotify IN_ATTRIB, such as a
    chmod or touch without writing) as modified events, so those notify too.
    Expect the occasional notification for a change that did not touch any
    file contents.
    """
    
    def __init__(self, signalled: threading.Event):
        super().__init__()
        self.signalled = signalled
    
    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type in WATCHED_EVENT_TYPES:
            self.signalled.set()


class NativeHandle:
    """One running observer subscribed to one directory.

    watchdog delivers events on its own threads; all they do is set the
    ``signalled`` flag, which the owning backend checks without blocking.
    """
    
    def __init__(self, observer: BaseObserver, watch: ObservedWatch, signalled: threading.Event):
        self.observer = observer
        self.watch = watch
        self.signalled = signalled
        self.released = False
    
    def wait(self, timeout: float = 0.0) -> bool:
        """Wait up to ``timeout`` seconds for the flag; 0 checks and returns"""
        return self.signalled.wait(timeout)
    
    def is_alive(self) -> bool:
        """Check that the observer and its emitters are still running"""
        if self.released or not self.observer.is_alive():
            return False
        emitters = self.observer.emitters
        return bool(emitters) and all(emitter.is_alive() for emitter in emitters)
    
    def rearm(self) -> None:
        """Clear the flag so the next change fires again.

        Raises:
            SubscriptionError: If the OS subscription has died
        """
        self.signalled.clear()
        if not self.is_alive():
            raise SubscriptionError(self.watch.path, "change subscription is no longer active")
    
    def release(self, join_timeout: Optional[float] = None) -> None:
        """Stop the observer. Safe to call more than once."""
        if self.released:
            return
        self.released = True
        _shutdown_observer(self.observer, join_timeout)


def _shutdown_observer(observer: BaseObserver, join_timeout: Optional[float] = None) -> None:
    if observer.is_alive():
        observer.stop()
        observer.join(join_timeout)
    else:
        # Never started, emitters may still hold OS resources
        observer.unschedule_all()


class NativeBackend(ChangeBackend):
    """Backend using the platform's change-notification primitive through watchdog"""
    
    kind = BackendKind.NATIVE
    
    def __init__(self, max_path_length: Optional[int] = None,
                 observer_factory: Optional[ObserverFactory] = None,
                 join_timeout: Optional[float] = 5.0):
        """Initialize an idle backend; nothing is acquired until watch()

        Args:
            max_path_length: Longest accepted path in encoded bytes, platform
                limit when None
            observer_factory: Builds the watchdog observer for each watch,
                watchdog's platform Observer by default
            join_timeout: Seconds to wait for observer threads on release
        """
        self.max_path_length = max_path_length
        self.observer_factory = observer_factory or Observer
        self.join_timeout = join_timeout
        self._handle: Optional[NativeHandle] = None
        self._target: Optional[WatchTarget] = None
    
    @property
    def target(self) -> Optional[WatchTarget]:
        return self._target
    
    @property
    def handle(self) -> Optional[NativeHandle]:
        return self._handle
    
    def watch(self, path: path_utils.PathInput) -> WatchTarget:
        # The old subscription goes first so a failure below leaves us idle
        self.close()
        
        native_path = path_utils.encode_watch_path(path, self.max_path_length)
        target = WatchTarget(path=path_utils.display_path(path), native_path=native_path)
        
        if not os.path.isdir(native_path):
            raise SubscriptionError(target.path, "not an existing directory")
        
        self._handle = self._subscribe(target)
        self._target = target
        logger.debug("Watching %s", target.path)
        return target
    
    def _subscribe(self, target: WatchTarget) -> NativeHandle:
        signalled = threading.Event()
        handler = ChangeSignalHandler(signalled)
        try:
            observer = self.observer_factory()
        except OSError as e:
            raise SubscriptionError(target.path, f"could not create observer ({e})") from e
        
        try:
            watch = observer.schedule(handler, os.fsdecode(target.native_path),
                                      recursive=target.recursive)
            observer.start()
        except OSError as e:
            _shutdown_observer(observer, self.join_timeout)
            raise SubscriptionError(target.path, f"subscription failed ({e})") from e
        
        return NativeHandle(observer, watch, signalled)
    
    def poll(self) -> bool:
        handle = self._handle
        if handle is None:
            return False
        
        if not handle.wait(0):
            if not handle.is_alive():
                self._drop_subscription(SubscriptionError(self._target.path, "change subscription was lost"))
            return False
        
        try:
            handle.rearm()
        except SubscriptionError as e:
            self._drop_subscription(e)
        return True
    
    def _drop_subscription(self, error: WatchError) -> None:
        logger.error("%s; further changes will not be observed", error)
        self.close()
    
    def close(self) -> None:
        handle, self._handle = self._handle, None
        target, self._target = self._target, None
        if handle is not None:
            handle.release(self.join_timeout)
            logger.debug("Stopped watching %s", target.path if target else handle.watch.path)


def create_backend(kind: Union[BackendKind, str] = BackendKind.AUTO, **options: Any) -> ChangeBackend:
    """Build the backend for ``kind``; options are passed to NativeBackend only"""
    resolved = resolve_backend_kind(kind)
    if resolved is BackendKind.NULL:
        return NullBackend()
    return NativeBackend(**options)
