"""
Listener interface and the weak reference the watcher keeps to it
"""

import weakref
from abc import ABC, abstractmethod
from typing import Callable, Optional, Union


class DirectoryListener(ABC):
    """Interface to an object that receives a callback when a directory has changed"""
    
    @abstractmethod
    def on_dir_changed(self, path: str) -> None:
        """Called once per process() call that observed a change in ``path``"""


Listener = Union[DirectoryListener, Callable[[str], None]]
ListenerRef = Callable[[], Optional[Callable[[str], None]]]


def make_listener_ref(listener: Listener) -> ListenerRef:
    """Build a weak reference that resolves to the listener's notify callable.

    The watcher never keeps the listener alive; once the caller drops its
    last reference the returned ref resolves to None.

    Raises:
        TypeError: If the listener is not callable or cannot be weakly referenced
    """
    notify = getattr(listener, 'on_dir_changed', listener)
    if not callable(notify):
        raise TypeError(f"listener must be a DirectoryListener or a callable, got {type(listener).__name__}")
    
    try:
        if hasattr(notify, '__self__') and hasattr(notify, '__func__'):
            return weakref.WeakMethod(notify)
        return weakref.ref(notify)
    except TypeError as e:
        raise TypeError(f"listener {notify!r} does not support weak references") from e
