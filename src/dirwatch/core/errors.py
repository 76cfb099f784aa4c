"""
Errors reported by directory watch backends
"""


class WatchError(Exception):
    """Base class for failures to start or keep a directory watch"""
    
    def __init__(self, path: str, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class PathEncodingError(WatchError):
    """The path cannot be represented in the form the OS call needs"""


class SubscriptionError(WatchError):
    """The OS declined to create or re-arm a change subscription"""
