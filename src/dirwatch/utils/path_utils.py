"""
Path encoding helpers for the native backend
"""

import os
import sys
from typing import Any, Optional, Tuple, Union

from ..core.errors import PathEncodingError


# MAX_PATH on Windows, including the terminating NUL
WINDOWS_MAX_PATH = 260
DEFAULT_PATH_MAX = 4096

PathInput = Union[str, bytes, 'os.PathLike[Any]']


def platform_max_path_length() -> int:
    """Return the longest path the OS accepts for a watch.

    The unit is UTF-16 code units on Windows and bytes elsewhere, see
    native_path_length().

    Both limits include room for the terminating NUL, which is not counted
    here.
    """
    if sys.platform == 'win32':
        return WINDOWS_MAX_PATH - 1
    try:
        limit = os.pathconf('/', 'PC_PATH_MAX')
    except (OSError, ValueError, AttributeError):
        limit = -1
    if limit <= 0:
        limit = DEFAULT_PATH_MAX
    return limit - 1


def display_path(path: PathInput) -> str:
    """Best-effort string form of a path for messages and callbacks."""
    try:
        return os.fsdecode(os.fspath(path))
    except (TypeError, UnicodeDecodeError):
        return repr(path)


def native_path_length(native: bytes) -> Tuple[int, str]:
    """Measure a path in the unit the OS limit is expressed in.

    Windows counts MAX_PATH in UTF-16 code units, elsewhere PATH_MAX is
    in bytes.
    """
    if sys.platform == 'win32':
        wide = os.fsdecode(native).encode('utf-16-le', 'surrogatepass')
        return len(wide) // 2, 'character'
    return len(native), 'byte'


def encode_watch_path(path: PathInput, max_length: Optional[int] = None) -> bytes:
    """Convert a path into the byte form handed to the OS.

    Args:
        path: Directory path as str, bytes or os.PathLike
        max_length: Maximum length as measured by native_path_length();
            the platform limit is used when this is None or 0

    Returns:
        The filesystem-encoded path

    Raises:
        PathEncodingError: If the path cannot be encoded, contains a NUL
            byte or is longer than the limit. Paths are never truncated.
    """
    shown = display_path(path)
    try:
        native = os.fsencode(path)
    except (TypeError, UnicodeEncodeError) as e:
        raise PathEncodingError(shown, f"cannot encode path: {e}") from e
    
    if not native:
        raise PathEncodingError(shown, "path is empty")
    if b'\x00' in native:
        raise PathEncodingError(shown, "path contains a NUL byte")
    
    limit = max_length or platform_max_path_length()
    length, unit = native_path_length(native)
    if length > limit:
        raise PathEncodingError(
            shown, f"path is {length} {unit}s, longer than the {limit} {unit} limit"
        )
    return native
