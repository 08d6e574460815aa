"""Error taxonomy for walkcache.

Every error carries the path it concerns. The concrete classes also derive
from the matching builtin so callers that already catch ``FileNotFoundError``
or ``ValueError`` keep working.
"""

from typing import Optional


class WalkCacheError(Exception):
    """Base class for all walkcache errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class NotFoundError(WalkCacheError, FileNotFoundError):
    """A container or source path cannot be opened or read."""


class AccessError(WalkCacheError, PermissionError):
    """Opening a path failed for a reason other than it being missing."""


class DecodeError(WalkCacheError, ValueError):
    """A descriptor or compiled artifact could not be decoded."""


class UnsupportedError(WalkCacheError, NotImplementedError):
    """No recognised handler exists for the request."""


def translate_os_error(error: OSError, path: str, action: str) -> WalkCacheError:
    """Map an ``OSError`` raised by storage onto the walkcache taxonomy.

    Args:
        error: The original error
        path: Path being operated on
        action: Short verb phrase for the message, e.g. ``"open container"``

    Returns:
        NotFoundError for missing paths, AccessError for everything else
    """
    reason = error.strerror or str(error)
    message = f"Cannot {action} {path!r}: {reason}"
    if isinstance(error, (FileNotFoundError, NotADirectoryError)):
        return NotFoundError(message, path)
    return AccessError(message, path)
