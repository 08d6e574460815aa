"""walkcache - lazy storage traversal and compiled descriptor caching.

walkcache provides two services:

Traversal:
    from walkcache.sync import walk, list_entries

Compiled descriptor cache:
    from walkcache.sync import load_compiled, clear_compiled

Both work against any storage through a StorageAdapter; the local
filesystem is used by default.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from . import sync
from ._common.errors import (
    WalkCacheError,
    NotFoundError,
    AccessError,
    DecodeError,
    UnsupportedError,
)

__all__ = [
    "__version__",
    "sync",
    "WalkCacheError",
    "NotFoundError",
    "AccessError",
    "DecodeError",
    "UnsupportedError",
]
