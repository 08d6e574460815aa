"""Common components that perform no storage I/O.

This internal package holds configuration, the error taxonomy and pure
helpers. It should NOT be imported directly by users.

Important: This package must NEVER import from sync to avoid circular
dependencies.
"""

from .config import (
    WalkConfig,
    CacheConfig,
    CACHE_DIR_ENV,
    DEFAULT_CACHE_SUBDIR,
    ARTIFACT_SUFFIX,
    RESERVED_NAMES,
    resolve_cache_dir,
)
from .errors import (
    WalkCacheError,
    NotFoundError,
    AccessError,
    DecodeError,
    UnsupportedError,
    translate_os_error,
)
from .introspection import describe_type
from .sequence import (
    constantly,
    filter_items,
    map_items,
    flatmap,
    partition,
    or_chain,
)

__all__ = [
    'WalkConfig',
    'CacheConfig',
    'CACHE_DIR_ENV',
    'DEFAULT_CACHE_SUBDIR',
    'ARTIFACT_SUFFIX',
    'RESERVED_NAMES',
    'resolve_cache_dir',
    'WalkCacheError',
    'NotFoundError',
    'AccessError',
    'DecodeError',
    'UnsupportedError',
    'translate_os_error',
    'describe_type',
    'constantly',
    'filter_items',
    'map_items',
    'flatmap',
    'partition',
    'or_chain',
]
