"""Configuration re-export for the sync package.

Re-exports configuration components from the _common package.
"""

from .._common.config import (
    WalkConfig,
    CacheConfig,
    CACHE_DIR_ENV,
    DEFAULT_CACHE_SUBDIR,
    ARTIFACT_SUFFIX,
    RESERVED_NAMES,
    resolve_cache_dir,
)

__all__ = [
    'WalkConfig',
    'CacheConfig',
    'CACHE_DIR_ENV',
    'DEFAULT_CACHE_SUBDIR',
    'ARTIFACT_SUFFIX',
    'RESERVED_NAMES',
    'resolve_cache_dir',
]
