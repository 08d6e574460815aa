"""Synchronous implementation of walkcache.

All components here operate in a blocking, synchronous manner. Listings and
walks are lazy: each step performs only the I/O needed for the next item.
"""

# Core components
from .core.adapter import StorageAdapter
from .core.lister import EntryIterator, list_entries
from .core.traverser import DirectoryWalker, TraversalFrame

# Adapters
from .adapters.filesystem import FileSystemAdapter

# Compiled cache
from .cache.store import CompiledCacheStore, FORMAT_VERSION
from .cache.purger import CachePurger
from .cache.decoders import DEFAULT_DECODERS, decode_json, select_decoder

# Configuration
from .config import (
    WalkConfig,
    CacheConfig,
    CACHE_DIR_ENV,
    DEFAULT_CACHE_SUBDIR,
    ARTIFACT_SUFFIX,
    RESERVED_NAMES,
    resolve_cache_dir,
)

# High-level API
from .api import (
    walk,
    walk_many,
    walk_batches,
    find_paths,
    default_store,
    load_compiled,
    clear_compiled,
)

__all__ = [
    # Core
    'StorageAdapter',
    'EntryIterator',
    'list_entries',
    'DirectoryWalker',
    'TraversalFrame',
    # Adapters
    'FileSystemAdapter',
    # Cache
    'CompiledCacheStore',
    'CachePurger',
    'FORMAT_VERSION',
    'DEFAULT_DECODERS',
    'decode_json',
    'select_decoder',
    # Config
    'WalkConfig',
    'CacheConfig',
    'CACHE_DIR_ENV',
    'DEFAULT_CACHE_SUBDIR',
    'ARTIFACT_SUFFIX',
    'RESERVED_NAMES',
    'resolve_cache_dir',
    # API
    'walk',
    'walk_many',
    'walk_batches',
    'find_paths',
    'default_store',
    'load_compiled',
    'clear_compiled',
]
