"""High-level API for walkcache.

This module provides simple, functional interfaces for the common cases.
These functions wrap the object-oriented API (DirectoryWalker,
CompiledCacheStore, CachePurger) for ease of use.
"""

from typing import Any, Callable, Iterable, Iterator, List, Optional

from cachetools import cached

from .._common.config import CacheConfig, WalkConfig
from .._common.sequence import flatmap, partition
from .adapters.filesystem import FileSystemAdapter
from .cache.purger import CachePurger
from .cache.store import CompiledCacheStore
from .core.adapter import StorageAdapter
from .core.traverser import DirectoryWalker


def _resolve_config(config: Optional[WalkConfig], options: dict) -> WalkConfig:
    """Build a WalkConfig from keyword options, or pass ``config`` through."""
    if config is None:
        return WalkConfig(**options)
    if options:
        raise TypeError(
            f"Pass either config or WalkConfig options, not both "
            f"(got config and {', '.join(sorted(options))})"
        )
    return config


def walk(
    root: str,
    adapter: Optional[StorageAdapter] = None,
    context: Any = None,
    config: Optional[WalkConfig] = None,
    **kwargs
) -> DirectoryWalker:
    """Walk every path below ``root``, depth-first, pre-order.

    The root container is opened immediately; everything else is listed
    lazily as the walk is consumed.

    Args:
        root: Container to walk (e.g. "/tmp", "mem://bucket")
        adapter: Storage adapter (defaults to the local filesystem)
        context: Access context passed through to every adapter call
        config: Traversal options
        **kwargs: WalkConfig fields, as an alternative to config

    Returns:
        DirectoryWalker; close it (or use it as a context manager) when
        abandoning the walk early

    Raises:
        TypeError: If both config and WalkConfig fields are given

    Example:
        >>> with walk("/a") as paths:
        ...     print(list(paths))
        ['/a/x', '/a/b', '/a/b/y']
    """
    config = _resolve_config(config, kwargs)
    return DirectoryWalker(root, adapter or FileSystemAdapter(), context, config)


def walk_many(
    roots: Iterable[str],
    adapter: Optional[StorageAdapter] = None,
    context: Any = None,
    config: Optional[WalkConfig] = None,
    **kwargs
) -> Iterator[str]:
    """Walk several roots one after another.

    Each root is opened only when the previous walk is exhausted.

    Raises:
        TypeError: If both config and WalkConfig fields are given
    """
    config = _resolve_config(config, kwargs)
    return _walk_roots(roots, adapter or FileSystemAdapter(), context, config)


def _walk_roots(roots: Iterable[str],
                adapter: StorageAdapter,
                context: Any,
                config: WalkConfig) -> Iterator[str]:
    walkers: List[DirectoryWalker] = []

    def _open(root: str) -> DirectoryWalker:
        walker = DirectoryWalker(root, adapter, context, config)
        walkers.append(walker)
        return walker

    try:
        yield from flatmap(roots, _open)
    finally:
        for walker in walkers:
            walker.close()


def walk_batches(
    root: str,
    size: int,
    adapter: Optional[StorageAdapter] = None,
    context: Any = None,
    config: Optional[WalkConfig] = None,
    **kwargs
) -> Iterator[List[str]]:
    """Walk ``root`` and yield paths in lists of ``size``.

    Like ``walk``, the root is opened before this function returns.

    Raises:
        ValueError: If size is not positive
        TypeError: If both config and WalkConfig fields are given
        NotFoundError: If root cannot be found
    """
    if size <= 0:
        raise ValueError(f"Batch size must be positive, got {size}")

    return _batches(walk(root, adapter, context, config, **kwargs), size)


def _batches(walker: DirectoryWalker, size: int) -> Iterator[List[str]]:
    with walker:
        yield from partition(walker, size)


def find_paths(
    root: str,
    predicate: Callable[[str], bool],
    adapter: Optional[StorageAdapter] = None,
    context: Any = None,
) -> DirectoryWalker:
    """Walk ``root`` yielding only the paths that satisfy ``predicate``.

    The root is opened before this function returns.

    Example:
        >>> list(find_paths("/etc", lambda p: p.endswith(".conf")))
    """
    return walk(root, adapter, context, include=predicate)


@cached(cache={})
def default_store() -> CompiledCacheStore:
    """Return the process-wide store used by ``load_compiled``.

    The cache root is resolved on first call. ``default_store.cache_clear()``
    forgets the store so the next call resolves it again.
    """
    return CompiledCacheStore()


def load_compiled(path: str) -> Any:
    """Load a descriptor through the process-wide compiled cache.

    The default cache root is ``walkcache-cache`` under the platform temp
    directory; set ``WALKCACHE_CACHE_DIR`` to use another directory.

    Args:
        path: Descriptor path

    Returns:
        The decoded value (JSON objects decode to dicts)
    """
    return default_store().load(path)


def clear_compiled(config: Optional[CacheConfig] = None) -> int:
    """Delete every compiled artifact under the cache root.

    The cache root is resolved afresh on each call.

    Returns:
        Number of artifacts removed
    """
    return CachePurger(config).purge()
