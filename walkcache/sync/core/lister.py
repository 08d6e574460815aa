"""One-level container listing for walkcache.

``EntryIterator`` owns a single container handle and guarantees it is
released exactly once, whether the listing is drained, abandoned, or fails.
"""

import logging
from typing import Any, Iterator, Optional

from .adapter import StorageAdapter

logger = logging.getLogger(__name__)


class EntryIterator:
    """Lazy iterator over the raw entry names of one container.

    The container is opened in the constructor, so open failures surface at
    call time rather than on the first ``next()``. Names are yielded in the
    order the adapter supplies them.

    Use as a context manager, or call ``close()``, to release the handle
    when abandoning the listing early. An abandoned iterator that is never
    closed releases its handle when it is garbage collected.
    """

    def __init__(self, adapter: StorageAdapter, container: str, context: Any = None):
        """Open ``container`` for listing.

        Args:
            adapter: Storage adapter providing the listing
            container: Container path to list
            context: Access context passed through to the adapter

        Raises:
            NotFoundError: If the container cannot be found
            AccessError: If the container cannot be opened
        """
        self.adapter = adapter
        self.container = container
        # Stays closed if open_container raises, so the finalizer has nothing to do
        self._closed = True
        self._handle = adapter.open_container(container, context)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self._closed:
            raise StopIteration

        try:
            name = self.adapter.read_entry(self._handle)
        except BaseException:
            self.close()
            raise

        if name is None:
            self.close()
            raise StopIteration
        return name

    def close(self) -> None:
        """Release the container handle. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self.adapter.close_container(self._handle)
        logger.debug("Closed container %s", self.container)

    def __enter__(self) -> 'EntryIterator':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self):
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"EntryIterator(container={self.container!r}, {state})"


def list_entries(container: str,
                 adapter: Optional[StorageAdapter] = None,
                 context: Any = None) -> EntryIterator:
    """List the raw entry names of ``container`` one level deep.

    Args:
        container: Container path to list
        adapter: Storage adapter (defaults to the local filesystem)
        context: Access context passed through to the adapter

    Returns:
        EntryIterator yielding names in listing order

    Example:
        >>> with list_entries("/tmp") as names:
        ...     for name in names:
        ...         print(name)
    """
    if adapter is None:
        from ..adapters.filesystem import FileSystemAdapter
        adapter = FileSystemAdapter()
    return EntryIterator(adapter, container, context)
