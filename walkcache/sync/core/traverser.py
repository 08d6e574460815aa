"""Recursive traversal for walkcache.

``DirectoryWalker`` walks a container tree depth-first, pre-order, keeping
an explicit stack of open listings instead of nesting generators. Each
container is opened once, drained once, and closed once, which is what
makes the walk correct over read-once listing handles.
"""

import logging
from typing import Any, Iterator, List, NamedTuple, Optional

from ..._common.config import WalkConfig
from .adapter import StorageAdapter
from .lister import EntryIterator

logger = logging.getLogger(__name__)


class TraversalFrame(NamedTuple):
    """One suspended directory level on the traversal stack."""

    entries: EntryIterator
    # Path that entry names are joined onto
    container: str
    # len(container) + len(separator)
    offset: int
    # Depth of the entries listed by this frame (children of root are 0)
    depth: int


class DirectoryWalker:
    """Lazy pre-order iterator over every path below a root container.

    A container's own path is yielded before any of its descendants.
    Classification of a yielded path (container or not) is deferred until
    the next item is requested, so consuming a prefix of the walk performs
    only the listing calls that prefix needs.

    Handles still on the stack are released by ``close()``, on context
    exit, when an error propagates out of ``next()``, and when an abandoned
    walker is garbage collected. After an error the walker is exhausted.

    Example:
        >>> with DirectoryWalker("/a", FileSystemAdapter()) as walker:
        ...     for path in walker:
        ...         print(path)
        /a/x
        /a/b
        /a/b/y
    """

    def __init__(self,
                 root: str,
                 adapter: StorageAdapter,
                 context: Any = None,
                 config: Optional[WalkConfig] = None):
        """Open the root container and prepare the walk.

        Args:
            root: Container to walk
            adapter: Storage adapter providing listings and classification
            context: Access context passed through to every adapter call
            config: Traversal options

        Raises:
            ValueError: If config is invalid
            NotFoundError: If root cannot be found
            AccessError: If root cannot be opened
        """
        # Nothing to release until the root is open
        self._stack: List[TraversalFrame] = []
        self._pending: Optional[tuple] = None
        self._closed = True

        self.config = config or WalkConfig()
        config_errors = self.config.validate()
        if config_errors:
            raise ValueError(f"Invalid configuration: {'; '.join(config_errors)}")

        self.adapter = adapter
        self.context = context
        self.root = root

        prefix = _strip_separator(root, adapter.separator)
        entries = EntryIterator(adapter, root, context)
        self._stack.append(
            TraversalFrame(entries, prefix, len(prefix) + len(adapter.separator), 0)
        )
        self._root_offset = self._stack[0].offset
        self._closed = False

    @property
    def depth(self) -> int:
        """Number of containers currently open on the stack."""
        return len(self._stack)

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        include = self.config.include
        while True:
            path = self._advance()
            if path is None:
                raise StopIteration
            if include is None or include(path):
                if self.config.relative:
                    return path[self._root_offset:]
                return path

    def _advance(self) -> Optional[str]:
        """Return the next full path, or None when the walk is complete."""
        if self._closed:
            return None

        try:
            if self._pending is not None:
                self._descend(*self._pending)

            while self._stack:
                frame = self._stack[-1]
                name = next(frame.entries, None)
                if name is None:
                    # EntryIterator closes itself on exhaustion
                    self._stack.pop()
                    continue
                if name in self.config.skip_names:
                    continue

                path = self.adapter.join(frame.container, name)
                self._pending = (path, frame.depth)
                return path
        except BaseException:
            self.close()
            raise

        self._closed = True
        return None

    def _descend(self, path: str, depth: int) -> None:
        """Push a frame for the last yielded path if it is a container."""
        self._pending = None
        if not self.config.should_descend(depth):
            return
        if not self.adapter.is_container(path, self.context):
            return

        entries = EntryIterator(self.adapter, path, self.context)
        logger.debug("Descending into %s at depth %d", path, depth + 1)
        self._stack.append(
            TraversalFrame(entries, path, len(path) + len(self.adapter.separator), depth + 1)
        )

    def close(self) -> None:
        """Release every handle still on the stack, innermost first."""
        self._closed = True
        self._pending = None
        while self._stack:
            frame = self._stack.pop()
            frame.entries.close()

    def __enter__(self) -> 'DirectoryWalker':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self):
        self.close()

    def __repr__(self) -> str:
        return f"DirectoryWalker(root={self.root!r}, depth={self.depth})"


def _strip_separator(path: str, separator: str) -> str:
    """Remove one trailing separator so joined paths have a single one."""
    if path.endswith(separator):
        return path[:-len(separator)]
    return path
