"""Test fixtures for walkcache consumers.

``MemoryAdapter`` is an in-memory StorageAdapter that behaves like the
stream-backed listings walkcache is designed for: listings start with the
``.`` and ``..`` markers, handles are tracked so tests can assert none leak,
and in read-once mode a container's listing position survives across opens.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set, Union

from .._common.errors import AccessError, NotFoundError
from ..sync.core.adapter import StorageAdapter

Tree = Mapping[str, Union[bytes, str, "Tree"]]


@dataclass
class MemoryHandle:
    """Open listing of one in-memory container."""
    path: str
    names: List[str]
    position: int = 0
    closed: bool = False


@dataclass
class _Clock:
    """Monotonic logical clock so mtimes never tie by accident."""
    now: float = field(default_factory=time.time)

    def tick(self) -> float:
        self.now += 1.0
        return self.now


class MemoryAdapter(StorageAdapter):
    """In-memory storage with handle tracking.

    Example:
        adapter = MemoryAdapter.from_tree("mem://a", {
            "x": b"data",
            "b": {"y": b""},
        })
        assert list(walk("mem://a", adapter)) == ["mem://a/x", "mem://a/b", "mem://a/b/y"]
        assert adapter.open_handles == 0
    """

    separator = "/"

    def __init__(self, read_once: bool = False, dot_entries: bool = True):
        """Initialize an empty store.

        Args:
            read_once: Persist each container's listing position across
                opens, the way broken stream wrappers do
            dot_entries: Start every listing with ``.`` and ``..``
        """
        self.read_once = read_once
        self.dot_entries = dot_entries
        self.dirs: Dict[str, List[str]] = {}
        self.files: Dict[str, bytes] = {}
        self.mtimes: Dict[str, float] = {}
        self.fail_on: Set[str] = set()
        self.opened: List[str] = []
        self.writes: List[str] = []
        self._handles: List[MemoryHandle] = []
        self._cursors: Dict[str, int] = {}
        self._clock = _Clock()

    @classmethod
    def from_tree(cls, root: str, tree: Tree, **kwargs) -> 'MemoryAdapter':
        """Build an adapter holding ``tree`` under ``root``.

        Mapping values are containers; bytes or str values are files.
        Insertion order is listing order.
        """
        adapter = cls(**kwargs)
        adapter.add_dir(root)
        adapter._populate(root, tree)
        return adapter

    def _populate(self, container: str, tree: Tree) -> None:
        for name, value in tree.items():
            path = self.join(container, name)
            if isinstance(value, Mapping):
                self.add_dir(path)
                self._populate(path, value)
            else:
                self.add_file(path, value)

    # Tree building

    def add_dir(self, path: str) -> None:
        if path in self.dirs:
            return
        self.dirs[path] = []
        self.mtimes[path] = self._clock.tick()
        self._link(path)

    def add_file(self, path: str, data: Union[bytes, str] = b"") -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        if path not in self.files:
            self._link(path)
        self.files[path] = data
        self.mtimes[path] = self._clock.tick()

    def touch(self, path: str, mtime: Optional[float] = None) -> float:
        """Advance the mtime of ``path`` (to ``mtime`` or the next tick)."""
        self.mtimes[path] = self._clock.tick() if mtime is None else mtime
        return self.mtimes[path]

    def _link(self, path: str) -> None:
        parent, _, name = path.rpartition(self.separator)
        if parent in self.dirs and name not in self.dirs[parent]:
            self.dirs[parent].append(name)

    def _unlink(self, path: str) -> None:
        parent, _, name = path.rpartition(self.separator)
        if parent in self.dirs and name in self.dirs[parent]:
            self.dirs[parent].remove(name)

    # Handle tracking

    @property
    def open_handles(self) -> int:
        """Number of handles opened and not yet closed."""
        return sum(1 for h in self._handles if not h.closed)

    def open_count(self, path: str) -> int:
        """Number of times ``path`` was opened for listing."""
        return self.opened.count(path)

    # StorageAdapter

    def open_container(self, path: str, context: Any = None) -> MemoryHandle:
        if path in self.fail_on:
            raise AccessError(f"Cannot open container {path!r}: injected failure", path)
        if path not in self.dirs:
            raise NotFoundError(f"Cannot open container {path!r}: not found", path)

        names = list(self.dirs[path])
        if self.dot_entries:
            names = [".", ".."] + names

        position = self._cursors.get(path, 0) if self.read_once else 0
        handle = MemoryHandle(path, names, position)
        self._handles.append(handle)
        self.opened.append(path)
        return handle

    def read_entry(self, handle: MemoryHandle) -> Optional[str]:
        if handle.closed:
            raise ValueError(f"Read from closed handle for {handle.path!r}")
        if handle.position >= len(handle.names):
            return None
        name = handle.names[handle.position]
        handle.position += 1
        if self.read_once:
            self._cursors[handle.path] = handle.position
        return name

    def close_container(self, handle: MemoryHandle) -> None:
        if handle.closed:
            raise ValueError(f"Handle for {handle.path!r} closed twice")
        handle.closed = True

    def is_container(self, path: str, context: Any = None) -> bool:
        return path in self.dirs

    def exists(self, path: str, context: Any = None) -> bool:
        return path in self.dirs or path in self.files

    def read_bytes(self, path: str) -> bytes:
        if path not in self.files:
            raise NotFoundError(f"Cannot read {path!r}: not found", path)
        return self.files[path]

    def write_bytes_atomic(self, path: str, data: bytes) -> None:
        parent = path.rpartition(self.separator)[0]
        if parent not in self.dirs:
            raise NotFoundError(f"Cannot write {path!r}: parent missing", path)
        self.writes.append(path)
        self.add_file(path, data)

    def get_mtime(self, path: str) -> Optional[float]:
        return self.mtimes.get(path)

    def set_mtime(self, path: str, mtime: float) -> None:
        self.mtimes[path] = mtime

    def make_dirs(self, path: str, private: bool = False) -> None:
        missing = []
        current = path
        # Stop at the scheme prefix, e.g. "mem:/" of "mem://cache"
        while current and current not in self.dirs and not current.endswith(":/"):
            missing.append(current)
            current = current.rpartition(self.separator)[0]
        for directory in reversed(missing):
            self.add_dir(directory)

    def remove(self, path: str) -> bool:
        if path not in self.files:
            return False
        del self.files[path]
        self.mtimes.pop(path, None)
        self._unlink(path)
        return True
