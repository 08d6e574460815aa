"""StorageAdapter abstraction for walkcache.

The StorageAdapter is what lets walkcache traverse and cache against any
storage. It provides the primitive operations (open a container, read the
next entry name, close, classify, read and write bytes); the lister,
traverser and cache store build everything else on top of them.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class StorageAdapter(ABC):
    """Abstract adapter exposing listing and file access for one storage.

    Handles returned by ``open_container`` are opaque to walkcache. The only
    guarantee walkcache gives an adapter is that every handle it opens is
    passed to ``close_container`` exactly once.

    Adapters for "read-once" listings (where listing a handle a second time
    silently resumes mid-stream) are fully supported: walkcache never
    rewinds or re-reads a handle.
    """

    separator: str = "/"

    # Listing

    @abstractmethod
    def open_container(self, path: str, context: Any = None) -> Any:
        """Open a container for listing.

        Must fail eagerly: an adapter that cannot open ``path`` raises here,
        not on the first ``read_entry`` call.

        Args:
            path: Container path
            context: Caller-supplied access context, passed through unchanged

        Returns:
            Opaque handle

        Raises:
            NotFoundError: If the container does not exist
            AccessError: If the container exists but cannot be opened
        """
        pass

    @abstractmethod
    def read_entry(self, handle: Any) -> Optional[str]:
        """Read the next raw entry name from an open handle.

        Args:
            handle: Handle returned by ``open_container``

        Returns:
            The entry name, or None when the listing is exhausted
        """
        pass

    @abstractmethod
    def close_container(self, handle: Any) -> None:
        """Release a handle returned by ``open_container``."""
        pass

    @abstractmethod
    def is_container(self, path: str, context: Any = None) -> bool:
        """Check if ``path`` denotes a listable container."""
        pass

    @abstractmethod
    def exists(self, path: str, context: Any = None) -> bool:
        """Check if ``path`` exists at all."""
        pass

    def join(self, container: str, name: str) -> str:
        """Build the path of entry ``name`` inside ``container``.

        Default implementation concatenates with ``separator``.
        """
        return f"{container}{self.separator}{name}"

    # File access used by the compiled cache

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Read the full contents of a file.

        Raises:
            NotFoundError: If the file does not exist
            AccessError: If the file cannot be read
        """
        pass

    @abstractmethod
    def write_bytes_atomic(self, path: str, data: bytes) -> None:
        """Publish ``data`` at ``path`` so readers never see a partial file.

        The parent container must already exist.
        """
        pass

    @abstractmethod
    def get_mtime(self, path: str) -> Optional[float]:
        """Get the last-modified timestamp of ``path``.

        Returns:
            Timestamp in seconds, or None if the path does not exist
        """
        pass

    def set_mtime(self, path: str, mtime: float) -> None:
        """Set the last-modified timestamp of ``path``.

        Raises:
            NotImplementedError: If the storage cannot set timestamps
        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support setting mtime")

    @abstractmethod
    def make_dirs(self, path: str, private: bool = False) -> None:
        """Create ``path`` and any missing parents. Existing paths are fine.

        Args:
            path: Container to create
            private: Restrict a newly created ``path`` to the current user
        """
        pass

    def is_trusted(self, path: str) -> bool:
        """Check that nobody but the current user can have written ``path``.

        The compiled cache only unpickles artifacts that pass this check.
        Storages without a notion of ownership trust everything.
        """
        return True

    @abstractmethod
    def remove(self, path: str) -> bool:
        """Remove a file.

        Returns:
            True if removed, False if it was already gone
        """
        pass
