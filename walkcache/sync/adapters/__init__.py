"""Storage adapters for specific storage backends.

Adapters implement the StorageAdapter interface, enabling walkcache to
list and cache against any storage.
"""

from .filesystem import FileSystemAdapter

__all__ = [
    "FileSystemAdapter",
]
