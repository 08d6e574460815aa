"""Core abstractions for walkcache.

This module contains the storage adapter contract and the listing and
traversal machinery built on it.
"""

from .adapter import StorageAdapter
from .lister import EntryIterator, list_entries
from .traverser import DirectoryWalker, TraversalFrame

__all__ = [
    "StorageAdapter",
    "EntryIterator",
    "list_entries",
    "DirectoryWalker",
    "TraversalFrame",
]
