"""Testing utilities for walkcache consumers."""

from .fixtures import MemoryAdapter, MemoryHandle

__all__ = ['MemoryAdapter', 'MemoryHandle']
