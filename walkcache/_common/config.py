"""Configuration system for walkcache.

This module defines how users specify traversal behaviour and where the
compiled-artifact cache lives.
"""

import os
import tempfile
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, List, Optional

from .introspection import describe_type


CACHE_DIR_ENV = "WALKCACHE_CACHE_DIR"
DEFAULT_CACHE_SUBDIR = "walkcache-cache"
ARTIFACT_SUFFIX = ".compiled.pickle"
RESERVED_NAMES = frozenset({".", ".."})


def resolve_cache_dir() -> str:
    """Resolve the cache root from the environment.

    Returns:
        The value of ``WALKCACHE_CACHE_DIR`` verbatim when set, otherwise
        ``walkcache-cache`` under the platform temp directory
    """
    override = os.environ.get(CACHE_DIR_ENV)
    if override:
        return override
    return os.path.join(tempfile.gettempdir(), DEFAULT_CACHE_SUBDIR)


@dataclass
class WalkConfig:
    """Configuration for recursive traversal."""

    # Entry names that are never emitted or descended into
    skip_names: FrozenSet[str] = RESERVED_NAMES

    # Yield paths relative to the root instead of root-prefixed paths
    relative: bool = False

    # Deepest level to descend into (children of root are depth 0)
    max_depth: Optional[int] = None

    # Predicate on emitted paths; does not affect recursion
    include: Optional[Callable[[str], bool]] = None

    def should_descend(self, depth: int) -> bool:
        """Check if containers found at ``depth`` should be opened.

        Args:
            depth: Depth of the container's own entry

        Returns:
            True if its children are within the depth limit
        """
        if self.max_depth is None:
            return True
        return depth < self.max_depth

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.max_depth is not None and self.max_depth < 0:
            errors.append("max_depth cannot be negative")

        if self.include is not None and not callable(self.include):
            errors.append(f"include must be callable, got {describe_type(self.include)}")

        return errors


@dataclass
class CacheConfig:
    """Configuration for the compiled-artifact cache.

    The cache directory is resolved once, when the config is built, so a
    store keeps using the same root for its whole lifetime.
    """

    cache_dir: str = field(default_factory=resolve_cache_dir)
    suffix: str = ARTIFACT_SUFFIX

    # Decoder used when no decoder is registered for a source suffix
    default_decoder: Optional[Callable[[bytes], Any]] = None

    @classmethod
    def from_env(cls, **overrides) -> 'CacheConfig':
        """Create config with the cache root taken from the environment.

        Args:
            **overrides: Field values to use instead of the defaults

        Returns:
            CacheConfig bound to the current environment
        """
        overrides.setdefault("cache_dir", resolve_cache_dir())
        return cls(**overrides)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.cache_dir, str) or not self.cache_dir:
            errors.append(f"cache_dir must be a non-empty string, got {describe_type(self.cache_dir)}")

        if not self.suffix or not self.suffix.startswith("."):
            errors.append("suffix must start with '.'")

        if self.default_decoder is not None and not callable(self.default_decoder):
            errors.append("default_decoder must be callable")

        return errors
