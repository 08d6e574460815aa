"""Bulk invalidation of compiled artifacts."""

import logging
from typing import Optional

from ..._common.config import CacheConfig
from ..._common.errors import NotFoundError
from ..adapters.filesystem import FileSystemAdapter
from ..core.adapter import StorageAdapter
from ..core.lister import list_entries

logger = logging.getLogger(__name__)


class CachePurger:
    """Deletes compiled artifacts directly under the cache root.

    Only files carrying the artifact suffix are removed; anything else in
    the cache root, including in-flight temp files, is left alone.
    """

    def __init__(self,
                 config: Optional[CacheConfig] = None,
                 adapter: Optional[StorageAdapter] = None):
        """Initialize the purger.

        Raises:
            ValueError: If config is invalid
        """
        self.config = config or CacheConfig.from_env()
        config_errors = self.config.validate()
        if config_errors:
            raise ValueError(f"Invalid configuration: {'; '.join(config_errors)}")

        self.adapter = adapter or FileSystemAdapter()

    def purge(self) -> int:
        """Remove every compiled artifact.

        Returns:
            Number of artifacts removed (0 if the cache root is missing)
        """
        cache_dir = self.config.cache_dir
        suffix = self.config.suffix

        try:
            entries = list_entries(cache_dir, self.adapter)
        except NotFoundError:
            logger.debug("Cache root %s does not exist, nothing to purge", cache_dir)
            return 0

        removed = 0
        with entries:
            for name in entries:
                if not name.endswith(suffix):
                    continue
                path = self.adapter.join(cache_dir, name)
                if self.adapter.is_container(path):
                    continue
                # Another purger may have removed it already
                if self.adapter.remove(path):
                    removed += 1

        logger.debug("Purged %d artifact(s) from %s", removed, cache_dir)
        return removed
