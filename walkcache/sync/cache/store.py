"""Compiled-artifact cache for descriptor files.

``CompiledCacheStore`` decodes a descriptor once, persists the decoded value
as a pickle under the cache root, and serves later loads from that pickle
for as long as it is at least as new as the descriptor.

Freshness compares modification times, so two edits to a descriptor
within one tick of a coarse-resolution filesystem clock can go unnoticed.

The cache root is created readable by its owner only, and an artifact is
unpickled only when ``StorageAdapter.is_trusted`` vouches for it. Any other
artifact is recompiled over.
"""

import hashlib
import logging
import operator
import os
import pickle
from typing import Any, Mapping, Optional, Tuple

from cachetools import LRUCache, cachedmethod

from ..._common.config import CacheConfig
from ..._common.errors import DecodeError, NotFoundError
from ..._common.introspection import describe_type
from ..adapters.filesystem import FileSystemAdapter
from ..core.adapter import StorageAdapter
from .decoders import DEFAULT_DECODERS, Decoder, decode, select_decoder

logger = logging.getLogger(__name__)

# Bumped whenever the pickled payload layout changes
FORMAT_VERSION = 1

_UNPICKLE_ERRORS = (
    pickle.UnpicklingError,
    EOFError,
    AttributeError,
    ImportError,
    IndexError,
    TypeError,
    ValueError,
)


def normalize_source(path: str) -> str:
    """Make a local source path absolute; leave scheme paths untouched."""
    if "://" in path:
        return path
    return os.path.abspath(path)


class CompiledCacheStore:
    """Loads descriptors through a compiled-artifact cache.

    The store keeps no decoded values in memory: every ``load`` repeats the
    freshness check against storage. Only derived artifact paths are
    memoised.

    Example:
        >>> store = CompiledCacheStore()
        >>> store.load("service.json")
        {'k': 'v'}
    """

    def __init__(self,
                 config: Optional[CacheConfig] = None,
                 adapter: Optional[StorageAdapter] = None,
                 decoders: Optional[Mapping[str, Decoder]] = None,
                 path_cache_size: int = 1024):
        """Initialize the store.

        Args:
            config: Cache configuration (cache root resolved from the
                environment when omitted)
            adapter: Storage adapter for both descriptors and artifacts
            decoders: Mapping of descriptor suffix to decoder
            path_cache_size: Number of derived artifact paths to memoise

        Raises:
            ValueError: If config is invalid
        """
        self.config = config or CacheConfig.from_env()
        config_errors = self.config.validate()
        if config_errors:
            raise ValueError(f"Invalid configuration: {'; '.join(config_errors)}")

        self.adapter = adapter or FileSystemAdapter()
        self.decoders = dict(DEFAULT_DECODERS if decoders is None else decoders)
        self._artifact_paths = LRUCache(maxsize=path_cache_size)

        # Statistics
        self.compiles = 0
        self.hits = 0

    @property
    def cache_dir(self) -> str:
        return self.config.cache_dir

    @cachedmethod(operator.attrgetter('_artifact_paths'))
    def artifact_path(self, source_path: str) -> str:
        """Derive the artifact path for a descriptor.

        The name combines the descriptor's base name, for readability, with
        a digest of its full normalised path, so distinct descriptors that
        share a base name never collide.

        Args:
            source_path: Descriptor path

        Returns:
            Path of the artifact under the cache root
        """
        source = normalize_source(source_path)
        basename = source.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
        digest = hashlib.sha256(source.encode("utf-8")).hexdigest()[:32]
        return self.adapter.join(self.cache_dir, f"{basename}.{digest}{self.config.suffix}")

    def load(self, source_path: str) -> Any:
        """Load a descriptor, using the compiled artifact when it is fresh.

        Args:
            source_path: Descriptor path

        Returns:
            The decoded value

        Raises:
            NotFoundError: If the descriptor does not exist
            DecodeError: If the descriptor is malformed
            UnsupportedError: If no decoder handles the descriptor
        """
        source = normalize_source(source_path)
        source_mtime = self._source_mtime(source)
        artifact = self.artifact_path(source)

        artifact_mtime = self.adapter.get_mtime(artifact)
        if artifact_mtime is not None and artifact_mtime >= source_mtime:
            found, value = self._read_artifact(source, artifact)
            if found:
                self.hits += 1
                logger.debug("Cache hit for %s", source)
                return value

        return self._compile(source, artifact, source_mtime)

    def compile(self, source_path: str) -> Any:
        """Decode a descriptor and rewrite its artifact unconditionally.

        Returns:
            The decoded value
        """
        source = normalize_source(source_path)
        source_mtime = self._source_mtime(source)
        return self._compile(source, self.artifact_path(source), source_mtime)

    def is_fresh(self, source_path: str) -> bool:
        """Check whether ``load`` would take the compiled fast path.

        Timestamps and artifact ownership are checked; the artifact is not
        opened.

        Raises:
            NotFoundError: If the descriptor does not exist
        """
        source = normalize_source(source_path)
        source_mtime = self._source_mtime(source)
        artifact = self.artifact_path(source)
        artifact_mtime = self.adapter.get_mtime(artifact)
        if artifact_mtime is None or artifact_mtime < source_mtime:
            return False
        return self.adapter.is_trusted(artifact)

    def _source_mtime(self, source: str) -> float:
        mtime = self.adapter.get_mtime(source)
        if mtime is None:
            raise NotFoundError(f"Descriptor not found: {source!r}", source)
        return mtime

    def _read_artifact(self, source: str, artifact: str) -> Tuple[bool, Any]:
        """Read a compiled artifact.

        Returns:
            ``(True, value)`` on success, ``(False, None)`` if the artifact
            is untrusted, vanished, is corrupt, or belongs to another
            descriptor
        """
        # Only artifacts no other user could have written are unpickled
        if not self.adapter.is_trusted(artifact):
            logger.warning("Ignoring artifact %s: writable by or owned by another user", artifact)
            return False, None

        try:
            raw = self.adapter.read_bytes(artifact)
        except NotFoundError:
            # Purged between stat and read
            return False, None

        try:
            payload = pickle.loads(raw)
        except _UNPICKLE_ERRORS as e:
            logger.warning("Discarding corrupt artifact %s: %s", artifact, e)
            return False, None

        if (not isinstance(payload, tuple) or len(payload) != 3
                or payload[0] != FORMAT_VERSION or payload[1] != source):
            logger.warning("Discarding foreign artifact %s: %s", artifact, describe_type(payload))
            return False, None

        return True, payload[2]

    def _compile(self, source: str, artifact: str, source_mtime: float) -> Any:
        decoder = select_decoder(source, self.decoders, self.config.default_decoder)
        value = decode(source, self.adapter.read_bytes(source), decoder)

        try:
            payload = pickle.dumps((FORMAT_VERSION, source, value), protocol=pickle.HIGHEST_PROTOCOL)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise DecodeError(
                f"Cannot compile {source!r}: decoded {describe_type(value)} is not picklable: {e}",
                source,
            ) from e

        self.adapter.make_dirs(self.cache_dir, private=True)
        self.adapter.write_bytes_atomic(artifact, payload)

        # A descriptor stamped in the future would otherwise never look fresh
        published = self.adapter.get_mtime(artifact)
        if published is not None and published < source_mtime:
            try:
                self.adapter.set_mtime(artifact, source_mtime)
            except NotImplementedError as e:
                # The artifact stays older than its source and is rebuilt on every load
                logger.debug("Cannot carry source mtime to %s: %s", artifact, e)

        self.compiles += 1
        logger.debug("Compiled %s -> %s", source, artifact)
        return value
