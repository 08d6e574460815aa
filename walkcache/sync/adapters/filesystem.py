"""Filesystem adapter for walkcache.

This adapter backs listing and the compiled cache with the local
filesystem, using ``os.scandir`` handles for lazy directory reads.
"""

import logging
import os
import stat
import tempfile
from typing import Any, Iterator, Optional

from ..._common.errors import translate_os_error
from ..core.adapter import StorageAdapter

logger = logging.getLogger(__name__)


class FileSystemAdapter(StorageAdapter):
    """Adapter for local filesystem storage.

    The access context is accepted for interface compatibility and ignored;
    local directory reads take no options.
    """

    def __init__(self, follow_symlinks: bool = False):
        """Initialize filesystem adapter.

        Args:
            follow_symlinks: Whether symlinks to directories count as
                containers (and are therefore descended into)
        """
        self.follow_symlinks = follow_symlinks
        self.separator = os.sep

    def open_container(self, path: str, context: Any = None) -> Iterator[os.DirEntry]:
        """Open a directory with ``os.scandir``."""
        try:
            handle = os.scandir(path)
        except OSError as e:
            raise translate_os_error(e, path, "open container") from e
        logger.debug("Opened container %s", path)
        return handle

    def read_entry(self, handle: Any) -> Optional[str]:
        """Read the next name from a scandir handle."""
        try:
            entry = next(handle, None)
        except OSError as e:
            raise translate_os_error(e, e.filename or "<directory>", "read container") from e
        return None if entry is None else entry.name

    def close_container(self, handle: Any) -> None:
        handle.close()

    def is_container(self, path: str, context: Any = None) -> bool:
        if not self.follow_symlinks and os.path.islink(path):
            return False
        return os.path.isdir(path)

    def exists(self, path: str, context: Any = None) -> bool:
        return os.path.lexists(path)

    def read_bytes(self, path: str) -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise translate_os_error(e, path, "read") from e

    def write_bytes_atomic(self, path: str, data: bytes) -> None:
        """Write to a temp file beside ``path`` and rename it into place.

        The temp file name starts with ``.`` and ends with ``.tmp`` so it never
        matches an artifact naming convention.
        """
        directory = os.path.dirname(path) or "."
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".", suffix=".tmp")
        except OSError as e:
            raise translate_os_error(e, directory, "create temp file in") from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, path)
        except OSError as e:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise translate_os_error(e, path, "write") from e

    def get_mtime(self, path: str) -> Optional[float]:
        try:
            return os.stat(path).st_mtime
        except FileNotFoundError:
            return None
        except OSError as e:
            raise translate_os_error(e, path, "stat") from e

    def set_mtime(self, path: str, mtime: float) -> None:
        try:
            os.utime(path, (mtime, mtime))
        except OSError as e:
            raise translate_os_error(e, path, "set mtime on") from e

    def make_dirs(self, path: str, private: bool = False) -> None:
        try:
            os.makedirs(path, mode=0o700 if private else 0o777, exist_ok=True)
        except OSError as e:
            raise translate_os_error(e, path, "create directory") from e

    def is_trusted(self, path: str) -> bool:
        """Check that ``path`` is a regular file and that it and its
        directory are owned by the current user and writable by nobody else.

        The file itself is not followed if it is a symlink; its directory
        is. Platforms without POSIX ownership trust everything.
        """
        if not hasattr(os, "getuid"):
            return True

        directory = os.path.dirname(path) or "."
        try:
            file_stat = os.lstat(path)
            dir_stat = os.stat(directory)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise translate_os_error(e, path, "stat") from e

        if not stat.S_ISREG(file_stat.st_mode):
            return False
        uid = os.getuid()
        for st in (file_stat, dir_stat):
            if st.st_uid != uid or st.st_mode & (stat.S_IWGRP | stat.S_IWOTH):
                logger.debug("%s is not private (uid %d, mode %o)", path, st.st_uid, st.st_mode)
                return False
        return True

    def remove(self, path: str) -> bool:
        try:
            os.unlink(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise translate_os_error(e, path, "remove") from e
        return True
