"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Directory traversal for candidate collection.
Features:
- Recursively walks a root with os.walk, never following symbolic links
- Visits directories and files in sorted name order, so unchanged trees enumerate identically
- Reports only regular files (symlinks, sockets, devices and FIFOs are skipped)
- Optionally stays on the filesystem of the root directory
- Yields ScanEntry records carrying path, size, identity and modification time
"""

import os
import stat
import logging
from typing import Callable, Iterator, Optional

from samanlainen.core.errors import EnumerationError, FileOperationError
from samanlainen.core.interfaces import FileScanner
from samanlainen.core.models import FileIdentity, ScanEntry

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Walks a root directory and yields its regular files.

    Attributes:
        same_file_system: Do not descend into directories on another device than the root
    """

    def __init__(self, same_file_system: bool = True):
        self.same_file_system = same_file_system

    def scan(
        self,
        root: str,
        on_error: Optional[Callable[[FileOperationError], None]] = None
    ) -> Iterator[ScanEntry]:
        """
        Yield every regular file under `root`.
        Raises EnumerationError when the root itself cannot be listed; subdirectories
        that cannot be listed are passed to `on_error` and skipped.
        """
        root_path = os.path.abspath(root)
        root_device = self._check_root(root_path)

        logger.debug(f"Scanning directory: {root_path}")
        found = 0

        def walk_error(err: OSError) -> None:
            error = EnumerationError(err.filename or root_path, err.strerror or str(err))
            logger.warning(f"Cannot list directory {error.path}: {error.reason}")
            if on_error:
                on_error(error)

        for dirpath, dirs, files in os.walk(root_path, onerror=walk_error, followlinks=False):
            # Prune and order subdirectories BEFORE os.walk enters them
            dirs[:] = sorted(d for d in dirs if self._prefilter_dir(os.path.join(dirpath, d), root_device))

            for filename in sorted(files):
                entry = self._process_file(os.path.join(dirpath, filename))
                if entry is not None:
                    found += 1
                    yield entry

        logger.debug(f"Scan of {root_path} completed. Found {found} regular files.")

    @staticmethod
    def _check_root(root_path: str) -> int:
        """Validates that the root can be listed and returns its device number."""
        if not os.path.exists(root_path):
            raise EnumerationError(root_path, "Directory does not exist")
        if not os.path.isdir(root_path):
            raise EnumerationError(root_path, "Not a directory")
        try:
            with os.scandir(root_path):
                pass
            return os.stat(root_path).st_dev
        except OSError as e:
            raise EnumerationError(root_path, e.strerror or str(e)) from e

    def _prefilter_dir(self, path: str, root_device: int) -> bool:
        """Skip symlinked directories and, if requested, mount points of other filesystems."""
        try:
            st = os.lstat(path)
        except OSError as e:
            logger.debug(f"Skipping inaccessible directory {path}: {e}")
            return False

        if not stat.S_ISDIR(st.st_mode):
            logger.debug(f"Skipping symbolic link to directory: {path}")
            return False

        if self.same_file_system and st.st_dev != root_device:
            logger.debug(f"Skipping directory on another filesystem: {path}")
            return False

        return True

    @staticmethod
    def _process_file(path: str) -> Optional[ScanEntry]:
        """
        Stat a single path and build its ScanEntry if it is a regular file.
        Files that vanish between listing and stat are skipped.
        """
        try:
            st = os.lstat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        return ScanEntry(
            path=path,
            size=st.st_size,
            identity=FileIdentity.from_stat(st),
            modified_at=st.st_mtime,
        )
