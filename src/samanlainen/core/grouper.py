"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements candidate grouping by size and by digest using an injected Hasher.
Digest grouping works on a list of batches (the incoming groups of a stage): the keys
of every file in every batch are computed in one pass, on a single bounded thread
pool, and grouping only starts once all of them are known.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from itertools import islice
from typing import Iterable, List, Dict, Any, Callable, Optional, Tuple

from samanlainen.core.errors import ReadError, FileOperationError
from samanlainen.core.interfaces import FileGrouper, Hasher
from samanlainen.core.models import FileCandidate, DEFAULT_MIN_COUNT
from samanlainen.core.hasher import HasherImpl

logger = logging.getLogger(__name__)

ErrorCallback = Optional[Callable[[FileOperationError], None]]
KeyedFile = Tuple[FileCandidate, Any, Optional[ReadError]]


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Uses an injected Hasher instance for flexibility and testability.

    Attributes:
        hasher: Computes the tail/head/full digests
        min_count: Groups with fewer members are eliminated
        max_workers: Size of the hashing thread pool (1 = hash sequentially)
    """

    def __init__(self, hasher: Hasher = None, min_count: int = DEFAULT_MIN_COUNT, max_workers: int = 1):
        if min_count < 2:
            raise ValueError("min_count must be 2 or more")
        self.hasher = hasher or HasherImpl()
        self.min_count = min_count
        self.max_workers = max(1, max_workers)

    def group_by_size(self, files: List[FileCandidate]) -> Dict[int, List[FileCandidate]]:
        """Groups files by their size. Reads metadata only, never uses the pool."""
        return self._collect_groups((file, file.size, None) for file in files)

    def split_by_tail_hash(
        self, batches: List[List[FileCandidate]], on_error: ErrorCallback = None
    ) -> List[Dict[bytes, List[FileCandidate]]]:
        """Splits every batch by tail-window digest."""
        return self._split_batches(batches, self.hasher.compute_tail_hash, on_error)

    def split_by_head_hash(
        self, batches: List[List[FileCandidate]], on_error: ErrorCallback = None
    ) -> List[Dict[bytes, List[FileCandidate]]]:
        """Splits every batch by head-window digest."""
        return self._split_batches(batches, self.hasher.compute_head_hash, on_error)

    def split_by_full_hash(
        self, batches: List[List[FileCandidate]], on_error: ErrorCallback = None
    ) -> List[Dict[bytes, List[FileCandidate]]]:
        """Splits every batch by full content digest."""
        return self._split_batches(batches, self.hasher.compute_full_hash, on_error)

    def _split_batches(
        self,
        batches: List[List[FileCandidate]],
        key_func: Callable[[FileCandidate], Any],
        on_error: ErrorCallback = None
    ) -> List[Dict[Any, List[FileCandidate]]]:
        """
        Helper method to group the files of several batches by a computed key.
        Args:
            batches: Lists of files; files of different batches never share a group
            key_func: Function that computes a hashable key from a FileCandidate
            on_error: Receives the ReadError of every file that could not be keyed
        Returns:
            One dict per batch, in batch order, holding the groups of at least
            min_count files, members kept in input order
        """
        keyed = iter(self._compute_keys([file for batch in batches for file in batch], key_func))
        return [self._collect_groups(islice(keyed, len(batch)), on_error) for batch in batches]

    def _collect_groups(self, keyed_files: Iterable[KeyedFile], on_error: ErrorCallback = None) -> Dict[Any, List[FileCandidate]]:
        """Buckets keyed files and drops buckets below min_count. Unkeyed files are reported and skipped."""
        groups = defaultdict(list)
        skipped_files = 0
        for file, key, error in keyed_files:
            if error is not None:
                logger.warning(f"Skipping {file.path}: {error.reason}")
                if on_error:
                    on_error(error)
                skipped_files += 1
                continue
            groups[key].append(file)

        if skipped_files > 0:
            logger.info(f"Skipped {skipped_files} files due to read errors")

        return {
            key: group
            for key, group in groups.items()
            if len(group) >= self.min_count
        }

    def _compute_keys(
        self,
        files: List[FileCandidate],
        key_func: Callable[[FileCandidate], Any]
    ) -> List[KeyedFile]:
        """
        Computes keys for all files, in input order, on the pool when it has more than one worker.
        executor.map returns only when every key is known.
        """

        def safe_key(file: FileCandidate) -> KeyedFile:
            try:
                return file, key_func(file), None
            except ReadError as e:
                return file, None, e

        if self.max_workers == 1 or len(files) < 2:
            return [safe_key(f) for f in files]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(safe_key, files))
