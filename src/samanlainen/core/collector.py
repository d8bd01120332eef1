"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/collector.py
Builds the initial candidate list from one or more root directories.

Roots are consumed in the order given; a root's position is its priority (0 = highest).
Only metadata is read here. Every file is reported once: a later entry with an identity
already seen (hardlink, overlapping root) is an alias of the same storage, not a duplicate.
"""

import logging
import time
from typing import List, Optional, Set

from samanlainen.core.errors import EnumerationError
from samanlainen.core.interfaces import FileScanner
from samanlainen.core.models import FileCandidate, FileIdentity, DeduplicationStats, ScanEntry, Stage
from samanlainen.core.scanner import FileScannerImpl

logger = logging.getLogger(__name__)


class CandidateCollector:
    """
    Applies size filters and identity deduplication to the scanner output.

    Attributes:
        scanner: Directory traversal collaborator
        min_size: Minimum file size in bytes (inclusive)
        max_size: Maximum file size in bytes (inclusive), None for no limit
    """

    def __init__(self, scanner: FileScanner = None, min_size: int = 1, max_size: Optional[int] = None):
        self.scanner = scanner or FileScannerImpl()
        self.min_size = min_size
        self.max_size = max_size

    def collect(self, roots: List[str], stats: Optional[DeduplicationStats] = None) -> List[FileCandidate]:
        """
        Collects candidates from every root in priority order.
        A root that cannot be enumerated is recorded and skipped.
        """
        if stats is None:
            stats = DeduplicationStats()

        stats.notify_stage_start(Stage.COLLECT.value)
        start_time = time.time()

        candidates: List[FileCandidate] = []
        seen: Set[FileIdentity] = set()

        for priority, root in enumerate(roots):
            logger.debug(f"Collecting candidates from {root} (priority {priority})")
            try:
                for entry in self.scanner.scan(root, on_error=stats.record_error):
                    if self._accepts(entry, seen):
                        seen.add(entry.identity)
                        candidates.append(FileCandidate.from_entry(entry, priority))
            except EnumerationError as e:
                logger.warning(f"Skipping root {e.path}: {e.reason}")
                stats.record_error(e)

        total_bytes = sum(c.size for c in candidates)
        logger.info(f"Collected {len(candidates)} candidates ({total_bytes} bytes) from {len(roots)} roots")
        stats.update_stage(
            stage_name=Stage.COLLECT.value,
            groups_found=0,
            files_processed=len(candidates),
            bytes_processed=total_bytes,
            duration=time.time() - start_time
        )
        return candidates

    def _accepts(self, entry: ScanEntry, seen: Set[FileIdentity]) -> bool:
        if entry.size == 0:
            logger.debug(f"Skipping zero-byte file: {entry.path}")
            return False

        if not self._size_passes(entry.size):
            logger.debug(f"Skipping {entry.path} (size {entry.size} bytes outside range)")
            return False

        if entry.identity in seen:
            logger.debug(f"Skipping {entry.path}: same file already reached through another path")
            return False

        return True

    def _size_passes(self, size: int) -> bool:
        """
        Check if file size is within configured limits (both ends inclusive).
        """
        if size < self.min_size:
            return False
        if self.max_size is not None and size > self.max_size:
            return False
        return True
