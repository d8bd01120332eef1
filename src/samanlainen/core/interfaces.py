"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/interfaces.py

Defines core interfaces (Protocols) used throughout the deduplication pipeline.
These protocols enforce structural typing using Python's `typing.Protocol` so that
scanners, digest algorithms and stages can be swapped without touching the pipeline.

Key Components:
---------------
- HashAlgorithm: Pluggable digest primitive (SHA-512, xxHash64, ...).
- Hasher: Computes tail-window, head-window and full-content digests of a candidate.
- FileScanner: Enumerates regular files under one root directory.
- FileGrouper: Groups candidates by size or digest and drops undersized groups.
- SizeStage / HashStage: Individual stages of the elimination pipeline.
- Deduplicator: Runs all stages in order and collects statistics.
"""

from typing import Protocol, List, Dict, Tuple, Optional, Callable, Iterator
from samanlainen.core.models import (
    FileCandidate,
    DuplicateGroup,
    DeduplicationStats,
    ScanEntry,
)
from samanlainen.core.errors import FileOperationError


# ===== Interfaces =====

class HashContext(Protocol):
    """Incremental digest object, as returned by hashlib.new() or xxhash.xxh64()."""
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-512 or xxHash
    without affecting the rest of the deduplication logic.
    """
    name: str

    @staticmethod
    def new() -> HashContext:
        """Returns a fresh incremental digest object."""
        ...

    @staticmethod
    def hash(data: bytes) -> bytes:
        """Computes the digest of the provided byte data."""
        ...


class Hasher(Protocol):
    """Interface for hashing different parts of a file."""
    def compute_tail_hash(self, file: FileCandidate) -> bytes: ...
    def compute_head_hash(self, file: FileCandidate) -> bytes: ...
    def compute_full_hash(self, file: FileCandidate) -> bytes: ...


class FileScanner(Protocol):
    """
    Interface for enumerating the regular files under a root directory.
    """
    def scan(
        self,
        root: str,
        on_error: Optional[Callable[[FileOperationError], None]] = None
    ) -> Iterator[ScanEntry]:
        """
        Yield every regular file found under `root`.

        Args:
            root: Directory to walk recursively.
            on_error: Receives an EnumerationError for each subdirectory that cannot be listed.

        Raises:
            EnumerationError: If the root itself cannot be listed.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for grouping candidates based on size or content digests.
    Groups with fewer than the configured minimum count are dropped.
    """
    def group_by_size(self, files: List[FileCandidate]) -> Dict[int, List[FileCandidate]]:
        """Group files by their size in bytes."""
        ...

    def split_by_tail_hash(
        self,
        batches: List[List[FileCandidate]],
        on_error: Optional[Callable[[FileOperationError], None]] = None
    ) -> List[Dict[bytes, List[FileCandidate]]]:
        """Split every batch by the digest of its files' last bytes."""
        ...

    def split_by_head_hash(
        self,
        batches: List[List[FileCandidate]],
        on_error: Optional[Callable[[FileOperationError], None]] = None
    ) -> List[Dict[bytes, List[FileCandidate]]]:
        """Split every batch by the digest of its files' first bytes."""
        ...

    def split_by_full_hash(
        self,
        batches: List[List[FileCandidate]],
        on_error: Optional[Callable[[FileOperationError], None]] = None
    ) -> List[Dict[bytes, List[FileCandidate]]]:
        """Split every batch by full content digest."""
        ...


# =============================
# Stage Interfaces
# =============================


class SizeStage(Protocol):
    """
    Interface for the first grouping stage: partition candidates by exact size.
    """
    def process(
        self,
        files: List[FileCandidate],
        stats: Optional[DeduplicationStats] = None,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> List[DuplicateGroup]:
        """
        Returns groups of same-size files that have at least `min_count` members.
        """
        ...


class HashStage(Protocol):
    """
    Interface for a stage that splits groups by a content digest
    (tail window, head window or full content).
    """

    def get_stage_name(self) -> str:
        """Return the name of this stage (used in logging and stats)."""
        ...

    def process(
        self,
        groups: List[DuplicateGroup],
        stats: Optional[DeduplicationStats] = None,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> List[DuplicateGroup]:
        """
        Split each group by digest and keep only sub-groups with enough members.

        Args:
            groups: Surviving groups of the previous stage.
            stats: Accumulator receiving read errors.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            Refined groups for the next stage.
        """
        ...


class Deduplicator(Protocol):
    """
    Interface for the main deduplication engine.

    Runs size → tail → head → full stages in order and records per-stage statistics.
    """
    def find_duplicates(
        self,
        files: List[FileCandidate],
        stats: Optional[DeduplicationStats] = None,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Run the elimination pipeline over collected candidates.

        Returns:
            A tuple containing:
                - Confirmed duplicate groups (survivors of the full hash stage)
                - Statistics collected during processing
        """
        ...
