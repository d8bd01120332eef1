"""
Unified command orchestrator for duplicate detection.
This is the single source of business logic used by the CLI.
It never deletes anything: deletion is left to the caller (see DuplicateService).
"""
from typing import List, Optional, Callable, Tuple

from samanlainen.core.models import (
    DeduplicationParams, DeduplicationStats, FileCandidate, ResolutionOutcome
)
from samanlainen.core.scanner import FileScannerImpl
from samanlainen.core.collector import CandidateCollector
from samanlainen.core.grouper import FileGrouperImpl
from samanlainen.core.hasher import HasherImpl, get_algorithm
from samanlainen.core.deduplicator import DeduplicatorImpl
from samanlainen.core.resolver import ResolutionEngine


class DeduplicationCommand:
    """
    Orchestrates the detection workflow:
    1. Collect candidates from the roots (priority = position)
    2. Run size → tail → head → full elimination
    3. Resolve every confirmed group into kept/removed files

    Usage:
        params = DeduplicationParams(roots=[...])
        command = DeduplicationCommand()
        outcomes, stats = command.execute(params, progress_callback=cli_progress_printer)
    """

    def __init__(self):
        self._candidates: List[FileCandidate] = []

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stats: Optional[DeduplicationStats] = None
    ) -> Tuple[List[ResolutionOutcome], DeduplicationStats]:
        """
        Execute duplicate detection with given parameters.

        Args:
            params: Validated deduplication parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stats: Accumulator to fill; pass one with listeners attached to follow stages live

        Returns:
            Tuple of (resolution outcomes, statistics)
        """
        if stats is None:
            stats = DeduplicationStats()

        # Step 1: Collect candidates
        collector = CandidateCollector(
            scanner=FileScannerImpl(same_file_system=params.same_file_system),
            min_size=params.min_size_bytes,
            max_size=params.max_size_bytes,
        )
        self._candidates = collector.collect(params.roots, stats)

        # Step 2: Eliminate non-duplicates
        hasher = HasherImpl(get_algorithm(params.algorithm), scan_size=params.scan_size)
        grouper = FileGrouperImpl(hasher, min_count=params.min_count, max_workers=params.max_workers)
        groups, stats = DeduplicatorImpl(grouper).find_duplicates(
            self._candidates,
            stats=stats,
            progress_callback=progress_callback
        )

        # Step 3: Decide what to keep
        outcomes = ResolutionEngine.resolve(groups)
        stats.finish()

        return outcomes, stats

    def get_candidates(self) -> List[FileCandidate]:
        """Get collected candidates after execution."""
        return self._candidates.copy()  # Return copy to prevent external mutation
