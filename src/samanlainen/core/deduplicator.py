"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/deduplicator.py
Implements the pipeline-based duplicate detection over collected candidates:
    size → tail window → head window → full content
Each stage fully finishes before the next one starts.
"""
import logging
import time
from typing import List, Tuple, Optional, Callable

from samanlainen.core.models import FileCandidate, DuplicateGroup, DeduplicationStats, Stage
from samanlainen.core.grouper import FileGrouperImpl
from samanlainen.core.interfaces import HashStage, Deduplicator
from samanlainen.core.stages import SizeStageImpl, TailHashStage, HeadHashStage, FullHashStage

logger = logging.getLogger(__name__)


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Implements multi-stage duplicate detection using a pipeline architecture.
    Records the survivors of every stage in the DeduplicationStats accumulator.
    """
    def __init__(self, grouper: FileGrouperImpl = None):
        self.grouper = grouper or FileGrouperImpl()

    def find_duplicates(
        self,
        files: List[FileCandidate],
        stats: Optional[DeduplicationStats] = None,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Main deduplication pipeline.
        Args:
            files: Candidates produced by the collector
            stats: Accumulator shared with the rest of the run (a new one is created if omitted)
            progress_callback (Optional[Callable[[str, int, int], None]]): Reports progress per stage.
        Returns:
            Tuple[List[DuplicateGroup], DeduplicationStats] where every group is a confirmed
            duplicate set keyed by its full content digest
        """
        if stats is None:
            stats = DeduplicationStats()

        # Initial stage: group by size
        size_stage = SizeStageImpl(self.grouper)
        stats.notify_stage_start(Stage.SIZE.value)
        start_time = time.time()
        groups = size_stage.process(files, stats=stats, progress_callback=progress_callback)
        DeduplicatorImpl._update_stats(stats, Stage.SIZE, time.time() - start_time, groups)

        # Run all hashing stages in sequence
        for stage_name, stage in self._build_pipeline():
            stats.notify_stage_start(stage_name.value)
            start_time = time.time()
            groups = stage.process(groups, stats=stats, progress_callback=progress_callback)
            DeduplicatorImpl._update_stats(stats, stage_name, time.time() - start_time, groups)

        return groups, stats

    def _build_pipeline(self) -> List[Tuple[Stage, HashStage]]:
        """Builds the hashing stages in the order they run."""
        return [
            (Stage.TAIL, TailHashStage(self.grouper)),
            (Stage.HEAD, HeadHashStage(self.grouper)),
            (Stage.FULL, FullHashStage(self.grouper)),
        ]

    @staticmethod
    def _update_stats(
        stats: DeduplicationStats,
        stage: Stage,
        duration: float,
        groups: List[DuplicateGroup]
    ):
        """
        Helper to record the survivors of a stage.
        """
        total_files = sum(len(g.files) for g in groups)
        total_bytes = sum(g.total_size for g in groups)
        logger.info(
            f"{stage.display_name}: {len(groups)} groups, {total_files} files, "
            f"{total_bytes} bytes ({duration:.3f}s)"
        )
        stats.update_stage(
            stage_name=stage.value,
            groups_found=len(groups),
            files_processed=total_files,
            bytes_processed=total_bytes,
            duration=duration
        )
