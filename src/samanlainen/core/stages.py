"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Elimination stages of the duplicate detection pipeline.

CLASS HIERARCHY
---------------
SizeStageImpl      : Initial partition of candidates by exact size (no I/O)
HashStageBase      : Shared logic for digest stages: split every incoming group by digest,
                     drop sub-groups below min_count, record read failures
TailHashStage      : Digest of the last scan_size bytes
HeadHashStage      : Digest of the first scan_size bytes
FullHashStage      : Digest of the whole content; survivors are confirmed duplicates

STAGE CONTRACTS
---------------
Each stage implements a `process()` method that:
  • Accepts the surviving groups of the previous stage
  • Returns refined groups for the next stage
  • Hashes the files of all incoming groups in one pass (one worker pool per stage)
  • Regroups only inside an incoming group, so files of different sizes never meet
  • Records ReadErrors in the stats accumulator and drops only the failing file
  • Reports progress via callback (stage name, processed count, total count)

The tail window is checked before the head window because both are cheap and each one
shrinks the candidate set before the next, costlier stage runs.
"""

from typing import List, Dict, Optional, Callable

from samanlainen.core.errors import FileOperationError
from samanlainen.core.models import FileCandidate, DuplicateGroup, DeduplicationStats, Stage
from samanlainen.core.grouper import FileGrouperImpl
from samanlainen.core.interfaces import SizeStage, HashStage

ProgressCallback = Optional[Callable[[str, int, Optional[int]], None]]


# =============================
# Hashing Base Class
# =============================
class HashStageBase(HashStage):
    """
    Abstract base class for stages that group by a digest.
    """

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def get_stage_name(self) -> str:
        """
        Returns the name of the current stage.
        Used for statistics and logging.
        """
        raise NotImplementedError

    def _split_groups(
        self,
        batches: List[List[FileCandidate]],
        on_error: Optional[Callable[[FileOperationError], None]]
    ) -> List[Dict[bytes, List[FileCandidate]]]:
        """
        Splits every batch by the digest this stage is responsible for.
        Must be implemented by subclasses.
        """
        raise NotImplementedError

    def process(
        self,
        groups: List[DuplicateGroup],
        stats: Optional[DeduplicationStats] = None,
        progress_callback: ProgressCallback = None
    ) -> List[DuplicateGroup]:
        """
        Splits every group by digest. Sub-groups with fewer than min_count files
        are eliminated with all their members.
        Digests of all groups are computed together before any group is split.
        """
        on_error = stats.record_error if stats is not None else None
        new_groups = []
        total_files = sum(len(group.files) for group in groups)
        processed_files = 0

        split_groups = self._split_groups([group.files for group in groups], on_error)

        for group, hash_groups in zip(groups, split_groups):
            for digest, files_in_group in hash_groups.items():
                new_groups.append(DuplicateGroup(size=group.size, files=files_in_group, digest=digest))

            processed_files += len(group.files)
            if progress_callback:
                progress_callback(self.get_stage_name(), processed_files, total_files)

        return new_groups


# =============================
# Individual Stages
# =============================
class SizeStageImpl(SizeStage):
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def get_stage_name(self) -> str:
        return Stage.SIZE.display_name

    def process(
            self,
            files: List[FileCandidate],
            stats: Optional[DeduplicationStats] = None,
            progress_callback: ProgressCallback = None
    ) -> List[DuplicateGroup]:
        """
        Group by file size.
        Returns list of DuplicateGroups with at least min_count files of same size.
        """
        size_groups = self.grouper.group_by_size(files)
        groups = [
            DuplicateGroup(size=size, files=files_list)
            for size, files_list in size_groups.items()
        ]

        if progress_callback:
            total_files = len(files)
            progress_callback(self.get_stage_name(), total_files, total_files)  # Fake instant progress

        return groups


class TailHashStage(HashStageBase):
    def get_stage_name(self) -> str:
        return Stage.TAIL.display_name

    def _split_groups(self, batches, on_error):
        return self.grouper.split_by_tail_hash(batches, on_error)


class HeadHashStage(HashStageBase):
    def get_stage_name(self) -> str:
        return Stage.HEAD.display_name

    def _split_groups(self, batches, on_error):
        return self.grouper.split_by_head_hash(batches, on_error)


class FullHashStage(HashStageBase):
    def get_stage_name(self) -> str:
        return Stage.FULL.display_name

    def _split_groups(self, batches, on_error):
        return self.grouper.split_by_full_hash(batches, on_error)
