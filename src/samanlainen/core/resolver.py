"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Pure keep/delete decision logic for confirmed duplicate groups.
"""
from typing import List, Tuple

from samanlainen.core.models import DuplicateGroup, FileCandidate, ResolutionOutcome


class ResolutionEngine:
    """
    Decides which file of each confirmed group is kept.
    Ordering (applied lexicographically):
    1. Lowest root priority first (files under the first given root win)
    2. Oldest modification time first
    3. Path order, so equal candidates resolve the same way on every run
    The first file is kept; the rest are removed in the same order.
    """

    @staticmethod
    def sort_key(file: FileCandidate) -> Tuple[int, float, str]:
        return file.root_priority, file.modified_at, file.path

    @staticmethod
    def resolve_group(group: DuplicateGroup) -> ResolutionOutcome:
        if len(group.files) < 2:
            raise ValueError("A duplicate group needs at least two files")
        ordered = sorted(group.files, key=ResolutionEngine.sort_key)
        return ResolutionOutcome(
            digest=group.digest or b"",
            size=group.size,
            kept=ordered[0],
            removed=ordered[1:],
        )

    @staticmethod
    def resolve(groups: List[DuplicateGroup]) -> List[ResolutionOutcome]:
        """
        Resolves every group. Outcomes are ordered by descending size, then kept path.
        """
        outcomes = [ResolutionEngine.resolve_group(group) for group in groups]
        outcomes.sort(key=lambda o: (-o.size, o.kept.path))
        return outcomes
