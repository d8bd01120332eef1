import logging
from dataclasses import dataclass, field
from typing import List, Optional

from samanlainen.core.errors import DeletionError
from samanlainen.core.models import FileCandidate, ResolutionOutcome
from samanlainen.services.file_service import FileService

logger = logging.getLogger(__name__)


@dataclass
class DeletionReport:
    """Running totals of a deletion pass."""
    removed_files: int = 0
    removed_bytes: int = 0
    errors: List[DeletionError] = field(default_factory=list)

    @property
    def failed_files(self) -> int:
        return len(self.errors)


class DuplicateService:
    @staticmethod
    def files_to_remove(outcomes: List[ResolutionOutcome]) -> List[FileCandidate]:
        """
        Flattens the removal plan of all outcomes, preserving group and in-group order.

        Args:
            outcomes (List[ResolutionOutcome]): Resolved duplicate groups.

        Returns:
            List[FileCandidate]: Every file marked for removal.
        """
        return [file for outcome in outcomes for file in outcome.removed]

    @staticmethod
    def calculate_space_savings(outcomes: List[ResolutionOutcome]) -> int:
        """Total bytes that removing every planned file frees."""
        return sum(outcome.bytes_removed for outcome in outcomes)

    @staticmethod
    def remove_files(
        files: List[FileCandidate],
        use_trash: bool = False,
        report: Optional[DeletionReport] = None
    ) -> DeletionReport:
        """
        Removes files one by one. A failing file is recorded in the report and
        the remaining files are still processed.

        Args:
            files: Files to remove.
            use_trash: Move to the system trash instead of deleting permanently.
            report: Report to accumulate into, so totals can run across groups.

        Returns:
            DeletionReport with totals and per-file errors.
        """
        if report is None:
            report = DeletionReport()

        for file in files:
            try:
                FileService.remove(file.path, use_trash=use_trash)
            except DeletionError as e:
                logger.warning(f"Failed to delete {e.path}: {e.reason}")
                report.errors.append(e)
                continue

            report.removed_files += 1
            report.removed_bytes += file.size

        return report
