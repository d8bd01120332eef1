#!/usr/bin/env python3
"""
samanlainen CLI: command line interface for duplicate file detection and removal.
Runs a dry run unless --delete-files is given; --trash moves files to the system
trash instead of deleting them permanently.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import Dict, List, Optional, NoReturn
import logging

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

logging.basicConfig(
    level=logging.WARNING,
    format=LOG_FORMAT
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package with its dependencies:", file=sys.stderr)
    print("   pip install samanlainen", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from samanlainen import __version__
from samanlainen.core.errors import ConfigurationError
from samanlainen.core.models import DeduplicationParams, DeduplicationStats, ResolutionOutcome, Stage
from samanlainen.commands import DeduplicationCommand
from samanlainen.utils.convert_utils import ConvertUtils
from samanlainen.services.duplicate_service import DuplicateService, DeletionReport
from samanlainen.aliases import (
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    SIZE_HELP_TEXT, EPILOG_TEXT
)

logger = logging.getLogger(__name__)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: int = 0
        self.quiet: bool = False
        self.params: Optional[DeduplicationParams] = None
        self._progress_shown: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="samanlainen",
            description="samanlainen: delete duplicate files (dry run unless --delete-files is given).\n"
                        + SIZE_HELP_TEXT,
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Required arguments
        parser.add_argument(
            "paths",
            nargs="+",
            metavar="PATH",
            help="Directories to scan. Earlier directories have higher priority:\n"
                 "the kept copy of a duplicate set comes from the first directory that has one."
        )

        # Filtering options
        parser.add_argument(
            "--min-size", "-m",
            default="1",
            type=str,
            metavar='SIZE',
            help="Minimum file size to scan (e.g., 500k, 1MiB). Default: 1"
        )
        parser.add_argument(
            "--max-size", "-M",
            default="0",
            type=str,
            metavar='SIZE',
            help="Maximum file size to scan, 0 = no limit. Default: 0"
        )
        parser.add_argument(
            "--count", "-c",
            default=2,
            type=int,
            metavar='N',
            help="Minimum count of identical files considered duplicate (2 or more). Default: 2"
        )
        parser.add_argument(
            "--scan-size", "-s",
            default="1MiB",
            type=str,
            metavar='SIZE',
            help="Bytes hashed from the end and from the start of each file\n"
                 "before hashing it fully. Default: 1MiB"
        )

        # Hashing options
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="sha512",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--jobs", "-j",
            default=1,
            type=int,
            metavar='N',
            help="Number of files hashed in parallel. Default: 1"
        )
        parser.add_argument(
            "--cross-filesystems",
            action="store_true",
            help="Descend into directories mounted from other filesystems"
        )

        # Actions
        parser.add_argument(
            "--delete-files",
            action="store_true",
            help="Actually delete duplicate files. Without it nothing is removed (dry run)."
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="Move duplicates to the system trash instead of deleting them permanently\n"
                 "(only with --delete-files)"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="count",
            default=0,
            help="Be verbose, -vv be very verbose"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate argument combinations that argparse cannot express."""
        if args.trash and not args.delete_files:
            self.error_exit("--trash can only be used with --delete-files")

        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        for path in args.paths:
            if os.path.exists(path) and not os.path.isdir(path):
                self.warning(f"Not a directory, it will be skipped: {path}")

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams.from_human_readable(
                roots=args.paths,
                min_size_str=args.min_size,
                max_size_str=args.max_size,
                scan_size_str=args.scan_size,
                min_count=args.count,
                dry_run=not args.delete_files,
                use_trash=args.trash,
                algorithm=ALGORITHM_ALIASES[args.algorithm],
                max_workers=args.jobs,
                same_file_system=not args.cross_filesystems,
            )
        except ConfigurationError as e:
            self.error_exit(f"Parameter error: {e}")

    def configure_logging(self) -> None:
        """Map -q / -v / -vv onto the root logger level."""
        if self.quiet:
            level = logging.ERROR
        elif self.verbose >= 2:
            level = logging.DEBUG
        elif self.verbose == 1:
            level = logging.INFO
        else:
            level = logging.WARNING
        logging.getLogger().setLevel(level)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        self._progress_shown = True
        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def stage_listener(self, stage_name: str, data: Dict) -> None:
        """Prints a header when a stage starts and the survivors when it ends."""
        if self.quiet:
            return

        if data.get("status") == "started":
            print(self._stage_title(stage_name))
            return

        if self._progress_shown:
            sys.stderr.write("\n")
            self._progress_shown = False
        print(f"  File candidates: {data['files']} Total size: {ConvertUtils.describe_size(data['bytes'])}")

    def _stage_title(self, stage_name: str) -> str:
        scan = ConvertUtils.describe_size(self.params.scan_size) if self.params else ""
        algorithm = self.params.algorithm.display_name if self.params else ""
        titles = {
            Stage.COLLECT.value: "(1 / 6) Generating file list...",
            Stage.SIZE.value: "(2 / 6) Eliminating candidates based on file sizes...",
            Stage.TAIL.value: f"(3 / 6) Eliminating candidates based on last {scan} of files...",
            Stage.HEAD.value: f"(4 / 6) Eliminating candidates based on first {scan} of files...",
            Stage.FULL.value: f"(5 / 6) Hashing remaining candidates fully ({algorithm})...",
        }
        return titles.get(stage_name, stage_name)

    def print_header(self, params: DeduplicationParams) -> None:
        """Show what is about to happen."""
        if self.quiet:
            return

        if params.dry_run:
            print("Not deleting files (dry run), add --delete-files to actually delete files.")
        elif params.use_trash:
            print("WARNING: moving duplicate files to trash!")
        else:
            print("WARNING: deleting files!")
        print()

        max_size = "no limit" if params.max_size_bytes is None else ConvertUtils.describe_size(params.max_size_bytes)
        print(f"File sizes to scan: {ConvertUtils.describe_size(params.min_size_bytes)} - {max_size}")
        print(f"Scan size for last and first bytes of files: {ConvertUtils.describe_size(params.scan_size)}")
        print(f"Minimum count of identical files: {params.min_count}")
        print("Directories to scan:")
        for root in params.roots:
            print(f" * {root}")
        print()

    def run_deduplication(self, params: DeduplicationParams) -> tuple[List[ResolutionOutcome], DeduplicationStats]:
        """Execute the detection workflow."""
        command = DeduplicationCommand()
        stats = DeduplicationStats()
        stats.add_listener(self.stage_listener)

        outcomes, stats = command.execute(
            params,
            progress_callback=self.progress_callback if self.verbose else None,
            stats=stats
        )

        if self.verbose:
            print("\n" + stats.print_summary())

        return outcomes, stats

    def process_outcomes(self, outcomes: List[ResolutionOutcome], params: DeduplicationParams) -> DeletionReport:
        """
        Print every duplicate group with its keep/delete decision, deleting as we go
        unless this is a dry run. Returns the accumulated deletion report.
        """
        report = DeletionReport()

        if not outcomes:
            if not self.quiet:
                print("No duplicate files found.")
            return report

        planned_files = 0
        planned_bytes = 0
        remaining_files = sum(len(o.removed) + 1 for o in outcomes)
        remaining_bytes = sum(o.size * (len(o.removed) + 1) for o in outcomes)

        if not self.quiet:
            action = "Listing duplicate files (dry run)" if params.dry_run else "Deleting duplicate files"
            print(f"(6 / 6) {action}...")

        for outcome in outcomes:
            remaining_files -= len(outcome.removed) + 1
            remaining_bytes -= outcome.size * (len(outcome.removed) + 1)

            if not self.quiet:
                print(f"  Duplicate files with checksum: {outcome.digest_hex}")
                print(f"   +keeping: {outcome.kept.path}")
                for file in outcome.removed:
                    print(f"  -deleting: {file.path}")

            if params.dry_run:
                planned_files += len(outcome.removed)
                planned_bytes += outcome.bytes_removed
                removed_files, removed_bytes = planned_files, planned_bytes
            else:
                DuplicateService.remove_files(outcome.removed, use_trash=params.use_trash, report=report)
                removed_files, removed_bytes = report.removed_files, report.removed_bytes

            if not self.quiet:
                verb = "would remove" if params.dry_run else "removed"
                print(
                    f"Currently {verb} {removed_files} files totaling {ConvertUtils.describe_size(removed_bytes)}  "
                    f"Remaining: {remaining_files} files, {ConvertUtils.describe_size(remaining_bytes)}"
                )

        if params.dry_run:
            report.removed_files = len(DuplicateService.files_to_remove(outcomes))
            report.removed_bytes = DuplicateService.calculate_space_savings(outcomes)

        return report

    def print_summary(self, report: DeletionReport, stats: DeduplicationStats, params: DeduplicationParams) -> None:
        """Final totals plus every failure that was recovered from."""
        print()
        verb = "Would remove" if params.dry_run else "Removed"
        print(f"{verb} {report.removed_files} files totaling {ConvertUtils.describe_size(report.removed_bytes)}")

        if stats.errors and not self.quiet:
            print(f"⚠️  {len(stats.errors)} files or directories could not be read and were skipped.")

        if report.errors:
            print(f"⚠️  Failed to delete {report.failed_files} file(s):")
            for error in report.errors[:5]:  # Show first 5 errors
                print(f"  • {error.path}: {error.reason}")
            if report.failed_files > 5:
                print(f"  ...and {report.failed_files - 5} more files")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> int:
        """Main entry point. Returns the process exit code."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        self.validate_args(args)
        self.configure_logging()
        params = self.create_params(args)
        self.params = params

        self.print_header(params)
        outcomes, stats = self.run_deduplication(params)
        report = self.process_outcomes(outcomes, params)
        self.print_summary(report, stats, params)

        # Show completion time
        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")

        return 1 if report.errors else 0


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
