"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and domain logic for candidate collection and deduplication.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Callable, NamedTuple
import logging
import os
import time
from enum import Enum

from samanlainen.core.errors import ConfigurationError, FileOperationError

logger = logging.getLogger(__name__)

DEFAULT_SCAN_SIZE = 1024 * 1024  # 1 MiB
DEFAULT_MIN_COUNT = 2


# =============================
# Enums
# =============================

class Stage(str, Enum):
    COLLECT = "collect"
    SIZE = "size"
    TAIL = "tail"
    HEAD = "head"
    FULL = "full"

    @property
    def display_name(self) -> str:
        """Human-readable name for progress output."""
        mapping = {
            Stage.COLLECT: "Candidate collection",
            Stage.SIZE: "Size grouping",
            Stage.TAIL: "Tail-window Hash",
            Stage.HEAD: "Head-window Hash",
            Stage.FULL: "Full Hash",
        }
        return mapping.get(self, self.value)


class HashAlgorithmType(Enum):
    """
    Digest algorithm used by every hashing stage of a run.
    """
    SHA512 = "sha512"
    XXH64 = "xxh64"

    @property
    def display_name(self) -> str:
        mapping = {
            HashAlgorithmType.SHA512: "SHA-512",
            HashAlgorithmType.XXH64: "xxHash64",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

class FileIdentity(NamedTuple):
    """
    Platform identity of a file's underlying storage.
    Only ever compared for equality; hashable so it can key a set.
    """
    device: int
    inode: int

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> 'FileIdentity':
        # On Windows os.stat fills st_dev/st_ino with the volume serial and file index
        return cls(device=stat_result.st_dev, inode=stat_result.st_ino)


class ScanEntry(NamedTuple):
    """A regular file as reported by the directory scanner."""
    path: str
    size: int
    identity: FileIdentity
    modified_at: float


@dataclass
class FileHashes:
    tail: Optional[bytes] = None
    head: Optional[bytes] = None
    full: Optional[bytes] = None

    def __post_init__(self):
        fields = getattr(self, '__dataclass_fields__', {})
        for key in fields:
            value = getattr(self, key)
            if value is not None and not isinstance(value, bytes):
                raise ValueError(f"Field '{key}' must be bytes or None")


@dataclass
class FileCandidate:
    """
    A file still under consideration as a potential duplicate.
    Metadata is captured once at enumeration time; digests are filled in by the
    hashing stages and cached in `hashes`.
    """
    path: str
    size: int  # in bytes
    identity: Optional[FileIdentity] = None
    root_priority: int = 0
    modified_at: float = 0.0
    hashes: FileHashes = field(default_factory=FileHashes)

    @property
    def stage_digest(self) -> Optional[bytes]:
        """Digest of the most advanced hashing stage this candidate went through."""
        return self.hashes.full or self.hashes.head or self.hashes.tail

    @classmethod
    def from_entry(cls, entry: ScanEntry, root_priority: int) -> 'FileCandidate':
        return cls(
            path=entry.path,
            size=entry.size,
            identity=entry.identity,
            root_priority=root_priority,
            modified_at=entry.modified_at,
        )

    def __repr__(self):
        return f"<FileCandidate path={self.path}, size={self.size}, priority={self.root_priority}>"


@dataclass
class DuplicateGroup:
    """
    A group of candidates that are potential duplicates.
    All files share the same size and, after a hashing stage, the same digest.
    """
    size: int
    files: List[FileCandidate]
    digest: Optional[bytes] = None

    @property
    def total_size(self) -> int:
        return self.size * len(self.files)

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}>"


@dataclass
class ResolutionOutcome:
    """
    Keep/delete decision for one confirmed duplicate group.
    """
    digest: bytes
    size: int
    kept: FileCandidate
    removed: List[FileCandidate]

    @property
    def bytes_removed(self) -> int:
        return self.size * len(self.removed)

    @property
    def digest_hex(self) -> str:
        return self.digest.hex()

    def __repr__(self):
        return f"<ResolutionOutcome kept={self.kept.path}, removed={len(self.removed)}>"


class DeduplicationStats:
    """
    Accumulator threaded through one pipeline run.
    Collects per-stage survivor counts and the errors recovered along the way.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self.errors: List[FileOperationError] = []
        self._listeners: List[Callable[[str, Dict], None]] = []
        self._started_at: float = time.time()

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when stats are updated."""
        self._listeners.append(listener)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            bytes_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "bytes": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["bytes"] += bytes_processed
        self.stage_stats[stage_name]["time"] += duration

        self._notify(stage_name, self.stage_stats[stage_name])

    def notify_stage_start(self, stage_name: str):
        """Notifies listeners that a new stage has started."""
        self._notify(stage_name, {"status": "started"})

    def record_error(self, error: FileOperationError) -> None:
        """Stores a recovered per-file or per-root failure."""
        self.errors.append(error)

    def errors_of(self, error_type: type) -> List[FileOperationError]:
        return [e for e in self.errors if isinstance(e, error_type)]

    def finish(self) -> None:
        self.total_time = time.time() - self._started_at

    def _notify(self, stage_name: str, data: Dict) -> None:
        for listener in self._listeners:
            listener(stage_name, data)

    def print_summary(self) -> str:
        lines = [
            "Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / BYTES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            try:
                label = Stage(stage).display_name
            except ValueError:
                label = stage.title()
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['bytes']} / {data['time']:.3f}s")

        if self.errors:
            lines.append(f"Recovered errors: {len(self.errors)}")

        return "\n".join(lines)


"""
DTO for deduplication parameters with built-in validation.
Interface-agnostic: the CLI builds it, the core consumes it.
"""
from samanlainen.utils.convert_utils import ConvertUtils


@dataclass
class DeduplicationParams:
    """Parameters for a deduplication run with validation."""
    roots: List[str]
    min_size_bytes: int = 1
    max_size_bytes: Optional[int] = None
    min_count: int = DEFAULT_MIN_COUNT
    scan_size: int = DEFAULT_SCAN_SIZE
    dry_run: bool = True
    use_trash: bool = False
    algorithm: HashAlgorithmType = HashAlgorithmType.SHA512
    max_workers: int = 1
    same_file_system: bool = True

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.roots:
            raise ConfigurationError("At least one root directory is required")

        if self.min_count < 2:
            raise ConfigurationError(f"Minimum duplicate count must be 2 or more, got {self.min_count}")

        if self.min_size_bytes < 0:
            raise ConfigurationError("Minimum size cannot be negative")

        if self.max_size_bytes is not None and self.max_size_bytes < self.min_size_bytes:
            raise ConfigurationError("Maximum size cannot be less than minimum size")

        if self.scan_size < 1:
            raise ConfigurationError("Scan size must be at least 1 byte")

        if self.max_workers < 1:
            raise ConfigurationError("Worker count must be at least 1")

        if not isinstance(self.algorithm, HashAlgorithmType):
            try:
                self.algorithm = HashAlgorithmType(self.algorithm)
            except ValueError:
                raise ConfigurationError(f"Unknown hash algorithm: {self.algorithm!r}")

        # Normalize roots: absolute paths, first occurrence keeps its priority
        normalized = []
        for root in self.roots:
            if not root or not str(root).strip():
                raise ConfigurationError("Root directory cannot be empty")
            path = os.path.normpath(os.path.abspath(os.path.expanduser(str(root))))
            if path not in normalized:
                normalized.append(path)
            else:
                logger.debug(f"Ignoring repeated root directory: {path}")
        self.roots = normalized

    @staticmethod
    def from_human_readable(
            roots: List[str],
            min_size_str: str = "1",
            max_size_str: str = "0",
            scan_size_str: str = "1MiB",
            min_count: int = DEFAULT_MIN_COUNT,
            dry_run: bool = True,
            use_trash: bool = False,
            algorithm: HashAlgorithmType = HashAlgorithmType.SHA512,
            max_workers: int = 1,
            same_file_system: bool = True,
    ) -> 'DeduplicationParams':
        """
        Factory method to create params from human-readable inputs.
        A maximum size of 0 means no upper limit.
        """
        try:
            min_size = ConvertUtils.human_to_bytes(min_size_str)
            max_size = ConvertUtils.human_to_bytes(max_size_str)
            scan_size = ConvertUtils.human_to_bytes(scan_size_str)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        return DeduplicationParams(
            roots=list(roots),
            min_size_bytes=min_size,
            max_size_bytes=max_size or None,
            min_count=min_count,
            scan_size=scan_size,
            dry_run=dry_run,
            use_trash=use_trash,
            algorithm=algorithm,
            max_workers=max_workers,
            same_file_system=same_file_system,
        )
