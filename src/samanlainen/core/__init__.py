"""
Core deduplication engine: scanner, collector, hasher, grouper, stages and resolver.

This package contains the performance-critical foundation of samanlainen:
- FileScannerImpl: recursive directory traversal yielding regular files
- CandidateCollector: size filters and identity deduplication across roots
- HasherImpl + Sha512AlgorithmImpl / XXHashAlgorithmImpl: tail/head/full digests
- FileGrouperImpl: size and digest grouping with min_count elimination
- DeduplicatorImpl: size → tail → head → full pipeline
- ResolutionEngine: deterministic choice of the file to keep
- Models: FileCandidate, DuplicateGroup, ResolutionOutcome and run parameters

All components are pure Python with no UI dependencies.
"""

from .errors import (
    SamanlainenError, ConfigurationError, FileOperationError,
    EnumerationError, ReadError, DeletionError)
from .scanner import FileScannerImpl
from .collector import CandidateCollector
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, Sha512AlgorithmImpl, XXHashAlgorithmImpl, get_algorithm
from .deduplicator import Deduplicator, DeduplicatorImpl
from .resolver import ResolutionEngine
from .models import (
    FileCandidate, FileIdentity, FileHashes, ScanEntry, DuplicateGroup, ResolutionOutcome,
    DeduplicationParams, DeduplicationStats, HashAlgorithmType, Stage)

__all__ = [
    "SamanlainenError",
    "ConfigurationError",
    "FileOperationError",
    "EnumerationError",
    "ReadError",
    "DeletionError",
    "FileScannerImpl",
    "CandidateCollector",
    "FileGrouperImpl",
    "HasherImpl",
    "Sha512AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "get_algorithm",
    "Deduplicator",
    "DeduplicatorImpl",
    "ResolutionEngine",
    "FileCandidate",
    "FileIdentity",
    "FileHashes",
    "ScanEntry",
    "DuplicateGroup",
    "ResolutionOutcome",
    "DeduplicationParams",
    "DeduplicationStats",
    "HashAlgorithmType",
    "Stage",
]
