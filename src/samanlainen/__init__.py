"""
samanlainen: delete duplicate files.

Core features:
- Progressive elimination: size → tail window → head window → full content (SHA-512)
- Hardlinks and overlapping roots are recognised as the same file, never as duplicates
- Deterministic choice of the kept file: root priority, then oldest, then path
- Dry run by default; permanent delete or move to system trash (via send2trash)
"""

# Get version
from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("samanlainen")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from samanlainen.commands import DeduplicationCommand
from samanlainen.core import (
    DeduplicationParams, HashAlgorithmType, FileCandidate, DuplicateGroup, ResolutionOutcome,
    ConfigurationError)
from samanlainen.utils.convert_utils import ConvertUtils
from samanlainen.services import DuplicateService, DeletionReport
from samanlainen.services.file_service import FileService

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "HashAlgorithmType",
    "FileCandidate",
    "DuplicateGroup",
    "ResolutionOutcome",
    "ConfigurationError",
    "ConvertUtils",
    "DuplicateService",
    "DeletionReport",
    "FileService",
    "__version__",
]
