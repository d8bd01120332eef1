"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception hierarchy for the duplicate detection pipeline.

Only ConfigurationError is fatal. The file-level errors are raised at the point of
failure and caught one level up (collector, grouper, duplicate service), where they are
logged and recorded so the run can continue with the remaining files.
"""


class SamanlainenError(Exception):
    """Base class for all errors raised by samanlainen."""


class ConfigurationError(SamanlainenError, ValueError):
    """Contradictory or invalid run parameters. Raised before any filesystem access."""


class FileOperationError(SamanlainenError):
    """A failure tied to a single path."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class EnumerationError(FileOperationError):
    """A root directory (or one of its subdirectories) could not be listed."""


class ReadError(FileOperationError):
    """A candidate could not be opened or read while hashing."""


class DeletionError(FileOperationError):
    """A file could not be removed in the final step."""
