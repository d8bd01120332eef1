"""File removal and duplicate plan services."""

from .file_service import FileService
from .duplicate_service import DuplicateService, DeletionReport

__all__ = ["FileService", "DuplicateService", "DeletionReport"]
