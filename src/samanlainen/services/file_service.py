"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Removal of single files: permanent delete, or move to the system trash.
"""
import os
from pathlib import Path

from send2trash import send2trash

from samanlainen.core.errors import DeletionError


class FileService:
    """
    File removal primitives. Every failure is raised as DeletionError.
    """

    @staticmethod
    def delete_file(file_path: str):
        """Permanently removes a file."""
        try:
            os.remove(file_path)
        except FileNotFoundError as e:
            raise DeletionError(file_path, "File not found") from e
        except OSError as e:
            raise DeletionError(file_path, e.strerror or str(e)) from e

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise DeletionError(file_path, "File not found")

        try:
            send2trash(str(path))
        except OSError as e:
            raise DeletionError(file_path, f"Failed to move to trash: {e}") from e

    @classmethod
    def remove(cls, file_path: str, use_trash: bool = False):
        """Removes a file with the requested method."""
        if use_trash:
            cls.move_to_trash(file_path)
        else:
            cls.delete_file(file_path)
