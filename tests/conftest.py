"""
Shared fixtures for duplicate detection tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_file(path: Path, content: bytes, mtime: float = None) -> Path:
    """Writes content and optionally pins the modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def make_file():
    """Exposes write_file to tests."""
    return write_file


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for deduplication scenarios:
    - 3 identical files of 1000 bytes (oldest is dup1_a)
    - 2 identical files of 2048 bytes
    - 2 unique files of the same size (1500 bytes, different content)
    - 1 unique file with a size of its own
    - 1 empty file (never a candidate)
    """
    files = {}

    content_a = b"A" * 1000
    files["dup1_a"] = write_file(temp_dir / "dup1_a.txt", content_a, mtime=1_000_000)
    files["dup1_b"] = write_file(temp_dir / "dup1_b.txt", content_a, mtime=2_000_000)
    files["dup1_c"] = write_file(temp_dir / "subdir" / "dup1_c.txt", content_a, mtime=3_000_000)

    content_b = b"B" * 2048
    files["dup2_a"] = write_file(temp_dir / "dup2_a.bin", content_b, mtime=1_000_000)
    files["dup2_b"] = write_file(temp_dir / "dup2_b.bin", content_b, mtime=1_000_000)

    files["same_size_1"] = write_file(temp_dir / "same_size_1.txt", b"C" * 1500)
    files["same_size_2"] = write_file(temp_dir / "same_size_2.txt", b"D" * 1500)
    files["unique"] = write_file(temp_dir / "unique.txt", b"E" * 2500)

    files["empty"] = write_file(temp_dir / "empty.txt", b"")

    return files
