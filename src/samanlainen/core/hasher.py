"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Implements file hashing utilities using FileCandidate and pluggable hash algorithms.

HasherImpl computes tail-window, head-window and full-content digests, caching results
in the candidate's FileHashes container. A file no larger than the scan window is hashed
once: its tail, head and full digests are the same bytes, so later stages reuse the cache.
"""

import hashlib
import logging
from typing import Dict, Type

import xxhash

from samanlainen.core.errors import ReadError
from samanlainen.core.interfaces import Hasher, HashAlgorithm, HashContext
from samanlainen.core.models import FileCandidate, HashAlgorithmType, DEFAULT_SCAN_SIZE

logger = logging.getLogger(__name__)

READ_BUFFER_SIZE = 1024 * 1024  # full-content hashing reads 1 MiB at a time


class Sha512AlgorithmImpl(HashAlgorithm):
    name = "sha512"

    @staticmethod
    def new() -> HashContext:
        return hashlib.sha512()

    @staticmethod
    def hash(data: bytes) -> bytes:
        return hashlib.sha512(data).digest()


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh64"

    @staticmethod
    def new() -> HashContext:
        return xxhash.xxh64()

    @staticmethod
    def hash(data: bytes) -> bytes:
        return xxhash.xxh64(data).digest()


HASH_ALGORITHMS: Dict[HashAlgorithmType, Type[HashAlgorithm]] = {
    HashAlgorithmType.SHA512: Sha512AlgorithmImpl,
    HashAlgorithmType.XXH64: XXHashAlgorithmImpl,
}


def get_algorithm(algorithm_type: HashAlgorithmType) -> HashAlgorithm:
    """Returns an algorithm instance for the given type."""
    return HASH_ALGORITHMS[algorithm_type]()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Computes and caches digests for the tail window, head window and whole content.
    Every I/O failure is raised as ReadError for the caller to record.
    """

    def __init__(self, algorithm: HashAlgorithm = None, scan_size: int = DEFAULT_SCAN_SIZE):
        if scan_size < 1:
            raise ValueError("scan_size must be at least 1 byte")
        self.algorithm = algorithm or Sha512AlgorithmImpl()
        self.scan_size = scan_size

    def compute_tail_hash(self, file: FileCandidate) -> bytes:
        """Computes and caches the digest of the last scan_size bytes of a file."""
        if file.hashes.tail is not None:
            return file.hashes.tail
        cached = self._whole_file_digest(file)
        if cached is not None:
            file.hashes.tail = cached
            return cached
        window = self._window(file)
        data = self._read_window(file, offset=file.size - window, length=window)
        result = self.algorithm.hash(data)
        file.hashes.tail = result
        return result

    def compute_head_hash(self, file: FileCandidate) -> bytes:
        """Computes and caches the digest of the first scan_size bytes of a file."""
        if file.hashes.head is not None:
            return file.hashes.head
        cached = self._whole_file_digest(file)
        if cached is not None:
            file.hashes.head = cached
            return cached
        data = self._read_window(file, offset=0, length=self._window(file))
        result = self.algorithm.hash(data)
        file.hashes.head = result
        return result

    def compute_full_hash(self, file: FileCandidate) -> bytes:
        """Computes and caches the digest of the entire file, streamed in 1 MiB reads."""
        if file.hashes.full is not None:
            return file.hashes.full
        cached = self._whole_file_digest(file)
        if cached is not None:
            file.hashes.full = cached
            return cached

        context = self.algorithm.new()
        try:
            with open(file.path, 'rb') as f:
                while True:
                    chunk = f.read(READ_BUFFER_SIZE)
                    if not chunk:
                        break
                    context.update(chunk)
        except OSError as e:
            raise ReadError(file.path, e.strerror or str(e)) from e

        result = context.digest()
        file.hashes.full = result
        return result

    def _window(self, file: FileCandidate) -> int:
        return min(self.scan_size, file.size)

    def _whole_file_digest(self, file: FileCandidate) -> bytes:
        """
        For files that fit in the scan window every digest covers the same bytes.
        Returns an already computed one, or None.
        """
        if file.size > self.scan_size:
            return None
        return file.hashes.tail or file.hashes.head or file.hashes.full

    @staticmethod
    def _read_window(file: FileCandidate, offset: int, length: int) -> bytes:
        """Reads `length` bytes starting at `offset`."""
        try:
            with open(file.path, 'rb') as f:
                f.seek(offset)
                data = f.read(length)
        except OSError as e:
            raise ReadError(file.path, e.strerror or str(e)) from e

        if not data:
            raise ReadError(file.path, f"empty read at offset {offset}")
        return data
