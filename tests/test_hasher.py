"""
Unit tests for HasherImpl and the pluggable hash algorithms.
"""
import hashlib
import pytest
import xxhash
from unittest import mock
from samanlainen.core.errors import ReadError
from samanlainen.core.hasher import (
    HasherImpl, Sha512AlgorithmImpl, XXHashAlgorithmImpl, get_algorithm,
)
from samanlainen.core.models import FileCandidate, HashAlgorithmType


def candidate(path) -> FileCandidate:
    return FileCandidate(path=str(path), size=path.stat().st_size)


class TestAlgorithms:
    def test_sha512_digest_is_64_bytes(self):
        assert len(Sha512AlgorithmImpl.hash(b"data")) == 64
        assert Sha512AlgorithmImpl.hash(b"data") == hashlib.sha512(b"data").digest()

    def test_xxh64_digest_is_8_bytes(self):
        assert len(XXHashAlgorithmImpl.hash(b"data")) == 8
        assert XXHashAlgorithmImpl.hash(b"data") == xxhash.xxh64(b"data").digest()

    def test_streaming_context_matches_one_shot(self):
        for algorithm in (Sha512AlgorithmImpl(), XXHashAlgorithmImpl()):
            ctx = algorithm.new()
            ctx.update(b"hello ")
            ctx.update(b"world")
            assert ctx.digest() == algorithm.hash(b"hello world")

    def test_get_algorithm(self):
        assert isinstance(get_algorithm(HashAlgorithmType.SHA512), Sha512AlgorithmImpl)
        assert isinstance(get_algorithm(HashAlgorithmType.XXH64), XXHashAlgorithmImpl)


class TestHasherImpl:
    def test_rejects_empty_scan_window(self):
        with pytest.raises(ValueError):
            HasherImpl(scan_size=0)

    def test_windows_cover_the_expected_bytes(self, temp_dir, make_file):
        content = b"HEAD" + b"-" * 92 + b"TAIL"
        path = make_file(temp_dir / "f.bin", content)
        hasher = HasherImpl(scan_size=4)
        file = candidate(path)

        assert hasher.compute_head_hash(file) == hashlib.sha512(b"HEAD").digest()
        assert hasher.compute_tail_hash(file) == hashlib.sha512(b"TAIL").digest()
        assert hasher.compute_full_hash(file) == hashlib.sha512(content).digest()

    def test_digests_are_cached_on_the_candidate(self, temp_dir, make_file):
        path = make_file(temp_dir / "f.bin", b"X" * 100)
        hasher = HasherImpl(scan_size=10)
        file = candidate(path)

        first = hasher.compute_full_hash(file)
        path.unlink()

        assert hasher.compute_full_hash(file) == first
        assert file.hashes.full == first

    def test_small_file_is_read_once(self, temp_dir, make_file):
        """A file inside the scan window reuses its first digest for every stage."""
        path = make_file(temp_dir / "small.bin", b"small content")
        hasher = HasherImpl(scan_size=1024)
        file = candidate(path)

        tail = hasher.compute_tail_hash(file)
        with mock.patch("builtins.open", side_effect=AssertionError("file re-read")):
            head = hasher.compute_head_hash(file)
            full = hasher.compute_full_hash(file)

        assert tail == head == full == hashlib.sha512(b"small content").digest()

    def test_large_file_digests_differ_per_window(self, temp_dir, make_file):
        path = make_file(temp_dir / "big.bin", b"A" * 50 + b"B" * 50)
        hasher = HasherImpl(scan_size=50)
        file = candidate(path)

        assert hasher.compute_head_hash(file) != hasher.compute_tail_hash(file)

    def test_full_hash_streams_past_the_read_buffer(self, temp_dir, make_file):
        content = bytes(range(256)) * 5000  # 1.28 MB, more than one read buffer
        path = make_file(temp_dir / "stream.bin", content)
        hasher = HasherImpl(algorithm=XXHashAlgorithmImpl(), scan_size=1024)

        assert hasher.compute_full_hash(candidate(path)) == xxhash.xxh64(content).digest()

    @pytest.mark.parametrize("method", ["compute_tail_hash", "compute_head_hash", "compute_full_hash"])
    def test_missing_file_raises_read_error(self, temp_dir, make_file, method):
        path = make_file(temp_dir / "gone.bin", b"X" * 10)
        file = candidate(path)
        path.unlink()

        with pytest.raises(ReadError) as exc_info:
            getattr(HasherImpl(), method)(file)
        assert exc_info.value.path == str(path)

    def test_truncated_file_raises_read_error(self, temp_dir, make_file):
        """A file that shrank after collection gives an empty tail read."""
        path = make_file(temp_dir / "shrunk.bin", b"X" * 100)
        file = candidate(path)
        path.write_bytes(b"X" * 10)

        with pytest.raises(ReadError, match="empty read"):
            HasherImpl(scan_size=5).compute_tail_hash(file)
