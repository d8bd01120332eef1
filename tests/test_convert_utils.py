"""
Tests for size conversion utilities: critical for correct file filtering.
"""
import pytest
from samanlainen.utils.convert_utils import ConvertUtils


class TestHumanToBytes:
    """Parsing of user supplied sizes."""

    @pytest.mark.parametrize("size_str, expected", [
        ("0", 0),
        ("1", 1),
        ("1000", 1000),
        ("1B", 1),
        ("1k", 1000),
        ("1kB", 1000),
        ("1KB", 1000),
        ("1Ki", 1024),
        ("1KiB", 1024),
        ("1M", 1000 ** 2),
        ("1MiB", 1024 ** 2),
        ("1.5MiB", int(1.5 * 1024 ** 2)),
        ("2 GiB", 2 * 1024 ** 3),
        ("  10mb  ", 10 * 1000 ** 2),
        ("1TB", 1000 ** 4),
        ("1EiB", 1024 ** 6),
    ])
    def test_parses_si_and_binary_suffixes(self, size_str, expected):
        """SI suffixes are powers of 1000, 'i' suffixes powers of 1024."""
        assert ConvertUtils.human_to_bytes(size_str) == expected

    def test_large_integer_keeps_precision(self):
        """Integers must not go through float arithmetic."""
        assert ConvertUtils.human_to_bytes("18446744073709551615") == 18446744073709551615

    @pytest.mark.parametrize("size_str", ["", "abc", "-1", "-5MB", "1XB", "1.2.3", "MB"])
    def test_rejects_invalid_formats(self, size_str):
        """Negative and malformed sizes must raise ValueError."""
        with pytest.raises(ValueError):
            ConvertUtils.human_to_bytes(size_str)


class TestBytesToHuman:
    """Formatting of byte counts."""

    @pytest.mark.parametrize("size, binary, expected", [
        (0, False, "0 B"),
        (999, False, "999 B"),
        (1000, False, "1 kB"),
        (1500, False, "1.5 kB"),
        (1024, True, "1 KiB"),
        (1024 ** 2, True, "1 MiB"),
        (1024 ** 2, False, "1.05 MB"),
        (5 * 1000 ** 3, False, "5 GB"),
    ])
    def test_formats_sizes(self, size, binary, expected):
        assert ConvertUtils.bytes_to_human(size, binary=binary) == expected

    def test_negative_size_renders_as_zero(self):
        assert ConvertUtils.bytes_to_human(-1) == "0 B"

    def test_describe_size_small_values_are_plain_bytes(self):
        assert ConvertUtils.describe_size(999) == "999 B"

    def test_describe_size_shows_exact_si_and_binary(self):
        assert ConvertUtils.describe_size(1024 ** 2) == "1048576 B (1.05 MB, 1 MiB)"
        assert ConvertUtils.describe_size(2000) == "2000 B (2 kB, 1.95 KiB)"
