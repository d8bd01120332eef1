"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import re

_SIZE_PATTERN = re.compile(r'^\s*(\d+(?:\.\d+)?)\s*([a-z]*)\s*$')

_SI_UNITS = ["B", "kB", "MB", "GB", "TB", "PB", "EB"]
_IEC_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]


class ConvertUtils:
    # Lowercased suffix -> multiplier. SI prefixes are decimal, "i" prefixes binary.
    UNITS = {
        '': 1, 'b': 1,
        'k': 1000, 'kb': 1000, 'ki': 1024, 'kib': 1024,
        'm': 1000 ** 2, 'mb': 1000 ** 2, 'mi': 1024 ** 2, 'mib': 1024 ** 2,
        'g': 1000 ** 3, 'gb': 1000 ** 3, 'gi': 1024 ** 3, 'gib': 1024 ** 3,
        't': 1000 ** 4, 'tb': 1000 ** 4, 'ti': 1024 ** 4, 'tib': 1024 ** 4,
        'p': 1000 ** 5, 'pb': 1000 ** 5, 'pi': 1024 ** 5, 'pib': 1024 ** 5,
        'e': 1000 ** 6, 'eb': 1000 ** 6, 'ei': 1024 ** 6, 'eib': 1024 ** 6,
    }

    @staticmethod
    def bytes_to_human(size_bytes: int, binary: bool = False) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.5 MB, or 1.43 MiB when binary=True).
        """
        if size_bytes < 0:
            return "0 B"

        units = _IEC_UNITS if binary else _SI_UNITS
        base = 1024 if binary else 1000

        value = float(size_bytes)
        for unit in units[:-1]:
            if value < base:
                return f"{round(value, 2):g} {unit}"
            value /= base
        return f"{round(value, 2):g} {units[-1]}"

    @staticmethod
    def describe_size(size_bytes: int) -> str:
        """
        Exact byte count followed by its SI and binary renderings,
        e.g. '1048576 B (1.05 MB, 1 MiB)'.
        """
        if size_bytes < 1000:
            return f"{size_bytes} B"
        return (
            f"{size_bytes} B ("
            f"{ConvertUtils.bytes_to_human(size_bytes)}, "
            f"{ConvertUtils.bytes_to_human(size_bytes, binary=True)})"
        )

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Supports formats: '1000', '1.5GB', '2048 KiB', '1k', '1M', '1Mi', etc.
        Raises ValueError for negative sizes or invalid formats.
        """
        match = _SIZE_PATTERN.match(str(size_str).lower())
        if not match:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 1000, 1.5GB, 2048KiB, 1k, 1M, 1MiB, etc."
            )

        value_str, unit = match.groups()
        if unit not in ConvertUtils.UNITS:
            raise ValueError(f"Unknown size unit in '{size_str}'")

        multiplier = ConvertUtils.UNITS[unit]
        if '.' not in value_str:
            return int(value_str) * multiplier
        return int(float(value_str) * multiplier)
