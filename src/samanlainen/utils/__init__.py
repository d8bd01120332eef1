"""Size conversion helpers shared by the CLI and the parameter DTO."""

from .convert_utils import ConvertUtils

__all__ = ["ConvertUtils"]
