"""
External binary lifecycle: locating, validating, resolving and running
executables.
"""

from .base import Argument, ExternalBinary, Option
from .locator import search_bin_in, search_bin_on_path
from .resolver import (
    BinaryCandidate,
    BinaryResolver,
    ResolutionSource,
    bundled_attempt,
    cached_attempt,
    supplied_attempt,
    system_path_attempt,
)
from .result import BinaryResult
from .version import compare_versions, detect_version, is_version_at_least

__all__ = [
    "Argument",
    "Option",
    "ExternalBinary",
    "BinaryResult",
    "search_bin_in",
    "search_bin_on_path",
    "compare_versions",
    "detect_version",
    "is_version_at_least",
    "ResolutionSource",
    "BinaryCandidate",
    "BinaryResolver",
    "supplied_attempt",
    "cached_attempt",
    "bundled_attempt",
    "system_path_attempt",
]
