"""
Checksum verification for extracted binaries.

This module provides the CRC32 digest used to decide whether a previously
extracted binary in the cache can be reused without extracting it again:
- CRC32 computation streamed in fixed-size blocks
- Comparison against an expected digest
- The embedded checksum table (``data/checksums.json``)

CRC32 guards against accidental corruption and partial extraction. It is not
a tamper-resistance mechanism; bundled payloads are trusted input.
"""

import json
import logging
import re
import zlib
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

BLOCK_SIZE = 16 * 1024

_CRC32_FORMAT = re.compile(r"^[0-9a-f]{8}$")


class ChecksumRegistryError(Exception):
    """Exception raised when the checksum table cannot be loaded."""

    pass


def compute_crc32(file_path: Union[str, Path]) -> Optional[str]:
    """
    Compute the CRC32 digest of a file's bytes.

    The file is read in binary mode, so the digest is identical on every
    platform for identical content.

    Args:
        file_path: Path to file

    Returns:
        8-character lowercase hex string, or None if the path does not exist
        or is not a regular file

    Example:
        >>> compute_crc32(Path('php-cli-8.4-linux-x86_64'))
        'afd3bd14'
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        return None

    crc = 0
    with open(file_path, "rb") as f:
        while chunk := f.read(BLOCK_SIZE):
            crc = zlib.crc32(chunk, crc)

    return f"{crc & 0xFFFFFFFF:08x}"


def verify_crc32(file_path: Union[str, Path], expected: Optional[str]) -> bool:
    """
    Check a file against an expected CRC32 digest.

    Args:
        file_path: Path to file
        expected: Expected digest (case-insensitive); None never matches

    Returns:
        True if the file exists and its digest matches
    """
    if not expected:
        return False

    actual = compute_crc32(file_path)
    if actual is None:
        return False

    matched = actual == expected.strip().lower()
    if not matched:
        logger.debug(f"CRC32 mismatch for {file_path}: {actual} != {expected}")
    return matched


class ChecksumRegistry:
    """
    Table of expected CRC32 digests for bundled binaries.

    Keys follow ``<tool>-<version>-<os>-<arch>`` for platform-specific
    binaries and ``<tool>-<version>`` for platform-independent ones.

    Example:
        >>> registry = ChecksumRegistry()
        >>> registry.lookup("php-parser-4.19.4")
        'e5711434'
    """

    def __init__(self, checksums_path: Optional[Path] = None):
        """
        Initialize the registry.

        Args:
            checksums_path: Optional path to a checksums JSON file.
                If None, uses the embedded data/checksums.json

        Raises:
            ChecksumRegistryError: If the file cannot be loaded or is malformed
        """
        self.checksums_path = checksums_path or self._get_default_path()
        self.checksums = self._load()
        logger.debug(f"Loaded {len(self.checksums)} checksums from {self.checksums_path}")

    def _get_default_path(self) -> Path:
        """Get path to the embedded checksums file."""
        return Path(__file__).parent.parent / "data" / "checksums.json"

    def _load(self) -> Dict[str, str]:
        if not self.checksums_path.exists():
            raise ChecksumRegistryError(
                f"Checksums file not found: {self.checksums_path}"
            )

        try:
            with open(self.checksums_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ChecksumRegistryError(
                f"Invalid JSON in checksums file: {e}\nFile: {self.checksums_path}"
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("checksums"), dict):
            raise ChecksumRegistryError(
                f"Invalid checksums structure: missing 'checksums' mapping\n"
                f"File: {self.checksums_path}"
            )

        checksums = {}
        for key, digest in data["checksums"].items():
            digest = str(digest).strip().lower()
            if not _CRC32_FORMAT.match(digest):
                raise ChecksumRegistryError(
                    f"Invalid CRC32 digest for {key}: {digest!r}"
                )
            checksums[key] = digest

        return checksums

    def lookup(self, key: str) -> Optional[str]:
        """Return the expected digest for a binary, or None if unknown."""
        return self.checksums.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self.checksums


__all__ = [
    "BLOCK_SIZE",
    "ChecksumRegistryError",
    "compute_crc32",
    "verify_crc32",
    "ChecksumRegistry",
]
