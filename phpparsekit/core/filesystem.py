"""
Cross-platform file system utilities for phpparsekit.

This module provides the file operations needed to install a bundled binary:
- Single-entry extraction from a ZIP archive stream
- Atomic replacement of the destination file
- Marking extracted files executable

All operations handle platform differences transparently.
"""

import logging
import os
import shutil
import stat
import tempfile
import zipfile
from pathlib import Path
from typing import BinaryIO, Union

logger = logging.getLogger(__name__)

# Platform detection
IS_WINDOWS = os.name == "nt"
IS_UNIX = not IS_WINDOWS


# ============================================================================
# Error Handling
# ============================================================================


class FilesystemError(Exception):
    """Base exception for filesystem operations."""

    pass


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


# ============================================================================
# Archive Extraction
# ============================================================================


def uniform_separators(path: Union[str, Path]) -> str:
    """
    Normalize path separators to forward slashes.

    Example:
        >>> uniform_separators('bin\\\\php.exe')
        'bin/php.exe'
    """
    return str(path).replace("\\", "/")


def extract_file_from_zip(
    archive_stream: BinaryIO,
    destination: Union[str, Path],
    *candidate_paths: Union[str, Path],
) -> bool:
    """
    Extract one file from a ZIP archive stream.

    Entries are scanned in archive order and the first entry whose name
    matches any candidate path is copied to ``destination``. Separator style
    does not matter: ``bin\\php`` and ``bin/php`` are the same candidate.

    Args:
        archive_stream: Readable (seekable) binary stream of the ZIP archive
        destination: Path the extracted file is written to (overwritten)
        *candidate_paths: Possible in-archive paths of the wanted file

    Returns:
        True if an entry was extracted, False if no entry matched (the
        destination is then left untouched)

    Raises:
        ArchiveExtractionError: If the stream is not a readable ZIP archive

    Example:
        >>> with open('php-cli-8.4-linux-x86_64.zip', 'rb') as stream:
        ...     extract_file_from_zip(stream, cache_dir / 'php', 'php', 'php.exe')
        True
    """
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    targets = {uniform_separators(p) for p in candidate_paths}

    try:
        with zipfile.ZipFile(archive_stream, "r") as zf:
            for info in zf.infolist():
                logger.debug(f"Checking entry: {info.filename}")
                if uniform_separators(info.filename) not in targets:
                    continue
                if info.is_dir():
                    continue
                with zf.open(info, "r") as source:
                    _atomic_copy(source, destination)
                logger.debug(f"Extracted {info.filename} to {destination}")
                return True
    except zipfile.BadZipFile as e:
        raise ArchiveExtractionError(f"Invalid ZIP archive: {e}") from e

    return False


def _atomic_copy(source: BinaryIO, destination: Path) -> None:
    """Copy a stream into destination through a temp file + rename."""
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        with open(temp_fd, "wb") as f:
            shutil.copyfileobj(source, f)
        temp_path.replace(destination)
    except Exception:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


# ============================================================================
# Permissions
# ============================================================================


def make_executable(path: Union[str, Path]) -> Path:
    """
    Add execute permission to a file (no-op on Windows).

    Args:
        path: File to mark executable

    Returns:
        The path

    Raises:
        FilesystemError: If the permissions cannot be changed
    """
    path = Path(path)
    if IS_WINDOWS:
        return path

    try:
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise FilesystemError(f"Failed to make {path} executable: {e}") from e

    return path


__all__ = [
    "IS_WINDOWS",
    "IS_UNIX",
    "FilesystemError",
    "ArchiveExtractionError",
    "uniform_separators",
    "extract_file_from_zip",
    "make_executable",
]
