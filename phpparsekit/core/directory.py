"""
Directory layout for phpparsekit.

Extracted binaries and cached execution output live under the system
temporary directory, one folder per wrapper class:

    <tempdir>/phpparsekit/
        binaries/
            <WrapperClassName>/
                php-cli-8.4-linux-x86_64   : extracted executable
                .<hash>.cache              : cached execution output
                .<name>.lock               : extraction lock files
"""

import tempfile
from pathlib import Path
from typing import Optional, Union

NAMESPACE = "phpparsekit"


class DirectoryError(Exception):
    """Base exception for directory-related errors."""

    pass


def get_cache_root(base: Optional[Union[str, Path]] = None) -> Path:
    """
    Get the root of the phpparsekit temporary cache.

    Args:
        base: Base directory (default: the system temporary directory)

    Returns:
        Path: <base>/phpparsekit

    Example:
        >>> get_cache_root('/tmp')
        PosixPath('/tmp/phpparsekit')
    """
    if base is None:
        base = tempfile.gettempdir()
    return Path(base) / NAMESPACE


def get_binaries_dir(owner: str, base: Optional[Union[str, Path]] = None) -> Path:
    """
    Get the working directory of a binary wrapper.

    Args:
        owner: Name of the wrapper class owning the directory
        base: Base directory (default: the system temporary directory)

    Returns:
        Path: <base>/phpparsekit/binaries/<owner>
    """
    if not owner or "/" in owner or "\\" in owner:
        raise DirectoryError(f"Invalid binaries directory owner: {owner!r}")
    return get_cache_root(base) / "binaries" / owner


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists (idempotent).

    Raises:
        DirectoryError: If the path exists but is not a directory, or
            cannot be created.
    """
    path = Path(path)
    if path.exists() and not path.is_dir():
        raise DirectoryError(f"Path exists and is not a directory: {path}")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryError(f"Failed to create directory {path}: {e}") from e
    return path


__all__ = [
    "NAMESPACE",
    "DirectoryError",
    "get_cache_root",
    "get_binaries_dir",
    "ensure_directory",
]
