"""
Access to bundled binary archives.

Bundled binaries ship as ``<name>.zip`` files inside the
``phpparsekit.resources`` package. Additional directories (for example a
vendored bundle directory named in the configuration file) are searched
after the package.
"""

import logging
from contextlib import contextmanager
from importlib import resources
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Sequence, Union

logger = logging.getLogger(__name__)

RESOURCE_PACKAGE = "phpparsekit.resources"
ARCHIVE_SUFFIX = ".zip"


def archive_name(binary_name: str) -> str:
    """
    Get the bundled archive file name for a binary.

    Example:
        >>> archive_name("php-parser-4.19.4")
        'php-parser-4.19.4.zip'
    """
    return f"{binary_name}{ARCHIVE_SUFFIX}"


def find_bundled_archive(
    binary_name: str, search_dirs: Sequence[Union[str, Path]] = ()
):
    """
    Locate the bundled archive of a binary.

    Args:
        binary_name: Binary file name without the .zip extension
        search_dirs: Extra directories searched after the package resources

    Returns:
        A Traversable/Path of the archive, or None if no archive exists
    """
    file_name = archive_name(binary_name)

    packaged = resources.files(RESOURCE_PACKAGE).joinpath(file_name)
    if packaged.is_file():
        logger.debug(f"Found packaged resource {file_name}")
        return packaged

    for directory in search_dirs:
        candidate = Path(directory) / file_name
        if candidate.is_file():
            logger.debug(f"Found resource {file_name} in {directory}")
            return candidate

    logger.debug(f"No bundled resource named {file_name}")
    return None


@contextmanager
def open_bundled_archive(
    binary_name: str, search_dirs: Sequence[Union[str, Path]] = ()
) -> Iterator[Optional[BinaryIO]]:
    """
    Open the bundled archive of a binary for reading.

    Yields:
        A binary stream that is closed on exit, or None if no archive exists

    Example:
        >>> with open_bundled_archive("php-parser-4.19.4") as stream:
        ...     if stream is not None:
        ...         extract_file_from_zip(stream, dest, "php-parser.phar")
    """
    archive = find_bundled_archive(binary_name, search_dirs)
    if archive is None:
        yield None
        return

    with archive.open("rb") as stream:
        yield stream


__all__ = [
    "RESOURCE_PACKAGE",
    "ARCHIVE_SUFFIX",
    "archive_name",
    "find_bundled_archive",
    "open_bundled_archive",
]
