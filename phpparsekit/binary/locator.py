"""
Locate executables on disk.

Two lookups are provided:
- search_bin_in: recursive search of one directory tree by file name
- search_bin_on_path: search of every directory on PATH, in order, with
  Windows executable suffixes added where needed
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from ..core.platform import PlatformInfo, detect_platform

logger = logging.getLogger(__name__)

WINDOWS_SUFFIXES = (".exe", ".bat")


def search_bin_in(directory: Union[str, Path], *names: str) -> Optional[Path]:
    """
    Find a file by name under a directory and its subdirectories.

    Args:
        directory: Root directory of the search
        *names: Accepted file names (exact match)

    Returns:
        Path of the first regular file whose name is one of names, or None

    Example:
        >>> search_bin_in(Path('/opt/php'), 'php', 'php.exe')
        PosixPath('/opt/php/bin/php')
    """
    directory = Path(directory)
    if not names or not directory.is_dir():
        return None

    for root, dirs, files in os.walk(directory):
        dirs.sort()
        present = set(files)
        for name in names:
            if name in present:
                candidate = Path(root) / name
                if candidate.is_file():
                    return candidate

    return None


def executable_names(name: str, platform: Optional[PlatformInfo] = None) -> List[str]:
    """
    Get the file names an executable may have on a platform.

    On Windows, '.exe' and '.bat' variants are used unless the name already
    carries one of those suffixes. Elsewhere the bare name is used.

    Example:
        >>> executable_names('php', PlatformInfo('windows', 'x86_64'))
        ['php.exe', 'php.bat']
    """
    platform = platform or detect_platform()
    if platform.is_windows and not name.lower().endswith(WINDOWS_SUFFIXES):
        return [f"{name}{suffix}" for suffix in WINDOWS_SUFFIXES]
    return [name]


def search_bin_on_path(
    name: str, platform: Optional[PlatformInfo] = None
) -> Optional[Path]:
    """
    Find an executable in the directories of the PATH environment variable.

    Args:
        name: Base name of the executable (e.g., 'php')
        platform: Platform information (auto-detected if None)

    Returns:
        Path of the first match in PATH order, or None if nothing matched or
        PATH is not set
    """
    path_env = os.environ.get("PATH")
    if not path_env:
        logger.debug("PATH is not set; skipping system path search")
        return None

    names = executable_names(name, platform)
    for entry in path_env.split(os.pathsep):
        if not entry:
            continue
        directory = Path(entry)
        if not directory.is_dir():
            continue
        found = search_bin_in(directory, *names)
        if found is not None:
            logger.debug(f"Found {name} on PATH: {found}")
            return found

    logger.debug(f"{name} not found on PATH")
    return None


__all__ = [
    "WINDOWS_SUFFIXES",
    "search_bin_in",
    "executable_names",
    "search_bin_on_path",
]
