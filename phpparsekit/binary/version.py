"""
Version validation of external executables.

A candidate executable is run with a version-query flag, the version number
is extracted from the first line of its output and compared against a
minimum requirement. Version strings are one to three dot-separated
non-negative integers; missing trailing parts count as zero.
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import List, Union

from ..core.exceptions import ExternalBinaryInvalidError

logger = logging.getLogger(__name__)

PHP_VERSION_PATTERN = r"PHP (\d+\.\d+\.\d+)"
VERSION_FORMAT = re.compile(r"[0-9]+(\.[0-9]+){0,2}")
VERSION_QUERY_TIMEOUT = 10


def detect_version(
    executable: Union[str, Path],
    version_flag: str = "-v",
    pattern: str = PHP_VERSION_PATTERN,
    timeout: float = VERSION_QUERY_TIMEOUT,
) -> str:
    """
    Extract the version reported by an executable.

    Runs ``executable version_flag`` and applies pattern to the first line
    of standard output. The first capture group is the version.

    Args:
        executable: Executable to query
        version_flag: Flag printing the version
        pattern: Regular expression with the version in group 1
        timeout: Seconds to wait before the process is killed

    Returns:
        The version string, or "" if the executable could not be run, timed
        out, printed nothing, or printed no recognizable version
    """
    try:
        process = subprocess.Popen(
            [str(executable), version_flag],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
        )
    except OSError as e:
        logger.debug(f"Failed to run {executable} {version_flag}: {e}")
        return ""

    with process:
        try:
            stdout, _ = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.debug(f"Timeout querying version of {executable}")
            process.kill()
            process.communicate()
            return ""

    lines = stdout.decode("utf-8", errors="replace").splitlines()
    if not lines:
        logger.debug(f"{executable} printed no version output")
        return ""

    match = re.search(pattern, lines[0])
    if not match:
        logger.debug(f"Could not parse version from output: {lines[0][:200]}")
        return ""

    return match.group(1)


def _version_parts(version: str) -> List[int]:
    parts = [int(part) for part in version.split(".")]
    return parts + [0] * (3 - len(parts))


def compare_versions(current: str, required: str, include_equal: bool = True) -> bool:
    """
    Check whether current is above (or equal to) required.

    Args:
        current: Detected version, e.g. '7.4.10'
        required: Minimum version, complete or partial, e.g. '7.4'
        include_equal: True for ">=", False for strictly ">"

    Returns:
        True if current satisfies the requirement

    Raises:
        ExternalBinaryInvalidError: If either string is not a version

    Example:
        >>> compare_versions('7.4.10', '7.4')
        True
        >>> compare_versions('7.4', '7.4.0', include_equal=False)
        False
    """
    if not VERSION_FORMAT.fullmatch(current or ""):
        raise ExternalBinaryInvalidError(
            "version", f"Invalid version format: {current!r}"
        )
    if not VERSION_FORMAT.fullmatch(required or ""):
        raise ExternalBinaryInvalidError(
            "version", f"Invalid version format: {required!r}"
        )

    for cur_part, req_part in zip(_version_parts(current), _version_parts(required)):
        if cur_part > req_part:
            return True
        if cur_part < req_part:
            return False

    return include_equal


def is_version_at_least(
    executable: Union[str, Path],
    min_required: str,
    include_equal: bool = True,
    version_flag: str = "-v",
    pattern: str = PHP_VERSION_PATTERN,
    timeout: float = VERSION_QUERY_TIMEOUT,
) -> bool:
    """
    Check whether an executable reports at least a minimum version.

    Raises:
        ExternalBinaryInvalidError: If the executable reports no parseable
            version, or min_required is malformed
    """
    current = detect_version(executable, version_flag, pattern, timeout)
    valid = compare_versions(current, min_required, include_equal)
    logger.debug(
        f"{executable} reports version {current}; required {min_required}: "
        f"{'ok' if valid else 'too old'}"
    )
    return valid


__all__ = [
    "PHP_VERSION_PATTERN",
    "VERSION_FORMAT",
    "VERSION_QUERY_TIMEOUT",
    "detect_version",
    "compare_versions",
    "is_version_at_least",
]
