"""
Cross-process locking for binary extraction.

Extracted binaries live in a directory under the system temporary directory
that every phpparsekit process shares. Extracting the same bundle from two
processes at once must not leave either of them with a half-written file, so
extraction happens under a file lock placed next to the binary.

Usage:
    from phpparsekit.core.locking import extraction_lock

    with extraction_lock(cache_dir, "php-cli-8.4-linux-x86_64", timeout=60):
        # re-check the cache, then extract
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as LockTimeout

logger = logging.getLogger(__name__)


def lock_path_for(lock_dir: Path, binary_name: str) -> Path:
    """
    Get the lock file path guarding one binary.

    Args:
        lock_dir: Directory holding the binary
        binary_name: File name of the binary (e.g., 'php-parser-4.19.4')

    Returns:
        Path to a dot-prefixed lock file in lock_dir
    """
    safe_name = binary_name.replace("/", "-").replace("\\", "-").replace(":", "-")
    return Path(lock_dir) / f".{safe_name}.lock"


@contextmanager
def extraction_lock(lock_dir: Path, binary_name: str, timeout: float = 60):
    """
    Acquire the extraction lock for a binary.

    Args:
        lock_dir: Directory holding the binary (created if missing)
        binary_name: File name of the binary being extracted
        timeout: Maximum wait time in seconds

    Yields:
        None

    Raises:
        LockTimeout: If the lock can't be acquired within timeout
    """
    lock_dir = Path(lock_dir)
    lock_dir.mkdir(parents=True, exist_ok=True)
    lock_path = lock_path_for(lock_dir, binary_name)
    lock = FileLock(lock_path, timeout=timeout)

    try:
        with lock:
            logger.debug(f"Acquired extraction lock: {lock_path}")
            yield
            logger.debug(f"Released extraction lock: {lock_path}")
    except LockTimeout as e:
        logger.error(
            f"Could not acquire extraction lock for {binary_name} after {timeout}s. "
            "Another process may be extracting this binary."
        )
        raise LockTimeout(str(lock_path)) from e


__all__ = [
    "LockTimeout",
    "lock_path_for",
    "extraction_lock",
]
