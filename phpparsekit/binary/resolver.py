"""
Binary resolution as an ordered chain of attempts.

Each attempt either produces a BinaryCandidate, returns None to let the next
attempt run, or raises to abort resolution. The first candidate wins:

    resolver = BinaryResolver("php", [
        supplied_attempt("php", user_path, validator),
        cached_attempt(cache_path, expected_crc32),
        bundled_attempt("php", "php-cli-8.4-linux-x86_64", cache_path, ["php"]),
        system_path_attempt("php", validator),
    ])
    candidate = resolver.resolve()
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Union

from ..core.exceptions import (
    ExternalBinaryInvalidError,
    ExternalBinaryNotFoundError,
)
from ..core.filesystem import (
    ArchiveExtractionError,
    FilesystemError,
    extract_file_from_zip,
    make_executable,
)
from ..core.locking import LockTimeout, extraction_lock
from ..core.platform import PlatformInfo
from ..core.resources import archive_name, open_bundled_archive
from ..core.verification import verify_crc32
from .locator import search_bin_on_path

logger = logging.getLogger(__name__)


class ResolutionSource(Enum):
    """Where a resolved binary came from."""

    SUPPLIED = "supplied"
    CACHED = "cached"
    EXTRACTED = "extracted"
    SYSTEM_PATH = "system-path"


@dataclass(frozen=True)
class BinaryCandidate:
    """A resolved, validated executable and the attempt that produced it."""

    path: Path
    source: ResolutionSource

    def __str__(self) -> str:
        return f"{self.path} ({self.source.value})"


Attempt = Callable[[], Optional[BinaryCandidate]]
Validator = Callable[[Path], bool]


class BinaryResolver:
    """
    Evaluate resolution attempts in order, stopping at the first success.

    Args:
        name: Display name of the binary, used in the not-found error
        attempts: Attempts in priority order
        under: Description of where the binary was searched for
    """

    def __init__(
        self, name: str, attempts: Iterable[Attempt], under: Optional[str] = None
    ):
        self.name = name
        self.attempts: List[Attempt] = list(attempts)
        self.under = under

    def resolve(self) -> BinaryCandidate:
        """
        Run the attempts.

        Returns:
            The first candidate produced

        Raises:
            ExternalBinaryNotFoundError: If every attempt returned None
            ExternalBinaryError: Whatever an attempt raised to abort
        """
        for attempt in self.attempts:
            candidate = attempt()
            if candidate is not None:
                logger.debug(f"Resolved {self.name}: {candidate}")
                return candidate

        raise ExternalBinaryNotFoundError(self.name, self.under)


def supplied_attempt(
    name: str,
    path: Optional[Union[str, Path]],
    validator: Validator,
    reason: str = "validation failed",
) -> Attempt:
    """
    Accept a caller-supplied binary.

    Nothing supplied lets the chain continue. A supplied binary that fails
    the validator raises immediately: an explicit wrong choice is not
    silently replaced by another binary.
    """

    def attempt() -> Optional[BinaryCandidate]:
        if path is None:
            return None
        supplied = Path(path)
        if not validator(supplied):
            raise ExternalBinaryInvalidError(f"{name} at {supplied}", reason)
        return BinaryCandidate(supplied, ResolutionSource.SUPPLIED)

    return attempt


def cached_attempt(cache_path: Path, expected_checksum: Optional[str]) -> Attempt:
    """Accept a previously extracted binary whose CRC32 matches."""

    def attempt() -> Optional[BinaryCandidate]:
        if verify_crc32(cache_path, expected_checksum):
            return BinaryCandidate(cache_path, ResolutionSource.CACHED)
        if cache_path.exists():
            logger.warning(
                f"Cached binary {cache_path} does not match its checksum; "
                "extracting it again"
            )
        return None

    return attempt


def bundled_attempt(
    name: str,
    binary_name: str,
    cache_path: Path,
    entry_names: Sequence[str],
    search_dirs: Sequence[Union[str, Path]] = (),
    executable: bool = True,
    required: bool = False,
    lock_timeout: float = 60,
    expected_checksum: Optional[str] = None,
) -> Attempt:
    """
    Extract a binary from its bundled archive into the cache.

    Args:
        name: Display name used in errors
        binary_name: Bundled archive name without the .zip extension
        cache_path: Destination of the extracted binary
        entry_names: Possible paths of the binary inside the archive
        search_dirs: Extra directories searched for the archive
        executable: Mark the extracted file executable
        required: Raise instead of continuing when no archive exists
        lock_timeout: Seconds to wait for another process extracting it
        expected_checksum: CRC32 of a complete extraction. A matching file
            found once the lock is held was extracted by another process
            and is reused
    """

    def attempt() -> Optional[BinaryCandidate]:
        try:
            with extraction_lock(cache_path.parent, binary_name, lock_timeout):
                if verify_crc32(cache_path, expected_checksum):
                    logger.debug(f"{cache_path} was extracted while waiting for the lock")
                    return BinaryCandidate(cache_path, ResolutionSource.CACHED)
                with open_bundled_archive(binary_name, search_dirs) as stream:
                    if stream is None:
                        if required:
                            raise ExternalBinaryNotFoundError(
                                archive_name(binary_name), "bundled resources"
                            )
                        return None
                    extracted = extract_file_from_zip(
                        stream, cache_path, *entry_names
                    )
                if not extracted:
                    raise ExternalBinaryNotFoundError(name, "unzip failed")
                if executable:
                    make_executable(cache_path)
        except LockTimeout as e:
            raise ExternalBinaryNotFoundError(
                name, f"extraction lock {e} not acquired"
            ) from e
        except (ArchiveExtractionError, FilesystemError, OSError) as e:
            raise ExternalBinaryNotFoundError(name, f"unzip failed: {e}") from e

        logger.info(f"Extracted {name} to {cache_path}")
        return BinaryCandidate(cache_path, ResolutionSource.EXTRACTED)

    return attempt


def system_path_attempt(
    name: str,
    validator: Validator,
    platform: Optional[PlatformInfo] = None,
) -> Attempt:
    """Accept the first executable of that name on PATH if it validates."""

    def attempt() -> Optional[BinaryCandidate]:
        found = search_bin_on_path(name, platform)
        if found is None:
            return None
        if not validator(found):
            logger.debug(f"Rejected {found}: validation failed")
            return None
        return BinaryCandidate(found, ResolutionSource.SYSTEM_PATH)

    return attempt


__all__ = [
    "ResolutionSource",
    "BinaryCandidate",
    "BinaryResolver",
    "supplied_attempt",
    "cached_attempt",
    "bundled_attempt",
    "system_path_attempt",
]
