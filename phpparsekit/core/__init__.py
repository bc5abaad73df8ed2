"""
Core functionality for phpparsekit.

This package contains the foundational modules that the binary wrappers
depend on: platform naming, cache directories, checksums, archive
extraction, locking and bundled resources.
"""

from .directory import (
    get_cache_root,
    get_binaries_dir,
    ensure_directory,
    DirectoryError,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    normalize_os,
    normalize_arch,
    clear_platform_cache,
)

from .verification import (
    compute_crc32,
    verify_crc32,
    ChecksumRegistry,
    ChecksumRegistryError,
)

from .filesystem import (
    extract_file_from_zip,
    make_executable,
    FilesystemError,
    ArchiveExtractionError,
)

from .locking import (
    extraction_lock,
    LockTimeout,
)

from .resources import (
    find_bundled_archive,
    open_bundled_archive,
)

from .exceptions import (
    PhpParseKitError,
    ExternalBinaryError,
    ExternalBinaryNotFoundError,
    ExternalBinaryInvalidError,
    ExternalBinaryArgumentMissingError,
)

__all__ = [
    "get_cache_root",
    "get_binaries_dir",
    "ensure_directory",
    "DirectoryError",
    "PlatformInfo",
    "detect_platform",
    "normalize_os",
    "normalize_arch",
    "clear_platform_cache",
    "compute_crc32",
    "verify_crc32",
    "ChecksumRegistry",
    "ChecksumRegistryError",
    "extract_file_from_zip",
    "make_executable",
    "FilesystemError",
    "ArchiveExtractionError",
    "extraction_lock",
    "LockTimeout",
    "find_bundled_archive",
    "open_bundled_archive",
    "PhpParseKitError",
    "ExternalBinaryError",
    "ExternalBinaryNotFoundError",
    "ExternalBinaryInvalidError",
    "ExternalBinaryArgumentMissingError",
]
