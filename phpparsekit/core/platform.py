"""
Platform detection for phpparsekit.

This module maps the raw operating system and CPU architecture strings
reported by the interpreter into the small fixed vocabulary used to name
bundled binaries and their cache files.

Vocabulary:
- OS: 'linux', 'macos', 'windows' (or 'unknown')
- Architecture: 'x86_64', 'aarch64' (or 'unknown')

Usage:
    from phpparsekit.core.platform import detect_platform

    platform_info = detect_platform()
    print(f"Platform string: {platform_info.platform_string()}")
"""

import functools
import platform
from dataclasses import dataclass

UNKNOWN = "unknown"

# Substring rules, evaluated in order. 'darwin' must be tested before 'win'.
_OS_ALIASES = (
    ("darwin", "macos"),
    ("mac", "macos"),
    ("win", "windows"),
    ("nix", "linux"),
    ("nux", "linux"),
    ("aix", "linux"),
)

_ARCH_ALIASES = (
    ("aarch64", "aarch64"),
    ("arm64", "aarch64"),
    ("x86_64", "x86_64"),
    ("amd64", "x86_64"),
)


@dataclass(frozen=True)
class PlatformInfo:
    """
    Normalized platform information.

    Attributes:
        os: Operating system ('linux', 'macos', 'windows', 'unknown')
        arch: CPU architecture ('x86_64', 'aarch64', 'unknown')
    """

    os: str
    arch: str

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x86_64', 'macos-aarch64').

        Example:
            >>> PlatformInfo('linux', 'x86_64').platform_string()
            'linux-x86_64'
        """
        return f"{self.os}-{self.arch}"

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    def __str__(self) -> str:
        return self.platform_string()


def normalize_os(raw: str) -> str:
    """
    Normalize a raw OS name.

    Args:
        raw: OS name as reported by the system (e.g., 'Linux', 'Darwin',
            'Windows 10', 'Mac OS X')

    Returns:
        'linux', 'macos', 'windows' or 'unknown'
    """
    name = (raw or "").lower()
    for needle, normalized in _OS_ALIASES:
        if needle in name:
            return normalized
    return UNKNOWN


def normalize_arch(raw: str) -> str:
    """
    Normalize a raw machine/architecture name.

    Args:
        raw: Architecture as reported by the system (e.g., 'AMD64', 'arm64')

    Returns:
        'x86_64', 'aarch64' or 'unknown'
    """
    name = (raw or "").lower()
    for needle, normalized in _ARCH_ALIASES:
        if needle in name:
            return normalized
    return UNKNOWN


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Returns:
        PlatformInfo instance with normalized OS and architecture
    """
    return PlatformInfo(
        os=normalize_os(platform.system()),
        arch=normalize_arch(platform.machine()),
    )


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    Useful for testing.
    """
    detect_platform.cache_clear()


__all__ = [
    "UNKNOWN",
    "PlatformInfo",
    "normalize_os",
    "normalize_arch",
    "detect_platform",
    "clear_platform_cache",
]
