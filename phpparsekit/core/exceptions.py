"""
Centralized exception hierarchy for phpparsekit.

This module defines the exceptions raised while locating, validating and
invoking external binaries, so callers can tell a missing binary from an
invalid one and from a usage error.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class PhpParseKitError(Exception):
    """Base exception for all phpparsekit errors."""

    pass


# ============================================================================
# External Binary Exceptions
# ============================================================================


class ExternalBinaryError(PhpParseKitError):
    """Base exception for external binary lifecycle errors."""

    pass


class ExternalBinaryNotFoundError(ExternalBinaryError):
    """Raised when no usable executable could be produced for a tool."""

    def __init__(self, name: str, under: Optional[str] = None):
        self.name = name
        self.under = under
        super().__init__(f"{name} does not exist under {under or 'the system'}.")


class ExternalBinaryInvalidError(ExternalBinaryError):
    """
    Raised when an executable was found but cannot be used.

    Covers a version below the required minimum, a version string that
    does not parse, or an explicitly supplied path that is not a file.
    """

    def __init__(self, name: str, reason: Optional[str] = None):
        self.name = name
        self.reason = reason
        msg = f"{name} is invalid"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ExternalBinaryArgumentMissingError(ExternalBinaryError):
    """Raised when a required argument is read before it has a value."""

    def __init__(self, arg_name: str):
        self.arg_name = arg_name
        super().__init__(f"Argument {arg_name} has not been initialized.")
