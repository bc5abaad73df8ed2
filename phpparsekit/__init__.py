"""
phpparsekit - PHP source to AST dumps through the php-parse tool.

Example:
    >>> from phpparsekit import BinPhpParser, DumpType
    >>> parser = BinPhpParser()
    >>> result = parser.parse_file("index.php", DumpType.JSON)
    >>> print(result.read_text())
"""

from .core.exceptions import (
    PhpParseKitError,
    ExternalBinaryError,
    ExternalBinaryNotFoundError,
    ExternalBinaryInvalidError,
    ExternalBinaryArgumentMissingError,
)
from .binary.result import BinaryResult
from .parser.php_parser import BinPhpParser, DumpType

__version__ = "0.1.0"

__all__ = [
    "PhpParseKitError",
    "ExternalBinaryError",
    "ExternalBinaryNotFoundError",
    "ExternalBinaryInvalidError",
    "ExternalBinaryArgumentMissingError",
    "BinaryResult",
    "BinPhpParser",
    "DumpType",
]
