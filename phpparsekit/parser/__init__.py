"""PHP parser wrapper."""

from .php_parser import (
    DEFAULT_MIN_PHP_VERSION,
    PHP_CLI_VERSION,
    PHP_PARSER_VERSION,
    BinPhpParser,
    DumpType,
)

__all__ = [
    "DEFAULT_MIN_PHP_VERSION",
    "PHP_CLI_VERSION",
    "PHP_PARSER_VERSION",
    "BinPhpParser",
    "DumpType",
]
