"""
PHP source to AST dumps through the php-parse tool.

BinPhpParser runs ``php php-parser.phar [options] <dump flag> <file>``. Both
binaries are resolved when the parser is constructed:

PHP interpreter:
    1. the binary passed by the caller (must report PHP >= min_php_version)
    2. php-cli-8.4-<os>-<arch> already extracted in the work directory,
       if its CRC32 matches the checksum table
    3. the bundled php-cli-8.4-<os>-<arch>.zip, extracted to the work
       directory
    4. the first php on PATH that reports PHP >= min_php_version

php-parse tool:
    1. the file passed by the caller
    2. php-parser-4.19.4 already extracted in the work directory
    3. the bundled php-parser-4.19.4.zip (required)
"""

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..binary.base import DEFAULT_TIMEOUT, Argument, ExternalBinary, Option
from ..binary.resolver import (
    BinaryCandidate,
    BinaryResolver,
    bundled_attempt,
    cached_attempt,
    supplied_attempt,
    system_path_attempt,
)
from ..binary.result import BinaryResult
from ..binary.version import VERSION_FORMAT, compare_versions, is_version_at_least
from ..core.exceptions import ExternalBinaryInvalidError
from ..core.platform import PlatformInfo, detect_platform
from ..core.verification import ChecksumRegistry

logger = logging.getLogger(__name__)

PHP_CLI_VERSION = "8.4"
PHP_PARSER_VERSION = "4.19.4"
DEFAULT_MIN_PHP_VERSION = "7.1"

PHP_ENTRY_NAMES = ("php", "php.exe")
PARSER_ENTRY_NAMES = ("php-parser.phar",)


class DumpType(Enum):
    """Output format of the php-parse tool."""

    S_EXPR = "--dump"
    VAR = "--var-dump"
    JSON = "--json-dump"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "DumpType":
        """
        Look up a dump type by short name ('sexpr', 'var', 'json').

        Raises:
            ValueError: If the name is unknown
        """
        aliases = {"sexpr": cls.S_EXPR, "var": cls.VAR, "json": cls.JSON}
        try:
            return aliases[name.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown dump type: {name} (expected one of {sorted(aliases)})"
            ) from None


class BinPhpParser(ExternalBinary):
    """
    Parse PHP files into ASTs with the php-parse binary.

    Args:
        php_binary: PHP interpreter to use instead of discovering one
        parser_binary: php-parse .phar to use instead of the bundled one
        min_php_version: Minimum interpreter version (1-3 numeric parts)
        work_dir: Working directory; also holds extracted binaries
        timeout: Maximum run time of one parse, in seconds
        cache_output: Reuse the output of an identical earlier parse
        resource_dirs: Extra directories searched for bundled archives
        platform: Platform used to name bundled binaries (auto-detected)
        checksums: Checksum table (default: the embedded one)

    Raises:
        ExternalBinaryInvalidError: If a supplied binary is unusable or
            min_php_version is malformed
        ExternalBinaryNotFoundError: If no usable binary could be resolved

    Example:
        >>> parser = BinPhpParser()
        >>> parser.target = Path('index.php')
        >>> parser.dump_type = DumpType.JSON
        >>> result = parser.execute()
        >>> ast_json = result.read_text()
    """

    target = Argument("entryFile")
    dump_type = Argument("dumpType", DumpType.S_EXPR)

    do_pretty_print = Option("--pretty-print", False)
    do_resolve_names = Option("--resolve-names", False)
    do_with_column_info = Option("--with-column-info", False)
    do_with_positions = Option("--with-positions", False)
    do_with_recovery = Option("--with-recovery", False)

    def __init__(
        self,
        php_binary: Optional[Union[str, Path]] = None,
        parser_binary: Optional[Union[str, Path]] = None,
        min_php_version: str = DEFAULT_MIN_PHP_VERSION,
        work_dir: Optional[Union[str, Path]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        cache_output: bool = False,
        resource_dirs: Sequence[Union[str, Path]] = (),
        platform: Optional[PlatformInfo] = None,
        checksums: Optional[ChecksumRegistry] = None,
    ):
        super().__init__(work_dir=work_dir, timeout=timeout, cache_output=cache_output)

        if not VERSION_FORMAT.fullmatch(min_php_version or ""):
            raise ExternalBinaryInvalidError(
                "version", f"Invalid version format: {min_php_version!r}"
            )

        self.min_php_version = min_php_version
        self.platform = platform or detect_platform()
        self.checksums = checksums or ChecksumRegistry()
        self.resource_dirs = [Path(d) for d in resource_dirs]

        self.php_candidate: BinaryCandidate = self._php_resolver(php_binary).resolve()
        self.parser_candidate: BinaryCandidate = self._parser_resolver(
            parser_binary
        ).resolve()
        logger.debug(
            f"Using PHP {self.php_candidate} and php-parse {self.parser_candidate}"
        )

    @classmethod
    def from_config(cls, config, **overrides) -> "BinPhpParser":
        """
        Create a parser from a ParserKitConfig.

        Keyword overrides take precedence over the configuration values;
        None overrides are ignored.
        """
        kwargs = dict(
            php_binary=config.php.binary,
            parser_binary=config.parser.binary,
            min_php_version=config.php.min_version,
            work_dir=config.execution.work_dir,
            timeout=config.execution.timeout,
            cache_output=config.execution.cache_output,
            resource_dirs=config.resource_dirs,
        )
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)

    @property
    def php_binary_name(self) -> str:
        """File name of the bundled interpreter for this platform."""
        return f"php-cli-{PHP_CLI_VERSION}-{self.platform.os}-{self.platform.arch}"

    @property
    def parser_binary_name(self) -> str:
        return f"php-parser-{PHP_PARSER_VERSION}"

    @property
    def php_binary(self) -> Path:
        return self.php_candidate.path

    @property
    def parser_binary(self) -> Path:
        return self.parser_candidate.path

    def _is_php_valid(self, path: Path) -> bool:
        return is_version_at_least(path, self.min_php_version)

    def _php_resolver(self, php_binary) -> BinaryResolver:
        name = self.php_binary_name
        cache_path = self.work_dir / name
        expected = self.checksums.lookup(name)

        attempts = [
            supplied_attempt(
                "php",
                php_binary,
                self._is_php_valid,
                f"PHP {self.min_php_version}+ required",
            )
        ]
        if compare_versions(PHP_CLI_VERSION, self.min_php_version):
            attempts += [
                cached_attempt(cache_path, expected),
                bundled_attempt(
                    "php",
                    name,
                    cache_path,
                    PHP_ENTRY_NAMES,
                    search_dirs=self.resource_dirs,
                    expected_checksum=expected,
                ),
            ]
        else:
            logger.debug(
                f"Bundled PHP {PHP_CLI_VERSION} is below {self.min_php_version}; "
                "skipping cached and bundled interpreters"
            )
        attempts.append(system_path_attempt("php", self._is_php_valid, self.platform))

        return BinaryResolver(
            f"php{self.min_php_version}+", attempts, under="resources or system paths"
        )

    def _parser_resolver(self, parser_binary) -> BinaryResolver:
        name = self.parser_binary_name
        cache_path = self.work_dir / name
        expected = self.checksums.lookup(name)
        return BinaryResolver(
            "php-parser.phar",
            [
                supplied_attempt(
                    "php-parser", parser_binary, Path.is_file, "not a file"
                ),
                cached_attempt(cache_path, expected),
                bundled_attempt(
                    "php-parser.phar",
                    name,
                    cache_path,
                    PARSER_ENTRY_NAMES,
                    search_dirs=self.resource_dirs,
                    executable=False,
                    required=True,
                    expected_checksum=expected,
                ),
            ],
            under="resources",
        )

    def get_command_array(self) -> List[str]:
        flags = [name for name, value in self.all_options.items() if value is True]
        return [
            str(self.php_binary.absolute()),
            str(self.parser_binary.absolute()),
            *flags,
            str(self.dump_type),
            str(Path(self.target).absolute()),
        ]

    def parse_file(
        self, target: Union[str, Path], dump_type: Optional[DumpType] = None
    ) -> BinaryResult:
        """
        Parse one file without changing the parser's configuration.

        Args:
            target: PHP file to parse
            dump_type: Output format for this run (default: current dump_type)
        """

        def overrides(parser: "BinPhpParser"):
            parser.target = Path(target)
            parser.dump_type = dump_type

        return self.execute_with(overrides)


__all__ = [
    "PHP_CLI_VERSION",
    "PHP_PARSER_VERSION",
    "DEFAULT_MIN_PHP_VERSION",
    "DumpType",
    "BinPhpParser",
]
