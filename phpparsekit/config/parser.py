"""YAML configuration parser for phpparsekit.

This module provides parsing and validation for phpparsekit.yaml
configuration files:

    version: 1
    php:
      binary: /usr/bin/php
      min_version: "7.1"
    parser:
      binary: ./php-parse.phar
    execution:
      timeout: 60
      cache_output: false
      work_dir: ./.phpparsekit
    resources:
      dirs: [./bundles]

Relative paths are resolved against the directory of the configuration file.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from ..binary.base import DEFAULT_TIMEOUT
from ..binary.version import VERSION_FORMAT
from ..parser.php_parser import DEFAULT_MIN_PHP_VERSION

CONFIG_FILE_NAME = "phpparsekit.yaml"


class ConfigError(Exception):
    """Configuration parsing or validation error."""

    pass


@dataclass
class PhpConfig:
    """PHP interpreter configuration."""

    binary: Optional[Path] = None  # explicit interpreter, skips discovery
    min_version: str = DEFAULT_MIN_PHP_VERSION


@dataclass
class ParserToolConfig:
    """php-parse tool configuration."""

    binary: Optional[Path] = None


@dataclass
class ExecutionConfig:
    """Process execution configuration."""

    timeout: float = DEFAULT_TIMEOUT  # seconds
    cache_output: bool = False
    work_dir: Optional[Path] = None


@dataclass
class ParserKitConfig:
    """Complete phpparsekit configuration."""

    version: int = 1
    php: PhpConfig = field(default_factory=PhpConfig)
    parser: ParserToolConfig = field(default_factory=ParserToolConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    resource_dirs: List[Path] = field(default_factory=list)


def parse_config(config_path: Path) -> ParserKitConfig:
    """
    Parse phpparsekit.yaml configuration file.

    Args:
        config_path: Path to phpparsekit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return _parse_and_validate(data, config_path.resolve().parent)


def load_config(
    project_root: Optional[Path] = None, config_path: Optional[Path] = None
) -> ParserKitConfig:
    """
    Load configuration for a project.

    An explicit config_path must exist. Otherwise <project_root>/phpparsekit.yaml
    is used when present, and defaults when it is not.

    Raises:
        ConfigError: If the configuration file is invalid
    """
    if config_path is not None:
        return parse_config(Path(config_path))

    default_path = Path(project_root or Path.cwd()) / CONFIG_FILE_NAME
    if default_path.exists():
        return parse_config(default_path)

    return ParserKitConfig()


def _parse_and_validate(data: dict, base_dir: Path) -> ParserKitConfig:
    """Parse and validate configuration data."""
    if "version" not in data:
        raise ConfigError("Missing required field: version")

    if data["version"] != 1:
        raise ConfigError(f"Unsupported version: {data['version']} (expected 1)")

    return ParserKitConfig(
        version=data["version"],
        php=_parse_php(_section(data, "php"), base_dir),
        parser=_parse_parser(_section(data, "parser"), base_dir),
        execution=_parse_execution(_section(data, "execution"), base_dir),
        resource_dirs=_parse_resources(_section(data, "resources"), base_dir),
    )


def _section(data: dict, name: str) -> dict:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")
    return value


def _path(value, field_name: str, base_dir: Path) -> Optional[Path]:
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{field_name} must be a non-empty path string")
    path = Path(value).expanduser()
    return path if path.is_absolute() else base_dir / path


def _parse_php(data: dict, base_dir: Path) -> PhpConfig:
    """Parse php section."""
    min_version = str(data.get("min_version", DEFAULT_MIN_PHP_VERSION))
    if not VERSION_FORMAT.fullmatch(min_version):
        raise ConfigError(
            f"Invalid php.min_version: {min_version} (expected e.g. 7, 7.1 or 7.1.3)"
        )

    return PhpConfig(
        binary=_path(data.get("binary"), "php.binary", base_dir),
        min_version=min_version,
    )


def _parse_parser(data: dict, base_dir: Path) -> ParserToolConfig:
    """Parse parser section."""
    return ParserToolConfig(
        binary=_path(data.get("binary"), "parser.binary", base_dir),
    )


def _parse_execution(data: dict, base_dir: Path) -> ExecutionConfig:
    """Parse execution section."""
    timeout = data.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ConfigError(f"execution.timeout must be a number, got {timeout!r}")
    if timeout <= 0:
        raise ConfigError(f"execution.timeout must be positive, got {timeout}")

    cache_output = data.get("cache_output", False)
    if not isinstance(cache_output, bool):
        raise ConfigError(
            f"execution.cache_output must be true or false, got {cache_output!r}"
        )

    return ExecutionConfig(
        timeout=float(timeout),
        cache_output=cache_output,
        work_dir=_path(data.get("work_dir"), "execution.work_dir", base_dir),
    )


def _parse_resources(data: dict, base_dir: Path) -> List[Path]:
    """Parse resources section."""
    dirs = data.get("dirs", [])
    if not isinstance(dirs, list):
        raise ConfigError("resources.dirs must be a list of directories")

    if any(d is None for d in dirs):
        raise ConfigError("resources.dirs entries must be non-empty path strings")

    return [_path(d, "resources.dirs entry", base_dir) for d in dirs]
