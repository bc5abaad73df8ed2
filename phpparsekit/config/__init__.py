"""Configuration loading for phpparsekit."""

from .parser import (
    CONFIG_FILE_NAME,
    ConfigError,
    ExecutionConfig,
    ParserKitConfig,
    ParserToolConfig,
    PhpConfig,
    load_config,
    parse_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ExecutionConfig",
    "ParserKitConfig",
    "ParserToolConfig",
    "PhpConfig",
    "load_config",
    "parse_config",
]
