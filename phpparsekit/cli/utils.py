"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
from pathlib import Path

from phpparsekit.config.parser import ParserKitConfig, load_config

logger = logging.getLogger(__name__)


def load_cli_config(args) -> ParserKitConfig:
    """
    Load the configuration selected by the global CLI options.

    Args:
        args: Parsed arguments with config and project_root

    Returns:
        Configuration from --config, <project-root>/phpparsekit.yaml, or
        defaults

    Raises:
        ConfigError: If the configuration file is invalid
    """
    project_root = Path(getattr(args, "project_root", None) or Path.cwd())
    config = load_config(project_root, getattr(args, "config", None))
    logger.debug(f"Loaded configuration: {config}")
    return config


def create_parser(args, **overrides):
    """
    Build a BinPhpParser from configuration plus --php/--parser/--work-dir.

    Raises:
        ExternalBinaryError: If the binaries cannot be resolved
    """
    from phpparsekit.parser.php_parser import BinPhpParser

    config = load_cli_config(args)
    return BinPhpParser.from_config(
        config,
        php_binary=getattr(args, "php", None),
        parser_binary=getattr(args, "parser", None),
        work_dir=getattr(args, "work_dir", None),
        **overrides,
    )


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Falls back to replacing characters the console cannot encode.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        print(message.encode("ascii", errors="replace").decode("ascii"), file=file)
