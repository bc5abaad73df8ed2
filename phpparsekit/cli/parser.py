"""
phpparsekit CLI argument parser.

This module implements the command-line interface for phpparsekit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from phpparsekit.core.exceptions import PhpParseKitError

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("phpparsekit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Subcommand -> module exposing run(args)
COMMAND_MODULES = {
    "parse": "phpparsekit.cli.commands.parse",
    "locate": "phpparsekit.cli.commands.locate",
    "checksum": "phpparsekit.cli.commands.checksum",
}


class CLI:
    """phpparsekit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="phpparsekit",
            description="phpparsekit - PHP source to AST dumps via php-parse",
            epilog='Use "phpparsekit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"phpparsekit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./phpparsekit.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_parse_command(subparsers)
        self._add_locate_command(subparsers)
        self._add_checksum_command(subparsers)

        return parser

    def _add_binary_arguments(self, parser):
        """Add binary override options shared by several subcommands."""
        parser.add_argument(
            "--php",
            type=Path,
            metavar="PATH",
            help="PHP interpreter to use (skips discovery)",
        )
        parser.add_argument(
            "--parser",
            type=Path,
            metavar="PATH",
            help="php-parse .phar to use instead of the bundled one",
        )
        parser.add_argument(
            "--work-dir",
            type=Path,
            metavar="DIR",
            help="Working directory for extracted binaries and output",
        )

    def _add_parse_command(self, subparsers):
        """Add 'parse' subcommand."""
        parser = subparsers.add_parser(
            "parse",
            help="Parse a PHP file and print its AST",
            description="Run php-parse on a PHP file and print the AST dump",
        )
        parser.add_argument("file", type=Path, help="PHP file to parse")
        parser.add_argument(
            "--dump",
            choices=["sexpr", "var", "json"],
            default="sexpr",
            metavar="FORMAT",
            help="Dump format (sexpr|var|json) [default: sexpr]",
        )
        parser.add_argument(
            "--pretty-print", action="store_true", help="Pretty print the dump"
        )
        parser.add_argument(
            "--resolve-names", action="store_true", help="Resolve names in the AST"
        )
        parser.add_argument(
            "--with-column-info",
            action="store_true",
            help="Include column information",
        )
        parser.add_argument(
            "--with-positions", action="store_true", help="Include positions"
        )
        parser.add_argument(
            "--with-recovery",
            action="store_true",
            help="Recover from parse errors",
        )
        parser.add_argument(
            "--timeout",
            type=float,
            metavar="SECONDS",
            help="Maximum run time in seconds (default: from config, 60)",
        )
        parser.add_argument(
            "--cache",
            action="store_true",
            help="Reuse the output of an identical earlier run",
        )
        parser.add_argument(
            "--output",
            "-o",
            type=Path,
            metavar="FILE",
            help="Write the dump to FILE instead of stdout",
        )
        self._add_binary_arguments(parser)

    def _add_locate_command(self, subparsers):
        """Add 'locate' subcommand."""
        parser = subparsers.add_parser(
            "locate",
            help="Show which PHP and php-parse binaries would be used",
            description="Resolve the PHP interpreter and php-parse tool and "
            "print where each one came from",
        )
        self._add_binary_arguments(parser)

    def _add_checksum_command(self, subparsers):
        """Add 'checksum' subcommand."""
        parser = subparsers.add_parser(
            "checksum",
            help="Print CRC32 checksums of files",
            description="Print the CRC32 digest used to validate extracted binaries",
        )
        parser.add_argument("files", nargs="+", type=Path, help="Files to checksum")

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except PhpParseKitError as e:
            logger.error(str(e))
            return 1
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        module = importlib.import_module(COMMAND_MODULES[args.command])
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
