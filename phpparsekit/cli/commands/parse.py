"""
Parse command implementation.

Runs php-parse on one PHP file and prints (or saves) the AST dump.
"""

import logging
import shutil

from phpparsekit.cli.utils import create_parser, safe_print
from phpparsekit.parser.php_parser import DumpType

logger = logging.getLogger(__name__)


def _apply_options(args):
    """Build the one-off configuration applied to the parser for this run."""

    def overrides(parser):
        parser.target = args.file
        parser.dump_type = DumpType.from_name(args.dump)
        parser.do_pretty_print = args.pretty_print
        parser.do_resolve_names = args.resolve_names
        parser.do_with_column_info = args.with_column_info
        parser.do_with_positions = args.with_positions
        parser.do_with_recovery = args.with_recovery

    return overrides


def run(args) -> int:
    """
    Run the parse command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code of php-parse; 1 if the file is missing or the run timed out
    """
    logger.debug(f"Arguments: {args}")

    if not args.file.is_file():
        logger.error(f"File not found: {args.file}")
        return 1

    parser = create_parser(
        args,
        timeout=args.timeout,
        cache_output=True if args.cache else None,
    )
    result = parser.execute_with(_apply_options(args))

    if result.timed_out:
        logger.error(result.read_text().strip())
        return 1

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(result.output, args.output)
        logger.info(f"AST written to {args.output}")
    else:
        safe_print(result.read_text().rstrip("\n"))

    if not result.succeeded:
        logger.error(f"php-parse exited with code {result.code}")
    return result.code
