"""
Locate command implementation.

Shows which PHP interpreter and php-parse tool a parse would use, and how
each one was found.
"""

import logging

from phpparsekit.cli.utils import create_parser, safe_print

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the locate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger.debug(f"Arguments: {args}")

    parser = create_parser(args)

    safe_print(f"platform:  {parser.platform}")
    safe_print(f"php:       {parser.php_candidate}")
    safe_print(f"php-parse: {parser.parser_candidate}")
    safe_print(f"work dir:  {parser.work_dir}")
    return 0
