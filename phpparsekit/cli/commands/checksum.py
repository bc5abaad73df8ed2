"""
Checksum command implementation.

Prints the CRC32 digests used in the embedded checksum table.
"""

import logging

from phpparsekit.cli.utils import safe_print
from phpparsekit.core.verification import compute_crc32

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the checksum command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if every file was readable, 1 otherwise)
    """
    exit_code = 0
    for path in args.files:
        digest = compute_crc32(path)
        if digest is None:
            logger.error(f"Not a file: {path}")
            exit_code = 1
            continue
        safe_print(f"{digest}  {path}")
    return exit_code
