"""
CLI command implementations.

Each module exposes ``run(args) -> int`` and is imported on demand by
phpparsekit.cli.parser.CLI.
"""
