"""Allow running phpparsekit with ``python -m phpparsekit``."""

from phpparsekit.cli.parser import main

if __name__ == "__main__":
    main()
