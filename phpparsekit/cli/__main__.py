"""
Entry point for running phpparsekit CLI as a module.

Usage: python -m phpparsekit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
