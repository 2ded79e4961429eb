"""
Main entry point for running floatwm as a module.

Usage:
    python -m floatwm --windows windows.json [options] COMMAND
"""

from .cli import main

if __name__ == "__main__":
    import sys

    sys.exit(main())
