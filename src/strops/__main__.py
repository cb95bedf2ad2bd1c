"""
Entry point for running strops as a module.

Usage:
    python -m strops split "A|B|C" "|"
    python -m strops selftest
"""

import sys

from strops.cli import main

if __name__ == "__main__":
    sys.exit(main())
