"""Tagval CLI - evaluate one binary operation.

Usage:
    tagval 2 + 3
    tagval '"x="' .. 42
    tagval 7 / 0 --type
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
