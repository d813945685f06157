"""CLI entry point for luis_async.

Usage:
    python -m luis_async "book a flight to Paris" --entity City
"""

import sys

from luis_async.cli import main

if __name__ == "__main__":
    sys.exit(main())
