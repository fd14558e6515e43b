"""
Package entry point.

Allows running: python -m location_tools geocode "New York City"
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
