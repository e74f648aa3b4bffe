#!/usr/bin/env python3
"""CLI script to resolve coordinates to timezones."""
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from tzlookup.cli import main


if __name__ == "__main__":
    sys.exit(main())
