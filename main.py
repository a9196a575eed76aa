#!/usr/bin/env python3
"""
plistkeeper - Main entry point.

Runs the command line tool from a source checkout.
"""

import sys

from plistkeeper.main import main


if __name__ == "__main__":
    sys.exit(main())
