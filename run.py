#!/usr/bin/env python3
"""Run script for Nudge."""

import sys

from nudge.main import main

if __name__ == "__main__":
    sys.exit(main())
