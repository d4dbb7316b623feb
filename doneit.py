#!/usr/bin/env python3
"""Thin launcher delegating to the interface layer."""

import sys

from interface.cli import main

if __name__ == "__main__":
    sys.exit(main())
