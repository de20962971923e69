#!/usr/bin/env python3
# /ubrowse/main.py
"""
ubrowse Main Entry Point
========================

Runs the browser straight from a source checkout:
1) Path Setup: puts `src/` on sys.path so the `ubrowse` package is importable
   without installing it.
2) Application Run: hands over to `ubrowse.cli.start`, which loads the
   environment, configuration and logging before starting curses.
"""

import os
import sys

# --- Step 1: Set up the Python Path ---
project_root = os.path.dirname(os.path.abspath(__file__))
source_root = os.path.join(project_root, "src")
if source_root not in sys.path:
    sys.path.insert(0, source_root)

# --- Step 2: Run ---
from ubrowse.cli import start  # noqa: E402


if __name__ == "__main__":
    start()
