# src/ubrowse/__init__.py
"""ubrowse: a terminal browser for the Unicode character set."""

__version__ = "1.3.0"
PROGRAM_NAME = "ubrowse"
