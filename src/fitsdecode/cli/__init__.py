"""
fitsdecode Command-Line Interface
=================================

This package provides command-line tools for fitsdecode:

- **fitsdump**: Dump, summarize and render FITS files

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["fitsdump"]
