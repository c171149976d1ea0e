"""
mzinfo Command-Line Interface
=============================

This package provides the `mzinfo` command, a Click-based tool that
prints the structural report of an MS-DOS MZ executable.
"""

__all__ = ["mzinfo"]
