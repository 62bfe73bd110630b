"""
Provides missive version information.
"""

# This file is auto-generated! Do not edit!
# Use `python -m incremental.update missive` to change this file.

from incremental import Version


__version__ = Version("missive", 21, 8, 0)
__all__ = ["__version__"]
