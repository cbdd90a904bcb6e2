"""
Single source of the package version.

Hatchling reads ``__version__`` from this file when building.
"""

__version__ = "0.1.0"
