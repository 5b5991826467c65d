"""
Top-level package for pkgtag.

This package exposes the main CLI entry point via the
``pkgtag.cli`` module.
"""

__all__ = ["__version__"]

__version__ = "0.3.0"
