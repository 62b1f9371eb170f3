"""Centralized version information for pltest."""

# Package version - follows semantic versioning (MAJOR.MINOR.PATCH)
__version__ = "0.2.0"
