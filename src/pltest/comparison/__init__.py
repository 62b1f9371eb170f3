"""Comparison of captured output against expected output."""

from .comparator import Reporter, compare, make_console

__all__ = ["Reporter", "compare", "make_console"]
