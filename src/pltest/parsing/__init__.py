"""Parsing of pltest test-definition files.

Public API:
    - parse_tests: Parse text into a list of TestCase
    - parse_suite: Parse text into a TestSuite
    - load_suite: Read and parse a test-definition file
    - Cursor: Line-counting cursor the parser is built on
"""

from .cursor import END, Cursor
from .parser import load_suite, parse_suite, parse_tests

__all__ = ["Cursor", "END", "load_suite", "parse_suite", "parse_tests"]
