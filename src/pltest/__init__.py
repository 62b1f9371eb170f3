"""pltest - a harness for testing command-line programs against expected output.

Test cases live in a text file. Each case names itself, picks its own
delimiter token, and gives an input blob and an expected-output blob:

    TEST shout:
    ===
    hello
    ===
    HELLO
    ===

The command-under-test is run once per test as ``command <input-file>`` and
its standard output must equal the expected blob exactly.

Basic Usage:
    >>> from pathlib import Path
    >>> from pltest import run_file
    >>>
    >>> report = run_file("./shout", Path("tests/shout.txt"))
    >>> print(f"{report.passed} out of {report.total} passed")

Public API:
    Running:
        - run_file: Parse a test file and run it
        - run_suite: Run an already parsed suite
        - execute_suite: Run a suite in a caller-provided scratch space

    Parsing:
        - parse_tests, parse_suite, load_suite

    Comparison:
        - compare: Exact output comparison
        - Reporter: Prints failures and the summary

    Models:
        - TestCase, TestSuite, TestOutcome, TestStatus, RunReport

    Errors:
        - PlTestError, ConfigError, InputError, ParseError, ExecutionError
"""

from .api import run_file, run_suite
from .comparison import Reporter, compare
from .core.config import HarnessConfig, load_config
from .core.errors import (
    ConfigError,
    ExecutionError,
    InputError,
    ParseError,
    ParseErrorKind,
    PlTestError,
)
from .core.models import RunReport, TestCase, TestOutcome, TestStatus, TestSuite
from .execution import ScratchDirectory, execute_suite
from .parsing import load_suite, parse_suite, parse_tests
from .version import __version__

__all__ = [
    # Version
    "__version__",
    # Running
    "run_file",
    "run_suite",
    "execute_suite",
    "ScratchDirectory",
    # Parsing
    "parse_tests",
    "parse_suite",
    "load_suite",
    # Comparison
    "compare",
    "Reporter",
    # Config
    "HarnessConfig",
    "load_config",
    # Models
    "TestCase",
    "TestSuite",
    "TestOutcome",
    "TestStatus",
    "RunReport",
    # Errors
    "PlTestError",
    "ConfigError",
    "InputError",
    "ParseError",
    "ParseErrorKind",
    "ExecutionError",
]
