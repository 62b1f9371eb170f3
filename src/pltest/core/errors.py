"""Exception hierarchy for pltest.

All custom exceptions inherit from PlTestError, making it easy to catch
every harness-specific error in a single except clause.

Errors fall into two phases:
- Before execution (ConfigError, InputError, ParseError): fatal, nothing runs.
- During execution (ExecutionError): isolated to one test, the run continues.
"""

from enum import Enum


class PlTestError(Exception):
    """Base exception for all pltest errors.

    Example:
        try:
            pltest.run_file("./prog", Path("tests.txt"))
        except PlTestError as e:
            print(f"pltest error: {e}")
    """

    pass


class ConfigError(PlTestError):
    """Configuration-related errors.

    Raised when:
    - The config file is missing or cannot be read
    - YAML syntax is invalid
    - Field values are invalid (negative timeout, unknown encoding, ...)

    Examples:
        - "Configuration file not found: pltest.yaml"
        - "Invalid value for PLTEST_TIMEOUT: 'soon'"
    """

    pass


class InputError(PlTestError):
    """The test-definition file cannot be read.

    Examples:
        - "Failed to load test file using path tests/missing.txt"
    """

    pass


class ParseErrorKind(str, Enum):
    """What went wrong while parsing a test-definition file."""

    MISSING_DIRECTIVE = "missing_directive"
    UNTERMINATED_NAME = "unterminated_name"
    MISSING_COLON = "missing_colon"
    MISSING_DELIMITER = "missing_delimiter"
    UNTERMINATED_BLOCK = "unterminated_block"


class ParseError(PlTestError):
    """Malformed test-definition file.

    A parse error invalidates the whole suite: no test is executed.

    Attributes:
        kind: Category of the error
        line: 1-based line number where the problem was detected
        message: Short diagnostic
    """

    def __init__(self, kind: ParseErrorKind, line: int, message: str):
        self.kind = kind
        self.line = line
        self.message = message
        super().__init__(f"line {line}: {message}")


class ExecutionError(PlTestError):
    """Infrastructure failure while running a single test.

    Raised when:
    - The scratch file cannot be created or written
    - The command-under-test cannot be spawned or waited for
    - The command's output is not valid text
    - The command exceeds the configured timeout

    Note: The execution engine catches this and records the test as an
    error outcome; it never aborts the run.
    """

    pass
