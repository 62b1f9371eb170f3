"""Recursive-descent parser for pltest test-definition files.

Each test case declares its own delimiter token:

    TEST upper case:
    ===
    hello
    ===
    HELLO
    ===

The line after the name holds the delimiter (any run of non-whitespace
characters). The input blob runs until the delimiter appears immediately
followed by a newline, and the expected blob is closed the same way. A
delimiter that is not followed by a newline is ordinary content, so blobs
may contain the token mid-line.

Example:
    >>> suite = load_suite(Path("tests/upper.txt"), command="./upper")
    >>> [t.name for t in suite.tests]
    ['upper case']
"""

from pathlib import Path

from pydantic import ValidationError

from ..core.errors import InputError, ParseError, ParseErrorKind
from ..core.logging import get_logger
from ..core.models import TestCase, TestSuite
from .cursor import Cursor

logger = get_logger(__name__)

DIRECTIVE = "TEST"
WHITESPACE = " \t\r\n"


def skip_whitespace(cursor: Cursor) -> None:
    while cursor.peek() != "" and cursor.peek() in WHITESPACE:
        cursor.advance()


def parse_tests(text: str) -> list[TestCase]:
    """Parse every test case in text, in order of appearance.

    Args:
        text: Full contents of a test-definition file

    Returns:
        List of TestCase (empty for a blank file)

    Raises:
        ParseError: On the first malformed test case
    """
    cursor = Cursor(text)
    tests: list[TestCase] = []

    skip_whitespace(cursor)
    while not cursor.at_end():
        tests.append(parse_test(cursor))
        skip_whitespace(cursor)

    logger.debug(f"Parsed {len(tests)} tests over {cursor.line} lines")
    return tests


def parse_test(cursor: Cursor) -> TestCase:
    """Parse one ``TEST name:`` directive and its two delimited blobs."""
    if not cursor.startswith(DIRECTIVE):
        found = cursor.remaining.split("\n", 1)[0]
        raise ParseError(
            ParseErrorKind.MISSING_DIRECTIVE,
            cursor.line,
            f"expected '{DIRECTIVE}' directive, found '{found[:40]}'",
        )

    source_line = cursor.line
    cursor.skip(len(DIRECTIVE))

    name = parse_name(cursor)
    skip_whitespace(cursor)
    delimiter = parse_delimiter(cursor, name)
    input_blob = parse_block(cursor, delimiter, name)
    expected_blob = parse_block(cursor, delimiter, name)

    logger.debug(f"Parsed test '{name}' (line {source_line}, delimiter '{delimiter}')")
    return TestCase(
        name=name,
        input=input_blob,
        expected=expected_blob,
        source_line=source_line,
    )


def parse_name(cursor: Cursor) -> str:
    """Read the test name up to ':' and consume the colon."""
    start = cursor.mark()
    while not cursor.at_end() and cursor.peek() not in (":", "\n"):
        cursor.advance()

    if cursor.at_end():
        raise ParseError(
            ParseErrorKind.UNTERMINATED_NAME,
            cursor.line,
            f"test name should be on the same line as the '{DIRECTIVE}' directive "
            "and end with ':'",
        )
    if cursor.peek() == "\n":
        raise ParseError(
            ParseErrorKind.MISSING_COLON,
            cursor.line,
            f"expected ':' after the test name following the '{DIRECTIVE}' directive",
        )

    name = cursor.slice_from(start).lstrip(WHITESPACE)
    cursor.advance()  # ':'
    return name


def parse_delimiter(cursor: Cursor, name: str) -> str:
    """Read the test's delimiter token: a maximal run of non-whitespace."""
    start = cursor.mark()
    while not cursor.at_end() and cursor.peek() not in WHITESPACE:
        cursor.advance()

    delimiter = cursor.slice_from(start)
    if not delimiter:
        raise ParseError(
            ParseErrorKind.MISSING_DELIMITER,
            cursor.line,
            f"expected a delimiter token after the name of test '{name}'",
        )
    return delimiter


def parse_block(cursor: Cursor, delimiter: str, name: str) -> str:
    """Read one blob closed by the delimiter followed by a newline.

    At each position whose character matches the delimiter's first character
    the full token is checked; a full match is consumed and closes the blob
    only if a newline comes next. Otherwise scanning resumes after the
    consumed characters, which stay part of the blob. The closing newline is
    left unconsumed.

    Returns:
        Blob text with leading whitespace trimmed

    Raises:
        ParseError: If the input ends before a valid close
    """
    first = delimiter[0]
    start = cursor.mark()
    start_line = cursor.line

    while not cursor.at_end():
        if cursor.peek() == first and cursor.startswith(delimiter):
            cursor.skip(len(delimiter))
            if cursor.peek() == "\n":
                blob = cursor.slice_from(start)[: -len(delimiter)]
                return blob.lstrip(WHITESPACE)
            continue
        cursor.advance()

    raise ParseError(
        ParseErrorKind.UNTERMINATED_BLOCK,
        start_line,
        f"unterminated block in test '{name}': expected '{delimiter}' "
        "followed by a newline",
    )


def parse_suite(text: str, command: str, source: Path | None = None) -> TestSuite:
    """Parse text into a TestSuite for the given command-under-test.

    Raises:
        InputError: If the command is empty
        ParseError: If the text is malformed
    """
    tests = tuple(parse_tests(text))
    try:
        return TestSuite(command=command, tests=tests, source=source)
    except ValidationError as e:
        raise InputError(f"Invalid test suite: {e}") from e


def load_suite(path: Path, command: str) -> TestSuite:
    """Read a UTF-8 test-definition file and parse it.

    Raises:
        InputError: If the file cannot be read or decoded
        ParseError: If the file is malformed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Failed to load test file using path {path}: {e}") from e

    logger.info(f"Loaded test file {path} ({len(text)} characters)")
    return parse_suite(text, command, source=path)
