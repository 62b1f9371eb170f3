"""Top-level orchestration for a pltest run.

run_file() is what the CLI calls and what library users should call: it
reads and parses the test file, creates the scratch directory, executes the
suite, prints the report and removes the scratch directory again.

Example:
    >>> from pathlib import Path
    >>> from pltest import run_file
    >>>
    >>> report = run_file("./upper", Path("tests/upper.txt"))
    >>> report.success
    True
"""

from pathlib import Path
from typing import Optional

from .comparison.comparator import Reporter
from .core.config import HarnessConfig
from .core.logging import get_logger
from .core.models import RunReport, TestSuite
from .execution.executor import ProgressCallback, execute_suite
from .execution.runner import CommandRunner
from .execution.scratch import ScratchDirectory
from .parsing.parser import load_suite

logger = get_logger(__name__)


def run_suite(
    suite: TestSuite,
    config: Optional[HarnessConfig] = None,
    runner: Optional[CommandRunner] = None,
    reporter: Optional[Reporter] = None,
    progress_callback: ProgressCallback | None = None,
) -> RunReport:
    """Execute an already parsed suite inside a fresh scratch directory.

    Args:
        suite: Parsed TestSuite
        config: Harness settings (default: HarnessConfig())
        runner: Command runner override, mainly for tests
        reporter: Reporter override (default: prints to stdout/stderr)
        progress_callback: Optional callback after each test

    Returns:
        RunReport for the run

    Raises:
        ExecutionError: If the scratch directory cannot be created
    """
    config = config or HarnessConfig()
    reporter = reporter or Reporter(escape=config.escape_output)

    with ScratchDirectory(config.scratch_dir, keep=config.keep_scratch) as scratch:
        report = execute_suite(
            suite,
            scratch,
            runner=runner,
            reporter=reporter,
            timeout=config.timeout,
            encoding=config.encoding,
            progress_callback=progress_callback,
        )

    if config.keep_scratch:
        logger.info(f"Kept scratch directory {scratch.path}")

    return report


def run_file(
    command: str,
    test_file: Path,
    config: Optional[HarnessConfig] = None,
    runner: Optional[CommandRunner] = None,
    reporter: Optional[Reporter] = None,
    progress_callback: ProgressCallback | None = None,
) -> RunReport:
    """Parse a test-definition file and run it against a command.

    Input and parse errors are raised before any scratch file is created or
    any test is executed.

    Args:
        command: Command-under-test, invoked as ``command <scratch-file>``
        test_file: Path to the test-definition file
        config: Harness settings (default: HarnessConfig())
        runner: Command runner override, mainly for tests
        reporter: Reporter override
        progress_callback: Optional callback after each test

    Returns:
        RunReport for the run

    Raises:
        InputError: If the test file cannot be read
        ParseError: If the test file is malformed
        ExecutionError: If the scratch directory cannot be created
    """
    suite = load_suite(Path(test_file), command)
    logger.info(f"Parsed {len(suite.tests)} tests from {test_file}")

    return run_suite(
        suite,
        config=config,
        runner=runner,
        reporter=reporter,
        progress_callback=progress_callback,
    )
