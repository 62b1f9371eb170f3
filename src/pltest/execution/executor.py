"""Execution engine for pltest.

Runs every test of a suite against the command-under-test, one at a time in
declaration order:

1. Write the test's input into the scratch space
2. Run ``command <scratch-file>`` capturing stdout
3. Decode the output (checked) and hand it to the reporter for comparison

Infrastructure failures (scratch write, spawn, timeout, decode) are recorded
as an error outcome for that test only; the run always continues.

Example:
    >>> with ScratchDirectory() as scratch:
    ...     report = execute_suite(suite, scratch)
    >>> print(f"{report.passed} out of {report.total} passed")
"""

import time
from datetime import datetime, timezone
from typing import Callable, Optional

from ..comparison.comparator import Reporter
from ..core.errors import ExecutionError
from ..core.logging import get_logger
from ..core.models import RunReport, TestCase, TestOutcome, TestStatus, TestSuite
from .runner import CommandRunner, CommandStatus, SubprocessCommandRunner
from .scratch import ScratchSpace

logger = get_logger(__name__)

# Type alias for progress callback
ProgressCallback = Callable[[int, int, TestOutcome], None]
# Parameters: (current_index, total_tests, outcome)


def scratch_file_name(test_name: str) -> str:
    """Lowercase the name and replace every whitespace character with '_'."""
    return "".join("_" if c.isspace() else c.lower() for c in test_name)


def execute_suite(
    suite: TestSuite,
    scratch: ScratchSpace,
    runner: Optional[CommandRunner] = None,
    reporter: Optional[Reporter] = None,
    timeout: float | None = None,
    encoding: str = "utf-8",
    progress_callback: ProgressCallback | None = None,
) -> RunReport:
    """Run every test in the suite sequentially and print the report.

    Args:
        suite: Parsed suite with the command-under-test
        scratch: Where input files are written (created by the caller)
        runner: Command runner (default: SubprocessCommandRunner)
        reporter: Reporter for failures and the summary (default: stdout/stderr)
        timeout: Per-test timeout in seconds; None waits indefinitely
        encoding: Encoding of the command's standard output
        progress_callback: Optional callback after each test

    Returns:
        RunReport with one outcome per test, in declaration order
    """
    runner = runner or SubprocessCommandRunner()
    reporter = reporter or Reporter()

    total = len(suite.tests)
    logger.info(f"Running {total} tests with command '{suite.command}'")

    report = RunReport(command=suite.command, started_at=datetime.now(timezone.utc))
    reporter.start(total)

    for index, test in enumerate(suite.tests):
        outcome = run_test(
            test,
            suite.command,
            scratch,
            runner,
            reporter,
            timeout=timeout,
            encoding=encoding,
        )
        report.outcomes.append(outcome)

        if progress_callback:
            progress_callback(index + 1, total, outcome)

    report.completed_at = datetime.now(timezone.utc)
    reporter.summary()

    logger.info(f"Run complete: {report.passed} passed, {len(report.failures)} failed")
    return report


def run_test(
    test: TestCase,
    command: str,
    scratch: ScratchSpace,
    runner: CommandRunner,
    reporter: Reporter,
    timeout: float | None = None,
    encoding: str = "utf-8",
) -> TestOutcome:
    """Run a single test and report its result.

    Returns:
        TestOutcome (PASSED, FAILED on mismatch, ERROR on infrastructure failure)
    """
    start_time = time.time()
    returncode = None

    try:
        path = scratch.write(scratch_file_name(test.name), test.input)
        logger.debug(f"Running '{command} {path}' for test '{test.name}'")

        result = runner.run([command, str(path)], timeout=timeout)
        returncode = result.returncode

        if result.status == CommandStatus.TIMEOUT:
            raise ExecutionError(f"the '{command}' command {result.error}")
        if result.status != CommandStatus.COMPLETED:
            raise ExecutionError(
                f"the '{command}' command failed to run. Reason: {result.error}"
            )
        if result.returncode != 0:
            logger.info(f"Test '{test.name}': command exited with {result.returncode}")

        try:
            actual = result.stdout.decode(encoding)
        except UnicodeDecodeError as e:
            raise ExecutionError(
                f"output of the '{command}' command is not valid {encoding}: {e}"
            ) from e

    except ExecutionError as e:
        duration_ms = (time.time() - start_time) * 1000
        logger.warning(f"Test '{test.name}' (line {test.source_line}) errored: {e}")
        reporter.error(test, str(e))
        return TestOutcome(
            test=test,
            status=TestStatus.ERROR,
            error=str(e),
            returncode=returncode,
            duration_ms=duration_ms,
        )

    passed = reporter.check(test, actual)
    duration_ms = (time.time() - start_time) * 1000

    return TestOutcome(
        test=test,
        status=TestStatus.PASSED if passed else TestStatus.FAILED,
        actual=actual,
        returncode=returncode,
        duration_ms=duration_ms,
    )
