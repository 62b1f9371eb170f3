"""Output comparison and failure reporting.

compare() is exact: no trimming, no whitespace or line-ending normalisation.
The Reporter prints failures as they happen and the summary at the end.
"""

from typing import Optional

from rich.console import Console

from ..core.logging import get_logger
from ..core.models import TestCase
from ..display.formatter import ReportFormatter

logger = get_logger(__name__)


def compare(actual: str, expected: str) -> bool:
    """Whether the captured output equals the expected output exactly."""
    return actual == expected


def make_console(stderr: bool = False) -> Console:
    """Console that prints report text literally (no markup, emoji or wrapping)."""
    return Console(
        stderr=stderr,
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


class Reporter:
    """Prints the run report and tallies failed tests.

    Attributes:
        failures: (name, source line) of every failed test, in run order
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
        escape: bool = True,
    ):
        self.console = console or make_console()
        self.error_console = error_console or make_console(stderr=True)
        self.formatter = ReportFormatter(escape=escape)
        self.failures: list[tuple[str, int]] = []
        self.total = 0

    def _print(self, lines: list[str], console: Optional[Console] = None, style=None) -> None:
        console = console or self.console
        for line in lines:
            console.print(line, style=style)

    def _write(self, lines: list[str]) -> None:
        # Written as-is: rich would drop control characters and expand tabs
        out = self.console.file
        for line in lines:
            out.write(line + "\n")
        out.flush()

    def start(self, total: int) -> None:
        self.total = total
        self.failures.clear()
        self._print(self.formatter.format_header(total), style="bold")

    def check(self, test: TestCase, actual: str) -> bool:
        """Compare one test's output, printing a diff on mismatch."""
        if compare(actual, test.expected):
            return True

        self.failures.append((test.name, test.source_line))
        lines = self.formatter.format_mismatch(
            test.name, test.source_line, actual, test.expected
        )
        if self.formatter.escape:
            self._print(lines)
        else:
            self._write(lines)
        return False

    def error(self, test: TestCase, message: str) -> None:
        """Report an infrastructure error for one test on stderr."""
        self.failures.append((test.name, test.source_line))
        self._print(
            self.formatter.format_error(test.name, test.source_line, message),
            console=self.error_console,
            style="red",
        )

    def summary(self) -> None:
        logger.info(f"{self.total - len(self.failures)} of {self.total} tests passed")
        self._print(self.formatter.format_summary(self.total, self.failures))
