"""Text formatting for the pltest report."""

import json
from typing import List


class ReportFormatter:
    """Render report blocks as plain text lines.

    Everything here is pure; the Reporter decides where the lines go.
    """

    def __init__(self, escape: bool = True):
        """Initialize formatter.

        Args:
            escape: Show strings in escaped form ("a\\tb\\n") instead of raw
        """
        self.escape = escape

    def quote(self, text: str) -> str:
        """Wrap text in double quotes, escaping control characters if enabled."""
        if self.escape:
            return json.dumps(text, ensure_ascii=False)
        return f'"{text}"'

    def format_header(self, total: int) -> List[str]:
        noun = "TESTS" if total > 1 else "TEST"
        return [f"RUNNING {total} {noun}:", ""]

    def format_mismatch(self, name: str, line: int, actual: str, expected: str) -> List[str]:
        """Failure block for an output that differs from the expected one."""
        lines = [f"![{line}]({name}): output does not match expected"]

        if len(actual) > len(expected):
            lines.append(
                f"output is longer than expected by {len(actual) - len(expected)} "
                f"characters - {len(actual)} vs {len(expected)}"
            )
        elif len(actual) < len(expected):
            lines.append(
                f"output is shorter than expected by {len(expected) - len(actual)} "
                f"characters - {len(actual)} vs {len(expected)}"
            )

        lines.append(f"got: {self.quote(actual)}")
        lines.append(f"expected: {self.quote(expected)}")
        lines.append("")
        return lines

    def format_error(self, name: str, line: int, error: str) -> List[str]:
        """Failure block for a test that could not be run."""
        return [f"![{line}]({name}): error: {error}", ""]

    def format_summary(self, total: int, failures: List[tuple[str, int]]) -> List[str]:
        lines = [""]
        if not failures:
            lines.append("All tests successfully completed!")
        else:
            lines.append("FAILED TESTS:")
            for name, line in failures:
                lines.append(f"{name} on line {line}")
            lines.append("")
            lines.append(
                f"Successfully completed {total - len(failures)} out of {total} tests."
            )
        lines.append("")
        return lines
