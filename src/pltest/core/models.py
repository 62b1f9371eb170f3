"""Data models for pltest.

Parsed test cases and suites are frozen: a suite is built once from a single
parse pass and consumed by one execution pass.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ============================================================================
# Parsed Models
# ============================================================================


class TestCase(BaseModel):
    """A single named test: the input fed to the command and its expected output."""

    # Not a pytest test class
    __test__: ClassVar[bool] = False

    model_config = ConfigDict(frozen=True)

    name: str
    input: str
    expected: str
    source_line: int = Field(ge=1)


class TestSuite(BaseModel):
    """Ordered test cases plus the command-under-test.

    The command always comes from the caller, never from the test file.
    """

    __test__: ClassVar[bool] = False

    model_config = ConfigDict(frozen=True)

    command: str
    tests: tuple[TestCase, ...] = ()
    source: Path | None = None

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: str) -> str:
        """Ensure a command was supplied."""
        if not v or not v.strip():
            raise ValueError("Command-under-test cannot be empty")
        return v


# ============================================================================
# Execution Models
# ============================================================================


class TestStatus(str, Enum):
    """Outcome of a single test."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"  # Output did not match
    ERROR = "error"  # Infrastructure error (scratch file, spawn, decode)


class TestOutcome(BaseModel):
    """Result of running one test case."""

    __test__: ClassVar[bool] = False

    test: TestCase
    status: TestStatus
    actual: str | None = None
    error: str | None = None
    returncode: int | None = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status == TestStatus.PASSED


class RunReport(BaseModel):
    """All outcomes of one execution pass, in declaration order."""

    command: str
    outcomes: list[TestOutcome] = Field(default_factory=list)
    started_at: datetime
    completed_at: datetime | None = None

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def passed(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failures(self) -> list[tuple[str, int]]:
        """Failing tests as (name, source line) pairs."""
        return [(o.test.name, o.test.source_line) for o in self.outcomes if not o.ok]

    @property
    def success(self) -> bool:
        return all(o.ok for o in self.outcomes)
