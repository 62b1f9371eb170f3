"""Command runners: how the command-under-test is launched."""

import dataclasses
import subprocess
from enum import Enum
from typing import Protocol

from ..core.logging import get_logger

logger = get_logger(__name__)


class CommandStatus(Enum):
    """Status of a command execution."""

    COMPLETED = "completed"
    FAILED_TO_RUN = "failed_to_run"
    TIMEOUT = "timeout"


@dataclasses.dataclass(frozen=True)
class CommandResult:
    """Result of running a command.

    Attributes:
        stdout: The captured standard output.
        returncode: The exit status, or -1 if the command did not complete.
        status: The status of the command execution.
        error: Why the command did not complete, if it did not.
    """

    stdout: bytes = b""
    returncode: int = 0
    status: CommandStatus = CommandStatus.COMPLETED
    error: str | None = None


class CommandRunner(Protocol):
    """Protocol for running a command and returning the result."""

    def run(self, command: list[str], timeout: float | None = None) -> CommandResult:
        """
        Executes a command and returns the result.

        Only standard output is captured. Standard error is inherited so the
        command's diagnostics reach the harness's own stderr.

        Args:
            command: List of command-line arguments,
                e.g., ['./upper', '/tmp/pltest-x/hello'].
            timeout: Seconds to wait before the command is killed; None waits
                indefinitely.

        Returns:
            The result of the command execution.
        """
        ...


class SubprocessCommandRunner:
    """Command runner that uses subprocess to execute commands."""

    def run(self, command: list[str], timeout: float | None = None) -> CommandResult:
        try:
            completed = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                timeout=timeout,
                check=False,
            )
            return CommandResult(
                stdout=completed.stdout,
                returncode=completed.returncode,
                status=CommandStatus.COMPLETED,
            )
        except subprocess.TimeoutExpired as e:
            logger.warning(f"Command timed out after {timeout}s: {command[0]}")
            return CommandResult(
                stdout=e.stdout or b"",
                returncode=-1,
                status=CommandStatus.TIMEOUT,
                error=f"timed out after {timeout} seconds",
            )
        except (OSError, subprocess.SubprocessError) as e:
            return CommandResult(
                returncode=-1,
                status=CommandStatus.FAILED_TO_RUN,
                error=str(e),
            )
