"""pltest execution engine.

Public API:
    - execute_suite: Run every test of a suite sequentially
    - run_test: Run a single test
    - ScratchDirectory: On-disk scratch space for test inputs
    - SubprocessCommandRunner: Launches the command-under-test
"""

from .executor import execute_suite, run_test, scratch_file_name
from .runner import (
    CommandResult,
    CommandRunner,
    CommandStatus,
    SubprocessCommandRunner,
)
from .scratch import ScratchDirectory, ScratchSpace

__all__ = [
    "execute_suite",
    "run_test",
    "scratch_file_name",
    "CommandResult",
    "CommandRunner",
    "CommandStatus",
    "SubprocessCommandRunner",
    "ScratchDirectory",
    "ScratchSpace",
]
