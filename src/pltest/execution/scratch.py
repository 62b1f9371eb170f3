"""Scratch storage for test inputs.

The command-under-test reads its input from a file, so every test's input
blob is written into a scratch space first. The execution engine only needs
``write()``; the orchestrator owns the directory's lifetime.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Protocol

from ..core.errors import ExecutionError
from ..core.logging import get_logger

logger = get_logger(__name__)

SCRATCH_PREFIX = "pltest-"


class ScratchSpace(Protocol):
    """Somewhere to put a test's input so the command can read it."""

    def write(self, file_name: str, content: str) -> Path:
        """Write content under file_name, replacing any previous file.

        Returns:
            Path to hand to the command-under-test

        Raises:
            ExecutionError: If the file cannot be created or written
        """
        ...


class ScratchDirectory:
    """Scratch space backed by a directory on disk.

    Use as a context manager: the directory is set up on entry and cleaned
    up on exit unless ``keep`` is set. Without an explicit path a fresh
    temporary directory is created. A directory that already existed is
    never removed; only the files written into it are deleted.

    Example:
        >>> with ScratchDirectory() as scratch:
        ...     path = scratch.write("hello", "hello\\n")
    """

    def __init__(self, path: Path | None = None, keep: bool = False):
        self.path = Path(path) if path is not None else None
        self.keep = keep
        self._created = False
        self._owned = False
        self._written: list[Path] = []

    def __enter__(self) -> "ScratchDirectory":
        self.create()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.keep:
            self.remove()

    def create(self) -> Path:
        try:
            if self.path is None:
                self.path = Path(tempfile.mkdtemp(prefix=SCRATCH_PREFIX))
                self._owned = True
            else:
                self._owned = not self.path.exists()
                self.path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExecutionError(f"Failed to create scratch directory: {e}") from e

        self._created = True
        self._written.clear()
        logger.debug(f"Scratch directory ready at {self.path} (owned: {self._owned})")
        return self.path

    def remove(self) -> None:
        if not self._created or self.path is None:
            return

        if self._owned:
            shutil.rmtree(self.path, ignore_errors=True)
            logger.debug(f"Removed scratch directory {self.path}")
        else:
            for target in self._written:
                try:
                    target.unlink(missing_ok=True)
                except OSError as e:
                    logger.warning(f"Could not remove scratch file {target}: {e}")
            logger.debug(f"Removed {len(self._written)} scratch files from {self.path}")

        self._written.clear()
        self._created = False

    def write(self, file_name: str, content: str) -> Path:
        if not self._created or self.path is None:
            raise ExecutionError("Scratch directory has not been created")

        try:
            root = self.path.resolve()
            target = (root / file_name).resolve()
        except (OSError, ValueError) as e:
            raise ExecutionError(f"Can't create test file for '{file_name}': {e}") from e

        if target == root or root not in target.parents:
            raise ExecutionError(
                f"Can't create test file for '{file_name}': path escapes {root}"
            )

        try:
            # newline="" keeps line endings byte-for-byte
            with open(target, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except (OSError, ValueError) as e:
            raise ExecutionError(f"Can't create test file at '{target}': {e}") from e

        if target not in self._written:
            self._written.append(target)
        return target
