"""Tests for the subprocess command runner and the on-disk scratch directory."""

import sys

import pytest

from pltest.core.errors import ExecutionError
from pltest.execution import CommandStatus, ScratchDirectory, SubprocessCommandRunner

PY = sys.executable

# ============================================================================
# SubprocessCommandRunner
# ============================================================================


class TestSubprocessCommandRunner:
    """Unit tests for SubprocessCommandRunner."""

    def test_run_success(self):
        runner = SubprocessCommandRunner()
        result = runner.run([PY, "-c", "print('hello')"])

        assert result.status == CommandStatus.COMPLETED
        assert result.returncode == 0
        assert result.stdout.strip() == b"hello"
        assert result.error is None

    def test_stderr_not_captured(self, capfd):
        """Test that stderr passes through instead of landing in stdout."""
        runner = SubprocessCommandRunner()
        result = runner.run(
            [PY, "-c", "import sys; sys.stderr.write('oops\\n'); print('out')"]
        )

        assert result.stdout.strip() == b"out"
        assert b"oops" not in result.stdout
        assert "oops" in capfd.readouterr().err

    def test_stdin_not_used(self):
        """Test that the command sees an empty stdin."""
        runner = SubprocessCommandRunner()
        result = runner.run([PY, "-c", "import sys; print(repr(sys.stdin.read()))"])
        assert result.stdout.strip() == b"''"

    def test_nonzero_exit(self):
        runner = SubprocessCommandRunner()
        result = runner.run([PY, "-c", "import sys; print('x'); sys.exit(4)"])

        assert result.status == CommandStatus.COMPLETED
        assert result.returncode == 4
        assert result.stdout.strip() == b"x"

    def test_run_invalid_command(self):
        runner = SubprocessCommandRunner()
        result = runner.run(["pltest_nonexistent_command_xyz"])

        assert result.status == CommandStatus.FAILED_TO_RUN
        assert result.returncode == -1
        assert result.error

    def test_run_timeout(self):
        runner = SubprocessCommandRunner()
        result = runner.run([PY, "-c", "import time; time.sleep(5)"], timeout=0.5)

        assert result.status == CommandStatus.TIMEOUT
        assert result.returncode == -1
        assert "timed out" in result.error


# ============================================================================
# ScratchDirectory
# ============================================================================


class TestScratchDirectory:
    """Tests for the on-disk scratch space."""

    def test_temporary_directory_lifecycle(self):
        """Test that a default scratch directory is created and removed."""
        with ScratchDirectory() as scratch:
            path = scratch.path
            assert path.is_dir()
            assert path.name.startswith("pltest-")

        assert not path.exists()

    def test_explicit_path(self, tmp_path):
        """Test that a configured path is created, including parents."""
        target = tmp_path / "nested" / "scratch"

        with ScratchDirectory(target) as scratch:
            assert scratch.path == target
            assert target.is_dir()

        assert not target.exists()

    def test_keep(self, tmp_path):
        """Test that keep leaves the directory and its files."""
        target = tmp_path / "kept"

        with ScratchDirectory(target, keep=True) as scratch:
            scratch.write("hello", "hello\n")

        assert (target / "hello").read_text() == "hello\n"

    def test_write_verbatim(self, tmp_path):
        """Test that content is written byte-for-byte, CRLF included."""
        with ScratchDirectory(tmp_path / "s", keep=True) as scratch:
            path = scratch.write("crlf", "a\r\nb\n")

        assert path.read_bytes() == b"a\r\nb\n"

    def test_write_overwrites(self, tmp_path):
        with ScratchDirectory(tmp_path / "s", keep=True) as scratch:
            scratch.write("same", "first\n")
            path = scratch.write("same", "second\n")

        assert path.read_text() == "second\n"

    def test_write_before_create(self, tmp_path):
        with pytest.raises(ExecutionError, match="has not been created"):
            ScratchDirectory(tmp_path / "s").write("x", "y")

    def test_write_outside_directory_rejected(self, tmp_path):
        """Test that a name cannot escape the scratch directory."""
        with ScratchDirectory(tmp_path / "s") as scratch:
            with pytest.raises(ExecutionError, match="escapes"):
                scratch.write("../outside", "x")

        assert not (tmp_path / "outside").exists()

    def test_empty_name_rejected(self, tmp_path):
        with ScratchDirectory(tmp_path / "s") as scratch:
            with pytest.raises(ExecutionError):
                scratch.write("", "x")

    def test_unwritable_name(self, tmp_path):
        """Test that a name inside a missing subdirectory is an ExecutionError."""
        with ScratchDirectory(tmp_path / "s") as scratch:
            with pytest.raises(ExecutionError, match="Can't create test file"):
                scratch.write("missing/dir", "x")

    def test_existing_directory_is_kept(self, tmp_path):
        """Test that cleanup of a pre-existing directory only removes written files."""
        target = tmp_path / "work"
        target.mkdir()
        (target / "precious.txt").write_text("keep me")

        with ScratchDirectory(target) as scratch:
            scratch.write("t", "x")
            scratch.write("t", "y")
            scratch.write("other", "z")

        assert target.is_dir()
        assert (target / "precious.txt").read_text() == "keep me"
        assert sorted(p.name for p in target.iterdir()) == ["precious.txt"]

    def test_null_byte_name(self, tmp_path):
        """Test that a name the OS cannot represent is an ExecutionError."""
        with ScratchDirectory(tmp_path / "s") as scratch:
            with pytest.raises(ExecutionError, match="Can't create test file"):
                scratch.write("a\x00b", "x")
