"""Command-line interface for pltest.

Usage:
    $ pltest ./upper tests/upper.txt
    $ pltest ./upper tests/upper.txt --timeout 5 --keep-scratch --scratch-dir /tmp/pltest

Exit codes:
    0 - every test passed
    1 - at least one test failed
    2 - the configuration or test file could not be read or parsed
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from .api import run_file
from .comparison.comparator import make_console
from .core.config import load_config
from .core.errors import ConfigError, ExecutionError, InputError, ParseError
from .core.logging import configure_logging
from .version import __version__

EXIT_FAILED = 1
EXIT_USAGE = 2

app = typer.Typer(
    name="pltest",
    help="pltest - run a command against delimited test cases and diff its output",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pltest {__version__}")
        raise typer.Exit()


@app.command()
def run(
    command: str = typer.Argument(
        ..., help="Command-under-test, invoked as COMMAND <input-file> for each test"
    ),
    test_file: Path = typer.Argument(..., help="Path to the test-definition file"),
    scratch_dir: Optional[Path] = typer.Option(
        None,
        "--scratch-dir",
        help="Directory for test input files (default: a fresh temporary directory)",
    ),
    keep_scratch: bool = typer.Option(
        False, "--keep-scratch", help="Leave the scratch directory in place"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Kill the command after this many seconds"
    ),
    raw: bool = typer.Option(
        False, "--raw", help="Print got/expected strings without escaping"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Run COMMAND against every test in TEST_FILE.

    Each test's input is written to a scratch file, the command is run with
    that file's path as its only argument, and its standard output must match
    the expected output exactly.

    Example:
        $ pltest ./upper tests/upper.txt
    """
    err_console = make_console(stderr=True)

    try:
        config = load_config(
            config_file,
            overrides={
                "scratch_dir": scratch_dir,
                "keep_scratch": True if keep_scratch else None,
                "timeout": timeout,
                "escape_output": False if raw else None,
            },
        )
    except ConfigError as e:
        err_console.print(f"Error: {e}", style="bold red")
        raise typer.Exit(code=EXIT_USAGE) from e

    configure_logging(logging.DEBUG if verbose else getattr(logging, config.log_level))

    try:
        report = run_file(command, test_file, config=config)
    except (InputError, ParseError, ExecutionError) as e:
        err_console.print(f"Error: {e}", style="bold red")
        raise typer.Exit(code=EXIT_USAGE) from e

    if not report.success:
        raise typer.Exit(code=EXIT_FAILED)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
