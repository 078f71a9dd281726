"""Subcommands of the ``sundries`` CLI.

Each command is a thin shell over one library helper: arguments are parsed
here, library errors are turned into Click errors, and results go to stdout.

Failure Modes
- Malformed durations, URLs or options → usage error (exit status 2).
- ``run``: a child exiting nonzero makes the command exit with the same
  status after echoing the child's stderr; other execution failures exit 1.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from urllib.parse import urlsplit

import click

from sundries.delay import delay
from sundries.duration import Milliseconds, Seconds
from sundries.errors import (
    InvalidArgumentError,
    PathConversionError,
    ProcessExecutionError,
    ProcessExitError,
)
from sundries.paths import PathInput, root_directory, to_path
from sundries.process import exec_file, exec_file_sync
from sundries.traversal import traverse_path_up

from .helpers import error

logger = logging.getLogger(__name__)

flavour_option = click.option(
    "--flavour",
    type=click.Choice(["posix", "windows"], case_sensitive=False),
    default=None,
    help="Path convention to apply (default: the running platform).",
)


def _path_argument(value: str) -> PathInput:
    """Treat ``file:`` arguments as URLs and anything else as a plain path."""
    if value.lower().startswith("file:"):
        return urlsplit(value)
    return value


@click.command()
@click.argument("path")
@flavour_option
def root(path: str, flavour: str | None) -> None:
    """Print the root directory of PATH (a path or file: URL)."""
    try:
        click.echo(root_directory(_path_argument(path), flavour=flavour))  # type: ignore[arg-type]
    except (PathConversionError, InvalidArgumentError) as e:
        raise click.BadParameter(str(e), param_hint="PATH") from e


@click.command("walk-up")
@click.argument("path", default=".")
@click.option(
    "--cwd",
    type=str,
    default=None,
    help="Base directory for a relative PATH (default: current directory).",
)
@flavour_option
def walk_up(path: str, cwd: str | None, flavour: str | None) -> None:
    """Print PATH and each of its parent directories up to the root."""
    try:
        for directory in traverse_path_up(
            _path_argument(path), cwd=cwd, flavour=flavour  # type: ignore[arg-type]
        ):
            click.echo(directory)
    except (PathConversionError, InvalidArgumentError) as e:
        raise click.BadParameter(str(e), param_hint="PATH") from e


@click.command("to-path")
@click.argument("url")
@flavour_option
def to_path_command(url: str, flavour: str | None) -> None:
    """Convert the file: URL to a filesystem path."""
    try:
        click.echo(to_path(urlsplit(url), flavour=flavour))  # type: ignore[arg-type]
    except PathConversionError as e:
        raise click.BadParameter(str(e), param_hint="URL") from e


@click.command()
@click.option(
    "--seconds", "-s", type=float, default=None, help="Duration in seconds."
)
@click.option(
    "--milliseconds", "-m", type=float, default=None, help="Duration in milliseconds."
)
def sleep(seconds: float | None, milliseconds: float | None) -> None:
    """Wait for the given duration, then exit."""
    if (seconds is None) == (milliseconds is None):
        raise click.UsageError("Pass exactly one of --seconds or --milliseconds.")
    try:
        if seconds is not None:
            pending = delay(Seconds(seconds))
        else:
            pending = delay(Milliseconds(milliseconds))  # type: ignore[arg-type]
    except InvalidArgumentError as e:
        raise click.BadParameter(str(e)) from e
    asyncio.run(pending)


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("file")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--max-buffer",
    type=click.IntRange(min=1),
    default=None,
    help="Largest number of bytes captured per stream (default: 10 MiB).",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Kill the process after this many seconds.",
)
@click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Working directory of the process.",
)
@click.option(
    "--async",
    "use_async",
    is_flag=True,
    help="Run through the asyncio wrapper and also print the captured stderr.",
)
@click.pass_context
def run(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    file: str,
    args: tuple[str, ...],
    max_buffer: int | None,
    timeout: float | None,
    cwd: Path | None,
    use_async: bool,
) -> None:
    """Run FILE with ARGS and print its standard output.

    Put ``--`` before ARGS that start with a dash.
    """
    options: dict[str, object] = {}
    if max_buffer is not None:
        options["max_buffer"] = max_buffer
    if timeout is not None:
        options["timeout"] = timeout
    if cwd is not None:
        options["cwd"] = cwd

    logger.info("Running %s", " ".join((file, *args)))
    try:
        if use_async:
            result = asyncio.run(exec_file(file, args, **options))
            click.echo(result.stdout, nl=False)
            click.echo(result.stderr, nl=False, err=True)
        else:
            click.echo(exec_file_sync(file, args, **options), nl=False)
    except ProcessExitError as e:
        click.echo(e.stderr, nl=False, err=True)
        error(str(e))
        ctx.exit(e.returncode if e.returncode and e.returncode > 0 else 1)
    except ProcessExecutionError as e:
        raise click.ClickException(str(e)) from e
