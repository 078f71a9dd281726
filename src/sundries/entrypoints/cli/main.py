"""Sundries CLI entry point.

Defines the top-level ``sundries`` command (via Click-Extra), configures
logging for the whole process, and registers the subcommands.

Currently available commands
- ``sundries root``    : print the root directory of a path.
- ``sundries walk-up`` : print a path and each of its parents up to the root.
- ``sundries to-path`` : convert a ``file:`` URL to a filesystem path.
- ``sundries sleep``   : wait for a number of seconds or milliseconds.
- ``sundries run``     : run an executable and print its output.

Examples
    $ sundries --version
    $ sundries walk-up .
    $ sundries -v run git -- status --short
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from sundries import __version__
from sundries.logging import LoggingSetup, log_startup

from .commands import root, run, sleep, to_path_command, walk_up
from .helpers import hyperlink
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """SUNDRIES command-line interface.

    Small path and process helpers from the sundries library, exposed for
    shell use: find the root of a path, walk up to it, convert file URLs,
    sleep for a duration, and run executables with a 10 MiB output buffer.
    """


EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  Docs  : " + hyperlink("https://sundries.readthedocs.io/"),
        "  Issues: " + hyperlink("https://github.com/sundries/sundries/issues"),
    ]
)

DEFAULT_LOG_PATH = Path(user_log_dir("sundries", appauthor=False)) / "latest.log"


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (enables extra developer diagnostics beyond -vvv).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to log file (overrides default flight recorder path).",
    default=DEFAULT_LOG_PATH,
    envvar="SUNDRIES_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=2000,
    hidden=True,
    envvar="SUNDRIES_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Enable the in-memory flight recorder. Keeps the last N log records at "
        "DEBUG granularity (unaffected by -v/-q) and writes them to --log-path "
        "when a WARNING/ERROR occurs, or on exit if --force-flush is set."
    ),
    default=True,
    envvar="SUNDRIES_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Force-flush the flight recorder buffer to --log-path on program exit.",
    default=False,
    envvar="SUNDRIES_FORCE_FLUSH_FLIGHT_RECORDER",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Applies to both "
        "console and flight-recorder. Repeatable (e.g. -L asyncio=INFO) or via "
        "SUNDRIES_LOGGER_LEVELS (comma/space list)."
    ),
    default=("asyncio=WARNING",),
    envvar="SUNDRIES_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def sundries(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """SUNDRIES command-line interface."""
    setup = LoggingSetup.from_counts(
        verbose_count,
        quiet_count,
        debug=debug,
        color=ctx.color is not False,  # None or True => allow color
        log_path=log_path if flight_recorder else None,
        capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    handlers = setup.install()
    log_startup(
        logger,
        setup,
        handlers,
        app_version=__version__,
        command=ctx.invoked_subcommand,
    )

    ctx.call_on_close(logging.shutdown)


sundries.add_command(root)
sundries.add_command(walk_up)
sundries.add_command(to_path_command)
sundries.add_command(sleep)
sundries.add_command(run)
