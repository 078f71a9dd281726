"""Logging setup for the sundries CLI.

The library modules only log at DEBUG through module loggers and never
configure handlers themselves. This module turns the CLI's logging options
into a `LoggingSetup` and installs it: a Rich console handler on stderr, and
optionally an in-memory "flight recorder" that writes its buffer to disk
when a WARNING arrives (or on exit, when forced).

Records are tagged with where they come from, so a console line reads
``[exec] Spawned git (pid 4242)`` rather than leaving the reader to guess
which helper produced it.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

from sundries.config import (
    MAX_BUFFER_ENV_VAR,
    InvalidMaxBufferError,
    get_default_max_buffer,
)

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

LIBRARY_LOGGER = "sundries"

# logger prefix -> tag shown in front of its records
ORIGIN_TAGS: dict[str, str] = {
    "sundries.process": "exec",
    "sundries.delay": "delay",
    "sundries.paths": "paths",
    "sundries.traversal": "paths",
}

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


def _is_within(name: str, prefix: str) -> bool:
    return name == prefix or name.startswith(prefix + ".")


def origin_tag(logger_name: str) -> str:
    """Return the bracketed tag for records of `logger_name`.

    Helper modules get their area (``"[exec]"``, ``"[delay]"``, ``"[paths]"``),
    the CLI itself gets no tag, and third-party loggers get their top-level
    package (``"asyncio.base_events"`` -> ``"[asyncio]"``).
    """
    for prefix, tag in ORIGIN_TAGS.items():
        if _is_within(logger_name, prefix):
            return f"[{tag}]"
    if _is_within(logger_name, LIBRARY_LOGGER):
        return ""
    return f"[{logger_name.split('.')[0]}]"


class OriginTagFilter(logging.Filter):
    """Set `record.origin` from the record's logger name; never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.origin = origin_tag(record.name)
        return True


@dataclass(frozen=True)
class LoggingSetup:  # pylint: disable=too-many-instance-attributes
    """Logging configuration chosen on the command line.

    Attributes:
        level: Minimum level shown on the console.
        debug: Force DEBUG on the console and show timestamps and logger names.
        color: Allow colour on the console.
        log_path: Flight-recorder destination; ``None`` disables the recorder.
        capacity: Number of records the flight recorder keeps in memory.
        force_flush: Write the flight-recorder buffer on exit even without a warning.
        logger_levels: Per-logger minimum levels, e.g. ``{"asyncio": WARNING}``.
    """

    level: int = logging.WARNING
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    capacity: int = 2000
    force_flush: bool = False
    logger_levels: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def from_counts(cls, verbose: int, quiet: int, **kwargs) -> LoggingSetup:
        """Build a setup whose console level is WARNING moved by ``-v`` / ``-q``.

        Each ``-v`` lowers the level by one step and each ``-q`` raises it,
        clamped to DEBUG..CRITICAL.
        """
        level = logging.WARNING - 10 * verbose + 10 * quiet
        return cls(level=max(logging.DEBUG, min(logging.CRITICAL, level)), **kwargs)

    @property
    def console_level(self) -> int:
        """Effective console level, DEBUG in debug mode."""
        return logging.DEBUG if self.debug else self.level

    def console_handler(self) -> RichHandler:
        """Return a RichHandler writing to stderr so stdout stays for command output."""
        color_system: ColorSystem | None = "auto" if self.color else None
        handler = RichHandler(
            level=self.console_level,
            console=Console(color_system=color_system, stderr=True),
            rich_tracebacks=True,
            show_time=False,
            show_path=self.debug,
            enable_link_path=self.debug,
        )
        fmt = (
            "%(asctime)s %(origin)s %(name)s: %(message)s"
            if self.debug
            else "%(origin)s %(message)s"
        )
        handler.setFormatter(logging.Formatter(fmt=fmt))
        handler.addFilter(OriginTagFilter())
        return handler

    def flight_recorder(self) -> MemoryHandler | None:
        """Return the flight recorder, or None when it is disabled.

        It buffers up to `capacity` records at DEBUG granularity and writes
        them to `log_path` when a WARNING arrives. The file is only created
        on the first write.
        """
        if self.log_path is None:
            return None
        target = logging.FileHandler(
            self.log_path, mode="w", encoding="utf-8", delay=True
        )
        target.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s %(origin)s %(name)s:%(lineno)d "
                "[pid %(process)d] %(message)s"
            )
        )
        recorder = MemoryHandler(
            capacity=self.capacity,
            flushLevel=logging.WARNING,
            target=target,
            flushOnClose=self.force_flush,
        )
        recorder.addFilter(OriginTagFilter())
        return recorder

    def install(self) -> list[logging.Handler]:
        """Replace the root logger's handlers with this setup's handlers.

        Returns:
            The installed handlers, console first.
        """
        handlers: list[logging.Handler] = [self.console_handler()]
        if self.log_path is not None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(self.flight_recorder())  # type: ignore[arg-type]

        # root captures everything; the handlers filter
        logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
        for name, level in self.logger_levels.items():
            logging.getLogger(name).setLevel(level)
        return handlers


def log_startup(
    logger: Logger,
    setup: LoggingSetup,
    handlers: list[logging.Handler],
    *,
    app_version: str,
    command: str | None = None,
) -> None:
    """Log a one-line startup summary and DEBUG diagnostics.

    Besides the environment, the diagnostics report the default output
    buffer the process wrappers will use and whether ``SUNDRIES_MAX_BUFFER``
    set it. An invalid ``SUNDRIES_MAX_BUFFER`` is logged as a warning, which
    also flushes the flight recorder.

    Args:
        logger: Logger used to emit startup messages.
        setup: The installed logging setup.
        handlers: Handlers returned by `LoggingSetup.install`.
        app_version: Application version string to display.
        command: Name of the subcommand about to run, if any.
    """
    logger.info(
        "SUNDRIES %s%s - console=%s, flight-recorder=%s",
        app_version,
        f" ({command})" if command else "",
        logging.getLevelName(setup.console_level),
        "ON" if setup.log_path is not None else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if setup.log_path is not None:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            setup.log_path,
            setup.capacity,
            setup.force_flush,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in setup.logger_levels.items()}
        or "<none>",
    )

    try:
        max_buffer = get_default_max_buffer()
    except InvalidMaxBufferError as e:
        logger.warning("%s; process commands will fail until it is fixed", e)
        return
    source = (
        MAX_BUFFER_ENV_VAR
        if os.environ.get(MAX_BUFFER_ENV_VAR, "").strip()
        else "built-in default"
    )
    logger.debug("Default max_buffer: %d bytes (%s)", max_buffer, source)
