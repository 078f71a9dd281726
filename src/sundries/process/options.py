"""Execution options shared by the process wrappers.

`ExecOptions` field defaults are the conventional baselines (1 MiB buffer,
UTF-8, piped streams). Each wrapper layers its own defaults on top, and
caller-supplied options win field by field:

    >>> resolve_options({"max_buffer": 10 * 1024 * 1024}, {"cwd": "/tmp"}).max_buffer
    10485760
"""

from __future__ import annotations

import codecs
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Literal, TypeAlias

from sundries import config
from sundries.errors import InvalidArgumentError

StdioMode: TypeAlias = Literal["pipe", "inherit", "ignore"]
STDIO_MODES: frozenset[str] = frozenset({"pipe", "inherit", "ignore"})


@dataclass(frozen=True, slots=True)
class ExecOptions:  # pylint: disable=too-many-instance-attributes
    """Options for running an executable.

    Attributes:
        max_buffer: Largest number of bytes captured from stdout, and separately
            from stderr, before the process is killed.
        encoding: Codec used to decode captured output; ``None`` keeps bytes.
        stdio: ``"pipe"`` captures output, ``"inherit"`` shares the caller's
            streams, ``"ignore"`` discards them.
        cwd: Working directory of the child process.
        env: Complete environment of the child process; ``None`` inherits.
        timeout: Seconds before the process is killed; ``None`` waits forever.
        input: Data written to the child's stdin before it is closed.
    """

    max_buffer: int = config.DEFAULT_PLATFORM_MAX_BUFFER
    encoding: str | None = config.DEFAULT_ENCODING
    stdio: StdioMode = "pipe"
    cwd: str | os.PathLike[str] | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None
    input: str | bytes | None = None

    def __post_init__(self) -> None:
        if isinstance(self.max_buffer, bool) or not isinstance(self.max_buffer, int):
            raise InvalidArgumentError(
                f"max_buffer must be an integer, got {type(self.max_buffer).__name__}."
            )
        if self.max_buffer <= 0:
            raise InvalidArgumentError(
                f"max_buffer must be positive, got {self.max_buffer}."
            )
        if self.encoding is not None:
            try:
                codecs.lookup(self.encoding)
            except LookupError as e:
                raise InvalidArgumentError(
                    f"Unknown encoding {self.encoding!r}."
                ) from e
        if self.stdio not in STDIO_MODES:
            raise InvalidArgumentError(
                f"stdio must be one of {sorted(STDIO_MODES)}, got {self.stdio!r}."
            )
        if self.timeout is not None and not (
            math.isfinite(self.timeout) and self.timeout > 0
        ):
            raise InvalidArgumentError(
                f"timeout must be a positive number of seconds, got {self.timeout!r}."
            )
        if self.input is not None and not isinstance(self.input, (str, bytes)):
            raise InvalidArgumentError(
                f"input must be str or bytes, got {type(self.input).__name__}."
            )

    def encoded_input(self) -> bytes | None:
        """Return `input` as bytes, encoding text with `encoding` (or UTF-8)."""
        if isinstance(self.input, str):
            return self.input.encode(self.encoding or config.DEFAULT_ENCODING)
        return self.input

    def decode(self, data: bytes) -> str | bytes:
        """Decode captured output according to `encoding`."""
        if self.encoding is None:
            return bytes(data)
        return data.decode(self.encoding, errors="replace")


OPTION_NAMES: frozenset[str] = frozenset(f.name for f in fields(ExecOptions))


def async_defaults() -> dict[str, Any]:
    """Defaults applied by `exec_file`: a larger output buffer."""
    return {"max_buffer": config.get_default_max_buffer()}


def sync_defaults() -> dict[str, Any]:
    """Defaults applied by `exec_file_sync`.

    Besides the larger buffer, output is decoded as text and stderr is piped
    so it is captured instead of leaking to the caller's terminal.
    """
    return {
        "max_buffer": config.get_default_max_buffer(),
        "encoding": config.DEFAULT_ENCODING,
        "stdio": "pipe",
    }


def resolve_options(
    defaults: Mapping[str, Any], overrides: Mapping[str, Any]
) -> ExecOptions:
    """Shallow-merge `overrides` over `defaults` and build `ExecOptions`.

    Raises:
        InvalidArgumentError: If an option name is unknown or a value is invalid.
    """
    if unknown := sorted(set(overrides) - OPTION_NAMES):
        raise InvalidArgumentError(
            f"Unknown execution option(s): {', '.join(unknown)}. "
            f"Expected any of: {', '.join(sorted(OPTION_NAMES))}."
        )
    return ExecOptions(**{**defaults, **overrides})
