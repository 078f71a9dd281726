"""Captured output of an executed file, and the checks applied to it."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from sundries.errors import (
    InvalidArgumentError,
    OutputLimitExceededError,
    ProcessExitError,
)
from sundries.process.options import ExecOptions

CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Outcome of a successful run."""

    stdout: str | bytes
    stderr: str | bytes
    returncode: int = 0


@dataclass(slots=True)
class Capture:
    """Bytes read from one output stream, bounded by ``limit``."""

    name: str
    limit: int
    data: bytearray = field(default_factory=bytearray)
    overflowed: bool = False

    def feed(self, chunk: bytes) -> bool:
        """Append `chunk`; return False once the limit has been passed.

        Data beyond the limit is dropped so ``data`` never exceeds ``limit``.
        """
        self.data.extend(chunk)
        if len(self.data) > self.limit:
            del self.data[self.limit :]
            self.overflowed = True
        return not self.overflowed


def check_result(  # pylint: disable=too-many-arguments
    file: str,
    argv: Sequence[str],
    options: ExecOptions,
    returncode: int,
    stdout: Capture,
    stderr: Capture,
) -> ProcessResult:
    """Turn a finished run into a `ProcessResult` or the matching error.

    Raises:
        OutputLimitExceededError: If either stream passed its limit.
        ProcessExitError: If the process exited nonzero or was killed by a signal.
    """
    out = options.decode(stdout.data)
    err = options.decode(stderr.data)
    for capture in (stdout, stderr):
        if capture.overflowed:
            raise OutputLimitExceededError(
                file,
                argv,
                stream=capture.name,
                limit=capture.limit,
                returncode=returncode,
                stdout=out,
                stderr=err,
            )
    if returncode != 0:
        raise ProcessExitError(file, argv, returncode, stdout=out, stderr=err)
    return ProcessResult(stdout=out, stderr=err, returncode=returncode)


def check_argv(file: str, args: Sequence[str]) -> list[str]:
    """Validate the executable name and argument vector.

    Raises:
        InvalidArgumentError: If `file` is empty or an argument is not a string.
    """
    if not isinstance(file, str) or not file:
        raise InvalidArgumentError(f"file must be a non-empty string, got {file!r}.")
    if isinstance(args, (str, bytes)):
        raise InvalidArgumentError("args must be a sequence of strings, not a string.")
    argv = list(args)
    for arg in argv:
        if not isinstance(arg, str):
            raise InvalidArgumentError(
                f"Every argument must be a string, got {type(arg).__name__}."
            )
    return argv
