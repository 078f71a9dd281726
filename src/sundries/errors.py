"""Error definitions shared by all sundries helpers."""

from __future__ import annotations

from collections.abc import Sequence

# ============================================================================
#                              General errors
# ============================================================================


class SundriesError(Exception):
    """Base class for all sundries errors."""


class InvalidArgumentError(SundriesError, ValueError):
    """Raised when a helper receives a malformed argument."""


class PathConversionError(SundriesError, ValueError):
    """Raised when a URL cannot be converted to a filesystem path."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Cannot convert {url!r} to a path: {reason}")
        self.url = url
        self.reason = reason


# ============================================================================
#                          Process execution errors
# ============================================================================


class ProcessExecutionError(SundriesError):
    """Base class for failures of an executed file.

    Attributes:
        file: The executable that was run.
        argv: The argument vector passed to it (excluding ``file``).
        returncode: Exit status, or ``None`` if the process never exited normally.
        signal: Number of the signal that terminated the process, if any.
        stdout: Standard output captured before the failure.
        stderr: Standard error captured before the failure.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        message: str,
        *,
        file: str,
        args: Sequence[str] = (),
        returncode: int | None = None,
        stdout: str | bytes = "",
        stderr: str | bytes = "",
    ) -> None:
        super().__init__(message)
        self.file = file
        self.argv = tuple(args)
        self.returncode = returncode
        self.signal = (
            -returncode if returncode is not None and returncode < 0 else None
        )
        self.stdout = stdout
        self.stderr = stderr

    @property
    def command(self) -> str:
        """The command line as a single display string."""
        return " ".join((self.file, *self.argv))


class ProcessSpawnError(ProcessExecutionError):
    """Raised when the executable cannot be started at all."""

    def __init__(self, file: str, args: Sequence[str], cause: OSError) -> None:
        super().__init__(
            f"Failed to spawn {file!r}: {cause.strerror or cause}",
            file=file,
            args=args,
        )
        self.errno = cause.errno


class ProcessExitError(ProcessExecutionError):
    """Raised when the process exits with a nonzero status or is killed by a signal."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        file: str,
        args: Sequence[str],
        returncode: int,
        stdout: str | bytes = "",
        stderr: str | bytes = "",
    ) -> None:
        if returncode < 0:
            message = f"Command failed: {file} (killed by signal {-returncode})"
        else:
            message = f"Command failed: {file} (exit status {returncode})"
        super().__init__(
            message,
            file=file,
            args=args,
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
        )


class OutputLimitExceededError(ProcessExecutionError):
    """Raised when stdout or stderr grows past the configured ``max_buffer``."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        file: str,
        args: Sequence[str],
        stream: str,
        limit: int,
        returncode: int | None = None,
        stdout: str | bytes = "",
        stderr: str | bytes = "",
    ) -> None:
        super().__init__(
            f"{stream} of {file} exceeded max_buffer of {limit} bytes",
            file=file,
            args=args,
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
        )
        self.stream = stream
        self.limit = limit


class ProcessTimeoutError(ProcessExecutionError):
    """Raised when the process outlives the configured ``timeout``."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        file: str,
        args: Sequence[str],
        timeout: float,
        returncode: int | None = None,
        stdout: str | bytes = "",
        stderr: str | bytes = "",
    ) -> None:
        super().__init__(
            f"{file} timed out after {timeout} seconds",
            file=file,
            args=args,
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
        )
        self.timeout = timeout
