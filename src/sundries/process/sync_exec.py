"""Blocking execution of files, returning stdout as text."""

from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Sequence
from typing import IO, Any

from sundries.errors import ProcessSpawnError, ProcessTimeoutError
from sundries.process.options import resolve_options, sync_defaults
from sundries.process.result import CHUNK_SIZE, Capture, check_argv, check_result

logger = logging.getLogger(__name__)

_STDIO_TARGETS = {
    "pipe": subprocess.PIPE,
    "ignore": subprocess.DEVNULL,
    "inherit": None,
}


def exec_file_sync(
    file: str, args: Sequence[str] = (), **options: Any
) -> str | bytes:
    """Execute `file` with `args`, block until it exits, and return its stdout.

    Same as `subprocess.check_output` but with:

    - text output instead of bytes
    - stderr captured instead of written to the terminal
    - a 10 MiB ``max_buffer`` per stream instead of 1 MiB

    Args:
        file: The executable to run; looked up on ``PATH`` if not a path.
        args: Arguments for the execution.
        **options: Any `ExecOptions` field; each one overrides only itself.

    Returns:
        The captured stdout, or an empty value when stdout is not piped.

    Raises:
        InvalidArgumentError: For unknown or invalid options.
        ProcessSpawnError: If the executable cannot be started.
        ProcessExitError: If the process exits nonzero or is killed by a signal.
        OutputLimitExceededError: If stdout or stderr exceeds ``max_buffer``.
        ProcessTimeoutError: If ``timeout`` elapses first.

    Example:
        ```py
        print(exec_file_sync("ls", ["-l"]))
        ```
    """
    argv = check_argv(file, args)
    opts = resolve_options(sync_defaults(), options)
    stream = _STDIO_TARGETS[opts.stdio]
    if opts.input is not None:
        stdin = subprocess.PIPE
    else:
        stdin = None if opts.stdio == "inherit" else subprocess.DEVNULL

    try:
        proc = subprocess.Popen(  # pylint: disable=consider-using-with
            [file, *argv],
            stdin=stdin,
            stdout=stream,
            stderr=stream,
            cwd=opts.cwd,
            env=opts.env,
        )
    except OSError as e:
        raise ProcessSpawnError(file, argv, e) from e
    logger.debug("Spawned %s (pid %s)", file, proc.pid)

    stdout = Capture("stdout", opts.max_buffer)
    stderr = Capture("stderr", opts.max_buffer)
    workers = [
        _start(_feed, proc.stdin, opts.encoded_input()),
        _start(_drain, proc, proc.stdout, stdout),
        _start(_drain, proc, proc.stderr, stderr),
    ]

    try:
        returncode = proc.wait(timeout=opts.timeout)
    except subprocess.TimeoutExpired as e:
        proc.kill()
        returncode = proc.wait()
        _join(workers)
        logger.debug("%s timed out after %s s", file, opts.timeout)
        raise ProcessTimeoutError(
            file,
            argv,
            timeout=opts.timeout or 0,
            returncode=returncode,
            stdout=opts.decode(stdout.data),
            stderr=opts.decode(stderr.data),
        ) from e
    except BaseException:
        # e.g. KeyboardInterrupt; do not leave the child running
        proc.kill()
        proc.wait()
        raise
    _join(workers)

    logger.debug("%s exited with status %s", file, returncode)
    return check_result(file, argv, opts, returncode, stdout, stderr).stdout


def _start(target: Any, *args: Any) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()
    return thread


def _join(workers: list[threading.Thread]) -> None:
    for worker in workers:
        worker.join()


def _feed(pipe: IO[bytes] | None, data: bytes | None) -> None:
    if pipe is None:
        return
    try:
        if data:
            pipe.write(data)
    except (BrokenPipeError, ConnectionResetError):
        # the child exited or closed stdin without reading everything
        pass
    finally:
        try:
            pipe.close()
        except BrokenPipeError:
            pass


def _drain(
    proc: subprocess.Popen[bytes], pipe: IO[bytes] | None, capture: Capture
) -> None:
    if pipe is None:
        return
    with pipe:
        while chunk := pipe.read1(CHUNK_SIZE):  # type: ignore[attr-defined]
            if not capture.feed(chunk):
                logger.debug(
                    "%s exceeded %s bytes; killing", capture.name, capture.limit
                )
                proc.kill()
                return
