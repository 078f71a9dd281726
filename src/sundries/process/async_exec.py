"""Asynchronous execution of files with a larger default output buffer."""

from __future__ import annotations

import asyncio
import logging
import subprocess
from collections.abc import Sequence
from typing import Any

from sundries.errors import ProcessSpawnError, ProcessTimeoutError
from sundries.process.options import ExecOptions, async_defaults, resolve_options
from sundries.process.result import (
    CHUNK_SIZE,
    Capture,
    ProcessResult,
    check_argv,
    check_result,
)

logger = logging.getLogger(__name__)


async def exec_file(
    file: str, args: Sequence[str] = (), **options: Any
) -> ProcessResult:
    """Execute `file` with `args` and capture its output.

    Same as `asyncio.create_subprocess_exec` plus `communicate`, but with:

    - a single awaitable returning stdout, stderr and the exit status
    - a 10 MiB ``max_buffer`` per stream instead of 1 MiB
    - decoded text output by default

    Args:
        file: The executable to run; looked up on ``PATH`` if not a path.
        args: Arguments for the execution.
        **options: Any `ExecOptions` field; each one overrides only itself.

    Returns:
        The captured output and exit status.

    Raises:
        InvalidArgumentError: For unknown or invalid options.
        ProcessSpawnError: If the executable cannot be started.
        ProcessExitError: If the process exits nonzero or is killed by a signal.
        OutputLimitExceededError: If stdout or stderr exceeds ``max_buffer``.
        ProcessTimeoutError: If ``timeout`` elapses first.

    Example:
        ```py
        result = await exec_file("ls", ["-l"])
        print(result.stdout)
        ```
    """
    argv = check_argv(file, args)
    opts = resolve_options(async_defaults(), options)
    stdin, stream = _stdio_targets(opts)

    try:
        proc = await asyncio.create_subprocess_exec(
            file,
            *argv,
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
    communicate = asyncio.ensure_future(
        _communicate(proc, opts.encoded_input(), stdout, stderr)
    )
    try:
        done, _ = await asyncio.wait({communicate}, timeout=opts.timeout)
        if communicate not in done:
            # readers keep draining until the killed child closes its pipes
            _kill(proc)
            returncode = await communicate
            logger.debug("%s timed out after %s s", file, opts.timeout)
            raise ProcessTimeoutError(
                file,
                argv,
                timeout=opts.timeout or 0,
                returncode=returncode,
                stdout=opts.decode(stdout.data),
                stderr=opts.decode(stderr.data),
            )
        returncode = communicate.result()
    finally:
        # cancelled by the caller
        if not communicate.done():
            _kill(proc)
            communicate.cancel()

    logger.debug("%s exited with status %s", file, returncode)
    return check_result(file, argv, opts, returncode, stdout, stderr)


def _stdio_targets(opts: ExecOptions) -> tuple[int | None, int | None]:
    """Map the ``stdio`` mode to (stdin, stdout/stderr) spawn arguments."""
    if opts.input is not None:
        stdin: int | None = subprocess.PIPE
    elif opts.stdio == "inherit":
        stdin = None
    else:
        stdin = subprocess.DEVNULL
    match opts.stdio:
        case "pipe":
            return stdin, subprocess.PIPE
        case "ignore":
            return stdin, subprocess.DEVNULL
        case _:
            return stdin, None


async def _communicate(
    proc: asyncio.subprocess.Process,
    data: bytes | None,
    stdout: Capture,
    stderr: Capture,
) -> int:
    await asyncio.gather(
        _feed(proc, data),
        _drain(proc, proc.stdout, stdout),
        _drain(proc, proc.stderr, stderr),
    )
    return await proc.wait()


async def _feed(proc: asyncio.subprocess.Process, data: bytes | None) -> None:
    if proc.stdin is None:
        return
    try:
        if data:
            proc.stdin.write(data)
            await proc.stdin.drain()
    except (BrokenPipeError, ConnectionResetError):
        # the child exited or closed stdin without reading everything
        logger.debug("stdin of pid %s closed before all input was written", proc.pid)
    finally:
        proc.stdin.close()


async def _drain(
    proc: asyncio.subprocess.Process,
    reader: asyncio.StreamReader | None,
    capture: Capture,
) -> None:
    if reader is None:
        return
    # keep reading to EOF after an overflow so the pipe gets closed
    while chunk := await reader.read(CHUNK_SIZE):
        was_overflowed = capture.overflowed
        if not capture.feed(chunk) and not was_overflowed:
            logger.debug("%s exceeded %s bytes; killing", capture.name, capture.limit)
            _kill(proc)


def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            # already reaped
            pass
