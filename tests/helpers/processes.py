"""Helpers for spawning small, portable child processes in tests.

Every child is the running interpreter with a ``-c`` snippet, so the suite
does not depend on coreutils being installed.
"""

from __future__ import annotations

import sys
from textwrap import dedent

PYTHON = sys.executable


def python_args(code: str) -> list[str]:
    """Return the argument vector that makes ``PYTHON`` run `code`."""
    return ["-c", dedent(code)]


def echo_args(stdout: str = "", stderr: str = "", exit_status: int = 0) -> list[str]:
    """Arguments for a child that writes the given text and exits with `exit_status`."""
    return python_args(
        f"""
        import sys
        sys.stdout.write({stdout!r})
        sys.stderr.write({stderr!r})
        sys.exit({exit_status})
        """
    )


def flood_args(stream: str, size: int) -> list[str]:
    """Arguments for a child that writes `size` bytes of ``x`` to `stream`."""
    return python_args(
        f"""
        import sys
        sys.{stream}.buffer.write(b"x" * {size})
        """
    )
