"""Thin wrappers around subprocess execution.

Both wrappers capture up to 10 MiB per output stream by default (overridable
with ``max_buffer`` or the ``SUNDRIES_MAX_BUFFER`` environment variable) and
raise a `ProcessExecutionError` subclass on failure.
"""

from .async_exec import exec_file
from .options import ExecOptions, resolve_options
from .result import ProcessResult
from .sync_exec import exec_file_sync

__all__ = [
    "exec_file",
    "exec_file_sync",
    "ExecOptions",
    "ProcessResult",
    "resolve_options",
]
