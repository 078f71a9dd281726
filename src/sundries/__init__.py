"""SUNDRIES

A handful of small, independent helpers: an awaitable delay, ``file:`` URL to
path conversion, root directory detection, upward path traversal and
subprocess wrappers with a larger default output buffer.
"""

import logging

from .delay import delay
from .duration import Duration, Milliseconds, Seconds, to_milliseconds
from .errors import (
    InvalidArgumentError,
    OutputLimitExceededError,
    PathConversionError,
    ProcessExecutionError,
    ProcessExitError,
    ProcessSpawnError,
    ProcessTimeoutError,
    SundriesError,
)
from .paths import root_directory, to_path
from .process import ExecOptions, ProcessResult, exec_file, exec_file_sync
from .traversal import PathTraversal, traverse_path_up

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "delay",
    "Duration",
    "Milliseconds",
    "Seconds",
    "to_milliseconds",
    "to_path",
    "root_directory",
    "traverse_path_up",
    "PathTraversal",
    "exec_file",
    "exec_file_sync",
    "ExecOptions",
    "ProcessResult",
    "SundriesError",
    "InvalidArgumentError",
    "PathConversionError",
    "ProcessExecutionError",
    "ProcessSpawnError",
    "ProcessExitError",
    "OutputLimitExceededError",
    "ProcessTimeoutError",
]
__version__ = "0.1.0"
