"""Configuration utilities for sundries.

This module centralizes the constants and environment lookups the process
wrappers use to fill in their defaults.
"""

import os

from sundries.errors import SundriesError

TEN_MEGABYTES_IN_BYTES = 10 * 1024 * 1024
DEFAULT_PLATFORM_MAX_BUFFER = 1024 * 1024
DEFAULT_ENCODING = "utf-8"

MAX_BUFFER_ENV_VAR = "SUNDRIES_MAX_BUFFER"  # pragma: no mutate


class InvalidMaxBufferError(SundriesError):
    """Raised when SUNDRIES_MAX_BUFFER is set to something other than a positive integer."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"{MAX_BUFFER_ENV_VAR} must be a positive integer number of bytes, "
            f"got {value!r}"
        )
        self.value = value


def get_default_max_buffer() -> int:
    """Get the default output buffer limit for executed files.

    Returns:
        The value of the `SUNDRIES_MAX_BUFFER` environment variable, or
        `TEN_MEGABYTES_IN_BYTES` when it is unset or empty.

    Raises:
        InvalidMaxBufferError: If `SUNDRIES_MAX_BUFFER` is not a positive integer.
    """
    if not (raw := os.environ.get(MAX_BUFFER_ENV_VAR, "").strip()):
        return TEN_MEGABYTES_IN_BYTES
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidMaxBufferError(raw) from e
    if value <= 0:
        raise InvalidMaxBufferError(raw)
    return value
