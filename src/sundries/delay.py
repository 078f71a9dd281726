"""Awaitable delay driven by a `Duration`."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Mapping
from typing import Any

from sundries.duration import Duration, to_milliseconds

logger = logging.getLogger(__name__)


def delay(duration: Duration | Mapping[str, Any]) -> Coroutine[Any, Any, None]:
    """Return an awaitable that completes after `duration` has elapsed.

    The duration is validated immediately, so a malformed value raises here
    rather than when the result is awaited. Waiting uses a single event-loop
    timer and only suspends the awaiting task.

    Args:
        duration: A `Seconds` / `Milliseconds` instance, or a mapping with
            exactly one of the ``seconds`` / ``milliseconds`` keys.

    Returns:
        A coroutine resolving to ``None``. There is no built-in way to abort the
        wait; race it against another awaitable if that is needed.

    Raises:
        InvalidArgumentError: If `duration` is not a well-formed duration.

    Example:
        ```py
        await delay(Seconds(1))
        print("1 second later")
        ```
    """
    milliseconds = to_milliseconds(duration)
    logger.debug("Delaying for %s ms", milliseconds)
    return asyncio.sleep(milliseconds / 1000)
