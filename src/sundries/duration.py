"""Durations expressed in either seconds or milliseconds.

A `Duration` is a closed sum type with exactly two variants, `Seconds` and
`Milliseconds`. Both validate their value on construction, so a `Duration`
instance always carries exactly one well-formed tag.

Examples:
    >>> to_milliseconds(Seconds(1.5))
    1500.0
    >>> to_milliseconds(Milliseconds(250))
    250
    >>> to_milliseconds({"seconds": 2})
    2000
"""

from __future__ import annotations

import abc
import math
from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Real
from typing import Any, ClassVar

from sundries.errors import InvalidArgumentError


class Duration(abc.ABC):
    """Base class of the two duration variants."""

    # Subclasses set this to the key used by the mapping form.
    tag: ClassVar[str]

    value: float

    @abc.abstractmethod
    def to_milliseconds(self) -> float:
        """Return the duration in milliseconds."""

    @staticmethod
    def coerce(duration: Duration | Mapping[str, Any]) -> Duration:
        """Return `duration` as a `Duration` variant.

        Accepts a variant instance unchanged, or a mapping holding exactly one
        of the ``seconds`` / ``milliseconds`` keys.

        Raises:
            InvalidArgumentError: If the mapping has no recognized key, more
                than one key, or the value is invalid.
        """
        if isinstance(duration, Duration):
            return duration
        if not isinstance(duration, Mapping):
            raise InvalidArgumentError(
                "Expected a Duration or a mapping with either `seconds` or "
                f"`milliseconds`, got {type(duration).__name__}."
            )
        if set(duration) == {Seconds.tag}:
            return Seconds(duration[Seconds.tag])
        if set(duration) == {Milliseconds.tag}:
            return Milliseconds(duration[Milliseconds.tag])
        raise InvalidArgumentError(
            "Expected an object with either `seconds` or `milliseconds`, "
            f"got keys {sorted(map(str, duration))}."
        )


def _check_value(tag: str, value: Any) -> None:
    # bool is a Real, but `Seconds(True)` is almost certainly a mistake
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgumentError(
            f"`{tag}` must be a real number, got {type(value).__name__}."
        )
    if not math.isfinite(value):
        raise InvalidArgumentError(f"`{tag}` must be finite, got {value!r}.")
    if value < 0:
        raise InvalidArgumentError(f"`{tag}` must not be negative, got {value!r}.")


@dataclass(frozen=True, slots=True)
class Seconds(Duration):
    """A duration measured in seconds."""

    tag: ClassVar[str] = "seconds"

    value: float

    def __post_init__(self) -> None:
        _check_value(self.tag, self.value)

    def to_milliseconds(self) -> float:
        return self.value * 1000


@dataclass(frozen=True, slots=True)
class Milliseconds(Duration):
    """A duration measured in milliseconds."""

    tag: ClassVar[str] = "milliseconds"

    value: float

    def __post_init__(self) -> None:
        _check_value(self.tag, self.value)

    def to_milliseconds(self) -> float:
        return self.value


def to_milliseconds(duration: Duration | Mapping[str, Any]) -> float:
    """Normalize `duration` to a number of milliseconds.

    Args:
        duration: A `Seconds` / `Milliseconds` instance, or a mapping with
            exactly one of the ``seconds`` / ``milliseconds`` keys.

    Returns:
        ``seconds * 1000`` for seconds, the value unchanged for milliseconds.

    Raises:
        InvalidArgumentError: If `duration` is not a well-formed duration.
    """
    return Duration.coerce(duration).to_milliseconds()
