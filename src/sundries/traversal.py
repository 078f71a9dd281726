"""Upward traversal from a start path to its root directory.

`traverse_path_up` returns a re-iterable view: every ``iter()`` call creates a
fresh `PathTraversal` cursor, so two loops over the same view yield the same
elements. Each cursor is forward-only and holds nothing but the next path to
produce.

This is pure path arithmetic; no directory is checked for existence.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from types import ModuleType

from sundries.errors import InvalidArgumentError
from sundries.paths import PathFlavour, PathInput, native_flavour, path_module, to_path


class PathTraversal(Iterator[str]):
    """Forward-only cursor over a path and its ancestors.

    Yields the start path, then each parent in turn, and stops right after the
    root (the path that is its own parent).
    """

    __slots__ = ("_current", "_pathmod")

    def __init__(self, start: str, pathmod: ModuleType) -> None:
        self._current: str | None = start
        self._pathmod = pathmod

    def __next__(self) -> str:
        if self._current is None:
            raise StopIteration
        current = self._current
        parent = self._pathmod.dirname(current)
        self._current = None if parent == current else parent
        return current

    def __repr__(self) -> str:
        return f"{type(self).__name__}(current={self._current!r})"


class UpwardPath(Iterable[str]):
    """Re-iterable view returned by `traverse_path_up`."""

    def __init__(
        self,
        start: PathInput,
        *,
        cwd: PathInput | None = None,
        flavour: PathFlavour | None = None,
    ) -> None:
        self._pathmod = path_module(flavour)
        self._flavour = flavour
        self._start = to_path(start, flavour=flavour)
        self._cwd = None if cwd is None else to_path(cwd, flavour=flavour)

    def __iter__(self) -> PathTraversal:
        return PathTraversal(self.resolve(), self._pathmod)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._start!r})"

    def resolve(self) -> str:
        """Return the absolute, normalized start path.

        Relative start paths are resolved against ``cwd`` if one was given,
        otherwise against the process working directory at call time.

        Raises:
            InvalidArgumentError: If the start path is relative and no usable
                working directory is available for the chosen flavour.
        """
        pathmod = self._pathmod
        if pathmod.isabs(self._start):
            joined = self._start
        else:
            base = self._base_directory()
            joined = pathmod.join(base, self._start)
        resolved = pathmod.normpath(joined)
        if pathmod.sep == "/" and resolved.startswith("//"):
            # POSIX allows an implementation-defined "//" root; treat it as "/"
            resolved = "/" + resolved.lstrip("/")
        return resolved

    def _base_directory(self) -> str:
        if self._cwd is None:
            if (self._flavour or native_flavour()) != native_flavour():
                raise InvalidArgumentError(
                    f"A cwd is required to resolve the relative path {self._start!r} "
                    f"with the {self._flavour} flavour on this platform."
                )
            return os.getcwd()
        if not self._pathmod.isabs(self._cwd):
            raise InvalidArgumentError(f"cwd must be absolute, got {self._cwd!r}.")
        return self._cwd


def traverse_path_up(
    start: PathInput,
    *,
    cwd: PathInput | None = None,
    flavour: PathFlavour | None = None,
) -> UpwardPath:
    """Iterate from `start` up to the root directory.

    Args:
        start: The starting path or ``file:`` URL. Can be relative.
        cwd: Base directory for a relative `start`; defaults to the process
            working directory read when iteration begins.
        flavour: Path convention to apply; defaults to the running platform.

    Returns:
        An iterable producing `start` (made absolute), each of its parents and
        finally the root directory.

    Example:
        ```py
        for directory in traverse_path_up("/Users/x/y/z"):
            print(directory)
        # /Users/x/y/z
        # /Users/x/y
        # /Users/x
        # /Users
        # /
        ```
    """
    return UpwardPath(start, cwd=cwd, flavour=flavour)
