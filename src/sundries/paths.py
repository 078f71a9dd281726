"""Path normalization helpers.

`to_path` turns a ``file:`` URL (or a path-like object) into a plain path
string, and `root_directory` extracts the root of a path. Both are purely
lexical and never touch the filesystem.

Path conventions follow the running platform unless a ``flavour`` of
``"posix"`` or ``"windows"`` is given explicitly.
"""

from __future__ import annotations

import ntpath
import os
import posixpath
import re
from types import ModuleType
from typing import Literal, TypeAlias
from urllib.parse import ParseResult, SplitResult, unquote

from sundries.errors import InvalidArgumentError, PathConversionError

PathFlavour: TypeAlias = Literal["posix", "windows"]
UrlLike: TypeAlias = SplitResult | ParseResult
PathInput: TypeAlias = "str | os.PathLike[str] | UrlLike"

_ENCODED_SLASH_RE = re.compile(r"%2f", re.IGNORECASE)
_ENCODED_SEPARATOR_RE = re.compile(r"%2f|%5c", re.IGNORECASE)
_SINGLE_DOT_SEGMENTS = frozenset({".", "%2e"})
_DOUBLE_DOT_SEGMENTS = frozenset({"..", ".%2e", "%2e.", "%2e%2e"})


def native_flavour() -> PathFlavour:
    """Return the path flavour of the running platform."""
    return "windows" if os.name == "nt" else "posix"


def path_module(flavour: PathFlavour | None = None) -> ModuleType:
    """Return the ``os.path`` implementation for `flavour`.

    Raises:
        InvalidArgumentError: If `flavour` is not ``"posix"``, ``"windows"`` or None.
    """
    match flavour or native_flavour():
        case "posix":
            return posixpath
        case "windows":
            return ntpath
        case other:
            raise InvalidArgumentError(
                f"Unknown path flavour {other!r}; expected 'posix' or 'windows'."
            )


def to_path(url_or_path: PathInput, *, flavour: PathFlavour | None = None) -> str:
    """Convert a ``file:`` URL or a path-like value to a filesystem path.

    Strings are returned unchanged and are not validated.

    Args:
        url_or_path: A parsed URL (``urllib.parse.urlsplit``/``urlparse``
            result), an ``os.PathLike`` or a plain string.
        flavour: Path convention to produce; defaults to the running platform.

    Returns:
        The filesystem path as a string.

    Raises:
        PathConversionError: If the URL is not a valid absolute ``file:`` URL.
        InvalidArgumentError: If `url_or_path` has an unsupported type.

    Examples:
        >>> from urllib.parse import urlsplit
        >>> to_path(urlsplit("file:///tmp/x"), flavour="posix")
        '/tmp/x'
        >>> to_path("/tmp/x")
        '/tmp/x'
    """
    if isinstance(url_or_path, str):
        return url_or_path
    if isinstance(url_or_path, (SplitResult, ParseResult)):
        windows = (flavour or native_flavour()) == "windows"
        path_module(flavour)  # reject unknown flavours early
        if windows:
            return _file_url_to_windows_path(url_or_path)
        return _file_url_to_posix_path(url_or_path)
    if isinstance(url_or_path, os.PathLike):
        path = os.fspath(url_or_path)
        if isinstance(path, str):
            return path
    raise InvalidArgumentError(
        f"Expected a URL, a path-like object or a string, "
        f"got {type(url_or_path).__name__}."
    )


def _check_file_scheme(url: UrlLike) -> None:
    if url.scheme.lower() != "file":
        raise PathConversionError(url.geturl(), "the URL must be of scheme file")


def _is_drive_letter(segment: str) -> bool:
    return (
        len(segment) == 2  # pylint: disable=magic-value-comparison
        and segment[0].isascii()
        and segment[0].isalpha()
        and segment[1] == ":"
    )


def _normalized_url_path(url: UrlLike, *, windows: bool) -> str:
    """Return the URL path made absolute, with ``.`` and ``..`` segments resolved.

    Percent-encoded dots count as dots. ``..`` never climbs above the root,
    nor above a leading drive letter on Windows.
    """
    segments = url.path.lstrip("/").split("/")
    resolved: list[str] = []
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        lowered = segment.lower()
        if lowered in _DOUBLE_DOT_SEGMENTS:
            if resolved and not (
                windows and len(resolved) == 1 and _is_drive_letter(resolved[0])
            ):
                resolved.pop()
            if last:
                resolved.append("")
        elif lowered in _SINGLE_DOT_SEGMENTS:
            if last:
                resolved.append("")
        else:
            resolved.append(segment)
    return "/" + "/".join(resolved)


def _file_url_to_posix_path(url: UrlLike) -> str:
    _check_file_scheme(url)
    if (url.hostname or "") not in ("", "localhost"):
        raise PathConversionError(
            url.geturl(), "file URL host must be empty or 'localhost'"
        )
    if _ENCODED_SLASH_RE.search(url.path):
        raise PathConversionError(
            url.geturl(), "file URL path must not include encoded / characters"
        )
    path = _normalized_url_path(url, windows=False)
    # undecodable bytes map to lone surrogates, as os.fsdecode does
    return unquote(path, errors="surrogateescape")


def _file_url_to_windows_path(url: UrlLike) -> str:
    _check_file_scheme(url)
    if _ENCODED_SEPARATOR_RE.search(url.path):
        raise PathConversionError(
            url.geturl(),
            "file URL path must not include encoded \\ or / characters",
        )
    try:
        pathname = unquote(
            _normalized_url_path(url, windows=True).replace("/", "\\"),
            errors="strict",
        )
    except UnicodeDecodeError as e:
        raise PathConversionError(
            url.geturl(), "file URL path must be percent-encoded UTF-8"
        ) from e
    hostname = url.hostname
    if hostname and hostname != "localhost":
        # UNC path, e.g. file://server/share/x -> \\server\share\x
        return f"\\\\{hostname}{pathname}"
    # pathname looks like \C:\dir\file
    if (
        len(pathname) < 3  # pylint: disable=magic-value-comparison
        or not pathname[1].isascii()
        or not pathname[1].isalpha()
        or pathname[2] != ":"
    ):
        raise PathConversionError(url.geturl(), "file URL path must be absolute")
    return pathname[1:]


def root_directory(
    path: PathInput, *, flavour: PathFlavour | None = None
) -> str:
    """Return the root directory of `path`.

    On POSIX-style paths the root of an absolute path is always ``"/"``. On
    Windows-style paths it includes the drive (``"C:\\\\"``) or the UNC share
    (``"\\\\\\\\server\\\\share\\\\"``), keeping the separator the
    caller used. Relative paths have an empty root.

    Args:
        path: The path or ``file:`` URL to inspect.
        flavour: Path convention to apply; defaults to the running platform.

    Returns:
        The root component of `path`.

    Examples:
        >>> root_directory("/Users/x/y/z", flavour="posix")
        '/'
        >>> root_directory("C:\\\\Users\\\\x", flavour="windows")
        'C:\\\\'
    """
    path_str = to_path(path, flavour=flavour)
    if path_module(flavour) is ntpath:
        # separators are kept as given: "C:/a" has root "C:/"
        drive, rest = ntpath.splitdrive(path_str)
        return drive + rest[:1] if rest[:1] in ("\\", "/") else drive
    return "/" if path_str.startswith("/") else ""
