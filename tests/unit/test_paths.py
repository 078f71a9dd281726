"""Unit tests for `sundries.paths`.

All cases pin the path flavour so they behave the same on every platform.
"""

from __future__ import annotations

import ntpath
import posixpath
from pathlib import PurePosixPath, PureWindowsPath
from urllib.parse import urlparse, urlsplit

import pytest

from sundries.errors import InvalidArgumentError, PathConversionError
from sundries.paths import native_flavour, path_module, root_directory, to_path

# pylint: disable=magic-value-comparison

# ---------------------------------------------------------------------------
# to_path
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("parse", [urlsplit, urlparse])
@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("file:///tmp/x", "/tmp/x"),
        ("file://localhost/tmp/x", "/tmp/x"),
        ("file:///tmp/with%20space", "/tmp/with space"),
        ("file:///tmp/%E2%82%AC", "/tmp/€"),
        ("FILE:///etc/hosts", "/etc/hosts"),
        ("file://", "/"),
        ("file:tmp/x", "/tmp/x"),
        ("file:///a/../b", "/b"),
        ("file:///a/./b/.", "/a/b/"),
        ("file:///a/%2e%2E/b", "/b"),
        ("file:///../../etc", "/etc"),
        ("file:///tmp/x/", "/tmp/x/"),
    ],
)
def test_file_url_to_posix_path(parse, url, expected):
    """file: URLs convert to decoded absolute POSIX paths."""
    assert to_path(parse(url), flavour="posix") == expected


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("file:///C:/Users/x", "C:\\Users\\x"),
        ("file:///c:/a%20b/c", "c:\\a b\\c"),
        ("file://server/share/dir", "\\\\server\\share\\dir"),
        ("file://localhost/C:/x", "C:\\x"),
        ("file://LOCALHOST/C:/x", "C:\\x"),
        ("file:///C:/a/../../b", "C:\\b"),
        ("file:C:/x", "C:\\x"),
    ],
)
def test_file_url_to_windows_path(url, expected):
    """Drive-letter URLs become drive paths; a remote host becomes a UNC path."""
    assert to_path(urlsplit(url), flavour="windows") == expected


def test_undecodable_posix_bytes_are_preserved():
    """Non-UTF-8 escapes survive as surrogates instead of collapsing to U+FFFD."""
    ff = to_path(urlsplit("file:///tmp/%FF"), flavour="posix")
    fe = to_path(urlsplit("file:///tmp/%FE"), flavour="posix")
    assert ff == "/tmp/\udcff"
    assert ff != fe
    assert "�" not in ff
    assert ff.encode("utf-8", "surrogateescape") == b"/tmp/\xff"


@pytest.mark.parametrize(
    ("url", "flavour", "reason"),
    [
        ("http://example.com/x", "posix", "scheme file"),
        ("https:///x", "windows", "scheme file"),
        ("file://example.com/tmp/x", "posix", "host must be empty"),
        ("file:///tmp/a%2Fb", "posix", "encoded /"),
        ("file:///tmp/a%2fb", "posix", "encoded /"),
        ("file:///C:/a%5Cb", "windows", "encoded"),
        ("file:///tmp/x", "windows", "must be absolute"),
        ("file:///", "windows", "must be absolute"),
        ("file:///C:/%FF", "windows", "UTF-8"),
    ],
)
def test_malformed_file_url_raises(url, flavour, reason):
    """Invalid file: URLs raise PathConversionError carrying the URL."""
    with pytest.raises(PathConversionError, match=reason) as exc_info:
        to_path(urlsplit(url), flavour=flavour)
    assert exc_info.value.url == urlsplit(url).geturl()


@pytest.mark.parametrize(
    "value", ["/tmp/x", "relative/x", "", "file:///not/converted", "C:\\x"]
)
def test_strings_are_returned_unchanged(value):
    """Plain strings are never parsed or validated."""
    assert to_path(value) == value
    assert to_path(value, flavour="windows") == value


@pytest.mark.parametrize(
    "value", [PurePosixPath("/tmp/x"), PureWindowsPath("C:/tmp/x")]
)
def test_path_like_objects_use_fspath(value):
    """os.PathLike inputs are converted with os.fspath."""
    assert to_path(value) == str(value)


@pytest.mark.parametrize("value", [None, 42, b"/tmp/x", ["/tmp"]])
def test_unsupported_types_raise(value):
    """Only URLs, path-like objects and strings are accepted."""
    with pytest.raises(InvalidArgumentError):
        to_path(value)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# root_directory
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/a/b/c", "/"),
        ("/", "/"),
        ("//a/b", "/"),
        ("a/b", ""),
        ("", ""),
    ],
)
def test_root_directory_posix(path, expected):
    """Absolute POSIX paths have '/' as root; relative ones have none."""
    assert root_directory(path, flavour="posix") == expected


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("C:\\a\\b", "C:\\"),
        ("C:/a/b", "C:/"),
        ("//server/share/dir", "//server/share/"),
        ("d:\\", "d:\\"),
        ("C:relative", "C:"),
        ("\\\\server\\share\\dir", "\\\\server\\share\\"),
        ("relative\\x", ""),
    ],
)
def test_root_directory_windows(path, expected):
    """Windows roots include the drive or UNC share, separators as given."""
    assert root_directory(path, flavour="windows") == expected


def test_root_directory_accepts_urls():
    """URLs are normalized before the root is taken."""
    assert root_directory(urlsplit("file:///usr/lib"), flavour="posix") == "/"
    assert root_directory(urlsplit("file:///D:/x"), flavour="windows") == "D:\\"


def test_root_directory_native_flavour(tmp_path):
    """Without a flavour, the running platform's convention is used."""
    expected = "/" if native_flavour() == "posix" else tmp_path.anchor
    assert root_directory(str(tmp_path)) == expected


# ---------------------------------------------------------------------------
# flavour helpers
# ---------------------------------------------------------------------------


def test_path_module_selects_implementation():
    """Flavours map onto the stdlib path modules."""
    assert path_module("posix") is posixpath
    assert path_module("windows") is ntpath


def test_unknown_flavour_raises():
    """Typos in the flavour are reported, not silently ignored."""
    with pytest.raises(InvalidArgumentError, match="Unknown path flavour"):
        root_directory("/x", flavour="mac")  # type: ignore[arg-type]
