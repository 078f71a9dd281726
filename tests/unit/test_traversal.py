"""Unit tests for `sundries.traversal`."""

from __future__ import annotations

import os
from pathlib import PurePosixPath
from urllib.parse import urlsplit

import pytest

from sundries.errors import InvalidArgumentError
from sundries.traversal import PathTraversal, UpwardPath, traverse_path_up

# pylint: disable=magic-value-comparison


def test_traverses_absolute_posix_path_to_root():
    """Every ancestor is produced, from the start path down to '/'."""
    assert list(traverse_path_up("/Users/x/y/z", flavour="posix")) == [
        "/Users/x/y/z",
        "/Users/x/y",
        "/Users/x",
        "/Users",
        "/",
    ]


def test_traverses_windows_path_to_drive_root():
    """Windows traversal stops at the drive root."""
    assert list(traverse_path_up("C:\\Users\\x", flavour="windows")) == [
        "C:\\Users\\x",
        "C:\\Users",
        "C:\\",
    ]


def test_traverses_unc_path_to_share_root():
    """UNC paths stop at the share, which is their root."""
    assert list(
        traverse_path_up("\\\\server\\share\\a\\b", flavour="windows")
    ) == [
        "\\\\server\\share\\a\\b",
        "\\\\server\\share\\a",
        "\\\\server\\share\\",
    ]


def test_root_yields_only_itself():
    """A root is its own parent, so the sequence has one element."""
    assert list(traverse_path_up("/", flavour="posix")) == ["/"]


@pytest.mark.parametrize(
    ("start", "expected_first"),
    [
        ("/a/b/", "/a/b"),
        ("/a/./b", "/a/b"),
        ("/a/c/../b", "/a/b"),
        ("//a/b", "/a/b"),
        ("///a/b", "/a/b"),
    ],
)
def test_start_path_is_normalized(start, expected_first):
    """The first element is the lexically normalized start path."""
    assert next(iter(traverse_path_up(start, flavour="posix"))) == expected_first


def test_relative_start_resolves_against_cwd_argument():
    """A relative start is joined to the given cwd."""
    assert list(traverse_path_up("b/c", cwd="/a", flavour="posix")) == [
        "/a/b/c",
        "/a/b",
        "/a",
        "/",
    ]


def test_relative_start_resolves_against_process_cwd(tmp_path, monkeypatch):
    """Without cwd, the process working directory is used."""
    monkeypatch.chdir(tmp_path)
    elements = list(traverse_path_up("child"))
    assert elements[0] == os.path.join(os.getcwd(), "child")
    assert elements[1] == os.getcwd()


def test_cwd_is_read_when_iteration_starts(tmp_path, monkeypatch):
    """Each new iteration resolves against the cwd current at that time."""
    (tmp_path / "one").mkdir()
    (tmp_path / "two").mkdir()
    view = traverse_path_up("leaf")
    monkeypatch.chdir(tmp_path / "one")
    first = next(iter(view))
    monkeypatch.chdir(tmp_path / "two")
    second = next(iter(view))
    assert first != second
    assert os.path.basename(os.path.dirname(second)) == "two"


def test_accepts_file_urls():
    """URLs are converted before traversal."""
    assert list(traverse_path_up(urlsplit("file:///a/b"), flavour="posix")) == [
        "/a/b",
        "/a",
        "/",
    ]


def test_accepts_path_objects():
    """os.PathLike starts are converted with os.fspath."""
    assert list(traverse_path_up(PurePosixPath("/a/b"), flavour="posix"))[-1] == "/"


def test_independent_iterations_are_identical():
    """Iterating the same view twice yields the same elements."""
    view = traverse_path_up("/a/b/c", flavour="posix")
    assert list(view) == list(view)
    assert list(view) == list(traverse_path_up("/a/b/c", flavour="posix"))


def test_cursor_is_forward_only():
    """A single cursor is exhausted after one pass and stays exhausted."""
    cursor = iter(traverse_path_up("/a", flavour="posix"))
    assert isinstance(cursor, PathTraversal)
    assert iter(cursor) is cursor
    assert list(cursor) == ["/a", "/"]
    assert list(cursor) == []
    with pytest.raises(StopIteration):
        next(cursor)


def test_partially_consumed_cursors_do_not_affect_each_other():
    """Cursors from the same view share no state."""
    view = traverse_path_up("/a/b", flavour="posix")
    first = iter(view)
    next(first)
    second = iter(view)
    assert next(second) == "/a/b"
    assert next(first) == "/a"


def test_each_element_parent_is_next_element():
    """The parent of every element is the element after it."""
    elements = list(traverse_path_up("/x/y/z/w", flavour="posix"))
    for current, following in zip(elements, elements[1:]):
        assert PurePosixPath(current).parent == PurePosixPath(following)


def test_non_native_relative_path_requires_cwd():
    """A foreign flavour cannot borrow the process cwd."""
    foreign = "windows" if os.name != "nt" else "posix"
    with pytest.raises(InvalidArgumentError, match="A cwd is required"):
        list(traverse_path_up("relative", flavour=foreign))


def test_relative_cwd_is_rejected():
    """The base directory itself must be absolute."""
    with pytest.raises(InvalidArgumentError, match="cwd must be absolute"):
        list(traverse_path_up("x", cwd="not/absolute", flavour="posix"))


def test_view_repr_and_type():
    """The returned view is an UpwardPath with a readable repr."""
    view = traverse_path_up("/a", flavour="posix")
    assert isinstance(view, UpwardPath)
    assert repr(view) == "UpwardPath('/a')"
    assert view.resolve() == "/a"
