import os

import pytest

from duplicate_detector import DuplicateDetector, find_duplicates, summarize
from file_analyzer import InvalidRootError


def test_groups_files_by_size_only(tmp_path):
    (tmp_path / "nested" / "deeper").mkdir(parents=True)
    layout = {
        "a": 10,
        "nested/b": 10,
        "c": 20,
        "d": 30,
        "nested/e": 30,
        "nested/deeper/f": 30,
    }
    for relative, size in layout.items():
        (tmp_path / relative).write_bytes(b"q" * size)

    groups = find_duplicates(tmp_path)

    assert set(groups) == {10, 30}
    assert sorted(groups[10]) == sorted(str(tmp_path / p) for p in ("a", "nested/b"))
    assert len(groups[30]) == 3
    assert summarize(groups) == (2, 5)


def test_same_size_different_content_is_still_reported(tmp_path):
    # Size-only heuristic: content is never compared
    (tmp_path / "one.txt").write_text("abc")
    (tmp_path / "two.txt").write_text("xyz")

    groups = find_duplicates(tmp_path)

    assert list(groups) == [3]
    assert sorted(groups[3]) == [str(tmp_path / "one.txt"), str(tmp_path / "two.txt")]


def test_directories_are_never_reported(tmp_path):
    (tmp_path / "x").mkdir()
    (tmp_path / "y").mkdir()

    assert find_duplicates(tmp_path) == {}


def test_min_group_size(tmp_path):
    for name in ("a", "b"):
        (tmp_path / name).write_bytes(b"12")

    assert DuplicateDetector(min_group_size=3).find_duplicates(tmp_path) == {}


def test_root_must_be_a_directory(tmp_path):
    (tmp_path / "file").write_text("x")

    with pytest.raises(InvalidRootError):
        find_duplicates(tmp_path / "file")
    with pytest.raises(InvalidRootError):
        find_duplicates(tmp_path / "missing")


def test_symlinked_directory_contributes_its_files(tmp_path):
    (tmp_path / "real").mkdir()
    (tmp_path / "real" / "f").write_bytes(b"x" * 10)
    try:
        os.symlink(tmp_path / "real", tmp_path / "alias")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    groups = find_duplicates(tmp_path)

    assert sorted(groups[10]) == [str(tmp_path / "alias" / "f"), str(tmp_path / "real" / "f")]


def test_symlink_loop_is_not_followed(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "f").write_bytes(b"1234")
    try:
        os.symlink(tmp_path, tmp_path / "a" / "up")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    assert find_duplicates(tmp_path) == {}
