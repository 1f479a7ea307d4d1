import os

import pytest

from directory_tree import build_tree, tree_lines
from file_analyzer import InvalidRootError


def test_tree_lists_every_entry_with_nesting(sample_tree):
    lines = tree_lines(sample_tree)
    text = "\n".join(lines)

    assert lines[0] == str(sample_tree)
    for name in ("app.log", "src", "main.py", "lib", "util.py", "junk.log"):
        assert name in text
    util_line = next(line for line in lines if line.endswith("util.py"))
    main_line = next(line for line in lines if line.endswith("main.py"))
    assert util_line.index("util.py") > main_line.index("main.py")


def test_tree_hides_dotfiles_on_request(sample_tree):
    (sample_tree / ".hidden").write_text("h")

    assert any(line.endswith(".hidden") for line in tree_lines(sample_tree))
    assert not any(line.endswith(".hidden") for line in tree_lines(sample_tree, show_hidden=False))


def test_tree_stops_at_symlink_loops(tmp_path):
    (tmp_path / "a").mkdir()
    try:
        os.symlink(tmp_path, tmp_path / "a" / "up")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    lines = tree_lines(tmp_path)

    assert any("symlink loop" in line for line in lines)


def test_tree_root_must_be_directory(sample_tree):
    with pytest.raises(InvalidRootError):
        build_tree(sample_tree / "notes.txt")


def test_tree_expands_symlinked_directories(tmp_path):
    (tmp_path / "real").mkdir()
    (tmp_path / "real" / "inside.txt").write_text("x")
    try:
        os.symlink(tmp_path / "real", tmp_path / "alias")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    lines = tree_lines(tmp_path)

    assert sum(line.endswith("inside.txt") for line in lines) == 2
    assert not any("symlink loop" in line for line in lines)
