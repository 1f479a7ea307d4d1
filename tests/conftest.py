"""Pytest bootstrap and shared fixtures.

The filebyte modules live at the repository root; make sure they import
when pytest runs with a sys.path that excludes it.
"""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from auxiliary import format_size  # noqa: E402
from file_analyzer import FileRecord  # noqa: E402


@pytest.fixture
def make_record():
    """Factory for synthetic records that need no filesystem"""

    def _make(
        name,
        size=0,
        is_directory=False,
        modified="2024-01-01 00:00:00 UTC",
        permissions="rwx",
        file_type=None,
        created=None,
    ):
        return FileRecord(
            name=name,
            path=f"/data/{name}",
            size=size,
            size_human=format_size(size),
            file_type=file_type or ("directory" if is_directory else "unknown"),
            created=created,
            modified=modified,
            permissions=permissions,
            is_directory=is_directory,
        )

    return _make


@pytest.fixture
def sample_tree(tmp_path):
    """
    tmp_path/
        app.log        (10 bytes)
        notes.txt      (20 bytes)
        image.png      (PNG header)
        src/
            main.py    (30 bytes)
            debug.log  (5 bytes)
            lib/
                util.py (7 bytes)
        tmp_cache/
            junk.log   (3 bytes)
    """
    (tmp_path / "app.log").write_bytes(b"x" * 10)
    (tmp_path / "notes.txt").write_bytes(b"y" * 20)
    (tmp_path / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 8)
    (tmp_path / "src" / "lib").mkdir(parents=True)
    (tmp_path / "src" / "main.py").write_bytes(b"z" * 30)
    (tmp_path / "src" / "debug.log").write_bytes(b"d" * 5)
    (tmp_path / "src" / "lib" / "util.py").write_bytes(b"u" * 7)
    (tmp_path / "tmp_cache").mkdir()
    (tmp_path / "tmp_cache" / "junk.log").write_bytes(b"j" * 3)
    return tmp_path
