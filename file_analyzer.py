#!/usr/bin/env python3
"""
File Metadata Normalization Module

Turns filesystem entries into uniform FileRecord objects: size (recursive
for directories), content-sniffed type, UTC timestamps and a compact
permission summary. Also provides the permission renderers and the
recursive directory size calculation used across filebyte.
"""

import datetime
import logging
import os
import pathlib
import stat
from dataclasses import asdict, dataclass, fields
from typing import Any, Optional

from auxiliary import format_size
from file_types import sniff_file

logger = logging.getLogger(__name__)

DIRECTORY_TYPE = "directory"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


class FilebyteError(RuntimeError):
    """Base class for errors surfaced to the command-line layer"""


class InvalidRootError(FilebyteError):
    """The requested root path does not exist or has an unsupported type"""


@dataclass(frozen=True)
class FileRecord:
    """Normalized description of one filesystem entry"""

    name: str
    path: str
    size: int
    size_human: str
    file_type: str
    created: Optional[str]
    modified: Optional[str]
    permissions: str
    is_directory: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON/CSV serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileRecord":
        """Create from dictionary"""
        is_directory = data.get("is_directory", False)
        if isinstance(is_directory, str):
            is_directory = is_directory.strip().lower() == "true"

        return cls(
            name=data["name"],
            path=data["path"],
            size=int(data["size"]),
            size_human=data["size_human"],
            file_type=data["file_type"],
            created=data.get("created") or None,
            modified=data.get("modified") or None,
            permissions=data["permissions"],
            is_directory=bool(is_directory),
        )


FIELD_NAMES: tuple[str, ...] = tuple(f.name for f in fields(FileRecord))


def format_timestamp(epoch_seconds: Optional[float]) -> Optional[str]:
    """Format a POSIX timestamp as "YYYY-MM-DD HH:MM:SS UTC" (None stays None)"""
    if epoch_seconds is None:
        return None
    try:
        moment = datetime.datetime.fromtimestamp(epoch_seconds, tz=datetime.timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return moment.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: Optional[str]) -> Optional[datetime.datetime]:
    """Parse a timestamp produced by format_timestamp into an aware UTC datetime"""
    if not text:
        return None
    try:
        moment = datetime.datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return moment.replace(tzinfo=datetime.timezone.utc)


def is_readonly(mode: int) -> bool:
    """True when no write permission bit is set for anyone"""
    return mode & 0o222 == 0


def compact_permissions(entry_mode: int, parent_mode: Optional[int]) -> str:
    """Render the 3-character capability summary

    The third character approximates "can this entry be deleted or renamed",
    which is a capability of the parent directory. A parent_mode of None
    means the parent could not be inspected and counts as not deletable.

    Args:
        entry_mode: st_mode of the entry itself
        parent_mode: st_mode of the containing directory, if known

    Returns:
        One of "rwx", "rw-", "r-x", "r--"
    """
    deletable = parent_mode is not None and not is_readonly(parent_mode)
    if is_readonly(entry_mode):
        return "r-x" if deletable else "r--"
    return "rwx" if deletable else "rw-"


_PERMISSION_BITS = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


def detailed_permissions(mode: int, is_directory: bool) -> str:
    """Render the 10-character POSIX permission string, e.g. "drwxr-xr-x" """
    type_char = "d" if is_directory else "-"
    return type_char + "".join(char if mode & bit else "-" for bit, char in _PERMISSION_BITS)


def directory_size(path: pathlib.Path) -> int:
    """Recursive total size of everything beneath a directory

    Independent of any filtering. Unreadable subdirectories and entries
    contribute nothing. A symlink pointing back at one of its own ancestor
    directories is not followed; other symlinked directories are counted
    as often as they are reached.
    """
    total = 0
    pending: list[tuple[pathlib.Path, frozenset]] = [(pathlib.Path(path), frozenset())]

    while pending:
        current, ancestors = pending.pop()
        try:
            current_stat = current.stat()
        except OSError:
            continue
        identity = (current_stat.st_dev, current_stat.st_ino)
        if identity in ancestors:
            logger.debug("Not following %s, it loops back to an ancestor", current)
            continue
        chain = ancestors | {identity}

        try:
            entries = list(os.scandir(current))
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", current, e)
            continue

        for entry in entries:
            try:
                if entry.is_dir():
                    pending.append((pathlib.Path(entry.path), chain))
                elif entry.is_file():
                    total += entry.stat().st_size
            except OSError:
                continue

    return total


def describe_extension(file_path: pathlib.Path) -> str:
    """Extension for display: suffix without dot, dotfile remainder, or "none" """
    if file_path.suffix:
        return file_path.suffix[1:]
    name = file_path.name
    if name.startswith(".") and len(name) > 1:
        return name[1:]
    return "none"


def _creation_time(stat_result: os.stat_result) -> Optional[float]:
    # st_birthtime only exists where the platform reports a creation time
    return getattr(stat_result, "st_birthtime", None)


class FileAnalyzer:
    """Builds FileRecord objects from filesystem entries"""

    def __init__(self):
        # Parent directories are shared by many siblings; stat them once per walk
        self._parent_modes: dict[str, Optional[int]] = {}

    def analyze_entry(
        self, entry_path: pathlib.Path, stat_result: Optional[os.stat_result] = None
    ) -> Optional[FileRecord]:
        """Normalize a single entry found during a walk

        Args:
            entry_path: Path of the entry
            stat_result: Already-read metadata (read here when omitted)

        Returns:
            FileRecord, or None if the entry's metadata cannot be read
        """
        try:
            if stat_result is None:
                stat_result = entry_path.stat()
        except OSError as e:
            logger.debug("Dropping %s, metadata unreadable: %s", entry_path, e)
            return None

        is_directory = stat.S_ISDIR(stat_result.st_mode)
        if is_directory:
            size = directory_size(entry_path)
            file_type = DIRECTORY_TYPE
        else:
            size = stat_result.st_size
            file_type = sniff_file(entry_path)

        return FileRecord(
            name=entry_path.name or str(entry_path),
            path=str(entry_path),
            size=size,
            size_human=format_size(size),
            file_type=file_type,
            created=format_timestamp(_creation_time(stat_result)),
            modified=format_timestamp(stat_result.st_mtime),
            permissions=compact_permissions(stat_result.st_mode, self._parent_mode(entry_path)),
            is_directory=is_directory,
        )

    def analyze_path(self, path: pathlib.Path) -> FileRecord:
        """Normalize a path given directly by the user

        Raises:
            InvalidRootError: If the path does not exist, is neither a file
                nor a directory, or its metadata cannot be read
        """
        path = pathlib.Path(path)
        if not path.exists():
            raise InvalidRootError(f"Path '{path}' does not exist")
        if not (path.is_file() or path.is_dir()):
            raise InvalidRootError(f"Path '{path}' is neither a file nor a directory")

        record = self.analyze_entry(path)
        if record is None:
            raise InvalidRootError(f"Cannot read metadata of '{path}'")
        return record

    def clear_cache(self):
        """Forget parent directory metadata from a previous walk"""
        self._parent_modes.clear()

    def _parent_mode(self, entry_path: pathlib.Path) -> Optional[int]:
        parent = entry_path.absolute().parent
        key = str(parent)
        if key not in self._parent_modes:
            try:
                self._parent_modes[key] = parent.stat().st_mode
            except OSError:
                self._parent_modes[key] = None
        return self._parent_modes[key]
