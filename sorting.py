#!/usr/bin/env python3
"""Ordering of collected records: directories first, then by the chosen key."""

from enum import Enum
from typing import Iterable, Optional

from file_analyzer import FileRecord


class SortBy(Enum):
    NAME = "name"
    SIZE = "size"
    DATE = "date"

    @classmethod
    def from_str(cls, text: Optional[str]) -> Optional["SortBy"]:
        """Parse a --sort-by value; unrecognized values fall back to NAME"""
        if text is None:
            return None
        try:
            return cls(text.lower())
        except ValueError:
            return cls.NAME


def sort_records(records: Iterable[FileRecord], sort_by: Optional[SortBy] = None) -> list[FileRecord]:
    """Return a new list ordered by sort_by (NAME when None)

    Name sorts ascending, size and date descending. Directories always
    precede files. Both passes are stable, so equal keys keep their
    enumeration order.
    """
    if sort_by is SortBy.SIZE:
        ordered = sorted(records, key=lambda r: r.size, reverse=True)
    elif sort_by is SortBy.DATE:
        # Missing timestamps compare as "", the lowest string, so they end up last
        ordered = sorted(records, key=lambda r: r.modified or "", reverse=True)
    else:
        ordered = sorted(records, key=lambda r: r.name)

    return sorted(ordered, key=lambda r: not r.is_directory)
