#!/usr/bin/env python3
"""
Auxiliary utility functions for filebyte

Provides size formatting and path display helpers shared by the
collector, the analysis code and the console renderer.
"""

import pathlib
from enum import Enum
from typing import Optional


class SizeUnit(Enum):
    """Fixed units for rendering byte counts (binary, 1024-based)"""

    BYTES = ("B", 1)
    KILOBYTES = ("KB", 1024)
    MEGABYTES = ("MB", 1024**2)
    GIGABYTES = ("GB", 1024**3)
    TERABYTES = ("TB", 1024**4)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def factor(self) -> int:
        return self.value[1]

    @classmethod
    def from_str(cls, text: str) -> "SizeUnit":
        """Parse a unit name as typed on the command line

        "auto" maps to BYTES; callers that support auto-scaling keep
        track of that choice themselves.

        Raises:
            ValueError: If the unit name is not recognized
        """
        aliases = {
            "b": cls.BYTES,
            "bytes": cls.BYTES,
            "kb": cls.KILOBYTES,
            "kilobytes": cls.KILOBYTES,
            "mb": cls.MEGABYTES,
            "megabytes": cls.MEGABYTES,
            "gb": cls.GIGABYTES,
            "gigabytes": cls.GIGABYTES,
            "tb": cls.TERABYTES,
            "terabytes": cls.TERABYTES,
            "auto": cls.BYTES,
        }
        try:
            return aliases[text.lower()]
        except KeyError:
            raise ValueError(f"Invalid size unit: {text}") from None

    def format(self, size_bytes: int) -> str:
        """Format a byte count in this unit"""
        if self is SizeUnit.BYTES:
            return f"{size_bytes} B"
        return f"{size_bytes / self.factor:.2f} {self.label}"


SIZE_UNIT_CHOICES = "auto, b/bytes, kb/kilobytes, mb/megabytes, gb/gigabytes, tb/terabytes"

_AUTO_ORDER = (
    SizeUnit.TERABYTES,
    SizeUnit.GIGABYTES,
    SizeUnit.MEGABYTES,
    SizeUnit.KILOBYTES,
)


def format_size(size_bytes: int) -> str:
    """Format byte size choosing the largest unit with a magnitude >= 1

    Args:
        size_bytes: Size in bytes to format

    Returns:
        Formatted string like "4.20 MB", "1.00 KB" or "789 B"
    """
    for unit in _AUTO_ORDER:
        if size_bytes >= unit.factor:
            return unit.format(size_bytes)
    return SizeUnit.BYTES.format(size_bytes)


def format_path_for_display(path: str, home_path: Optional[str] = None) -> str:
    """Format file path for display by replacing home directory with ~

    Args:
        path: File path to format
        home_path: Home directory path (defaults to platform home)

    Returns:
        Path with home directory replaced by ~ if applicable
    """
    if home_path is None:
        home_path = str(pathlib.Path.home())

    if path == home_path or path.startswith(home_path.rstrip("/\\") + "/"):
        return "~" + path[len(home_path.rstrip("/\\")) :]
    return path
