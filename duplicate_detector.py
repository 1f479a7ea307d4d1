#!/usr/bin/env python3
"""
Duplicate Detection Module

Groups files beneath a directory by exact byte size and reports every size
shared by two or more files.

This is a size-only heuristic: files are never opened, so two different
files that happen to have the same length are reported together. Content
comparison is intentionally not part of this module.
"""

import logging
import os
import pathlib
import stat
from typing import Union

from file_analyzer import InvalidRootError

logger = logging.getLogger(__name__)


class DuplicateDetector:
    """Size-based duplicate candidate detection"""

    def __init__(self, min_group_size: int = 2):
        """Initialize duplicate detector

        Args:
            min_group_size: Smallest number of same-size files reported as a group
        """
        self.min_group_size = min_group_size

    def find_duplicates(self, root: Union[str, pathlib.Path]) -> dict[int, list[str]]:
        """Find candidate duplicate files beneath root

        Args:
            root: Directory to scan recursively

        Returns:
            Dictionary mapping size -> list of file paths sharing that size

        Raises:
            InvalidRootError: If root does not exist or is not a directory
        """
        root_path = pathlib.Path(root)
        if not root_path.exists():
            raise InvalidRootError(f"Path '{root}' does not exist")
        if not root_path.is_dir():
            raise InvalidRootError(f"Path '{root}' is not a directory")

        size_groups = self.group_by_size(root_path)
        return {size: paths for size, paths in size_groups.items() if len(paths) >= self.min_group_size}

    def group_by_size(self, root: pathlib.Path) -> dict[int, list[str]]:
        """Map every file size beneath root to the files having it"""
        size_groups: dict[int, list[str]] = {}
        pending: list[tuple[pathlib.Path, frozenset]] = [(root, frozenset())]

        while pending:
            directory, ancestors = pending.pop()
            try:
                directory_stat = directory.stat()
            except OSError:
                continue
            identity = (directory_stat.st_dev, directory_stat.st_ino)
            if identity in ancestors:
                logger.debug("Not following %s, it loops back to an ancestor", directory)
                continue
            chain = ancestors | {identity}

            try:
                entries = list(os.scandir(directory))
            except OSError as e:
                logger.debug("Skipping unreadable directory %s: %s", directory, e)
                continue

            subdirectories = []
            for entry in entries:
                try:
                    entry_stat = entry.stat()
                except OSError:
                    continue  # Skip files we can't stat

                if stat.S_ISREG(entry_stat.st_mode):
                    size_groups.setdefault(entry_stat.st_size, []).append(entry.path)
                elif stat.S_ISDIR(entry_stat.st_mode):
                    subdirectories.append((pathlib.Path(entry.path), chain))

            # Reversed so the stack pops subdirectories in enumeration order
            pending.extend(reversed(subdirectories))

        return size_groups


def summarize(groups: dict[int, list[str]]) -> tuple[int, int]:
    """Return (number of groups, number of files across all groups)"""
    return len(groups), sum(len(paths) for paths in groups.values())


def find_duplicates(root: Union[str, pathlib.Path]) -> dict[int, list[str]]:
    """Find same-size file groups with a default DuplicateDetector"""
    return DuplicateDetector().find_duplicates(root)
