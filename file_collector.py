#!/usr/bin/env python3
"""
File Collector Module

Walks a directory (one level or the full subtree), filters entry names and
normalizes every accepted entry into a FileRecord. This is the data source
for the listing, the analysis views and the exporters.
"""

import logging
import os
import pathlib
import stat
from typing import Optional, Union

from file_analyzer import FileAnalyzer, FileRecord, InvalidRootError
from pattern_filter import NameFilter
from sorting import SortBy, sort_records

logger = logging.getLogger(__name__)


class FileCollector:
    """Collects normalized records from a directory tree"""

    def __init__(self, analyzer: Optional[FileAnalyzer] = None, show_hidden: bool = True):
        """Initialize collector

        Args:
            analyzer: Metadata normalizer to use (a fresh one by default)
            show_hidden: Include names starting with "." when True
        """
        self.analyzer = analyzer or FileAnalyzer()
        self.show_hidden = show_hidden

    def collect(
        self,
        root: Union[str, pathlib.Path],
        search_pattern: Optional[str] = None,
        exclude_pattern: Optional[str] = None,
        sort_by: Optional[SortBy] = None,
        recursive: bool = False,
    ) -> list[FileRecord]:
        """Collect, filter and sort records beneath root

        Args:
            root: Directory to list (a regular file yields a single record)
            search_pattern: Substring or regex names must match
            exclude_pattern: Regex of names to drop (and, when recursive, not descend into)
            sort_by: Ordering criterion (name when None)
            recursive: Walk the full subtree instead of direct children only

        Returns:
            Sorted list of records

        Raises:
            InvalidRootError: If root does not exist or is neither file nor directory
        """
        root_path = pathlib.Path(root)
        if not root_path.exists():
            raise InvalidRootError(f"Path '{root}' does not exist")

        name_filter = NameFilter(search_pattern, exclude_pattern)
        self.analyzer.clear_cache()

        if root_path.is_dir():
            records = self._walk(root_path, name_filter, recursive, frozenset())
        elif root_path.is_file():
            records = self._collect_single(root_path, name_filter)
        else:
            raise InvalidRootError(f"Path '{root}' is neither a file nor a directory")

        logger.debug("Collected %d records from %s", len(records), root_path)
        return sort_records(records, sort_by)

    def _collect_single(self, file_path: pathlib.Path, name_filter: NameFilter) -> list[FileRecord]:
        if not name_filter.matches(file_path.name):
            return []
        record = self.analyzer.analyze_entry(file_path)
        return [record] if record else []

    def _walk(
        self,
        directory: pathlib.Path,
        name_filter: NameFilter,
        recursive: bool,
        ancestors: frozenset,
    ) -> list[FileRecord]:
        """Depth-first traversal returning the records found beneath directory

        Each call builds its own list; the caller concatenates. ancestors holds
        the (device, inode) pairs of the directories above this one, so only a
        symlink leading back up the current chain is refused.
        """
        try:
            directory_stat = directory.stat()
            identity = (directory_stat.st_dev, directory_stat.st_ino)
        except OSError as e:
            logger.debug("Skipping directory %s: %s", directory, e)
            return []
        if identity in ancestors:
            logger.debug("Not descending into %s, it loops back to an ancestor", directory)
            return []
        chain = ancestors | {identity}

        try:
            entries = list(os.scandir(directory))
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            return []

        records: list[FileRecord] = []
        for entry in entries:
            if not self.show_hidden and entry.name.startswith("."):
                continue
            if name_filter.is_excluded(entry.name):
                continue

            entry_path = pathlib.Path(entry.path)
            try:
                entry_stat = entry.stat()
            except OSError as e:
                logger.debug("Dropping %s, metadata unreadable: %s", entry_path, e)
                continue

            if name_filter.is_selected(entry.name):
                record = self.analyzer.analyze_entry(entry_path, entry_stat)
                if record is not None:
                    records.append(record)

            if recursive and stat.S_ISDIR(entry_stat.st_mode):
                records.extend(self._walk(entry_path, name_filter, recursive, chain))

        return records


def collect(
    root: Union[str, pathlib.Path],
    search_pattern: Optional[str] = None,
    exclude_pattern: Optional[str] = None,
    sort_by: Optional[SortBy] = None,
    recursive: bool = False,
) -> list[FileRecord]:
    """Collect records with a default FileCollector"""
    return FileCollector().collect(root, search_pattern, exclude_pattern, sort_by, recursive)
