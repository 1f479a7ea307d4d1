#!/usr/bin/env python3
"""
Record Set Analysis

Derived statistics over collected records: item counts, size and age
histograms, extremal files, permission summary and file type counts.
"""

import datetime
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

from file_analyzer import FileRecord, parse_timestamp

KIB = 1024
MIB = 1024**2
GIB = 1024**3

DAY = 86400
WEEK = 7 * DAY

# Half-open [low, high) ranges; None means unbounded
SIZE_BUCKETS: tuple[tuple[str, int, Optional[int]], ...] = (
    ("Empty (0 B)", 0, 1),
    ("Tiny (< 1 KB)", 1, KIB),
    ("Small (1 KB - 1 MB)", KIB, MIB),
    ("Medium (1 MB - 100 MB)", MIB, 100 * MIB),
    ("Large (100 MB - 1 GB)", 100 * MIB, GIB),
    ("Huge (> 1 GB)", GIB, None),
)

AGE_BUCKETS: tuple[tuple[str, int, Optional[int]], ...] = (
    ("Today", 0, DAY),
    ("This Week", DAY, WEEK),
    ("This Month", WEEK, 30 * DAY),
    ("This Year", 30 * DAY, 365 * DAY),
    ("Older", 365 * DAY, None),
)

READ_ONLY_PERMISSIONS = "r--"
READ_WRITE_PERMISSIONS = "rw-"


def percentage(count: int, total: int) -> float:
    return count / total * 100.0 if total else 0.0


def _in_bucket(value: float, low: int, high: Optional[int]) -> bool:
    return value >= low and (high is None or value < high)


@dataclass
class BucketCount:
    label: str
    count: int
    percentage: float


@dataclass
class PermissionCount:
    count: int
    percentage: float


@dataclass
class PermissionSummary:
    readable: PermissionCount
    writable: PermissionCount
    read_only: PermissionCount
    read_write: PermissionCount


@dataclass
class AnalysisReport:
    """Statistics over one record set"""

    total_items: int
    directories: int
    regular_files: int
    size_distribution: list[BucketCount] = field(default_factory=list)
    age_distribution: list[BucketCount] = field(default_factory=list)
    largest_file: Optional[FileRecord] = None
    smallest_file: Optional[FileRecord] = None
    permissions: Optional[PermissionSummary] = None


@dataclass
class TypeStats:
    """Counts of non-directory records per detected type ("unknown" left out of the listing)"""

    counts: list[tuple[str, int, float]]
    total_files: int


def size_distribution(records: Sequence[FileRecord]) -> list[BucketCount]:
    """Histogram of record sizes; empty buckets are omitted"""
    total = len(records)
    buckets = []
    for label, low, high in SIZE_BUCKETS:
        count = sum(1 for r in records if _in_bucket(r.size, low, high))
        if count:
            buckets.append(BucketCount(label, count, percentage(count, total)))
    return buckets


def age_distribution(records: Sequence[FileRecord], now: Optional[datetime.datetime] = None) -> list[BucketCount]:
    """Histogram of time since modification; unparseable timestamps count nowhere

    Modification times in the future count as age zero.
    """
    now = now or datetime.datetime.now(datetime.timezone.utc)
    total = len(records)

    ages = []
    for record in records:
        modified = parse_timestamp(record.modified)
        if modified is not None:
            ages.append(max((now - modified).total_seconds(), 0.0))

    buckets = []
    for label, low, high in AGE_BUCKETS:
        count = sum(1 for age in ages if _in_bucket(age, low, high))
        if count:
            buckets.append(BucketCount(label, count, percentage(count, total)))
    return buckets


def largest_file(records: Sequence[FileRecord]) -> Optional[FileRecord]:
    files = [r for r in records if not r.is_directory]
    return max(files, key=lambda r: r.size, default=None)


def smallest_file(records: Sequence[FileRecord]) -> Optional[FileRecord]:
    """Smallest non-empty file; empty files would always win otherwise"""
    files = [r for r in records if not r.is_directory and r.size > 0]
    return min(files, key=lambda r: r.size, default=None)


def permission_summary(records: Sequence[FileRecord]) -> PermissionSummary:
    total = len(records)

    def count(predicate) -> PermissionCount:
        n = sum(1 for r in records if predicate(r.permissions))
        return PermissionCount(n, percentage(n, total))

    return PermissionSummary(
        readable=count(lambda p: "r" in p),
        writable=count(lambda p: "w" in p),
        read_only=count(lambda p: p == READ_ONLY_PERMISSIONS),
        read_write=count(lambda p: p == READ_WRITE_PERMISSIONS),
    )


def analyze(records: Sequence[FileRecord], now: Optional[datetime.datetime] = None) -> AnalysisReport:
    """Compute every statistic for a record set"""
    directories = sum(1 for r in records if r.is_directory)
    return AnalysisReport(
        total_items=len(records),
        directories=directories,
        regular_files=len(records) - directories,
        size_distribution=size_distribution(records),
        age_distribution=age_distribution(records, now),
        largest_file=largest_file(records),
        smallest_file=smallest_file(records),
        permissions=permission_summary(records),
    )


def file_type_stats(records: Sequence[FileRecord]) -> TypeStats:
    """Type counts over non-directory records, most common first"""
    files = [r for r in records if not r.is_directory]
    counter = Counter(r.file_type for r in files)
    total_files = len(files)

    counts = [
        (file_type, count, percentage(count, total_files))
        for file_type, count in counter.most_common()
        if file_type != "unknown"
    ]
    return TypeStats(counts=counts, total_files=total_files)
