#!/usr/bin/env python3
"""
Record Export

Writes collected records to JSON or CSV (chosen by file suffix) and reads
them back. Both formats use the FileRecord field names as keys/columns.
"""

import csv
import json
import pathlib
from typing import Iterable, Union

from file_analyzer import FIELD_NAMES, FileRecord, FilebyteError

SUPPORTED_SUFFIXES = (".json", ".csv")


class ExportError(FilebyteError):
    """Export target cannot be written or read"""


def _format_for(path: pathlib.Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ExportError(f"Unsupported export format '{path.suffix or path.name}' (use .json or .csv)")
    return suffix[1:]


def export_records(records: Iterable[FileRecord], path: Union[str, pathlib.Path]) -> pathlib.Path:
    """Write records to path as JSON or CSV

    Returns:
        The path written

    Raises:
        ExportError: If the suffix is unsupported or the file cannot be written
    """
    path = pathlib.Path(path)
    export_format = _format_for(path)
    rows = [record.to_dict() for record in records]

    try:
        if export_format == "json":
            with path.open("w", encoding="utf-8") as f:
                json.dump(rows, f, indent=2)
        else:
            with path.open("w", encoding="utf-8", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=FIELD_NAMES)
                writer.writeheader()
                for row in rows:
                    writer.writerow({key: "" if value is None else value for key, value in row.items()})
    except OSError as e:
        raise ExportError(f"Failed to write to {path}: {e}") from e

    return path


def load_records(path: Union[str, pathlib.Path]) -> list[FileRecord]:
    """Read records previously written by export_records

    Raises:
        ExportError: If the file cannot be read or parsed
    """
    path = pathlib.Path(path)
    export_format = _format_for(path)

    try:
        with path.open(encoding="utf-8", newline="" if export_format == "csv" else None) as f:
            if export_format == "json":
                rows = json.load(f)
            else:
                rows = list(csv.DictReader(f))
        return [FileRecord.from_dict(row) for row in rows]
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise ExportError(f"Failed to read records from {path}: {e}") from e
