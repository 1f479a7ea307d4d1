#!/usr/bin/env python3
"""
Filebyte - list files and directories with sizes

Inspects a local filesystem: directory listings with sizes, types,
timestamps and permissions, directory trees, size-based duplicate
candidates, aggregate statistics and JSON/CSV export.

Usage:
    filebyte [PATH]                       # List a directory
    filebyte PATH -r -s                   # Recursive listing with sizes
    filebyte PATH -e log -x '^tmp'        # Search and exclude by name
    filebyte PATH -p                      # Detailed analysis
    filebyte PATH --duplicates            # Same-size file groups
    filebyte PATH --export files.json     # Export the listing
    filebyte -m list                      # Show mounted disks
    filebyte -f FILE | -d DIR | -w PATH   # Analyze a single path
"""

import argparse
import pathlib
import sys
from typing import Optional

from analysis import analyze, file_type_stats
from auxiliary import SIZE_UNIT_CHOICES, SizeUnit
from console_ui import ConsoleUI
from directory_tree import build_tree
from disks import find_disk, list_disks
from duplicate_detector import DuplicateDetector
from exporters import export_records
from file_analyzer import FileAnalyzer, FilebyteError, InvalidRootError, directory_size
from file_collector import FileCollector
from filebyte_config import ConfigManager
from pattern_filter import NamePattern
from sorting import SortBy

VERSION = "1.3.2"


class Filebyte:
    """Main application class for the filebyte inspector"""

    def __init__(self, args: argparse.Namespace, ui: Optional[ConsoleUI] = None, config_manager=None):
        self.args = args
        self.config = (config_manager or ConfigManager()).load()

        color = self.config.color and not getattr(args, "no_color", False)
        self.ui = ui or ConsoleUI(color=color)

        self.analyzer = FileAnalyzer()
        self.collector = FileCollector(self.analyzer, show_hidden=self.config.show_hidden)
        self.duplicate_detector = DuplicateDetector()

        sort_text = args.sort_by if args.sort_by is not None else self.config.sort_by
        self.sort_by = SortBy.from_str(sort_text)
        self.show_size = args.size is not None
        self.detailed = self.config.detailed_permissions

    def _size_unit(self) -> Optional[SizeUnit]:
        """Fixed display unit, or None for auto-scaling

        Raises:
            ValueError: If the unit name is invalid
        """
        unit_text = self.args.size if self.args.size else self.config.size_unit
        unit = SizeUnit.from_str(unit_text)
        return None if unit_text.lower() == "auto" else unit

    # -- single path views --------------------------------------------------

    def analyze_file(self, path: pathlib.Path, size_unit: Optional[SizeUnit]) -> int:
        if path.exists() and not path.is_file():
            self.ui.print_error(f"Error: '{path}' is not a file")
            return 1
        record = self.analyzer.analyze_path(path)
        self.ui.show_file_analysis(record, size_unit, self.detailed)
        return 0

    def analyze_directory(self, path: pathlib.Path, size_unit: Optional[SizeUnit]) -> int:
        if path.exists() and not path.is_dir():
            self.ui.print_error(f"Error: '{path}' is not a directory")
            return 1
        record = self.analyzer.analyze_path(path)
        self.ui.show_directory_analysis(record, size_unit, self.detailed)
        return 0

    def analyze_whole(self, path: pathlib.Path, size_unit: Optional[SizeUnit]) -> int:
        record = self.analyzer.analyze_path(path)
        if record.is_directory:
            self.ui.show_directory_analysis(record, size_unit, self.detailed)
        else:
            self.ui.show_file_analysis(record, size_unit, self.detailed)
        return 0

    # -- directory views ----------------------------------------------------

    def show_tree(self, path: pathlib.Path) -> int:
        self.ui.show_tree(build_tree(path, color=self.ui.color, show_hidden=self.config.show_hidden))
        return 0

    def show_properties(self, path: pathlib.Path) -> int:
        """Full analysis of a directory tree (or the single-file view for a file)"""
        if path.is_file():
            return self.analyze_file(path, self._size_unit())

        records = self.collector.collect(
            path, self.args.search, self.args.excluding, self.sort_by, recursive=True
        )
        if not records:
            self.ui.print_info("No files found.")
            return 0

        report = analyze(records)
        self.ui.print_header("Directory Summary")
        self.ui.show_totals(report, total_size=directory_size(path))
        self.ui.show_type_stats(file_type_stats(records))
        self.ui.show_analysis(report)
        return 0

    def show_duplicates(self, path: pathlib.Path) -> int:
        self.ui.show_duplicates(self.duplicate_detector.find_duplicates(path))
        return 0

    def show_listing(self, path: pathlib.Path, size_unit: Optional[SizeUnit]) -> int:
        records = self.collector.collect(
            path, self.args.search, self.args.excluding, self.sort_by, recursive=self.args.recursive
        )

        if not records:
            if self.args.search is not None:
                self.ui.print_info(f"No files found matching pattern: {self.args.search}")
            else:
                self.ui.print_info("No files found.")
            return 0

        if self.args.search is not None:
            self.ui.show_type_stats(file_type_stats(records))
        else:
            self.ui.show_listing(
                records,
                size_unit=size_unit,
                show_size=self.show_size,
                properties=self.args.properties,
                detailed=self.detailed,
            )
            if not self.args.properties and self.args.recursive:
                self.ui.show_type_stats(file_type_stats(records))

        if self.args.export:
            written = export_records(records, self.args.export)
            self.ui.print_success(f"Results exported to {written}")
        return 0

    # -- disks --------------------------------------------------------------

    def run_disk(self, disk_name: str, size_unit: Optional[SizeUnit]) -> int:
        if disk_name == "list":
            self.ui.show_disks(list_disks(), size_unit)
            return 0

        disk = find_disk(disk_name)
        if disk is None:
            self.ui.print_error(f"Disk '{disk_name}' not found")
            return 1

        self.ui.show_disk_info(disk)
        mount_point = pathlib.Path(disk.mount_point)

        if self.args.duplicates:
            return self.show_duplicates(mount_point)
        if self.args.tree:
            return self.show_tree(mount_point)
        if self.args.properties:
            return self.show_properties(mount_point)

        records = self.collector.collect(mount_point, self.args.search, self.args.excluding, self.sort_by)
        report = analyze(records)
        self.ui.show_totals(report)
        if self.args.search is not None or self.args.excluding is not None or self.args.sort_by:
            self.ui.show_listing(records, size_unit=size_unit, show_size=self.show_size, detailed=self.detailed)
            self.ui.show_type_stats(file_type_stats(records))
        return 0

    # -- main entry point ---------------------------------------------------

    def warn_invalid_patterns(self):
        """Report malformed regular expressions, which match nothing"""
        for label, text, force_regex in (
            ("search", self.args.search, False),
            ("exclusion", self.args.excluding, True),
        ):
            if text is not None and not NamePattern.compile(text, force_regex=force_regex).is_valid:
                self.ui.print_warning(f"Warning: invalid {label} pattern '{text}' matches nothing")

    def run(self) -> int:
        try:
            size_unit = self._size_unit()
        except ValueError as e:
            self.ui.print_error(f"Error: {e}")
            self.ui.print_plain(f"Available options are: {SIZE_UNIT_CHOICES}")
            return 1

        self.warn_invalid_patterns()
        try:
            return self._dispatch(size_unit)
        except FilebyteError as e:
            self.ui.print_error(f"Error: {e}")
            return 1

    def _dispatch(self, size_unit: Optional[SizeUnit]) -> int:
        args = self.args

        if args.disk:
            return self.run_disk(args.disk, size_unit)

        if args.whole:
            if not args.path:
                raise InvalidRootError("--whole requires a path argument")
            return self.analyze_whole(pathlib.Path(args.path), size_unit)
        if args.file:
            return self.analyze_file(pathlib.Path(args.file), size_unit)
        if args.directory:
            return self.analyze_directory(pathlib.Path(args.directory), size_unit)

        path = pathlib.Path(args.path or ".")
        if not path.exists():
            raise InvalidRootError(f"Path '{path}' does not exist")

        plain_file = path.is_file() and not any(
            (
                args.tree,
                args.properties,
                args.duplicates,
                args.recursive,
                args.search is not None,
                args.excluding is not None,
                args.sort_by,
                args.export,
            )
        )
        if plain_file:
            return self.analyze_file(path, size_unit)

        if args.tree:
            if not path.is_dir():
                raise InvalidRootError(f"Path '{path}' is not a directory")
            return self.show_tree(path)
        if args.properties:
            return self.show_properties(path)
        if args.duplicates:
            return self.show_duplicates(path)
        return self.show_listing(path, size_unit)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filebyte",
        description="List files and directories with sizes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", nargs="?", help="Path to file or directory (default: current directory)")
    parser.add_argument("-v", "--version", action="version", version=f"filebyte {VERSION}")
    parser.add_argument(
        "-s",
        "--size",
        nargs="?",
        const="auto",
        default=None,
        metavar="UNIT",
        help=f"Show file sizes with specified unit ({SIZE_UNIT_CHOICES})",
    )
    parser.add_argument("-t", "--tree", action="store_true", help="Show directory tree")
    parser.add_argument("-p", "--properties", action="store_true", help="Show detailed file properties and analysis")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "-m", "--disk", metavar="DISK", help="Disk operations: 'list' to show all disks, or a disk name for info"
    )
    parser.add_argument("-e", "--search", metavar="PATTERN", help="Search for files by substring or regex pattern")
    parser.add_argument("-x", "--excluding", metavar="PATTERN", help="Exclude files matching regex pattern")
    parser.add_argument("--sort-by", metavar="CRITERIA", help="Sort files by: name, size, date")
    parser.add_argument("--duplicates", action="store_true", help="Find files sharing the same size")
    parser.add_argument("--export", metavar="FILE", help="Export results to file (.json or .csv)")
    parser.add_argument("-f", "--file", metavar="FILE", help="Analyze a specific file")
    parser.add_argument("-d", "--directory", metavar="DIR", help="Analyze a directory as a whole (not its contents)")
    parser.add_argument("-r", "--recursive", action="store_true", help="Enable recursive searching and analysis")
    parser.add_argument(
        "-w", "--whole", action="store_true", help="Analyze the path as a whole (auto-detects file or directory)"
    )
    parser.add_argument("--verbose", action="store_true", help="Log skipped entries and other details to stderr")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # Must precede Filebyte(), which loads the configuration file
    ConsoleUI.setup_logging(args.verbose, color=not args.no_color)
    return Filebyte(args).run()


if __name__ == "__main__":
    sys.exit(main())
