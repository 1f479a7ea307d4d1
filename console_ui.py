#!/usr/bin/env python3
"""
Console UI Module using Rich

Renders filebyte results: listings, type statistics, detailed analysis,
duplicate groups, disk information and single-path views. Also installs
the Rich logging handler used by the command-line tool.
"""

import logging
import pathlib
from typing import Optional, Sequence, TextIO

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree
from tzlocal import get_localzone

from analysis import AnalysisReport, BucketCount, TypeStats
from auxiliary import SizeUnit, format_path_for_display, format_size
from disks import DiskInfo
from duplicate_detector import summarize
from file_analyzer import FileRecord, detailed_permissions, describe_extension, parse_timestamp


class ConsoleUI:
    """Console output handler for filebyte"""

    def __init__(
        self,
        color: bool = True,
        force_terminal: Optional[bool] = None,
        timezone=None,
        file: Optional[TextIO] = None,
        width: Optional[int] = None,
    ):
        """Initialize console

        Args:
            color: Emit styles; False renders plain text
            force_terminal: Override terminal detection
            timezone: Zone for local-time display (defaults to the system zone)
            file: Output stream (stdout by default)
            width: Fixed console width instead of terminal detection
        """
        self.color = color
        self.console = Console(
            force_terminal=force_terminal, highlight=False, no_color=not color, file=file, width=width
        )
        self.timezone = timezone or get_localzone()

    # Logging
    @staticmethod
    def setup_logging(verbose: bool = False, color: bool = True):
        """Route library logging through Rich on stderr

        Static so it can run before any ConsoleUI (or configuration) exists.
        """
        handler = RichHandler(
            console=Console(stderr=True, no_color=not color),
            show_time=False,
            show_path=verbose,
            markup=False,
        )
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(message)s",
            handlers=[handler],
            force=True,
        )

    # Basic styled output methods
    def print_success(self, message: str):
        """Print success message in green"""
        self.console.print(message, style="green", markup=False)

    def print_error(self, message: str):
        """Print error message in red"""
        self.console.print(message, style="red bold", markup=False)

    def print_warning(self, message: str):
        """Print warning message in yellow"""
        self.console.print(message, style="yellow", markup=False)

    def print_info(self, message: str):
        """Print info message in cyan"""
        self.console.print(message, style="cyan", markup=False)

    def print_plain(self, message: str):
        self.console.print(message, markup=False)

    def print_header(self, title: str):
        self.console.print()
        self.console.print(f"[bold]{escape(title)}:[/bold]")
        self.print_separator()

    def print_separator(self, char: str = "─", length: int = 50):
        """Print a separator line"""
        self.console.print(char * length, style="dim")

    def _styled(self, text: str, style: str) -> str:
        text = escape(text)
        return f"[{style}]{text}[/{style}]" if self.color else text

    # Listing
    def show_listing(
        self,
        records: Sequence[FileRecord],
        size_unit: Optional[SizeUnit] = None,
        show_size: bool = False,
        properties: bool = False,
        detailed: bool = True,
    ):
        """Print one line per record

        Args:
            records: Records to display
            size_unit: Fixed unit for sizes; None uses the auto-scaled size
            show_size: Show sizes instead of permissions and date
            properties: Append permissions and timestamps
            detailed: Show POSIX permission strings when they can be read;
                plain (uncolored) output always uses the compact summary
        """
        for record in records:
            size_text = size_unit.format(record.size) if size_unit else record.size_human

            if record.is_directory:
                parts = [self._styled(record.name, "bold blue")]
                if show_size:
                    parts.append(self._styled(size_text, "bold cyan"))
                parts.append(self._styled("[DIR]", "blue"))
            elif show_size:
                parts = [escape(record.name), self._styled(size_text, "green")]
            else:
                modified_short = record.modified.split(" ")[0] if record.modified else "unknown"
                permissions = self.permission_display(record) if detailed and self.color else record.permissions
                parts = [
                    escape(record.name),
                    self._styled(permissions, "magenta"),
                    self._styled(modified_short, "yellow"),
                ]

            line = " ".join(parts)
            if properties:
                created_info = f"Created: {record.created}" if record.created else ""
                modified_info = f"Modified: {record.modified}" if record.modified else ""
                details = f"[{record.permissions} {created_info} {modified_info}]"
                line += " " + self._styled(details, "yellow")

            self.console.print(line)

    def permission_display(self, record: FileRecord) -> str:
        """POSIX permission string read fresh from disk, else the compact summary"""
        try:
            mode = pathlib.Path(record.path).stat().st_mode
        except OSError:
            return record.permissions
        return detailed_permissions(mode, record.is_directory)

    # Statistics
    def show_type_stats(self, stats: TypeStats):
        """Print per-type counts (nothing when there are no files)"""
        if stats.total_files == 0:
            return

        self.print_header("File Type Statistics")
        for file_type, count, percentage in stats.counts:
            self.console.print(
                f"{self._styled(file_type, 'magenta')}: {self._styled(str(count), 'cyan')} files ({percentage:.1f}%)"
            )
        self.console.print(f"\nTotal Files: {self._styled(str(stats.total_files), 'cyan')}")

    def show_totals(self, report: AnalysisReport, total_size: Optional[int] = None):
        counts = f"{report.regular_files} files, {report.directories} dirs"
        self.console.print(
            f"Total Items: {self._styled(str(report.total_items), 'cyan')} ({self._styled(counts, 'yellow')})"
        )
        if total_size is not None:
            self.console.print(f"Total Size: {self._styled(format_size(total_size), 'bold green')}")

    def _show_buckets(self, title: str, buckets: list[BucketCount]):
        self.console.print(f"\n{title}:")
        for bucket in buckets:
            self.console.print(
                f"  {self._styled(bucket.label, 'magenta')}: "
                f"{self._styled(str(bucket.count), 'cyan')} files ({bucket.percentage:.1f}%)"
            )

    def show_analysis(self, report: AnalysisReport):
        """Print size/age histograms, extremes and the permission summary"""
        self.print_header("Detailed Analysis")
        self.show_totals(report)
        self._show_buckets("Size Distribution", report.size_distribution)
        self._show_buckets("File Age Distribution", report.age_distribution)

        if report.largest_file:
            largest = report.largest_file
            self.console.print(
                f"\nLargest File: {self._styled(largest.name, 'cyan')} ({self._styled(largest.size_human, 'green')})"
            )
        if report.smallest_file:
            smallest = report.smallest_file
            self.console.print(
                f"Smallest File: {self._styled(smallest.name, 'cyan')} ({self._styled(smallest.size_human, 'green')})"
            )

        if report.permissions:
            summary = report.permissions
            self.console.print("\nPermissions Summary:")
            for label, entry in (
                ("Readable", summary.readable),
                ("Writable", summary.writable),
                ("Read-only", summary.read_only),
                ("Read-write", summary.read_write),
            ):
                self.console.print(
                    f"  {label}: {self._styled(str(entry.count), 'cyan')} files ({entry.percentage:.1f}%)"
                )

    # Duplicates
    def show_duplicates(self, groups: dict[int, list[str]]):
        """Print same-size groups, largest size first"""
        if not groups:
            self.console.print("No duplicate files found.")
            return

        group_count, file_count = summarize(groups)
        self.print_header("Duplicate files found (same size, content not compared)")
        self.console.print(
            f"{self._styled(str(file_count), 'cyan')} files in {self._styled(str(group_count), 'cyan')} size groups\n"
        )
        for size in sorted(groups, reverse=True):
            paths = groups[size]
            self.console.print(
                f"Size: {self._styled(format_size(size), 'cyan')} ({self._styled(str(len(paths)), 'yellow')})"
            )
            for path in paths:
                self.console.print(f"  {escape(format_path_for_display(path))}")
            self.console.print()

    # Disks
    def show_disks(self, disks: Sequence[DiskInfo], size_unit: Optional[SizeUnit] = None):
        """Print all volumes in a table"""
        table = Table(title="Available disks", box=box.SIMPLE)
        table.add_column("Name", style="bold blue" if self.color else "")
        table.add_column("Mount point")
        table.add_column("Total", justify="right", style="cyan" if self.color else "")
        table.add_column("Used", justify="right", style="red" if self.color else "")
        table.add_column("Available", justify="right", style="green" if self.color else "")

        render = size_unit.format if size_unit else format_size
        for disk in disks:
            table.add_row(
                escape(disk.name), escape(disk.mount_point), render(disk.total), render(disk.used), render(disk.available)
            )
        self.console.print(table)

    def show_disk_info(self, disk: DiskInfo):
        self.show_properties(
            f"Disk Information: {disk.name}",
            {
                "Device": disk.device,
                "Mount Point": disk.mount_point,
                "File System": disk.file_system,
                "Total Space": format_size(disk.total),
                "Used Space": f"{format_size(disk.used)} ({disk.usage_percentage:.1f}%)",
                "Available Space": format_size(disk.available),
            },
        )

    # Single path views
    def show_properties(self, title: str, properties: dict[str, str]):
        """Display key/value properties in a panel"""
        table = Table(show_header=False, box=box.SIMPLE)
        table.add_column("Property", style="cyan dim" if self.color else "", justify="right")
        table.add_column("Value", style="cyan" if self.color else "")
        for key, value in properties.items():
            table.add_row(key, escape(str(value)))

        self.console.print(Panel(table, title=escape(title), box=box.ROUNDED, expand=False))

    def local_time(self, timestamp: Optional[str]) -> str:
        """Render a stored UTC timestamp in the local time zone"""
        moment = parse_timestamp(timestamp)
        if moment is None:
            return "unknown"
        return moment.astimezone(self.timezone).strftime("%Y-%m-%d %H:%M:%S %Z")

    def _timestamps(self, record: FileRecord) -> dict[str, str]:
        return {
            "Created": record.created or "unknown",
            "Modified": record.modified or "unknown",
            "Modified (local)": self.local_time(record.modified),
        }

    def show_file_analysis(self, record: FileRecord, size_unit: Optional[SizeUnit] = None, detailed: bool = True):
        path = pathlib.Path(record.path)
        properties = {
            "Name": record.name,
            "Path": str(path.resolve()),
            "Size": size_unit.format(record.size) if size_unit else record.size_human,
            "Type": record.file_type,
            "Extension": describe_extension(path),
            "Permissions": self.permission_display(record) if detailed else record.permissions,
        }
        properties.update(self._timestamps(record))
        self.show_properties("File Analysis", properties)

    def show_directory_analysis(
        self, record: FileRecord, size_unit: Optional[SizeUnit] = None, detailed: bool = True
    ):
        properties = {
            "Name": record.name,
            "Path": record.path,
            "Size": size_unit.format(record.size) if size_unit else record.size_human,
            "Permissions": self.permission_display(record) if detailed else record.permissions,
        }
        properties.update(self._timestamps(record))
        self.show_properties("Directory Analysis", properties)

    def show_tree(self, tree: Tree):
        self.console.print(tree)

