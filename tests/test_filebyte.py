import datetime
import io
import json
import logging

import pytest

from console_ui import ConsoleUI
from filebyte import Filebyte, build_parser, main
from filebyte_config import ConfigManager, FilebyteConfig


@pytest.fixture
def run_cli(tmp_path_factory):
    """Run the application with plain-text output captured in a buffer"""
    config_dir = tmp_path_factory.mktemp("config")

    def _run(*argv, config=None, color=False):
        manager = ConfigManager(config_dir)
        if config is not None:
            manager.save(config)
        output = io.StringIO()
        ui = ConsoleUI(color=color, file=output, width=300, timezone=datetime.timezone.utc)
        args = build_parser().parse_args([str(a) for a in argv])
        status = Filebyte(args, ui=ui, config_manager=manager).run()
        return status, output.getvalue()

    return _run


def test_listing_shows_directories_first(run_cli, sample_tree):
    status, output = run_cli(sample_tree)
    lines = output.splitlines()

    assert status == 0
    assert lines[0] == "src [DIR]"
    assert lines[1] == "tmp_cache [DIR]"
    assert lines[2].startswith("app.log rwx ")


def test_colored_listing_shows_posix_permissions(run_cli, sample_tree):
    _, output = run_cli(sample_tree, color=True)

    assert "app.log -rw" in output


def test_listing_with_sizes(run_cli, sample_tree):
    _, output = run_cli(sample_tree, "-s")

    assert "src 42 B [DIR]" in output
    assert "notes.txt 20 B" in output


def test_listing_with_fixed_unit(run_cli, sample_tree):
    _, output = run_cli(sample_tree, "--size", "kb")

    assert "notes.txt 0.02 KB" in output


def test_invalid_size_unit(run_cli, sample_tree):
    status, output = run_cli(sample_tree, "--size", "furlongs")

    assert status == 1
    assert "Invalid size unit: furlongs" in output


def test_recursive_listing_adds_type_statistics(run_cli, sample_tree):
    _, output = run_cli(sample_tree, "-r")

    assert "util.py" in output
    assert "File Type Statistics:" in output
    assert "image/png: 1 files" in output
    assert "Total Files: 7" in output


def test_search_shows_statistics_instead_of_listing(run_cli, sample_tree):
    _, output = run_cli(sample_tree, "-r", "-e", "log")

    assert "Total Files: 3" in output
    assert "app.log" not in output


def test_search_without_results(run_cli, sample_tree):
    status, output = run_cli(sample_tree, "-e", "nothing-like-this")

    assert status == 0
    assert "No files found matching pattern: nothing-like-this" in output


def test_sort_from_config(run_cli, sample_tree):
    _, output = run_cli(sample_tree, "-s", config=FilebyteConfig(sort_by="size"))
    names = [line.split()[0] for line in output.splitlines() if line.strip()]

    assert names == ["src", "tmp_cache", "notes.txt", "image.png", "app.log"]


def test_export_json(run_cli, sample_tree, tmp_path_factory):
    target = tmp_path_factory.mktemp("export") / "out.json"

    status, output = run_cli(sample_tree, "--export", target)

    assert status == 0
    assert "Results exported to" in output
    assert {item["name"] for item in json.loads(target.read_text())} == {
        "app.log",
        "notes.txt",
        "image.png",
        "src",
        "tmp_cache",
    }


def test_export_rejects_unknown_format(run_cli, sample_tree, tmp_path_factory):
    target = tmp_path_factory.mktemp("export") / "out.xml"

    status, output = run_cli(sample_tree, "--export", target)

    assert status == 1
    assert "Unsupported export format" in output


def test_properties_show_full_analysis(run_cli, sample_tree):
    _, output = run_cli(sample_tree, "-p")

    assert "Total Items: 10 (7 files, 3 dirs)" in output
    assert "Total Size: 91 B" in output
    assert "Size Distribution:" in output
    assert "Largest File: main.py (30 B)" in output
    assert "Smallest File: junk.log (3 B)" in output
    assert "Permissions Summary:" in output


def test_duplicates(run_cli, tmp_path):
    (tmp_path / "a").write_bytes(b"1234")
    (tmp_path / "b").write_bytes(b"abcd")
    (tmp_path / "c").write_bytes(b"xy")

    _, output = run_cli(tmp_path, "--duplicates")

    assert "2 files in 1 size groups" in output
    assert "Size: 4 B (2)" in output
    assert "Size: 2 B" not in output


def test_no_duplicates(run_cli, tmp_path):
    (tmp_path / "a").write_bytes(b"1")

    _, output = run_cli(tmp_path, "--duplicates")

    assert "No duplicate files found." in output


def test_tree(run_cli, sample_tree):
    _, output = run_cli(sample_tree, "-t")

    assert "util.py" in output
    assert "└──" in output or "├──" in output


def test_tree_requires_directory(run_cli, sample_tree):
    status, output = run_cli(sample_tree / "notes.txt", "-t")

    assert status == 1
    assert "is not a directory" in output


def test_plain_file_path_shows_file_analysis(run_cli, sample_tree):
    status, output = run_cli(sample_tree / "image.png")

    assert status == 0
    assert "File Analysis" in output
    assert "image/png" in output
    assert "Extension" in output


def test_file_option_rejects_directories(run_cli, sample_tree):
    status, output = run_cli("-f", sample_tree)

    assert status == 1
    assert "is not a file" in output


def test_directory_option(run_cli, sample_tree):
    status, output = run_cli("-d", sample_tree / "src")

    assert status == 0
    assert "Directory Analysis" in output
    assert "42 B" in output


def test_whole_detects_kind(run_cli, sample_tree):
    _, dir_output = run_cli(sample_tree / "src", "-w")
    _, file_output = run_cli(sample_tree / "notes.txt", "-w")

    assert "Directory Analysis" in dir_output
    assert "File Analysis" in file_output


def test_missing_path_fails(run_cli, tmp_path):
    status, output = run_cli(tmp_path / "missing")

    assert status == 1
    assert "does not exist" in output


def test_unknown_disk(run_cli, monkeypatch):
    monkeypatch.setattr("filebyte.find_disk", lambda name: None)

    status, output = run_cli("-m", "nvme9")

    assert status == 1
    assert "Disk 'nvme9' not found" in output


def test_invalid_search_regex_is_reported(run_cli, sample_tree):
    status, output = run_cli(sample_tree, "-e", "[unclosed")

    assert status == 0
    assert "Warning: invalid search pattern '[unclosed' matches nothing" in output
    assert "No files found matching pattern: [unclosed" in output


def test_empty_exclusion_pattern_hides_everything(run_cli, sample_tree):
    status, output = run_cli(sample_tree, "-x", "")

    assert status == 0
    assert "No files found." in output


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_corrupt_config_warning_goes_through_rich_handler(
    restore_logging, sample_tree, tmp_path_factory, monkeypatch, capsys
):
    config_dir = tmp_path_factory.mktemp("broken-config")
    (config_dir / "config.json").write_text("{not json")
    monkeypatch.setenv("FILEBYTE_HOME", str(config_dir))

    status = main([str(sample_tree), "--no-color"])
    captured = capsys.readouterr()

    assert status == 0
    assert "WARNING" in captured.err
    assert "Ignoring unreadable configuration" in captured.err
    assert "notes.txt" in captured.out
