#!/usr/bin/env python3
"""Directory tree rendering with rich.tree."""

import logging
import os
import pathlib
import stat
from typing import Union

from rich.markup import escape
from rich.tree import Tree

from file_analyzer import InvalidRootError

logger = logging.getLogger(__name__)


def build_tree(root: Union[str, pathlib.Path], color: bool = True, show_hidden: bool = True) -> Tree:
    """Build a renderable tree of everything beneath root

    Entries appear in filesystem enumeration order. Unreadable directories
    get an error note instead of children; a symlink leading back to one of
    its own ancestors is shown but not expanded.

    Raises:
        InvalidRootError: If root does not exist or is not a directory
    """
    root_path = pathlib.Path(root)
    if not root_path.exists():
        raise InvalidRootError(f"Path '{root}' does not exist")
    if not root_path.is_dir():
        raise InvalidRootError(f"Path '{root}' is not a directory")

    tree = Tree(_label(str(root_path), True, color), guide_style="dim" if color else "")
    _add_children(tree, root_path, color, show_hidden, frozenset())
    return tree


def _label(name: str, is_directory: bool, color: bool) -> str:
    name = escape(name)
    if is_directory and color:
        return f"[bold blue]{name}[/bold blue]"
    return name


def _add_children(
    node: Tree, directory: pathlib.Path, color: bool, show_hidden: bool, ancestors: frozenset
):
    try:
        directory_stat = directory.stat()
    except OSError:
        return
    identity = (directory_stat.st_dev, directory_stat.st_ino)
    if identity in ancestors:
        node.add("[dim]… (symlink loop)[/dim]" if color else "… (symlink loop)")
        return
    chain = ancestors | {identity}

    try:
        entries = list(os.scandir(directory))
    except OSError as e:
        logger.debug("Cannot read directory %s: %s", directory, e)
        message = f"Error reading directory: {escape(str(e))}"
        node.add(f"[red]{message}[/red]" if color else message)
        return

    for entry in entries:
        if not show_hidden and entry.name.startswith("."):
            continue
        try:
            is_directory = stat.S_ISDIR(entry.stat().st_mode)
        except OSError:
            is_directory = False

        child = node.add(_label(entry.name, is_directory, color))
        if is_directory:
            _add_children(child, pathlib.Path(entry.path), color, show_hidden, chain)


def tree_lines(root: Union[str, pathlib.Path], show_hidden: bool = True) -> list[str]:
    """Plain-text lines of the tree, for tests and non-terminal output"""
    from rich.console import Console

    console = Console(width=200, color_system=None, force_terminal=False)
    with console.capture() as capture:
        console.print(build_tree(root, color=False, show_hidden=show_hidden))
    return [line.rstrip() for line in capture.get().splitlines()]
