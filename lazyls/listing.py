"""Traversal controller: resolve arguments, print files, then directories.

Directories are processed from an explicit work queue. When recursion is
on, a directory's subdirectories are pushed to the *front* of the queue,
so each subtree is finished before the next sibling starts, without any
call-stack recursion.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .errors import EntryError
from .file_model import Directory, Entry, entry_from_path
from .git_status import GitRepository, find_repositories, find_repository
from .options import Options
from .output import render

logger = logging.getLogger(__name__)

RepositoriesLookup = Callable[[list[Path]], "list[GitRepository | None]"]


def path_depth(path: Path) -> int:
    """Number of path components, ignoring ``.``, plus one."""
    return sum(1 for part in path.parts if part != os.curdir) + 1


@dataclass(frozen=True)
class _QueuedDirectory:
    directory: Directory
    depth: int
    top_level: bool

    @property
    def heading(self) -> str:
        # Arguments keep the spelling the user typed.
        return self.directory.entry.name if self.top_level else str(self.directory.path)


class Lister:
    """Drive one listing run over ``options.paths``, writing to ``writer``.

    Per-path problems go to ``error_writer`` and never stop the run. Errors
    raised by ``writer`` itself propagate to the caller untouched.
    """

    def __init__(
        self,
        options: Options,
        writer: TextIO,
        error_writer: TextIO,
        repositories_lookup: RepositoriesLookup = find_repositories,
    ) -> None:
        self.options = options
        self.writer = writer
        self.error_writer = error_writer
        self.repositories_lookup = repositories_lookup

    def _report(self, message: str) -> None:
        self.error_writer.write(message + "\n")

    def resolve_arguments(self) -> tuple[list[Entry], list[Directory]]:
        """Split the argument paths into a file batch and directories to open."""
        scan_for_git = self.options.should_scan_for_git()
        treat_dirs_as_files = self.options.dir_action.treat_dirs_as_files()
        files: list[Entry] = []
        dirs: list[Directory] = []
        for name in self.options.paths:
            try:
                entry = entry_from_path(Path(name), name=name, follow_symlinks=True)
            except EntryError as exc:
                self._report(f"{name}: {exc}")
                continue

            if entry.is_directory and not treat_dirs_as_files:
                try:
                    dirs.append(Directory.read(entry, scan_for_git=scan_for_git, repository_lookup=find_repository))
                except EntryError as exc:
                    self._report(f"{name}: {exc}")
            else:
                files.append(entry)
        return files, dirs

    def prefetch_repositories(self, dirs: list[Directory]) -> None:
        """Look up every top-level directory's repository in parallel, then join."""
        if not dirs or not self.options.should_scan_for_git():
            return
        logger.debug("looking up repositories for %d directories", len(dirs))
        repositories = self.repositories_lookup([directory.path for directory in dirs])
        for directory, repository in zip(dirs, repositories):
            directory.set_repository(repository)

    def run(self) -> None:
        files, dirs = self.resolve_arguments()
        self.prefetch_repositories(dirs)

        # A directory gets a heading unless it is the only thing listed.
        no_files = not files
        is_only_dir = len(dirs) == 1 and no_files

        files = self.options.filter.filter_argument_files(files)
        self.print_files(None, files)
        self.print_dirs(dirs, first=no_files, is_only_dir=is_only_dir)

    def print_files(self, directory: Directory | None, entries: list[Entry]) -> None:
        if entries:
            render(self.options.view, directory, entries, self.writer)

    def _read_children(self, directory: Directory) -> list[Entry]:
        children: list[Entry] = []
        for child in directory.files():
            if isinstance(child, EntryError):
                self._report(f"[{child.path}: {child}]")
            else:
                children.append(child)
        return children

    def _open_child_directories(self, parent: Directory, children: list[Entry]) -> list[Directory]:
        opened: list[Directory] = []
        for child in children:
            if not child.is_directory:
                continue
            try:
                directory = Directory.read(child)
            except EntryError as exc:
                self._report(f"{child.path}: {exc}")
                continue
            if parent.repository is not None:
                directory.set_repository(parent.repository)
            opened.append(directory)
        return opened

    def print_dirs(self, dirs: list[Directory], first: bool, is_only_dir: bool) -> None:
        recurse = self.options.dir_action.recurse_options()
        queue = deque(_QueuedDirectory(directory, path_depth(directory.path), True) for directory in dirs)

        while queue:
            item = queue.popleft()
            directory = item.directory

            # Blank line between blocks, and between the file batch and the first block.
            if first:
                first = False
            else:
                self.writer.write("\n")

            if not (is_only_dir and item.top_level):
                self.writer.write(f"{item.heading}:\n")

            children = self.options.filter.apply(self._read_children(directory))

            child_dirs: list[Directory] = []
            if recurse is not None and not recurse.tree:
                if recurse.is_too_deep(item.depth):
                    logger.debug("not descending into %s at depth %d", directory.path, item.depth)
                else:
                    child_dirs = self._open_child_directories(directory, children)

            self.print_files(directory, children)
            # Subdirectories go to the front, in order, so their subtree is printed next.
            queue.extendleft(
                reversed([_QueuedDirectory(child, path_depth(child.path), False) for child in child_dirs])
            )


__all__ = ["Lister", "path_depth"]
