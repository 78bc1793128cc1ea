"""The details view: one row per entry, metadata columns, then the name.

Column widths are the widest rendered cell of each column across the batch
(header included). In tree mode directories are expanded inline, driven by
an explicit stack so deep trees never hit the interpreter's recursion
limit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from .. import xattr as xattr_mod
from ..ansi import display_width, pad_left, pad_right, paint
from ..colours import Colours
from ..columns import Alignment, Column, ColumnKind, Columns
from ..dir_action import RecurseOptions
from ..errors import EntryError
from ..file_model import Directory, Entry
from ..filtering import FileFilter
from .cells import CellContext, render_cell
from .filename import filename, sibling_names_of
from .tree import TreePart, continuation_prefix, tree_prefix


@dataclass(frozen=True)
class Row:
    """One output row. ``cells`` is ``None`` for rows that only carry a name."""

    cells: tuple[str, ...] | None
    name: str
    tree: tuple[TreePart, ...] = ()


@dataclass
class _Frame:
    entries: list[Entry]
    depth: int
    ancestors_last: tuple[bool, ...]
    siblings: frozenset[str]
    index: int = 0


@dataclass(frozen=True)
class Details:
    columns: Columns | None
    header: bool
    recurse: RecurseOptions | None
    filter: FileFilter
    xattr: bool
    colours: Colours
    git_enabled: bool = True
    xattr_supported: bool = xattr_mod.ENABLED

    def columns_for(self, directory: Directory | None) -> list[Column]:
        if self.columns is None:
            return []
        return self.columns.for_dir(directory, git_enabled=self.git_enabled)

    def cell_context(self, directory: Directory | None, columns: list[Column]) -> CellContext:
        wants_git = any(column.kind is ColumnKind.GIT_STATUS for column in columns)
        return CellContext(
            colours=self.colours,
            repository=directory.repository if wants_git and directory is not None else None,
            xattr_enabled=self.xattr_supported,
        )

    def header_row(self, columns: list[Column]) -> Row:
        return Row(
            cells=tuple(paint(self.colours.header, column.header) for column in columns),
            name=paint(self.colours.header, "Name"),
        )

    def entry_row(
        self,
        entry: Entry,
        columns: list[Column],
        ctx: CellContext,
        siblings: frozenset[str],
        tree: tuple[TreePart, ...],
    ) -> Row:
        cells = tuple(render_cell(column, entry, ctx) for column in columns)
        return Row(cells=cells, name=filename(entry, self.colours, True, siblings), tree=tree)

    def _should_descend(self, entry: Entry, depth: int) -> bool:
        recurse = self.recurse
        return recurse is not None and recurse.tree and entry.is_directory and not recurse.is_too_deep(depth)

    def _read_children(self, entry: Entry) -> tuple[list[Entry], list[EntryError]]:
        try:
            directory = Directory.read(entry)
        except EntryError as exc:
            return [], [exc]
        children: list[Entry] = []
        errors: list[EntryError] = []
        for child in directory.files():
            if isinstance(child, EntryError):
                errors.append(child)
            else:
                children.append(child)
        return self.filter.apply(children), errors

    def _error_row(self, error: EntryError, tree: tuple[TreePart, ...]) -> Row:
        return Row(cells=None, name=paint(self.colours.broken_filename, f"[{error.path}: {error}]"), tree=tree)

    def build_rows(self, directory: Directory | None, entries: list[Entry], columns: list[Column]) -> list[Row]:
        """Rows for ``entries`` plus, in tree mode, everything nested beneath them."""
        ctx = self.cell_context(directory, columns)
        rows: list[Row] = [self.header_row(columns)] if self.header and columns else []
        stack = [_Frame(entries=entries, depth=0, ancestors_last=(), siblings=sibling_names_of(entries))]

        while stack:
            frame = stack[-1]
            if frame.index >= len(frame.entries):
                stack.pop()
                continue
            entry = frame.entries[frame.index]
            frame.index += 1
            is_last = frame.index == len(frame.entries)

            if frame.depth == 0:
                tree: tuple[TreePart, ...] = ()
                child_ancestors: tuple[bool, ...] = ()
            else:
                tree = tuple(tree_prefix(frame.ancestors_last, is_last))
                child_ancestors = frame.ancestors_last + (is_last,)
            rows.append(self.entry_row(entry, columns, ctx, frame.siblings, tree))

            if self.xattr and self.xattr_supported:
                hang = tuple(continuation_prefix(child_ancestors)) if frame.depth else ()
                for attribute in xattr_mod.list_attributes(entry.path):
                    rows.append(Row(cells=None, name=f"{attribute.name} (len={attribute.size})", tree=hang))

            if not self._should_descend(entry, frame.depth):
                continue
            children, errors = self._read_children(entry)
            for position, error in enumerate(errors):
                last_error = not children and position == len(errors) - 1
                rows.append(self._error_row(error, tuple(tree_prefix(child_ancestors, last_error))))
            if children:
                stack.append(
                    _Frame(
                        entries=children,
                        depth=frame.depth + 1,
                        ancestors_last=child_ancestors,
                        siblings=sibling_names_of(children),
                    )
                )
        return rows

    def render_rows(self, rows: list[Row], columns: list[Column]) -> list[str]:
        """Align rows into text lines; widths come from this batch alone."""
        widths = [0] * len(columns)
        for row in rows:
            if row.cells is None:
                continue
            for index, cell in enumerate(row.cells):
                widths[index] = max(widths[index], display_width(cell))

        blank = " " * (sum(widths) + len(widths))
        lines: list[str] = []
        for row in rows:
            tree = paint(self.colours.punctuation, "".join(part.value for part in row.tree))
            if not columns:
                lines.append(tree + row.name)
                continue
            if row.cells is None:
                lines.append(blank + tree + row.name)
                continue
            cells = [
                pad_left(cell, width) if column.alignment is Alignment.RIGHT else pad_right(cell, width)
                for column, cell, width in zip(columns, row.cells, widths)
            ]
            lines.append(" ".join(cells) + " " + tree + row.name)
        return lines

    def table_lines(self, directory: Directory | None, entries: list[Entry]) -> list[str]:
        columns = self.columns_for(directory)
        return self.render_rows(self.build_rows(directory, entries, columns), columns)

    def view(self, directory: Directory | None, entries: list[Entry], writer: TextIO) -> None:
        for line in self.table_lines(directory, entries):
            writer.write(line + "\n")


__all__ = ["Row", "Details"]
