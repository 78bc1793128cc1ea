"""The grid-details view: several details tables side by side.

Entries are split column-major into ``c`` chunks and each chunk becomes its
own details table with its own column widths. ``c`` grows from one until
the tables no longer fit the console width; the last fitting ``c`` is used.
When even a single table is too wide the output is plain details.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from ..ansi import display_width
from ..file_model import Directory, Entry
from ..grid import COLUMN_GAP, total_width
from .details import Details, Row
from .filename import sibling_names_of
from .grid import Grid


def _chunks(items: list, columns: int) -> list[list]:
    rows = -(-len(items) // columns)
    return [items[start : start + rows] for start in range(0, len(items), rows)]


def _join_tables(tables: list[list[str]], widths: list[int], gap: int = COLUMN_GAP) -> list[str]:
    height = max(len(table) for table in tables)
    separator = " " * gap
    lines: list[str] = []
    for row_index in range(height):
        parts: list[str] = []
        last_filled = max(i for i, table in enumerate(tables) if row_index < len(table))
        for table_index, table in enumerate(tables[: last_filled + 1]):
            text = table[row_index] if row_index < len(table) else ""
            if table_index < last_filled:
                text += " " * max(0, widths[table_index] - display_width(text))
            parts.append(text)
        lines.append(separator.join(parts))
    return lines


@dataclass(frozen=True)
class GridDetails:
    grid: Grid
    details: Details

    def layout_lines(self, directory: Directory | None, entries: list[Entry]) -> list[str] | None:
        """Packed lines for ``entries``, or ``None`` if one table is already too wide."""
        details = self.details
        columns = details.columns_for(directory)
        ctx = details.cell_context(directory, columns)
        siblings = sibling_names_of(entries)
        header = [details.header_row(columns)] if details.header and columns else []
        rows: list[Row] = [details.entry_row(entry, columns, ctx, siblings, ()) for entry in entries]

        best: list[str] | None = None
        previous_count = 0
        for candidate in range(1, len(rows) + 1):
            chunks = _chunks(rows, candidate)
            if len(chunks) == previous_count:
                continue
            previous_count = len(chunks)
            tables = [details.render_rows(header + chunk, columns) for chunk in chunks]
            widths = [max(display_width(line) for line in table) for table in tables]
            if total_width(widths) > self.grid.console_width:
                break
            best = _join_tables(tables, widths)
        return best

    def view(self, directory: Directory | None, entries: list[Entry], writer: TextIO) -> None:
        lines = self.layout_lines(directory, entries)
        if lines is None:
            self.details.view(directory, entries, writer)
            return
        for line in lines:
            writer.write(line + "\n")


__all__ = ["GridDetails"]
