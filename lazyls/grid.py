"""Grid packing: fit a list of cells into the fewest rows of a given width.

Cells are placed column-major (down, then across) or row-major (across,
then down). For each candidate row count the column widths are the widest
cell in each column; the first row count whose columns plus gaps fit the
width wins, which is the same as taking the largest feasible column count.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .ansi import display_width

COLUMN_GAP = 2


class Direction(Enum):
    TOP_TO_BOTTOM = "top_to_bottom"
    LEFT_TO_RIGHT = "left_to_right"


@dataclass(frozen=True)
class Cell:
    contents: str
    width: int

    @classmethod
    def of(cls, contents: str) -> "Cell":
        return cls(contents, display_width(contents))


@dataclass(frozen=True)
class GridLayout:
    """Where every cell goes, and how wide each column is.

    ``positions[i]`` is the ``(row, column)`` of cell ``i``.
    """

    rows: int
    columns: int
    column_widths: tuple[int, ...]
    positions: tuple[tuple[int, int], ...]
    gap: int = COLUMN_GAP

    @property
    def total_width(self) -> int:
        return total_width(self.column_widths, self.gap)

    def render_lines(self, cells: list[Cell]) -> list[str]:
        """Join cells into padded lines; the last column in a row is not padded."""
        grid: list[list[int | None]] = [[None] * self.columns for _ in range(self.rows)]
        for index, (row, column) in enumerate(self.positions):
            grid[row][column] = index

        separator = " " * self.gap
        lines: list[str] = []
        for row_cells in grid:
            filled = [index for index in row_cells if index is not None]
            parts: list[str] = []
            for column, index in enumerate(row_cells):
                if index is None:
                    continue
                cell = cells[index]
                if index == filled[-1]:
                    parts.append(cell.contents)
                else:
                    padding = max(0, self.column_widths[column] - cell.width)
                    parts.append(cell.contents + " " * padding)
            lines.append(separator.join(parts))
        return lines


def total_width(column_widths: tuple[int, ...] | list[int], gap: int = COLUMN_GAP) -> int:
    if not column_widths:
        return 0
    return sum(column_widths) + gap * (len(column_widths) - 1)


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def layout_for_rows(widths: list[int], rows: int, direction: Direction, gap: int = COLUMN_GAP) -> GridLayout:
    """Lay ``widths`` out over exactly ``rows`` rows (the last column may be short)."""
    count = len(widths)
    if count == 0:
        return GridLayout(0, 0, (), (), gap)
    rows = max(1, min(rows, count))
    columns = _ceil_div(count, rows)
    if direction is Direction.LEFT_TO_RIGHT:
        rows = _ceil_div(count, columns)

    column_widths = [0] * columns
    positions: list[tuple[int, int]] = []
    for index, width in enumerate(widths):
        if direction is Direction.TOP_TO_BOTTOM:
            row, column = index % rows, index // rows
        else:
            row, column = index // columns, index % columns
        positions.append((row, column))
        if width > column_widths[column]:
            column_widths[column] = width
    return GridLayout(rows, columns, tuple(column_widths), tuple(positions), gap)


def layout_for_columns(widths: list[int], columns: int, direction: Direction, gap: int = COLUMN_GAP) -> GridLayout:
    """Lay ``widths`` out for a candidate column count ``columns``.

    The layout uses ``ceil(N / columns)`` rows, so it may occupy fewer
    columns than asked for.
    """
    count = len(widths)
    if count == 0:
        return GridLayout(0, 0, (), (), gap)
    columns = max(1, min(columns, count))
    return layout_for_rows(widths, _ceil_div(count, columns), direction, gap)


def fit_into_width(
    widths: list[int],
    max_width: int,
    direction: Direction = Direction.TOP_TO_BOTTOM,
    gap: int = COLUMN_GAP,
) -> GridLayout | None:
    """Pick the layout with the fewest rows whose total width fits ``max_width``.

    Returns ``None`` when not even a single column fits, so the caller can
    fall back to one entry per line. Zero cells yield an empty layout.
    """
    count = len(widths)
    if count == 0:
        return GridLayout(0, 0, (), (), gap)
    widest = max(widths)
    if widest > max_width:
        return None

    # No layout can use more columns than the narrowest cells allow.
    min_rows = 1
    narrow = sorted(widths)
    running = 0
    for columns, width in enumerate(narrow, start=1):
        running += width + (gap if columns > 1 else 0)
        if running > max_width:
            min_rows = _ceil_div(count, columns - 1)
            break

    # A single column always fits here, so the loop returns by rows == count.
    for rows in range(min_rows, count):
        layout = layout_for_rows(widths, rows, direction, gap)
        if layout.total_width <= max_width:
            return layout
    return layout_for_rows(widths, count, direction, gap)


__all__ = [
    "COLUMN_GAP",
    "Direction",
    "Cell",
    "GridLayout",
    "total_width",
    "layout_for_rows",
    "layout_for_columns",
    "fit_into_width",
]
