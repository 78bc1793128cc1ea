"""The grid view: names packed into as many columns as the width allows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from ..colours import Colours
from ..file_model import Entry
from ..grid import Cell, Direction, fit_into_width
from .filename import filename, sibling_names_of


@dataclass(frozen=True)
class Grid:
    across: bool
    console_width: int
    colours: Colours

    @property
    def direction(self) -> Direction:
        return Direction.LEFT_TO_RIGHT if self.across else Direction.TOP_TO_BOTTOM

    def view(self, entries: list[Entry], writer: TextIO) -> None:
        siblings = sibling_names_of(entries)
        cells = [Cell.of(filename(entry, self.colours, False, siblings)) for entry in entries]
        layout = fit_into_width([cell.width for cell in cells], self.console_width, self.direction)
        if layout is None:
            # Some name is wider than the console; one per line is the best we can do.
            for cell in cells:
                writer.write(cell.contents + "\n")
            return
        for line in layout.render_lines(cells):
            writer.write(line + "\n")


__all__ = ["Grid"]
