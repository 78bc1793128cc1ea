"""The lines view: one entry per line, name only."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from ..colours import Colours
from ..file_model import Entry
from .filename import filename, sibling_names_of


@dataclass(frozen=True)
class Lines:
    colours: Colours

    def view(self, entries: list[Entry], writer: TextIO) -> None:
        siblings = sibling_names_of(entries)
        for entry in entries:
            writer.write(filename(entry, self.colours, True, siblings) + "\n")


__all__ = ["Lines"]
