"""Render strategies for entry batches.

Exactly one of the four views is chosen per run:
- ``Lines``: one name per line
- ``Grid``: names packed into columns that fit the console width
- ``Details``: metadata columns plus name, optionally drawn as a tree
- ``GridDetails``: details tables packed side by side
"""

from __future__ import annotations

from typing import TextIO, Union

from ..file_model import Directory, Entry
from .details import Details, Row
from .grid import Grid
from .grid_details import GridDetails
from .lines import Lines

View = Union[Lines, Grid, Details, GridDetails]


def render(view: View, directory: Directory | None, entries: list[Entry], writer: TextIO) -> None:
    """Write ``entries`` through ``view``. Writer errors propagate unchanged."""
    if isinstance(view, Lines):
        view.view(entries, writer)
    elif isinstance(view, Grid):
        view.view(entries, writer)
    elif isinstance(view, Details):
        view.view(directory, entries, writer)
    elif isinstance(view, GridDetails):
        view.view(directory, entries, writer)
    else:
        raise TypeError(f"unknown view: {view!r}")


__all__ = ["View", "Lines", "Grid", "Details", "GridDetails", "Row", "render"]
