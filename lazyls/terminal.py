"""Terminal width discovery and colour auto-detection."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from typing import TextIO

from .errors import FailedParse


def terminal_columns(stream: TextIO | None = None) -> int | None:
    """Return the column count of the terminal behind ``stream``.

    ``None`` when the stream is not a terminal, for instance when output is
    redirected to a file or a pipe.
    """
    stream = sys.stdout if stream is None else stream
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None
    try:
        if not os.isatty(fd):
            return None
        columns = os.get_terminal_size(fd).columns
    except OSError:
        return None
    return columns if columns > 0 else None


def parse_width(value: str) -> int:
    try:
        width = int(value)
    except ValueError as exc:
        raise FailedParse(value) from exc
    if width <= 0:
        raise FailedParse(value)
    return width


def resolve_width(
    override: int | None,
    environ: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
) -> int | None:
    """Pick the listing width: explicit override, then ``COLUMNS``, then the terminal."""
    if override is not None:
        return override
    environ = os.environ if environ is None else environ
    columns = environ.get("COLUMNS")
    if columns:
        return parse_width(columns)
    return terminal_columns(stream)


def stream_is_terminal(stream: TextIO | None = None) -> bool:
    stream = sys.stdout if stream is None else stream
    try:
        return os.isatty(stream.fileno())
    except (AttributeError, OSError, ValueError):
        return False


__all__ = ["terminal_columns", "parse_width", "resolve_width", "stream_is_terminal"]
