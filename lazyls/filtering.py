"""Hidden-file filtering and ordering of entry batches.

The order of operations is fixed: filter, primary sort, reverse, then the
directories-first partition. Each sort is stable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .file_model import Entry

_NATURAL_TOKEN_RE = re.compile(r"[0-9]+|\S")
_DIGIT_ORDINAL = ord("0")


class SortField(Enum):
    UNSORTED = "none"
    NAME = "name"
    EXTENSION = "extension"
    SIZE = "size"
    INODE = "inode"
    MODIFIED = "modified"
    ACCESSED = "accessed"
    CREATED = "created"


class SortCase(Enum):
    """Whether name comparisons tell upper and lower case apart."""

    SENSITIVE = "sensitive"
    INSENSITIVE = "insensitive"


# Capitalised words select the case-insensitive name and extension orders.
SORT_FIELD_WORDS: dict[str, tuple[SortField, SortCase]] = {
    "none": (SortField.UNSORTED, SortCase.SENSITIVE),
    "name": (SortField.NAME, SortCase.SENSITIVE),
    "filename": (SortField.NAME, SortCase.SENSITIVE),
    "Name": (SortField.NAME, SortCase.INSENSITIVE),
    "Filename": (SortField.NAME, SortCase.INSENSITIVE),
    "extension": (SortField.EXTENSION, SortCase.SENSITIVE),
    "ext": (SortField.EXTENSION, SortCase.SENSITIVE),
    "Extension": (SortField.EXTENSION, SortCase.INSENSITIVE),
    "Ext": (SortField.EXTENSION, SortCase.INSENSITIVE),
    "size": (SortField.SIZE, SortCase.SENSITIVE),
    "filesize": (SortField.SIZE, SortCase.SENSITIVE),
    "inode": (SortField.INODE, SortCase.SENSITIVE),
    "modified": (SortField.MODIFIED, SortCase.SENSITIVE),
    "date": (SortField.MODIFIED, SortCase.SENSITIVE),
    "accessed": (SortField.ACCESSED, SortCase.SENSITIVE),
    "created": (SortField.CREATED, SortCase.SENSITIVE),
}


def natural_key(text: str, ignore_case: bool = False) -> tuple[tuple[int, int, str], ...]:
    """Sort key comparing embedded digit runs numerically.

    Everything else compares one character at a time by code point, and
    whitespace is skipped. A digit run meeting another character compares
    as its leading digit would, so ``"file.txt" < "file2.txt" < "file10.txt"``
    and ``"a-b" < "a1"``. Equal numbers with different zero padding fall back
    to the digit text so the ordering stays total.
    """
    if ignore_case:
        text = text.lower()
    parts: list[tuple[int, int, str]] = []
    for match in _NATURAL_TOKEN_RE.finditer(text):
        token = match.group()
        if token[0] in "0123456789":
            # No other character shares the digits' code point range.
            parts.append((_DIGIT_ORDINAL, int(token), token))
        else:
            parts.append((ord(token), 0, ""))
    return tuple(parts)


def _extension_key(case: SortCase):
    ignore_case = case is SortCase.INSENSITIVE

    def key(entry: Entry) -> tuple[bool, str, tuple]:
        ext = entry.ext or ""
        if ignore_case:
            ext = ext.lower()
        return (entry.ext is not None, ext, natural_key(entry.name, ignore_case))

    return key


def sort_key_for(field: SortField, case: SortCase = SortCase.SENSITIVE):
    """Return the key callable for ``field``, or ``None`` for insertion order."""
    if field is SortField.UNSORTED:
        return None
    if field is SortField.NAME:
        ignore_case = case is SortCase.INSENSITIVE
        return lambda entry: natural_key(entry.name, ignore_case)
    if field is SortField.EXTENSION:
        return _extension_key(case)
    if field is SortField.SIZE:
        return lambda entry: entry.metadata.size
    if field is SortField.INODE:
        return lambda entry: entry.metadata.inode
    if field is SortField.MODIFIED:
        return lambda entry: entry.metadata.mtime
    if field is SortField.ACCESSED:
        return lambda entry: entry.metadata.atime
    if field is SortField.CREATED:
        return lambda entry: entry.metadata.ctime
    raise ValueError(f"unknown sort field: {field!r}")


def filter_hidden(entries: list[Entry], show_hidden: bool) -> list[Entry]:
    if show_hidden:
        return list(entries)
    return [entry for entry in entries if not entry.is_dotfile]


def sort_entries(
    entries: list[Entry],
    field: SortField,
    reverse: bool = False,
    case: SortCase = SortCase.SENSITIVE,
) -> list[Entry]:
    """Stable sort by ``field``, then reverse the whole sequence if asked."""
    key = sort_key_for(field, case)
    ordered = list(entries) if key is None else sorted(entries, key=key)
    if reverse:
        ordered.reverse()
    return ordered


def directories_first(entries: list[Entry]) -> list[Entry]:
    """Stable partition placing directories ahead of everything else."""
    return sorted(entries, key=lambda entry: not entry.is_directory)


@dataclass(frozen=True)
class FileFilter:
    """How to prune and order a batch of entries before output."""

    show_hidden: bool = False
    reverse: bool = False
    list_dirs_first: bool = False
    sort_field: SortField = SortField.NAME
    sort_case: SortCase = SortCase.SENSITIVE

    def filter_argument_files(self, entries: list[Entry]) -> list[Entry]:
        """Entries named on the command line are never hidden-filtered."""
        return list(entries)

    def filter_child_files(self, entries: list[Entry]) -> list[Entry]:
        return filter_hidden(entries, self.show_hidden)

    def sort_files(self, entries: list[Entry]) -> list[Entry]:
        ordered = sort_entries(entries, self.sort_field, self.reverse, self.sort_case)
        if self.list_dirs_first:
            ordered = directories_first(ordered)
        return ordered

    def apply(self, entries: list[Entry]) -> list[Entry]:
        return self.sort_files(self.filter_child_files(entries))


__all__ = [
    "SortField",
    "SortCase",
    "SORT_FIELD_WORDS",
    "natural_key",
    "sort_key_for",
    "filter_hidden",
    "sort_entries",
    "directories_first",
    "FileFilter",
]
