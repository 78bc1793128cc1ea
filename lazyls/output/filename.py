"""Coloured entry names, with optional symlink targets."""

from __future__ import annotations

from ..ansi import paint
from ..colours import Colours
from ..file_model import Entry, FileKind
from ..filetype import FileClass, classify

_KIND_ROLES = {
    FileKind.DIRECTORY: "directory",
    FileKind.SYMLINK: "symlink",
    FileKind.PIPE: "pipe",
    FileKind.SOCKET: "socket",
    FileKind.BLOCK_DEVICE: "block_device",
    FileKind.CHAR_DEVICE: "char_device",
    FileKind.OTHER: "special",
}


def file_colour(entry: Entry, colours: Colours, sibling_names: frozenset[str] | None = None) -> str:
    """Pick the style for ``entry``'s name: kind first, then name class."""
    if colours.is_plain:
        return ""
    role = _KIND_ROLES.get(entry.kind)
    if role is not None:
        return getattr(colours, role)
    if entry.is_executable_file:
        return colours.executable

    file_class = classify(entry, sibling_names)
    if file_class is None:
        return colours.normal
    if file_class is FileClass.IMMEDIATE:
        return colours.immediate
    return getattr(colours, file_class.value)


def filename(
    entry: Entry,
    colours: Colours,
    links: bool,
    sibling_names: frozenset[str] | None = None,
) -> str:
    """Render ``entry``'s name; with ``links`` a symlink also shows its target."""
    name = paint(file_colour(entry, colours, sibling_names), entry.name)
    target = entry.link_target
    if not links or target is None:
        return name

    if not target.exists:
        return f"{name} {paint(colours.broken_arrow, '->')} {paint(colours.broken_filename, str(target.path))}"
    target_style = colours.directory if target.is_directory else colours.normal
    return f"{name} {paint(colours.link_arrow, '->')} {paint(target_style, str(target.path))}"


def sibling_names_of(entries: list[Entry]) -> frozenset[str]:
    return frozenset(entry.path.name or entry.name for entry in entries)


__all__ = ["file_colour", "filename", "sibling_names_of"]
