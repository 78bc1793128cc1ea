"""Text for each metadata column of a details row."""

from __future__ import annotations

import grp
import os
import pwd
import stat as stat_mod
import time
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache

from .. import xattr
from ..ansi import paint
from ..colours import Colours
from ..columns import Column, ColumnKind, SizeFormat, TimeType
from ..file_model import Entry, FileKind
from ..git_status import (
    CONFLICTED,
    DELETED,
    MODIFIED,
    NEW,
    RENAMED,
    TYPE_CHANGE,
    GitRepository,
)

DECIMAL_PREFIXES = ("k", "M", "G", "T", "P", "E", "Z", "Y")
BINARY_PREFIXES = ("Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi")

_TYPE_CHARS = {
    FileKind.DIRECTORY: "d",
    FileKind.FILE: ".",
    FileKind.SYMLINK: "l",
    FileKind.PIPE: "|",
    FileKind.SOCKET: "s",
    FileKind.BLOCK_DEVICE: "b",
    FileKind.CHAR_DEVICE: "c",
    FileKind.OTHER: "?",
}

_GIT_ROLES = {
    NEW: "git_new",
    MODIFIED: "git_modified",
    DELETED: "git_deleted",
    RENAMED: "git_renamed",
    TYPE_CHANGE: "git_typechange",
    CONFLICTED: "git_conflicted",
}


@lru_cache(maxsize=256)
def user_name(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


@lru_cache(maxsize=256)
def group_name(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def _current_groups() -> frozenset[int]:
    try:
        return frozenset({os.getgid(), *os.getgroups()})
    except OSError:
        return frozenset({os.getgid()})


@dataclass(frozen=True)
class CellContext:
    """Everything cell rendering needs beyond the entry itself."""

    colours: Colours
    repository: GitRepository | None = None
    xattr_enabled: bool = xattr.ENABLED
    current_uid: int = field(default_factory=os.getuid)
    current_groups: frozenset[int] = field(default_factory=_current_groups)
    current_year: int = field(default_factory=lambda: time.localtime().tm_year)


def _bit(mode: int, flag: int, char: str, style: str, colours: Colours) -> str:
    if mode & flag:
        return paint(style, char)
    return paint(colours.punctuation, "-")


def _special_bit(mode: int, exec_flag: int, special_flag: int, exec_style: str, special_style: str, chars: str, colours: Colours) -> str:
    executable = bool(mode & exec_flag)
    if mode & special_flag:
        return paint(special_style, chars[0] if executable else chars[1])
    if executable:
        return paint(exec_style, "x")
    return paint(colours.punctuation, "-")


def render_permissions(entry: Entry, ctx: CellContext) -> str:
    colours = ctx.colours
    mode = entry.metadata.mode
    if entry.is_directory:
        type_style = colours.perm_type
    elif entry.is_file:
        type_style = colours.punctuation
    else:
        type_style = colours.special
    user_exec_style = colours.user_execute_file if entry.is_file else colours.user_execute_other
    special_user_style = colours.special_user_file if entry.is_file else colours.special_other

    parts = [
        paint(type_style, _TYPE_CHARS[entry.kind]),
        _bit(mode, stat_mod.S_IRUSR, "r", colours.user_read, colours),
        _bit(mode, stat_mod.S_IWUSR, "w", colours.user_write, colours),
        _special_bit(mode, stat_mod.S_IXUSR, stat_mod.S_ISUID, user_exec_style, special_user_style, "sS", colours),
        _bit(mode, stat_mod.S_IRGRP, "r", colours.group_read, colours),
        _bit(mode, stat_mod.S_IWGRP, "w", colours.group_write, colours),
        _special_bit(mode, stat_mod.S_IXGRP, stat_mod.S_ISGID, colours.group_execute, colours.special_other, "sS", colours),
        _bit(mode, stat_mod.S_IROTH, "r", colours.other_read, colours),
        _bit(mode, stat_mod.S_IWOTH, "w", colours.other_write, colours),
        _special_bit(mode, stat_mod.S_IXOTH, stat_mod.S_ISVTX, colours.other_execute, colours.special_other, "tT", colours),
    ]
    if ctx.xattr_enabled and xattr.list_attributes(entry.path):
        parts.append(paint(colours.attribute, "@"))
    return "".join(parts)


def format_size(size: int, size_format: SizeFormat) -> tuple[str, str]:
    """Split a byte count into ``(number, unit)`` text for ``size_format``."""
    if size_format is SizeFormat.JUST_BYTES:
        return f"{size:,}", ""
    if size_format is SizeFormat.BINARY_BYTES:
        base, prefixes = 1024, BINARY_PREFIXES
    else:
        base, prefixes = 1000, DECIMAL_PREFIXES
    if size < base:
        return str(size), ""

    value = float(size)
    unit = ""
    for prefix in prefixes:
        value /= base
        unit = prefix
        if value < base:
            break
    if value < 10:
        return f"{value:.1f}", unit
    return f"{value:.0f}", unit


def render_size(entry: Entry, size_format: SizeFormat, ctx: CellContext) -> str:
    colours = ctx.colours
    if entry.is_directory:
        return paint(colours.punctuation, "-")
    number, unit = format_size(entry.metadata.size, size_format)
    return paint(colours.size_style(entry.metadata.size), number) + paint(colours.size_unit, unit)


def format_timestamp(timestamp: float, current_year: int) -> str:
    moment = datetime.fromtimestamp(timestamp)
    month = moment.strftime("%b")
    if moment.year == current_year:
        return f"{moment.day:>2} {month} {moment.hour:02}:{moment.minute:02}"
    return f"{moment.day:>2} {month} {moment.year:>5}"


def _timestamp_for(entry: Entry, time_type: TimeType) -> float:
    if time_type is TimeType.ACCESSED:
        return entry.metadata.atime
    if time_type is TimeType.CREATED:
        return entry.metadata.ctime
    return entry.metadata.mtime


def render_git(entry: Entry, ctx: CellContext) -> str:
    colours = ctx.colours
    if ctx.repository is None:
        return paint(colours.punctuation, "--")
    status = ctx.repository.status_for(entry.path, entry.is_directory)
    return "".join(
        paint(getattr(colours, _GIT_ROLES[code]) if code in _GIT_ROLES else colours.punctuation, code)
        for code in (status.staged, status.unstaged)
    )


def render_cell(column: Column, entry: Entry, ctx: CellContext) -> str:
    """Render one column of ``entry``; never raises for a well-formed entry."""
    colours = ctx.colours
    metadata = entry.metadata
    kind = column.kind
    if kind is ColumnKind.PERMISSIONS:
        return render_permissions(entry, ctx)
    if kind is ColumnKind.FILE_SIZE:
        assert column.size_format is not None
        return render_size(entry, column.size_format, ctx)
    if kind is ColumnKind.TIMESTAMP:
        assert column.time_type is not None
        return paint(colours.date, format_timestamp(_timestamp_for(entry, column.time_type), ctx.current_year))
    if kind is ColumnKind.BLOCKS:
        if entry.is_file:
            return paint(colours.blocks, str(metadata.blocks))
        return paint(colours.punctuation, "-")
    if kind is ColumnKind.USER:
        style = colours.user_you if metadata.uid == ctx.current_uid else colours.user_someone_else
        return paint(style, user_name(metadata.uid))
    if kind is ColumnKind.GROUP:
        style = colours.group_yours if metadata.gid in ctx.current_groups else colours.group_not_yours
        return paint(style, group_name(metadata.gid))
    if kind is ColumnKind.HARD_LINKS:
        style = colours.links_multi if entry.is_file and metadata.nlink > 1 else colours.links_normal
        return paint(style, str(metadata.nlink))
    if kind is ColumnKind.INODE:
        return paint(colours.inode, str(metadata.inode))
    if kind is ColumnKind.GIT_STATUS:
        return render_git(entry, ctx)
    raise ValueError(f"unknown column: {column!r}")


__all__ = [
    "DECIMAL_PREFIXES",
    "BINARY_PREFIXES",
    "CellContext",
    "user_name",
    "group_name",
    "render_permissions",
    "format_size",
    "render_size",
    "format_timestamp",
    "render_git",
    "render_cell",
]
