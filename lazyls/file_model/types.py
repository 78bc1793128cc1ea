"""Domain datatypes for stat-ed filesystem entries."""

from __future__ import annotations

import os
import stat as stat_mod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class FileKind(Enum):
    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    PIPE = "pipe"
    SOCKET = "socket"
    BLOCK_DEVICE = "block_device"
    CHAR_DEVICE = "char_device"
    OTHER = "other"


def kind_for_mode(mode: int) -> FileKind:
    """Map the type bits of ``st_mode`` onto a :class:`FileKind`."""
    if stat_mod.S_ISDIR(mode):
        return FileKind.DIRECTORY
    if stat_mod.S_ISREG(mode):
        return FileKind.FILE
    if stat_mod.S_ISLNK(mode):
        return FileKind.SYMLINK
    if stat_mod.S_ISFIFO(mode):
        return FileKind.PIPE
    if stat_mod.S_ISSOCK(mode):
        return FileKind.SOCKET
    if stat_mod.S_ISBLK(mode):
        return FileKind.BLOCK_DEVICE
    if stat_mod.S_ISCHR(mode):
        return FileKind.CHAR_DEVICE
    return FileKind.OTHER


@dataclass(frozen=True)
class FileMetadata:
    """Snapshot of the stat fields the listing needs, captured once."""

    size: int
    inode: int
    nlink: int
    blocks: int
    atime: float
    mtime: float
    ctime: float
    uid: int
    gid: int
    mode: int

    @classmethod
    def from_stat(cls, st: os.stat_result) -> "FileMetadata":
        return cls(
            size=int(st.st_size),
            inode=int(st.st_ino),
            nlink=int(st.st_nlink),
            blocks=int(getattr(st, "st_blocks", 0)),
            atime=float(st.st_atime),
            mtime=float(st.st_mtime),
            ctime=float(st.st_ctime),
            uid=int(st.st_uid),
            gid=int(st.st_gid),
            mode=int(st.st_mode),
        )

    @property
    def kind(self) -> FileKind:
        return kind_for_mode(self.mode)

    @property
    def permission_bits(self) -> int:
        return stat_mod.S_IMODE(self.mode)


@dataclass(frozen=True)
class LinkTarget:
    """Where a symlink points, as written in the link, plus whether it resolves."""

    path: Path
    exists: bool
    is_directory: bool = False


def extension_for_name(name: str) -> str | None:
    """Return the lower-cased extension of ``name``.

    Dotfiles such as ``.bashrc`` have no extension; ``archive.tar.gz`` has
    ``gz``.
    """
    index = name.rfind(".")
    if index <= 0 or index == len(name) - 1:
        return None
    return name[index + 1 :].lower()


@dataclass(frozen=True)
class Entry:
    """One filesystem object whose metadata has already been captured.

    ``name`` is the text shown for the entry: the base name for directory
    children, or the path exactly as given for command-line arguments.
    """

    path: Path
    name: str
    metadata: FileMetadata
    depth: int = 0
    link_target: LinkTarget | None = None

    @property
    def kind(self) -> FileKind:
        return self.metadata.kind

    @property
    def ext(self) -> str | None:
        return extension_for_name(self.path.name or self.name)

    @property
    def is_directory(self) -> bool:
        return self.kind is FileKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is FileKind.FILE

    @property
    def is_link(self) -> bool:
        return self.kind is FileKind.SYMLINK

    @property
    def is_dotfile(self) -> bool:
        return self.name.startswith(".")

    @property
    def is_executable_file(self) -> bool:
        return self.is_file and bool(self.metadata.mode & stat_mod.S_IXUSR)


__all__ = [
    "FileKind",
    "kind_for_mode",
    "FileMetadata",
    "LinkTarget",
    "extension_for_name",
    "Entry",
]
