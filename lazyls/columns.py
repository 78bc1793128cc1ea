"""Which metadata columns a details view shows, and in what order."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .file_model import Directory


class Alignment(Enum):
    LEFT = "left"
    RIGHT = "right"


class SizeFormat(Enum):
    """Decimal prefixes (k, M, G), binary prefixes (Ki, Mi, Gi), or raw bytes."""

    DECIMAL_BYTES = "decimal"
    BINARY_BYTES = "binary"
    JUST_BYTES = "bytes"


class TimeType(Enum):
    ACCESSED = "accessed"
    MODIFIED = "modified"
    CREATED = "created"

    @property
    def header(self) -> str:
        return {
            TimeType.ACCESSED: "Date Accessed",
            TimeType.MODIFIED: "Date Modified",
            TimeType.CREATED: "Date Created",
        }[self]


TIME_WORDS: dict[str, TimeType] = {
    "mod": TimeType.MODIFIED,
    "modified": TimeType.MODIFIED,
    "acc": TimeType.ACCESSED,
    "accessed": TimeType.ACCESSED,
    "cr": TimeType.CREATED,
    "created": TimeType.CREATED,
}


@dataclass(frozen=True)
class TimeTypes:
    """Which timestamps to show; at least one is always shown."""

    accessed: bool = False
    modified: bool = True
    created: bool = False

    @classmethod
    def from_flags(cls, accessed: bool, modified: bool, created: bool) -> "TimeTypes":
        if not (accessed or modified or created):
            return cls()
        return cls(accessed=accessed, modified=modified, created=created)

    @classmethod
    def only(cls, time_type: TimeType) -> "TimeTypes":
        return cls(
            accessed=time_type is TimeType.ACCESSED,
            modified=time_type is TimeType.MODIFIED,
            created=time_type is TimeType.CREATED,
        )


class ColumnKind(Enum):
    INODE = "inode"
    PERMISSIONS = "permissions"
    HARD_LINKS = "links"
    FILE_SIZE = "size"
    BLOCKS = "blocks"
    USER = "user"
    GROUP = "group"
    TIMESTAMP = "timestamp"
    GIT_STATUS = "git"


_RIGHT_ALIGNED = frozenset(
    {ColumnKind.FILE_SIZE, ColumnKind.HARD_LINKS, ColumnKind.INODE, ColumnKind.BLOCKS, ColumnKind.GIT_STATUS}
)

_HEADERS = {
    ColumnKind.INODE: "inode",
    ColumnKind.PERMISSIONS: "Permissions",
    ColumnKind.HARD_LINKS: "Links",
    ColumnKind.FILE_SIZE: "Size",
    ColumnKind.BLOCKS: "Blocks",
    ColumnKind.USER: "User",
    ColumnKind.GROUP: "Group",
    ColumnKind.GIT_STATUS: "Git",
}


@dataclass(frozen=True)
class Column:
    """One metadata column; only size and timestamp columns carry extra data."""

    kind: ColumnKind
    size_format: SizeFormat | None = None
    time_type: TimeType | None = None

    @classmethod
    def file_size(cls, size_format: SizeFormat) -> "Column":
        return cls(ColumnKind.FILE_SIZE, size_format=size_format)

    @classmethod
    def timestamp(cls, time_type: TimeType) -> "Column":
        return cls(ColumnKind.TIMESTAMP, time_type=time_type)

    @property
    def alignment(self) -> Alignment:
        return Alignment.RIGHT if self.kind in _RIGHT_ALIGNED else Alignment.LEFT

    @property
    def header(self) -> str:
        if self.kind is ColumnKind.TIMESTAMP:
            assert self.time_type is not None
            return self.time_type.header
        return _HEADERS[self.kind]


@dataclass(frozen=True)
class Columns:
    """The user's column request, resolved per directory by :meth:`for_dir`."""

    size_format: SizeFormat = SizeFormat.DECIMAL_BYTES
    time_types: TimeTypes = TimeTypes()
    inode: bool = False
    links: bool = False
    blocks: bool = False
    group: bool = False
    git: bool = False

    def should_scan_for_git(self) -> bool:
        return self.git

    def for_dir(self, directory: Directory | None, git_enabled: bool = True) -> list[Column]:
        """Ordered columns for ``directory``.

        The git column is added only when git support is enabled, it was
        requested, and ``directory`` is inside a repository.
        """
        columns: list[Column] = []
        if self.inode:
            columns.append(Column(ColumnKind.INODE))
        columns.append(Column(ColumnKind.PERMISSIONS))
        if self.links:
            columns.append(Column(ColumnKind.HARD_LINKS))
        columns.append(Column.file_size(self.size_format))
        if self.blocks:
            columns.append(Column(ColumnKind.BLOCKS))
        columns.append(Column(ColumnKind.USER))
        if self.group:
            columns.append(Column(ColumnKind.GROUP))
        if self.time_types.modified:
            columns.append(Column.timestamp(TimeType.MODIFIED))
        if self.time_types.created:
            columns.append(Column.timestamp(TimeType.CREATED))
        if self.time_types.accessed:
            columns.append(Column.timestamp(TimeType.ACCESSED))
        if git_enabled and self.should_scan_for_git() and directory is not None and directory.has_git_repo():
            columns.append(Column(ColumnKind.GIT_STATUS))
        return columns


__all__ = [
    "Alignment",
    "SizeFormat",
    "TimeType",
    "TIME_WORDS",
    "TimeTypes",
    "ColumnKind",
    "Column",
    "Columns",
]
