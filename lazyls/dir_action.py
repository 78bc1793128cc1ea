"""What to do when a listed path turns out to be a directory."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class RecurseOptions:
    """How deep to descend, and whether to draw the result as a tree."""

    tree: bool = False
    max_depth: int | None = None

    def is_too_deep(self, depth: int) -> bool:
        """Whether a directory at ``depth`` is too deep to descend into."""
        if self.max_depth is None:
            return False
        return self.max_depth <= depth


class DirMode(Enum):
    # List the directory alongside regular files instead of opening it.
    AS_FILE = "as_file"
    # Open the directory and list its contents separately (the default).
    LIST = "list"
    # List the contents, then descend further as ``RecurseOptions`` allows.
    RECURSE = "recurse"


@dataclass(frozen=True)
class DirAction:
    mode: DirMode = DirMode.LIST
    recurse: RecurseOptions | None = None

    def __post_init__(self) -> None:
        if (self.mode is DirMode.RECURSE) != (self.recurse is not None):
            raise ValueError("recurse options are required for, and only for, DirMode.RECURSE")

    @classmethod
    def as_file(cls) -> "DirAction":
        return cls(DirMode.AS_FILE)

    @classmethod
    def list(cls) -> "DirAction":
        return cls(DirMode.LIST)

    @classmethod
    def recurse_with(cls, options: RecurseOptions) -> "DirAction":
        return cls(DirMode.RECURSE, options)

    def recurse_options(self) -> RecurseOptions | None:
        return self.recurse

    def treat_dirs_as_files(self) -> bool:
        """Directories join the file batch when listed as files, or in tree mode."""
        if self.mode is DirMode.AS_FILE:
            return True
        if self.recurse is not None:
            return self.recurse.tree
        return False


__all__ = ["RecurseOptions", "DirMode", "DirAction"]
