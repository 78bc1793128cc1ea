"""Entry construction from paths and on-demand directory enumeration."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

from ..errors import EntryError
from ..git_status import GitRepository, find_repository
from .types import Entry, FileKind, FileMetadata, LinkTarget, kind_for_mode

logger = logging.getLogger(__name__)

_UNSET = object()


def _read_link_target(path: Path) -> LinkTarget | None:
    try:
        raw_target = os.readlink(path)
    except OSError:
        return None
    target = Path(raw_target)
    absolute = target if target.is_absolute() else path.parent / target
    return LinkTarget(path=target, exists=os.path.exists(absolute), is_directory=os.path.isdir(absolute))


def entry_from_path(
    path: Path,
    name: str | None = None,
    depth: int = 0,
    follow_symlinks: bool = False,
) -> Entry:
    """Stat ``path`` once and build an immutable :class:`Entry`.

    Command-line arguments are looked up with ``follow_symlinks=True`` so a
    link to a directory is listed as that directory; a dangling link falls
    back to the link itself. Raises :class:`EntryError` on failure.
    """
    try:
        st = os.stat(path, follow_symlinks=follow_symlinks)
    except FileNotFoundError as exc:
        if not follow_symlinks:
            raise EntryError.from_os_error(path, exc) from exc
        try:
            st = os.lstat(path)
        except OSError:
            raise EntryError.from_os_error(path, exc) from exc
    except OSError as exc:
        raise EntryError.from_os_error(path, exc) from exc

    metadata = FileMetadata.from_stat(st)
    link_target = _read_link_target(path) if kind_for_mode(metadata.mode) is FileKind.SYMLINK else None
    return Entry(
        path=path,
        name=name if name is not None else (path.name or str(path)),
        metadata=metadata,
        depth=depth,
        link_target=link_target,
    )


RepositoryLookup = Callable[[Path], "GitRepository | None"]


class Directory:
    """A directory entry whose child names have been read.

    Children are stat-ed lazily by :meth:`files`. The covering git
    repository is looked up on first access of :attr:`repository` unless it
    was supplied up front.
    """

    def __init__(
        self,
        entry: Entry,
        child_names: list[str],
        scan_for_git: bool = False,
        repository_lookup: RepositoryLookup = find_repository,
    ) -> None:
        self.entry = entry
        self.path = entry.path
        self._child_names = child_names
        self._scan_for_git = scan_for_git
        self._repository_lookup = repository_lookup
        self._repository: object = _UNSET

    @classmethod
    def read(
        cls,
        entry: Entry,
        scan_for_git: bool = False,
        repository_lookup: RepositoryLookup = find_repository,
    ) -> "Directory":
        """Read the child names of ``entry``; raises :class:`EntryError`."""
        try:
            with os.scandir(entry.path) as iterator:
                names = [child.name for child in iterator]
        except OSError as exc:
            raise EntryError.from_os_error(entry.path, exc) from exc
        return cls(entry, names, scan_for_git=scan_for_git, repository_lookup=repository_lookup)

    def __len__(self) -> int:
        return len(self._child_names)

    def files(self) -> Iterator[Entry | EntryError]:
        """Yield one entry per child, or the error that prevented it."""
        depth = self.entry.depth + 1
        for name in self._child_names:
            child_path = self.path / name
            try:
                yield entry_from_path(child_path, name=name, depth=depth)
            except EntryError as exc:
                logger.debug("skipping unreadable child %s: %s", child_path, exc)
                yield exc

    def set_repository(self, repository: GitRepository | None) -> None:
        """Supply the repository up front, skipping the lazy lookup."""
        self._scan_for_git = True
        self._repository = repository

    @property
    def repository(self) -> GitRepository | None:
        if not self._scan_for_git:
            return None
        if self._repository is _UNSET:
            self._repository = self._repository_lookup(self.path)
        return self._repository  # type: ignore[return-value]

    def has_git_repo(self) -> bool:
        return self.repository is not None


__all__ = [
    "entry_from_path",
    "Directory",
    "RepositoryLookup",
]
