"""Git repository discovery and per-path status lookup.

Repositories are located with ``git rev-parse`` and their working-tree
state is read once from ``git status --porcelain=v1 -z``. Each listed entry
then gets a two-character (staged, unstaged) code; directories aggregate
the codes of everything beneath them.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

NOT_MODIFIED = "-"
NEW = "N"
MODIFIED = "M"
DELETED = "D"
RENAMED = "R"
TYPE_CHANGE = "T"
CONFLICTED = "U"

# Higher-priority codes win when a directory aggregates its children.
_AGGREGATE_PRIORITY = (CONFLICTED, NEW, MODIFIED, DELETED, RENAMED, TYPE_CHANGE)

_INDEX_CODES = {
    "A": NEW,
    "C": NEW,
    "M": MODIFIED,
    "D": DELETED,
    "R": RENAMED,
    "T": TYPE_CHANGE,
    "U": CONFLICTED,
}
_WORKTREE_CODES = {
    "?": NEW,
    "M": MODIFIED,
    "D": DELETED,
    "R": RENAMED,
    "T": TYPE_CHANGE,
    "U": CONFLICTED,
}


@dataclass(frozen=True)
class GitStatus:
    staged: str = NOT_MODIFIED
    unstaged: str = NOT_MODIFIED

    def render(self) -> str:
        return f"{self.staged}{self.unstaged}"


UNMODIFIED = GitStatus()


def _status_from_porcelain(code: str) -> GitStatus:
    if code == "??":
        return GitStatus(NOT_MODIFIED, NEW)
    return GitStatus(
        _INDEX_CODES.get(code[0], NOT_MODIFIED),
        _WORKTREE_CODES.get(code[1], NOT_MODIFIED),
    )


def _strongest(codes: Iterable[str]) -> str:
    present = set(codes)
    for code in _AGGREGATE_PRIORITY:
        if code in present:
            return code
    return NOT_MODIFIED


@dataclass(frozen=True)
class GitRepository:
    """Working-tree status of one repository, keyed by repo-relative POSIX path."""

    root: Path
    statuses: dict[str, GitStatus] = field(default_factory=dict)

    def _relative_key(self, path: Path) -> str | None:
        # Resolve the parent only, so a symlink entry keeps its own name.
        absolute = Path(os.path.realpath(path.parent)) / path.name if path.name else Path(os.path.realpath(path))
        try:
            relative = absolute.relative_to(self.root)
        except ValueError:
            return None
        key = relative.as_posix()
        return "" if key == "." else key

    def status_for(self, path: Path, is_directory: bool = False) -> GitStatus:
        key = self._relative_key(path)
        if key is None:
            return UNMODIFIED
        if not is_directory:
            return self.statuses.get(key, UNMODIFIED)

        prefix = f"{key}/" if key else ""
        nested = [status for rel, status in self.statuses.items() if rel.startswith(prefix) or rel == key]
        if not nested:
            return UNMODIFIED
        return GitStatus(
            _strongest(status.staged for status in nested),
            _strongest(status.unstaged for status in nested),
        )


def _run_git(cwd: Path, args: list[str], timeout_seconds: float | None) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git %s failed in %s: %s", " ".join(args), cwd, exc)
        return None


def resolve_repo_root(path: Path, timeout_seconds: float | None = None) -> Path | None:
    """Return the top-level directory of the repository covering ``path``."""
    proc = _run_git(path, ["rev-parse", "--show-toplevel"], timeout_seconds)
    if proc is None or proc.returncode != 0:
        return None
    lines = [line.strip() for line in proc.stdout.splitlines() if line.strip()]
    if not lines:
        return None
    return Path(os.path.realpath(lines[0]))


def iter_porcelain_records(output: str) -> list[tuple[str, str]]:
    """Split ``git status --porcelain=v1 -z`` output into ``(code, path)`` pairs."""
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token:
            continue
        if len(token) < 4 or token[2] != " ":
            continue

        code = token[:2]
        records.append((code, token[3:]))

        # Renames and copies carry the source path as an extra token.
        if "R" in code or "C" in code:
            index += 1

    return records


def find_repository(path: Path, timeout_seconds: float | None = None) -> GitRepository | None:
    """Locate the repository covering ``path`` and capture its status table.

    Returns ``None`` when ``path`` is not inside a work tree or git is not
    available.
    """
    directory = Path(os.path.realpath(path))
    repo_root = resolve_repo_root(directory, timeout_seconds)
    if repo_root is None:
        logger.debug("no git repository covers %s", directory)
        return None

    proc = _run_git(
        repo_root,
        ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
        timeout_seconds,
    )
    if proc is None or proc.returncode != 0:
        return None

    statuses: dict[str, GitStatus] = {}
    for code, rel_path in iter_porcelain_records(proc.stdout):
        if not rel_path or code == "!!":
            continue
        statuses[rel_path.rstrip("/")] = _status_from_porcelain(code)
    return GitRepository(root=repo_root, statuses=statuses)


def find_repositories(paths: list[Path], max_workers: int | None = None) -> list[GitRepository | None]:
    """Look up repositories for many directories on a bounded worker pool.

    Results come back in the order of ``paths``; the call returns only once
    every lookup has finished.
    """
    if not paths:
        return []
    workers = max(1, min(len(paths), max_workers or os.cpu_count() or 1))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lazyls-git") as executor:
        return list(executor.map(find_repository, paths))


__all__ = [
    "NOT_MODIFIED",
    "NEW",
    "MODIFIED",
    "DELETED",
    "RENAMED",
    "TYPE_CHANGE",
    "CONFLICTED",
    "GitStatus",
    "UNMODIFIED",
    "GitRepository",
    "resolve_repo_root",
    "iter_porcelain_records",
    "find_repository",
    "find_repositories",
]
