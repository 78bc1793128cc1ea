"""Repository status provider tests.

Porcelain parsing and aggregation run without git. Tests against a real
work tree are skipped when git is not installed.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path

from lazyls.git_status import (
    UNMODIFIED,
    GitRepository,
    GitStatus,
    find_repositories,
    find_repository,
    iter_porcelain_records,
)


class PorcelainParsingTests(unittest.TestCase):
    def test_records_split_on_nul(self) -> None:
        output = " M src/a.py\0?? new.txt\0A  added.py\0"
        self.assertEqual(
            iter_porcelain_records(output),
            [(" M", "src/a.py"), ("??", "new.txt"), ("A ", "added.py")],
        )

    def test_rename_source_token_is_skipped(self) -> None:
        output = "R  new_name.py\0old_name.py\0 M other.py\0"
        self.assertEqual(iter_porcelain_records(output), [("R ", "new_name.py"), (" M", "other.py")])

    def test_malformed_tokens_are_ignored(self) -> None:
        self.assertEqual(iter_porcelain_records("garbage\0\0"), [])


class StatusLookupTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(os.path.realpath(self._tmp.name))
        self.repo = GitRepository(
            root=self.root,
            statuses={
                "src/a.py": GitStatus("-", "M"),
                "src/deep/b.py": GitStatus("N", "-"),
                "top.txt": GitStatus("-", "N"),
            },
        )

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_file_status_by_relative_path(self) -> None:
        self.assertEqual(self.repo.status_for(self.root / "src" / "a.py").render(), "-M")
        self.assertEqual(self.repo.status_for(self.root / "clean.py"), UNMODIFIED)

    def test_directory_aggregates_nested_statuses(self) -> None:
        self.assertEqual(self.repo.status_for(self.root / "src", is_directory=True).render(), "NM")
        self.assertEqual(self.repo.status_for(self.root / "empty", is_directory=True).render(), "--")

    def test_paths_outside_the_repository_are_unmodified(self) -> None:
        self.assertEqual(self.repo.status_for(Path("/") / "elsewhere.txt"), UNMODIFIED)


def _git(root: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=root, check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


@unittest.skipIf(shutil.which("git") is None, "git is required for repository tests")
class RealRepositoryTests(unittest.TestCase):
    def test_find_repository_reports_modified_and_untracked_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(os.path.realpath(tmp))
            _git(root, "init", "-q")
            _git(root, "config", "user.email", "tests@example.com")
            _git(root, "config", "user.name", "Tests")
            (root / "tracked.txt").write_text("one\n", encoding="utf-8")
            _git(root, "add", "-A")
            _git(root, "commit", "-q", "-m", "initial")
            (root / "tracked.txt").write_text("two\n", encoding="utf-8")
            (root / "fresh.txt").write_text("new\n", encoding="utf-8")

            repo = find_repository(root)

            self.assertIsNotNone(repo)
            self.assertEqual(repo.root, root)
            self.assertEqual(repo.status_for(root / "tracked.txt").render(), "-M")
            self.assertEqual(repo.status_for(root / "fresh.txt").render(), "-N")

    def test_find_repositories_keeps_input_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(os.path.realpath(tmp))
            inside = root / "repo"
            outside = root / "plain"
            inside.mkdir()
            outside.mkdir()
            _git(inside, "init", "-q")

            results = find_repositories([outside, inside, outside])

            self.assertEqual(len(results), 3)
            self.assertIsNone(results[0])
            self.assertIsNotNone(results[1])
            self.assertIsNone(results[2])


if __name__ == "__main__":
    unittest.main()
