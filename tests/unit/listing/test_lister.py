"""End-to-end traversal tests for ``lazyls.listing.Lister``.

Filesystem fixtures are built in temporary directories; paths are given
relative to the fixture root so output matches what a user would see.
"""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyls.colours import PLAIN_COLOURS
from lazyls.columns import Columns
from lazyls.dir_action import DirAction, RecurseOptions
from lazyls.errors import EntryError, ErrorKind
from lazyls.file_model import fs
from lazyls.filtering import FileFilter
from lazyls.listing import Lister, path_depth
from lazyls.options import Options
from lazyls.output import Details, Lines


def _options(*paths: str, dir_action: DirAction | None = None, file_filter: FileFilter | None = None) -> Options:
    return Options(
        dir_action=dir_action or DirAction.list(),
        filter=file_filter or FileFilter(),
        view=Lines(colours=PLAIN_COLOURS),
        paths=paths,
    )


class ListerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self._previous_cwd = Path.cwd()
        os.chdir(self.root)

    def tearDown(self) -> None:
        os.chdir(self._previous_cwd)
        self._tmp.cleanup()

    def touch(self, relative: str) -> None:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")

    def run_lister(self, options: Options, **kwargs) -> tuple[str, str]:
        out = io.StringIO()
        err = io.StringIO()
        Lister(options, out, err, **kwargs).run()
        return out.getvalue(), err.getvalue()


class HeadingAndSeparatorTests(ListerTestCase):
    def test_files_then_directory_block(self) -> None:
        self.touch("a.txt")
        self.touch("dir1/b.txt")

        out, err = self.run_lister(_options("a.txt", "dir1"))

        self.assertEqual(out, "a.txt\n\ndir1:\nb.txt\n")
        self.assertEqual(err, "")

    def test_single_directory_has_no_heading(self) -> None:
        self.touch("only/x")
        self.touch("only/y")

        out, _ = self.run_lister(_options("only"))

        self.assertEqual(out, "x\ny\n")

    def test_several_directories_are_separated_by_blank_lines(self) -> None:
        self.touch("d1/one")
        self.touch("d2/two")

        out, _ = self.run_lister(_options("d1", "d2"))

        self.assertEqual(out, "d1:\none\n\nd2:\ntwo\n")

    def test_argument_files_keep_command_line_order(self) -> None:
        self.touch("b")
        self.touch("a")

        out, _ = self.run_lister(_options("b", "a"))

        self.assertEqual(out, "b\na\n")

    def test_list_dirs_treats_directories_as_files(self) -> None:
        self.touch("d1/one")

        out, _ = self.run_lister(_options("d1", dir_action=DirAction.as_file()))

        self.assertEqual(out, "d1\n")


class ErrorReportingTests(ListerTestCase):
    def test_missing_argument_is_reported_and_skipped(self) -> None:
        self.touch("real")

        out, err = self.run_lister(_options("nope", "real"))

        self.assertEqual(out, "real\n")
        self.assertTrue(err.startswith("nope: "))
        self.assertIn("(os error 2)", err)

    def test_unreadable_child_is_reported_and_siblings_still_render(self) -> None:
        self.touch("dir/a")
        self.touch("dir/broken")
        self.touch("dir/c")
        real_entry_from_path = fs.entry_from_path

        def entry_from_path(path: Path, *args, **kwargs):
            if path.name == "broken":
                raise EntryError(path, ErrorKind.PERMISSION_DENIED, "Permission denied (os error 13)")
            return real_entry_from_path(path, *args, **kwargs)

        with mock.patch.object(fs, "entry_from_path", entry_from_path):
            out, err = self.run_lister(_options("dir"))

        self.assertEqual(out, "a\nc\n")
        self.assertEqual(err, "[dir/broken: Permission denied (os error 13)]\n")

    def test_writer_errors_propagate(self) -> None:
        self.touch("a")

        class _ClosedPipe(io.StringIO):
            def write(self, text: str) -> int:
                raise BrokenPipeError(32, "Broken pipe")

        with self.assertRaises(BrokenPipeError):
            Lister(_options("a"), _ClosedPipe(), io.StringIO()).run()


class HiddenFileTests(ListerTestCase):
    def test_hidden_arguments_are_listed_but_hidden_children_are_not(self) -> None:
        self.touch(".secret")
        self.touch("dir/.inner")
        self.touch("dir/visible")

        out, _ = self.run_lister(_options(".secret", "dir"))

        self.assertEqual(out, ".secret\n\ndir:\nvisible\n")

    def test_secret_child_only_appears_with_all(self) -> None:
        self.touch("a.txt")
        self.touch("dir1/.secret")
        self.touch("dir1/b.txt")

        default_out, _ = self.run_lister(_options("a.txt", "dir1"))
        all_out, _ = self.run_lister(_options("a.txt", "dir1", file_filter=FileFilter(show_hidden=True)))

        self.assertEqual(default_out, "a.txt\n\ndir1:\nb.txt\n")
        self.assertEqual(all_out, "a.txt\n\ndir1:\n.secret\nb.txt\n")

    def test_all_shows_hidden_children(self) -> None:
        self.touch("dir/.inner")
        self.touch("dir/visible")

        out, _ = self.run_lister(_options("dir", file_filter=FileFilter(show_hidden=True)))

        self.assertEqual(out, ".inner\nvisible\n")


class RecursionTests(ListerTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.touch("top/a/b/c.txt")
        self.touch("top/a/a.txt")
        self.touch("top/z/z.txt")

    def test_depth_counts_path_components(self) -> None:
        self.assertEqual(path_depth(Path(".")), 1)
        self.assertEqual(path_depth(Path("top")), 2)
        self.assertEqual(path_depth(Path("./top/a")), 3)

    def test_recursion_finishes_each_subtree_before_the_next_sibling(self) -> None:
        action = DirAction.recurse_with(RecurseOptions())

        out, _ = self.run_lister(_options("top", dir_action=action))

        self.assertEqual(
            out,
            "a\nz\n"
            "\ntop/a:\na.txt\nb\n"
            "\ntop/a/b:\nc.txt\n"
            "\ntop/z:\nz.txt\n",
        )

    def test_level_stops_descending(self) -> None:
        action = DirAction.recurse_with(RecurseOptions(max_depth=3))

        out, _ = self.run_lister(_options("top", dir_action=action))

        self.assertEqual(out, "a\nz\n\ntop/a:\na.txt\nb\n\ntop/z:\nz.txt\n")

    def test_level_at_argument_depth_lists_only_the_argument(self) -> None:
        action = DirAction.recurse_with(RecurseOptions(max_depth=2))

        out, _ = self.run_lister(_options("top", dir_action=action))

        self.assertEqual(out, "a\nz\n")

    def test_level_one_from_current_directory_lists_immediate_children(self) -> None:
        os.chdir(self.root / "top")
        action = DirAction.recurse_with(RecurseOptions(max_depth=1))

        out, _ = self.run_lister(_options(".", dir_action=action))

        self.assertEqual(out, "a\nz\n")


class GitPrefetchTests(ListerTestCase):
    def test_repositories_are_looked_up_once_for_all_arguments(self) -> None:
        self.touch("d1/x")
        self.touch("d2/y")
        calls: list[list[Path]] = []

        def lookup(paths: list[Path]):
            calls.append(list(paths))
            return [None for _ in paths]

        details = Details(
            columns=Columns(git=True),
            header=False,
            recurse=None,
            filter=FileFilter(),
            xattr=False,
            colours=PLAIN_COLOURS,
            git_enabled=True,
            xattr_supported=False,
        )
        options = Options(dir_action=DirAction.list(), filter=FileFilter(), view=details, paths=("d1", "d2"))

        out, _ = self.run_lister(options, repositories_lookup=lookup)

        self.assertEqual(calls, [[Path("d1"), Path("d2")]])
        self.assertIn("d1:", out)

    def test_no_lookup_without_git_column(self) -> None:
        self.touch("d1/x")

        def lookup(paths: list[Path]):
            raise AssertionError("lookup should not run")

        out, _ = self.run_lister(_options("d1"), repositories_lookup=lookup)

        self.assertEqual(out, "x\n")


if __name__ == "__main__":
    unittest.main()
