"""CLI argument validation, view deduction, and exit-status behavior tests.

Verifies how ``lazyls.cli.main`` maps misuse, help, version, output
failures, and successful runs onto exit statuses and streams.
"""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyls import __version__, cli
from lazyls.config import CONFIG_ENV_VAR
from lazyls.filtering import SortCase, SortField
from lazyls.options import Options
from lazyls.output import Details, Grid, GridDetails, Lines


class _CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self._previous_cwd = Path.cwd()
        os.chdir(self.root)
        patcher = mock.patch.dict(os.environ, {CONFIG_ENV_VAR: str(self.root / "no-config.json")})
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        os.chdir(self._previous_cwd)
        self._tmp.cleanup()

    def run_main(self, *argv: str, environ: dict[str, str] | None = None) -> tuple[int, str, str]:
        out = io.StringIO()
        err = io.StringIO()
        code = cli.main(list(argv), stdout=out, stderr=err, environ=environ if environ is not None else {})
        return code, out.getvalue(), err.getvalue()


class MisfireTests(_CliTestCase):
    def test_conflicting_size_formats(self) -> None:
        code, out, err = self.run_main("-l", "--binary", "--bytes")
        self.assertEqual(code, 3)
        self.assertEqual(out, "")
        self.assertEqual(err, "Option --binary conflicts with option --bytes.\n")

    def test_long_only_option_without_long(self) -> None:
        code, _, err = self.run_main("--binary")
        self.assertEqual(code, 3)
        self.assertEqual(err, "Option --binary is useless without option --long.\n")

    def test_level_without_recursion(self) -> None:
        code, _, err = self.run_main("-L", "2")
        self.assertEqual(code, 3)
        self.assertEqual(err, "Option --level is useless without options --recurse or --tree.\n")

    def test_across_with_long(self) -> None:
        code, _, err = self.run_main("-l", "-x")
        self.assertEqual(code, 3)
        self.assertEqual(err, "Option --across is useless given option --long.\n")

    def test_time_conflicts_with_timestamp_flags(self) -> None:
        code, _, err = self.run_main("-l", "--time", "modified", "--accessed")
        self.assertEqual(code, 3)
        self.assertEqual(err, "Option --time conflicts with option --accessed.\n")

    def test_oneline_conflicts_with_tree(self) -> None:
        code, _, err = self.run_main("-1", "-T")
        self.assertEqual(code, 3)
        self.assertEqual(err, "Option --oneline conflicts with option --tree.\n")

    def test_non_numeric_level(self) -> None:
        code, _, err = self.run_main("-R", "-L", "abc")
        self.assertEqual(code, 3)
        self.assertEqual(err, "Failed to parse number: 'abc'\n")

    def test_non_numeric_columns_variable(self) -> None:
        code, _, err = self.run_main(environ={"COLUMNS": "wide"})
        self.assertEqual(code, 3)
        self.assertEqual(err, "Failed to parse number: 'wide'\n")

    def test_unknown_option_is_a_misfire(self) -> None:
        code, out, err = self.run_main("--no-such-flag")
        self.assertEqual(code, 3)
        self.assertEqual(out, "")
        self.assertIn("--no-such-flag", err)

    def test_unknown_sort_field(self) -> None:
        code, _, err = self.run_main("--sort", "colour")
        self.assertEqual(code, 3)
        self.assertIn("--sort", err)

    def test_sort_words_are_matched_exactly(self) -> None:
        code, _, err = self.run_main("--sort", "NAME")
        self.assertEqual(code, 3)
        self.assertIn("'NAME'", err)


class HelpAndVersionTests(_CliTestCase):
    def test_help_goes_to_stdout_with_status_two(self) -> None:
        code, out, err = self.run_main("--help")
        self.assertEqual(code, 2)
        self.assertIn("usage: lazyls", out)
        self.assertEqual(err, "")

    def test_version_goes_to_stdout_with_status_zero(self) -> None:
        code, out, _ = self.run_main("-v")
        self.assertEqual(code, 0)
        self.assertEqual(out, f"lazyls {__version__}\n")


class ListingRunTests(_CliTestCase):
    def test_files_and_directory(self) -> None:
        (self.root / "a.txt").write_text("", encoding="utf-8")
        (self.root / "dir1").mkdir()
        (self.root / "dir1" / "b.txt").write_text("", encoding="utf-8")

        code, out, err = self.run_main("a.txt", "dir1")

        self.assertEqual(code, 0)
        self.assertEqual(out, "a.txt\n\ndir1:\nb.txt\n")
        self.assertEqual(err, "")

    def test_missing_path_still_exits_zero(self) -> None:
        code, out, err = self.run_main("missing")
        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        self.assertTrue(err.startswith("missing: "))

    def test_broken_pipe_exits_zero(self) -> None:
        for index in range(50):
            (self.root / f"file{index:02}").write_text("", encoding="utf-8")

        class _PipeClosedAfter(io.StringIO):
            def __init__(self, limit: int) -> None:
                super().__init__()
                self.limit = limit

            def write(self, text: str) -> int:
                if self.tell() + len(text) > self.limit:
                    raise BrokenPipeError(32, "Broken pipe")
                return super().write(text)

        out = _PipeClosedAfter(20)
        err = io.StringIO()
        code = cli.main(["-1"], stdout=out, stderr=err, environ={})

        self.assertEqual(code, 0)
        self.assertEqual(err.getvalue(), "")

    def test_other_output_errors_exit_one(self) -> None:
        (self.root / "a").write_text("", encoding="utf-8")

        class _Failing(io.StringIO):
            def write(self, text: str) -> int:
                raise OSError(5, "Input/output error")

        err = io.StringIO()
        code = cli.main(["a"], stdout=_Failing(), stderr=err, environ={})

        self.assertEqual(code, 1)
        self.assertIn("Input/output error", err.getvalue())


class ViewDeductionTests(_CliTestCase):
    def _options(self, *argv: str, environ: dict[str, str] | None = None) -> Options:
        args = cli.build_parser().parse_args(list(argv))
        return Options.deduce(args, environ=environ or {}, stream=io.StringIO())

    def test_known_width_gives_grid(self) -> None:
        view = self._options(environ={"COLUMNS": "80"}).view
        self.assertIsInstance(view, Grid)
        self.assertEqual(view.console_width, 80)

    def test_unknown_width_gives_lines(self) -> None:
        self.assertIsInstance(self._options().view, Lines)

    def test_width_flag_wins_over_environment(self) -> None:
        view = self._options("-w", "100", environ={"COLUMNS": "80"}).view
        self.assertEqual(view.console_width, 100)

    def test_long_grid_needs_a_width(self) -> None:
        self.assertIsInstance(self._options("-l", "-G", environ={"COLUMNS": "120"}).view, GridDetails)
        self.assertIsInstance(self._options("-l", "-G").view, Details)

    def test_tree_is_details_without_columns(self) -> None:
        options = self._options("-T", environ={"COLUMNS": "80"})
        self.assertIsInstance(options.view, Details)
        self.assertIsNone(options.view.columns)
        self.assertTrue(options.dir_action.treat_dirs_as_files())

    def test_long_tree_grid_stays_details(self) -> None:
        self.assertIsInstance(self._options("-l", "-T", "-G", environ={"COLUMNS": "120"}).view, Details)

    def test_colour_auto_is_plain_off_terminal(self) -> None:
        self.assertTrue(self._options().view.colours.is_plain)
        self.assertFalse(self._options("--color", "always").view.colours.is_plain)

    def test_git_scanning_requires_long_and_git(self) -> None:
        self.assertTrue(self._options("-l", "--git").should_scan_for_git())
        self.assertFalse(self._options("-l").should_scan_for_git())

    def test_capitalised_sort_word_ignores_case(self) -> None:
        sensitive = self._options("--sort", "name").filter
        insensitive = self._options("--sort", "Name").filter
        self.assertEqual((sensitive.sort_field, sensitive.sort_case), (SortField.NAME, SortCase.SENSITIVE))
        self.assertEqual((insensitive.sort_field, insensitive.sort_case), (SortField.NAME, SortCase.INSENSITIVE))
        self.assertIs(self._options("--sort", "Ext").filter.sort_case, SortCase.INSENSITIVE)

    def test_color_scale_marks_the_palette(self) -> None:
        self.assertTrue(self._options("--color", "always", "--color-scale").view.colours.scale)
        self.assertFalse(self._options("--color", "always").view.colours.scale)
        self.assertTrue(self._options("--color-scale").view.colours.is_plain)


if __name__ == "__main__":
    unittest.main()
