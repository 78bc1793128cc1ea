"""Command-line front door for lazyls.

Parses options, loads config defaults, and resolves them into ``Options``.
Then runs the listing and maps failures onto exit statuses.
"""

from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
from collections.abc import Mapping, Sequence
from typing import TextIO

from . import __version__
from .colours import available_theme_names
from .config import load_defaults
from .errors import HelpRequested, Misfire, VersionRequested
from .filtering import SORT_FIELD_WORDS
from .listing import Lister
from .options import Options

logger = logging.getLogger(__name__)

DEBUG_ENV_VAR = "LAZYLS_DEBUG"

EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


class ArgumentParser(argparse.ArgumentParser):
    """argparse without the ``SystemExit``: problems surface as ``Misfire``."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise Misfire(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="lazyls",
        description="List directory contents as lines, a grid, a table, or a tree.",
        add_help=False,
    )
    parser.add_argument("paths", nargs="*", help="Files and directories to list. Defaults to '.'.")

    display = parser.add_argument_group("display options")
    display.add_argument("-1", "--oneline", action="store_true", help="Display one entry per line.")
    display.add_argument("-l", "--long", action="store_true", help="Display extended file metadata as a table.")
    display.add_argument("-G", "--grid", action="store_true", help="Display entries as a grid (default).")
    display.add_argument("-x", "--across", action="store_true", help="Sort the grid across, rather than downwards.")
    display.add_argument("-R", "--recurse", action="store_true", help="Recurse into directories.")
    display.add_argument("-T", "--tree", action="store_true", help="Recurse into directories as a tree.")
    display.add_argument(
        "--color",
        "--colour",
        dest="color",
        metavar="WHEN",
        default=None,
        help="When to use terminal colours (always, auto, never).",
    )
    display.add_argument(
        "--color-scale",
        "--colour-scale",
        dest="color_scale",
        action="store_true",
        help="Colour file sizes by how large they are.",
    )
    display.add_argument(
        "--theme",
        default=None,
        help=f"Colour theme name ({', '.join(available_theme_names())}).",
    )
    display.add_argument("-w", "--width", metavar="COLS", default=None, help="Console width to lay out for.")

    filtering = parser.add_argument_group("filtering and sorting options")
    filtering.add_argument("-a", "--all", action="store_true", help="Show hidden and 'dot' files.")
    filtering.add_argument("-d", "--list-dirs", action="store_true", help="List directories like regular files.")
    filtering.add_argument("-L", "--level", metavar="DEPTH", default=None, help="Limit the depth of recursion.")
    filtering.add_argument("-r", "--reverse", action="store_true", help="Reverse the sort order.")
    filtering.add_argument(
        "-s",
        "--sort",
        metavar="FIELD",
        default=None,
        help=f"Which field to sort by ({', '.join(SORT_FIELD_WORDS)}).",
    )
    filtering.add_argument(
        "--group-directories-first",
        action="store_true",
        help="List directories before other files.",
    )

    long_view = parser.add_argument_group("long view options")
    long_view.add_argument("-b", "--binary", action="store_true", help="List file sizes with binary prefixes.")
    long_view.add_argument("-B", "--bytes", action="store_true", help="List file sizes in bytes, without prefixes.")
    long_view.add_argument("-g", "--group", action="store_true", help="List each file's group.")
    long_view.add_argument("-h", "--header", action="store_true", help="Add a header row to each column.")
    long_view.add_argument("-H", "--links", action="store_true", help="List each file's number of hard links.")
    long_view.add_argument("-i", "--inode", action="store_true", help="List each file's inode number.")
    long_view.add_argument("-S", "--blocks", action="store_true", help="List each file's number of file blocks.")
    long_view.add_argument("-m", "--modified", action="store_true", help="Use the modified timestamp field.")
    long_view.add_argument("-u", "--accessed", action="store_true", help="Use the accessed timestamp field.")
    long_view.add_argument("-U", "--created", action="store_true", help="Use the created timestamp field.")
    long_view.add_argument(
        "-t",
        "--time",
        metavar="WORD",
        default=None,
        help="Which timestamp field to list (modified, accessed, created).",
    )
    long_view.add_argument("--git", action="store_true", help="List each file's git status, if tracked.")
    long_view.add_argument("-@", "--extended", action="store_true", help="List each file's extended attributes.")

    misc = parser.add_argument_group("miscellaneous options")
    misc.add_argument("--debug", action="store_true", help="Log debug records to stderr.")
    misc.add_argument("-?", "--help", action="store_true", help="Show this help and exit.")
    misc.add_argument("-v", "--version", action="store_true", help="Show the version and exit.")
    return parser


def configure_logging(enabled: bool, stream: TextIO) -> None:
    """Attach one stderr handler to the package logger when debugging."""
    if not enabled:
        return
    package_logger = logging.getLogger("lazyls")
    if not any(getattr(handler, "_lazyls_debug", False) for handler in package_logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        handler._lazyls_debug = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def parse_arguments(
    argv: Sequence[str],
    stdout: TextIO,
    environ: Mapping[str, str],
) -> Options:
    """Resolve ``argv`` into ``Options``, raising ``Misfire`` on bad input."""
    parser = build_parser()
    args = parser.parse_args(list(argv))
    if args.help:
        raise HelpRequested(parser.format_help())
    if args.version:
        raise VersionRequested(__version__)
    return Options.deduce(
        args,
        defaults=load_defaults(sort_words=tuple(SORT_FIELD_WORDS)),
        environ=environ,
        stream=stdout,
        git_available=shutil.which("git") is not None,
    )


def _silence_stdout(stdout: TextIO) -> None:
    # Python flushes stdout at exit; point it at devnull so that flush cannot fail again.
    try:
        fd = stdout.fileno()
    except (AttributeError, OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


def main(
    argv: Sequence[str] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run lazyls and return the process exit status."""
    argv = sys.argv[1:] if argv is None else argv
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr
    environ = os.environ if environ is None else environ

    configure_logging("--debug" in argv or bool(environ.get(DEBUG_ENV_VAR)), stderr)
    try:
        options = parse_arguments(argv, stdout, environ)
    except (HelpRequested, VersionRequested) as exc:
        stdout.write(exc.message() + "\n")
        return exc.exit_code
    except Misfire as exc:
        stderr.write(exc.message() + "\n")
        return exc.exit_code

    logger.debug("listing %d paths with a %s view", len(options.paths), type(options.view).__name__)
    try:
        Lister(options, stdout, stderr).run()
        stdout.flush()
    except BrokenPipeError:
        _silence_stdout(stdout)
        return EXIT_SUCCESS
    except OSError as exc:
        stderr.write(f"{exc}\n")
        return EXIT_RUNTIME_ERROR
    return EXIT_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
