"""Turn parsed command-line arguments into a validated ``Options`` value.

Validation happens here, before any filesystem access, so every bad
combination of flags surfaces as a ``Misfire`` with nothing printed yet.
"""

from __future__ import annotations

import argparse
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TextIO

from . import xattr
from .colours import Colours, resolve_colours
from .columns import TIME_WORDS, Columns, SizeFormat, TimeTypes
from .config import ConfigDefaults
from .dir_action import DirAction, RecurseOptions
from .errors import BadChoice, Conflict, FailedParse, Useless, Useless2
from .filtering import SORT_FIELD_WORDS, FileFilter, SortCase, SortField
from .output import Details, Grid, GridDetails, Lines, View
from .terminal import parse_width, resolve_width, stream_is_terminal

LONG_ONLY_OPTIONS = (
    "binary",
    "bytes",
    "group",
    "header",
    "links",
    "inode",
    "blocks",
    "git",
    "extended",
    "accessed",
    "created",
    "modified",
    "time",
)


def _given(args: argparse.Namespace, attribute: str) -> bool:
    value = getattr(args, attribute, None)
    return value is not None and value is not False


def validate(args: argparse.Namespace) -> None:
    """Raise the first ``Misfire`` that applies to ``args``."""
    if args.binary and args.bytes:
        raise Conflict("binary", "bytes")
    if args.time is not None:
        for other in ("modified", "accessed", "created"):
            if getattr(args, other):
                raise Conflict("time", other)

    if args.across and args.oneline:
        raise Useless("across", True, "oneline")
    if args.across and args.long and not args.grid:
        raise Useless("across", True, "long")
    if args.oneline:
        for other in ("grid", "tree"):
            if getattr(args, other):
                raise Conflict("oneline", other)

    if args.list_dirs:
        for other in ("recurse", "tree"):
            if getattr(args, other):
                raise Conflict("list-dirs", other)

    if not args.long:
        for attribute in LONG_ONLY_OPTIONS:
            if _given(args, attribute):
                raise Useless(attribute, False, "long")

    if args.level is not None and not (args.recurse or args.tree):
        raise Useless2("level", "recurse", "tree")


def parse_level(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise FailedParse(value) from exc


def deduce_dir_action(args: argparse.Namespace) -> DirAction:
    if args.list_dirs:
        return DirAction.as_file()
    if args.recurse or args.tree:
        max_depth = parse_level(args.level) if args.level is not None else None
        return DirAction.recurse_with(RecurseOptions(tree=bool(args.tree), max_depth=max_depth))
    return DirAction.list()


def deduce_filter(args: argparse.Namespace, defaults: ConfigDefaults) -> FileFilter:
    word = args.sort if args.sort is not None else defaults.sort
    if word is None:
        sort_field, sort_case = SortField.NAME, SortCase.SENSITIVE
    else:
        # Words match exactly: "name" and "Name" are different orders.
        try:
            sort_field, sort_case = SORT_FIELD_WORDS[word]
        except KeyError:
            raise BadChoice("sort", word, tuple(SORT_FIELD_WORDS)) from None
    return FileFilter(
        show_hidden=bool(args.all) or defaults.show_all,
        reverse=bool(args.reverse),
        list_dirs_first=bool(args.group_directories_first) or defaults.group_directories_first,
        sort_field=sort_field,
        sort_case=sort_case,
    )


def deduce_colours(args: argparse.Namespace, defaults: ConfigDefaults, stream: TextIO | None) -> Colours:
    """``always`` and ``never`` are unconditional; ``auto`` follows stdout."""
    mode = (args.color or defaults.color or "auto").lower()
    theme = args.theme or defaults.theme
    scale = bool(args.color_scale)
    if mode == "always":
        return resolve_colours(theme, scale=scale)
    if mode == "never":
        return resolve_colours(theme, no_color=True)
    if mode in ("auto", "automatic"):
        return resolve_colours(theme, no_color=not stream_is_terminal(stream), scale=scale)
    raise BadChoice("color", mode, ("always", "auto", "never"))


def deduce_columns(args: argparse.Namespace) -> Columns:
    if args.binary:
        size_format = SizeFormat.BINARY_BYTES
    elif args.bytes:
        size_format = SizeFormat.JUST_BYTES
    else:
        size_format = SizeFormat.DECIMAL_BYTES

    if args.time is not None:
        try:
            time_types = TimeTypes.only(TIME_WORDS[args.time.lower()])
        except KeyError:
            raise BadChoice("time", args.time, tuple(TIME_WORDS)) from None
    else:
        time_types = TimeTypes.from_flags(
            accessed=bool(args.accessed),
            modified=bool(args.modified),
            created=bool(args.created),
        )

    return Columns(
        size_format=size_format,
        time_types=time_types,
        inode=bool(args.inode),
        links=bool(args.links),
        blocks=bool(args.blocks),
        group=bool(args.group),
        git=bool(args.git),
    )


def deduce_view(
    args: argparse.Namespace,
    file_filter: FileFilter,
    dir_action: DirAction,
    colours: Colours,
    width: int | None,
    git_available: bool,
    xattr_supported: bool,
) -> View:
    recurse = dir_action.recurse_options()
    tree = recurse is not None and recurse.tree

    if args.long:
        details = Details(
            columns=deduce_columns(args),
            header=bool(args.header),
            recurse=recurse,
            filter=file_filter,
            xattr=bool(args.extended) and xattr_supported,
            colours=colours,
            git_enabled=git_available,
            xattr_supported=xattr_supported,
        )
        if args.grid and not tree and width is not None:
            return GridDetails(grid=Grid(across=False, console_width=width, colours=colours), details=details)
        return details

    if args.oneline:
        return Lines(colours=colours)
    if tree:
        return Details(
            columns=None,
            header=False,
            recurse=recurse,
            filter=file_filter,
            xattr=False,
            colours=colours,
            git_enabled=git_available,
            xattr_supported=xattr_supported,
        )
    if width is not None:
        return Grid(across=bool(args.across), console_width=width, colours=colours)
    return Lines(colours=colours)


@dataclass(frozen=True)
class Options:
    """Everything one listing run needs, fixed before it starts."""

    dir_action: DirAction
    filter: FileFilter
    view: View
    paths: tuple[str, ...] = (".",)

    def should_scan_for_git(self) -> bool:
        view = self.view
        if isinstance(view, GridDetails):
            view = view.details
        if not isinstance(view, Details) or view.columns is None:
            return False
        return view.git_enabled and view.columns.should_scan_for_git()

    @classmethod
    def deduce(
        cls,
        args: argparse.Namespace,
        *,
        defaults: ConfigDefaults | None = None,
        environ: Mapping[str, str] | None = None,
        stream: TextIO | None = None,
        git_available: bool = True,
        xattr_supported: bool = xattr.ENABLED,
    ) -> "Options":
        defaults = ConfigDefaults() if defaults is None else defaults
        validate(args)
        dir_action = deduce_dir_action(args)
        file_filter = deduce_filter(args, defaults)
        colours = deduce_colours(args, defaults, stream)
        override = parse_width(args.width) if args.width is not None else None
        width = resolve_width(override, environ, stream)
        view = deduce_view(args, file_filter, dir_action, colours, width, git_available, xattr_supported)
        paths = tuple(args.paths) if args.paths else (".",)
        return cls(dir_action=dir_action, filter=file_filter, view=view, paths=paths)


__all__ = [
    "LONG_ONLY_OPTIONS",
    "Options",
    "validate",
    "deduce_dir_action",
    "deduce_filter",
    "deduce_colours",
    "deduce_columns",
    "deduce_view",
]
