"""Tree-drawing prefixes for nested details rows."""

from __future__ import annotations

from enum import Enum


class TreePart(Enum):
    EDGE = "├── "
    LINE = "│   "
    CORNER = "└── "
    BLANK = "    "


def tree_prefix(ancestors_last: tuple[bool, ...], is_last: bool) -> list[TreePart]:
    """Prefix parts for a row nested under ancestors.

    ``ancestors_last`` says, for every ancestor below the top level, whether
    it was the last of its siblings. Top-level rows get no prefix at all.
    """
    parts = [TreePart.BLANK if last else TreePart.LINE for last in ancestors_last]
    parts.append(TreePart.CORNER if is_last else TreePart.EDGE)
    return parts


def continuation_prefix(ancestors_last: tuple[bool, ...]) -> list[TreePart]:
    """Prefix for extra rows (attributes, errors) that hang under a row."""
    return [TreePart.BLANK if last else TreePart.LINE for last in ancestors_last]


__all__ = ["TreePart", "tree_prefix", "continuation_prefix"]
