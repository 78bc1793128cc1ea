"""ANSI-aware text measurement and padding.

Listing cells carry colour escapes, so every width used for alignment is a
display width: escapes count zero, wide characters count two.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
RESET = "\033[0m"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks and other zero-width format characters consume no
    columns, and East Asian wide/fullwidth characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.category(ch) in {"Cf", "Mn", "Me"}:
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Number of terminal columns ``text`` occupies once printed."""
    plain = strip_ansi(text) if "\x1b" in text else text
    if plain.isascii():
        return len(plain)
    return sum(char_display_width(ch) for ch in plain)


def paint(style: str, text: str) -> str:
    """Wrap ``text`` in ``style`` and a reset, or return it bare for no style."""
    if not style or not text:
        return text
    return f"{style}{text}{RESET}"


def pad_right(text: str, width: int) -> str:
    return text + " " * max(0, width - display_width(text))


def pad_left(text: str, width: int) -> str:
    return " " * max(0, width - display_width(text)) + text


__all__ = [
    "ANSI_ESCAPE_RE",
    "RESET",
    "char_display_width",
    "strip_ansi",
    "display_width",
    "paint",
    "pad_right",
    "pad_left",
]
