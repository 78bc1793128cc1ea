"""Error taxonomy shared by the CLI front door and the listing engine.

``Misfire`` covers everything that stops a run before any listing happens.
``EntryError`` covers per-path failures that are reported and skipped.
"""

from __future__ import annotations

import errno
from enum import Enum
from pathlib import Path


class Misfire(Exception):
    """Something that happens instead of listing files."""

    exit_code = 3

    def __str__(self) -> str:
        return self.message()

    def message(self) -> str:
        return "".join(str(arg) for arg in self.args)


class HelpRequested(Misfire):
    """The user asked for help. Not strictly an error."""

    exit_code = 2

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text

    def message(self) -> str:
        return self.text


class VersionRequested(Misfire):
    exit_code = 0

    def __init__(self, version: str) -> None:
        super().__init__(version)
        self.version = version

    def message(self) -> str:
        return f"lazyls {self.version}"


class Conflict(Misfire):
    """Two options were given that conflict with one another."""

    def __init__(self, first: str, second: str) -> None:
        super().__init__(first, second)
        self.first = first
        self.second = second

    def message(self) -> str:
        return f"Option --{self.first} conflicts with option --{self.second}."


class Useless(Misfire):
    """An option does nothing when another one either is or isn't present."""

    def __init__(self, option: str, present: bool, other: str) -> None:
        super().__init__(option, present, other)
        self.option = option
        self.present = present
        self.other = other

    def message(self) -> str:
        if self.present:
            return f"Option --{self.option} is useless given option --{self.other}."
        return f"Option --{self.option} is useless without option --{self.other}."


class Useless2(Misfire):
    """An option does nothing unless one of two other options is present."""

    def __init__(self, option: str, first: str, second: str) -> None:
        super().__init__(option, first, second)
        self.option = option
        self.first = first
        self.second = second

    def message(self) -> str:
        return f"Option --{self.option} is useless without options --{self.first} or --{self.second}."


class FailedParse(Misfire):
    """A numeric option failed to parse as a number."""

    def __init__(self, value: str) -> None:
        super().__init__(value)
        self.value = value

    def message(self) -> str:
        return f"Failed to parse number: {self.value!r}"


class BadChoice(Misfire):
    def __init__(self, option: str, value: str, choices: tuple[str, ...]) -> None:
        super().__init__(option, value, choices)
        self.option = option
        self.value = value
        self.choices = choices

    def message(self) -> str:
        return f"Option --{self.option} has no {self.value!r} setting (choices: {' '.join(self.choices)})"


class ErrorKind(Enum):
    NOT_FOUND = "not found"
    PERMISSION_DENIED = "permission denied"
    OTHER = "other"


class EntryError(Exception):
    """A single path could not be turned into an entry.

    Raised by entry construction and yielded (not raised) by directory
    enumeration, so callers can report it without aborting the run.
    """

    def __init__(self, path: Path, kind: ErrorKind, message: str) -> None:
        super().__init__(path, kind, message)
        self.path = path
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_os_error(cls, path: Path, exc: OSError) -> "EntryError":
        if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
            kind = ErrorKind.NOT_FOUND
        elif isinstance(exc, PermissionError) or exc.errno in {errno.EACCES, errno.EPERM}:
            kind = ErrorKind.PERMISSION_DENIED
        else:
            kind = ErrorKind.OTHER
        message = exc.strerror or str(exc)
        if exc.errno is not None:
            message = f"{message} (os error {exc.errno})"
        return cls(path, kind, message)


__all__ = [
    "Misfire",
    "HelpRequested",
    "VersionRequested",
    "Conflict",
    "Useless",
    "Useless2",
    "FailedParse",
    "BadChoice",
    "ErrorKind",
    "EntryError",
]
