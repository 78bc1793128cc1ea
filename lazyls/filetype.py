"""File-class detection by name, used to pick a name colour.

Classes are checked in a fixed order: build/readme files first, then
extension tables, then temporary-file patterns, then compiled artefacts
whose source sits next to them, and finally source code recognised by a
pygments lexer.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from .file_model import Entry


class FileClass(Enum):
    IMMEDIATE = "immediate"
    IMAGE = "image"
    VIDEO = "video"
    MUSIC = "music"
    LOSSLESS = "lossless"
    CRYPTO = "crypto"
    DOCUMENT = "document"
    COMPRESSED = "compressed"
    TEMP = "temp"
    COMPILED = "compiled"
    SOURCE = "source"


IMMEDIATE_NAMES = frozenset(
    {
        "Makefile",
        "GNUmakefile",
        "CMakeLists.txt",
        "Cargo.toml",
        "SConstruct",
        "Rakefile",
        "Gruntfile.js",
        "Gulpfile.js",
        "build.gradle",
        "pom.xml",
        "pyproject.toml",
        "setup.py",
        "Dockerfile",
        "meson.build",
    }
)

EXTENSION_CLASSES: dict[FileClass, frozenset[str]] = {
    FileClass.IMAGE: frozenset(
        {
            "png", "jpeg", "jpg", "gif", "bmp", "tiff", "tif", "ppm", "pgm", "pbm", "pnm",
            "webp", "raw", "arw", "svg", "stl", "eps", "dvi", "ps", "cbr", "cbz", "xpm",
            "ico", "cr2", "orf", "nef", "heic",
        }
    ),
    FileClass.VIDEO: frozenset(
        {"avi", "flv", "m2v", "mkv", "mov", "mp4", "mpeg", "mpg", "ogm", "ogv", "vob", "wmv", "webm", "m4v"}
    ),
    FileClass.MUSIC: frozenset({"aac", "m4a", "mp3", "ogg", "wma", "mka", "opus"}),
    FileClass.LOSSLESS: frozenset({"alac", "ape", "flac", "wav"}),
    FileClass.CRYPTO: frozenset(
        {"asc", "enc", "gpg", "pgp", "sig", "signature", "pfx", "p12", "pem", "crt", "key", "kbx"}
    ),
    FileClass.DOCUMENT: frozenset(
        {
            "djvu", "doc", "docx", "dvi", "eml", "eps", "fotd", "odp", "odt", "pdf", "ppt",
            "pptx", "rtf", "xls", "xlsx", "ods",
        }
    ),
    FileClass.COMPRESSED: frozenset(
        {
            "zip", "tar", "Z", "z", "gz", "bz2", "a", "ar", "7z", "iso", "dmg", "tc", "rar",
            "par", "tgz", "xz", "txz", "lz", "tlz", "lzma", "zst", "deb", "rpm", "jar", "whl",
        }
    ),
    FileClass.TEMP: frozenset({"tmp", "swp", "swo", "swn", "bak", "orig"}),
}

# Compiled artefacts only count as such when their source is alongside.
COMPILED_EXTENSIONS: dict[str, tuple[str, ...]] = {
    "class": ("java",),
    "elc": ("el",),
    "hi": ("hs",),
    "o": ("c", "cpp", "cc", "m", "s"),
    "pyc": ("py",),
    "pyo": ("py",),
}


def is_temp_name(name: str) -> bool:
    return name.endswith("~") or (name.startswith("#") and name.endswith("#"))


@lru_cache(maxsize=2048)
def is_source_name(name: str) -> bool:
    """Whether a pygments lexer claims ``name`` as source code."""
    from pygments.lexers import find_lexer_class_for_filename

    lexer_class = find_lexer_class_for_filename(name)
    if lexer_class is None:
        return False
    return lexer_class.name not in {"Text only", "Text output"}


def classify(entry: Entry, sibling_names: frozenset[str] | None = None) -> FileClass | None:
    """Return the name-based class of ``entry``, or ``None`` for plain files."""
    name = entry.path.name or entry.name
    if name in IMMEDIATE_NAMES or name.upper().startswith("README"):
        return FileClass.IMMEDIATE

    ext = entry.ext
    if ext is not None:
        for file_class, extensions in EXTENSION_CLASSES.items():
            if ext in extensions:
                return file_class

    if is_temp_name(name):
        return FileClass.TEMP

    if ext is not None and ext in COMPILED_EXTENSIONS and sibling_names is not None:
        stem = name[: -(len(ext) + 1)]
        if any(f"{stem}.{source_ext}" in sibling_names for source_ext in COMPILED_EXTENSIONS[ext]):
            return FileClass.COMPILED

    if is_source_name(name):
        return FileClass.SOURCE
    return None


__all__ = [
    "FileClass",
    "IMMEDIATE_NAMES",
    "EXTENSION_CLASSES",
    "COMPILED_EXTENSIONS",
    "is_temp_name",
    "is_source_name",
    "classify",
]
