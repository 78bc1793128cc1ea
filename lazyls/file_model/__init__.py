"""Domain model for listed filesystem entries.

This package contains non-output primitives:
- immutable entry/metadata datatypes with derived predicates
- entry construction from paths with typed per-path errors
- directories that enumerate their children on demand
"""

from __future__ import annotations

from .types import Entry, FileKind, FileMetadata, LinkTarget, extension_for_name, kind_for_mode
from .fs import Directory, RepositoryLookup, entry_from_path

__all__ = [
    "Entry",
    "FileKind",
    "FileMetadata",
    "LinkTarget",
    "extension_for_name",
    "kind_for_mode",
    "Directory",
    "RepositoryLookup",
    "entry_from_path",
]
