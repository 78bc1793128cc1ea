"""Extended-attribute capability and lookup.

Support is a capability of the running platform, computed once here and
passed explicitly to the views that need it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ENABLED = hasattr(os, "listxattr") and hasattr(os, "getxattr")


@dataclass(frozen=True)
class Attribute:
    name: str
    size: int


def list_attributes(path: Path) -> list[Attribute]:
    """Return the extended attributes of ``path`` without following symlinks.

    Unsupported filesystems and unreadable attributes yield what could be
    read; they never raise.
    """
    if not ENABLED:
        return []
    try:
        names = os.listxattr(path, follow_symlinks=False)
    except OSError as exc:
        logger.debug("listxattr failed for %s: %s", path, exc)
        return []

    attributes: list[Attribute] = []
    for name in names:
        try:
            size = len(os.getxattr(path, name, follow_symlinks=False))
        except OSError:
            size = 0
        attributes.append(Attribute(name=name, size=size))
    return attributes


__all__ = ["ENABLED", "Attribute", "list_attributes"]
