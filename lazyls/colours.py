"""Colour palettes for listing output.

A palette is a flat set of ANSI SGR prefixes, one per semantic role. The
plain palette maps every role to the empty string, so renderers can paint
unconditionally.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class Colours:
    """Semantic ANSI palette used by renderers."""

    name: str

    # file kinds
    normal: str
    directory: str
    symlink: str
    pipe: str
    block_device: str
    char_device: str
    socket: str
    special: str
    executable: str

    # file classes, by name
    image: str
    video: str
    music: str
    lossless: str
    crypto: str
    document: str
    compressed: str
    temp: str
    immediate: str
    compiled: str
    source: str

    # symlink arrows
    link_arrow: str
    broken_arrow: str
    broken_filename: str

    # permission bits
    perm_type: str
    user_read: str
    user_write: str
    user_execute_file: str
    user_execute_other: str
    group_read: str
    group_write: str
    group_execute: str
    other_read: str
    other_write: str
    other_execute: str
    special_user_file: str
    special_other: str
    attribute: str

    # metadata columns
    size_number: str
    size_unit: str
    size_scale_byte: str
    size_scale_kilo: str
    size_scale_mega: str
    size_scale_giga: str
    size_scale_huge: str
    user_you: str
    user_someone_else: str
    group_yours: str
    group_not_yours: str
    links_normal: str
    links_multi: str
    inode: str
    blocks: str
    date: str
    header: str
    punctuation: str

    # git status
    git_new: str
    git_modified: str
    git_deleted: str
    git_renamed: str
    git_typechange: str
    git_conflicted: str

    # size numbers coloured by magnitude instead of size_number
    scale: bool = False

    @property
    def is_plain(self) -> bool:
        return all(getattr(self, name) == "" for name in _style_field_names())

    def size_style(self, size: int) -> str:
        if not self.scale:
            return self.size_number
        if size < 1024:
            return self.size_scale_byte
        if size < 1024**2:
            return self.size_scale_kilo
        if size < 1024**3:
            return self.size_scale_mega
        if size < 1024**4:
            return self.size_scale_giga
        return self.size_scale_huge


def _style_field_names() -> tuple[str, ...]:
    return tuple(f.name for f in fields(Colours) if f.name not in ("name", "scale"))


DEFAULT_COLOURS = Colours(
    name="default",
    normal="",
    directory="\033[1;34m",
    symlink="\033[36m",
    pipe="\033[33m",
    block_device="\033[1;33m",
    char_device="\033[1;33m",
    socket="\033[1;31m",
    special="\033[33m",
    executable="\033[1;32m",
    image="\033[38;5;133m",
    video="\033[1;38;5;135m",
    music="\033[38;5;92m",
    lossless="\033[1;38;5;93m",
    crypto="\033[1;38;5;109m",
    document="\033[38;5;105m",
    compressed="\033[31m",
    temp="\033[38;5;244m",
    immediate="\033[1;4;33m",
    compiled="\033[38;5;137m",
    source="\033[38;5;110m",
    link_arrow="\033[38;5;244m",
    broken_arrow="\033[31m",
    broken_filename="\033[4;31m",
    perm_type="\033[1;34m",
    user_read="\033[1;33m",
    user_write="\033[1;31m",
    user_execute_file="\033[1;4;32m",
    user_execute_other="\033[1;32m",
    group_read="\033[33m",
    group_write="\033[31m",
    group_execute="\033[32m",
    other_read="\033[33m",
    other_write="\033[31m",
    other_execute="\033[32m",
    special_user_file="\033[35m",
    special_other="\033[35m",
    attribute="",
    size_number="\033[1;32m",
    size_unit="\033[32m",
    size_scale_byte="\033[38;5;118m",
    size_scale_kilo="\033[38;5;190m",
    size_scale_mega="\033[38;5;226m",
    size_scale_giga="\033[38;5;220m",
    size_scale_huge="\033[38;5;214m",
    user_you="\033[1;33m",
    user_someone_else="",
    group_yours="\033[1;33m",
    group_not_yours="",
    links_normal="\033[1;31m",
    links_multi="\033[1;41;31m",
    inode="\033[35m",
    blocks="\033[36m",
    date="\033[34m",
    header="\033[4m",
    punctuation="\033[38;5;244m",
    git_new="\033[32m",
    git_modified="\033[34m",
    git_deleted="\033[31m",
    git_renamed="\033[33m",
    git_typechange="\033[35m",
    git_conflicted="\033[1;31m",
)

OCEAN_COLOURS = Colours(
    name="ocean",
    normal="\033[38;5;252m",
    directory="\033[1;38;5;45m",
    symlink="\033[38;5;117m",
    pipe="\033[38;5;186m",
    block_device="\033[1;38;5;186m",
    char_device="\033[1;38;5;186m",
    socket="\033[1;38;5;204m",
    special="\033[38;5;186m",
    executable="\033[1;38;5;84m",
    image="\033[38;5;141m",
    video="\033[1;38;5;141m",
    music="\033[38;5;99m",
    lossless="\033[1;38;5;99m",
    crypto="\033[1;38;5;73m",
    document="\033[38;5;153m",
    compressed="\033[38;5;203m",
    temp="\033[2;38;5;110m",
    immediate="\033[1;4;38;5;229m",
    compiled="\033[38;5;180m",
    source="\033[38;5;117m",
    link_arrow="\033[2;38;5;110m",
    broken_arrow="\033[38;5;203m",
    broken_filename="\033[4;38;5;203m",
    perm_type="\033[1;38;5;45m",
    user_read="\033[1;38;5;229m",
    user_write="\033[1;38;5;215m",
    user_execute_file="\033[1;4;38;5;84m",
    user_execute_other="\033[1;38;5;84m",
    group_read="\033[38;5;229m",
    group_write="\033[38;5;215m",
    group_execute="\033[38;5;84m",
    other_read="\033[38;5;229m",
    other_write="\033[38;5;215m",
    other_execute="\033[38;5;84m",
    special_user_file="\033[38;5;141m",
    special_other="\033[38;5;141m",
    attribute="",
    size_number="\033[1;38;5;73m",
    size_unit="\033[38;5;73m",
    size_scale_byte="\033[38;5;117m",
    size_scale_kilo="\033[38;5;45m",
    size_scale_mega="\033[38;5;39m",
    size_scale_giga="\033[38;5;215m",
    size_scale_huge="\033[1;38;5;203m",
    user_you="\033[1;38;5;229m",
    user_someone_else="",
    group_yours="\033[1;38;5;229m",
    group_not_yours="",
    links_normal="\033[1;38;5;215m",
    links_multi="\033[1;48;5;52;38;5;215m",
    inode="\033[38;5;141m",
    blocks="\033[38;5;73m",
    date="\033[38;5;39m",
    header="\033[4;38;5;153m",
    punctuation="\033[2;38;5;110m",
    git_new="\033[38;5;84m",
    git_modified="\033[38;5;39m",
    git_deleted="\033[38;5;203m",
    git_renamed="\033[38;5;215m",
    git_typechange="\033[38;5;141m",
    git_conflicted="\033[1;38;5;203m",
)

PLAIN_COLOURS = Colours(name="plain", **{name: "" for name in _style_field_names()})

_PALETTES: dict[str, Colours] = {
    DEFAULT_COLOURS.name: DEFAULT_COLOURS,
    OCEAN_COLOURS.name: OCEAN_COLOURS,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain palette names."""
    return tuple(sorted(_PALETTES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid palette name, falling back to default."""
    if not name:
        return DEFAULT_COLOURS.name
    candidate = str(name).strip().lower()
    if candidate in _PALETTES:
        return candidate
    return DEFAULT_COLOURS.name


def resolve_colours(name: str | None, *, no_color: bool = False, scale: bool = False) -> Colours:
    """Return the concrete palette for a requested name and colour mode."""
    if no_color:
        return PLAIN_COLOURS
    palette = _PALETTES[normalize_theme_name(name)]
    return replace(palette, scale=True) if scale else palette


__all__ = [
    "Colours",
    "DEFAULT_COLOURS",
    "OCEAN_COLOURS",
    "PLAIN_COLOURS",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_colours",
]
