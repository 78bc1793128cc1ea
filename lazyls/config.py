"""Persistent JSON config holding listing defaults.

Stores the preferred colour mode, palette, sort field, and hidden-file and
directory-grouping preferences. Command-line flags always win.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "lazyls"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "LAZYLS_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

COLOR_MODES = ("always", "auto", "automatic", "never")


def config_path() -> Path:
    """Return the config location, honouring the ``LAZYLS_CONFIG`` override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    path = config_path() if path is None else path
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _string_choice(
    data: dict[str, object],
    key: str,
    choices: tuple[str, ...] | None = None,
    fold_case: bool = True,
) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    if fold_case:
        stripped = stripped.lower()
    if not stripped:
        return None
    if choices is not None and stripped not in choices:
        return None
    return stripped


def _bool_value(data: dict[str, object], key: str) -> bool:
    """Only explicit booleans count; anything else reads as ``False``."""
    value = data.get(key)
    return bool(value) if isinstance(value, bool) else False


@dataclass(frozen=True)
class ConfigDefaults:
    color: str | None = None
    theme: str | None = None
    sort: str | None = None
    group_directories_first: bool = False
    show_all: bool = False


def load_defaults(path: Path | None = None, sort_words: tuple[str, ...] | None = None) -> ConfigDefaults:
    """Read listing defaults, dropping values of the wrong type key by key."""
    data = load_config(path)
    return ConfigDefaults(
        color=_string_choice(data, "color", COLOR_MODES),
        theme=_string_choice(data, "theme"),
        sort=_string_choice(data, "sort", sort_words, fold_case=False),
        group_directories_first=_bool_value(data, "group_directories_first"),
        show_all=_bool_value(data, "all"),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_FILENAME",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "COLOR_MODES",
    "config_path",
    "load_config",
    "ConfigDefaults",
    "load_defaults",
]
