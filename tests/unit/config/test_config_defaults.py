"""Tests for config loading and input sanitization.

Ensures malformed config data is safely ignored on load, key by key.
"""

from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyls import config
from lazyls.filtering import SORT_FIELD_WORDS


class ConfigLoadingTests(unittest.TestCase):
    def _write(self, tmp: str, payload: str) -> Path:
        path = Path(tmp) / "config.json"
        path.write_text(payload, encoding="utf-8")
        return path

    def test_missing_file_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            defaults = config.load_defaults(Path(tmp) / "absent.json")
        self.assertEqual(defaults, config.ConfigDefaults())

    def test_sort_word_keeps_its_case(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            defaults = config.load_defaults(self._write(tmp, json.dumps({"sort": "Name"})), tuple(SORT_FIELD_WORDS))
        self.assertEqual(defaults.sort, "Name")

    def test_malformed_and_non_object_files_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(config.load_config(self._write(tmp, "{not json")), {})
            self.assertEqual(config.load_config(self._write(tmp, "[1, 2]")), {})

    def test_valid_values_are_read(self) -> None:
        payload = {
            "color": "Never",
            "theme": "ocean",
            "sort": "size",
            "group_directories_first": True,
            "all": True,
        }
        with tempfile.TemporaryDirectory() as tmp:
            defaults = config.load_defaults(self._write(tmp, json.dumps(payload)), tuple(SORT_FIELD_WORDS))
        self.assertEqual(
            defaults,
            config.ConfigDefaults(
                color="never",
                theme="ocean",
                sort="size",
                group_directories_first=True,
                show_all=True,
            ),
        )

    def test_wrong_types_are_dropped_key_by_key(self) -> None:
        payload = {"color": "sometimes", "theme": 7, "sort": "colour", "group_directories_first": "yes", "all": 1}
        with tempfile.TemporaryDirectory() as tmp:
            defaults = config.load_defaults(self._write(tmp, json.dumps(payload)), tuple(SORT_FIELD_WORDS))
        self.assertEqual(defaults, config.ConfigDefaults())

    def test_environment_variable_overrides_location(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, json.dumps({"all": True}))
            with mock.patch.dict(os.environ, {config.CONFIG_ENV_VAR: str(path)}):
                self.assertEqual(config.config_path(), path)
                self.assertTrue(config.load_defaults().show_all)


if __name__ == "__main__":
    unittest.main()
