from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from navipage import config
from navipage.config import DEFAULT_HELP_COMMANDS, HELP_URL, Settings


class ConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "config.json"

    def test_missing_config_uses_defaults(self) -> None:
        self.assertEqual(config.load_config(self.path), {})
        self.assertEqual(config.load_settings(self.path), Settings())

    def test_malformed_or_non_object_config_uses_defaults(self) -> None:
        for text in ("{not json", "[1, 2]", '"text"'):
            with self.subTest(text=text):
                self.path.write_text(text, encoding="utf-8")
                self.assertEqual(config.load_settings(self.path), Settings())

    def test_valid_values_are_loaded(self) -> None:
        self.path.write_text(
            json.dumps(
                {
                    "numbers": True,
                    "show_hint": False,
                    "help_commands": [["man", "navipage"], ["cat", "README.md"]],
                    "help_url": "https://example.org",
                }
            ),
            encoding="utf-8",
        )
        settings = config.load_settings(self.path)
        self.assertTrue(settings.numbers)
        self.assertFalse(settings.show_hint)
        self.assertEqual(settings.help_commands, (("man", "navipage"), ("cat", "README.md")))
        self.assertEqual(settings.help_url, "https://example.org")

    def test_invalid_values_fall_back_per_key(self) -> None:
        self.path.write_text(
            json.dumps(
                {
                    "numbers": 1,
                    "show_hint": "yes",
                    "help_commands": [["man", 3]],
                    "help_url": "",
                }
            ),
            encoding="utf-8",
        )
        settings = config.load_settings(self.path)
        self.assertFalse(settings.numbers)
        self.assertTrue(settings.show_hint)
        self.assertEqual(settings.help_commands, DEFAULT_HELP_COMMANDS)
        self.assertEqual(settings.help_url, HELP_URL)

    def test_environment_helpers_ignore_empty_values(self) -> None:
        self.assertEqual(config.default_corpus_dir({"NAVIPAGE_DIR": "/srv/omnavi"}), "/srv/omnavi")
        self.assertIsNone(config.default_corpus_dir({"NAVIPAGE_DIR": ""}))
        self.assertIsNone(config.default_corpus_dir({}))
        self.assertEqual(config.startup_script({"NAVIPAGE_SH": "true"}), "true")
        self.assertIsNone(config.startup_script({}))


if __name__ == "__main__":
    unittest.main()
