from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydiff.runtime import config


class UserConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "lazydiff" / "config.json"
        patcher = mock.patch("lazydiff.runtime.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def _write_config(self, data: object) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(data), encoding="utf-8")

    def test_missing_config_gives_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.assertIsNone(config.load_theme_name())
        self.assertIsNone(config.load_overlay_title())
        self.assertIsNone(config.load_syntax_style())
        self.assertEqual(config.load_ledger_path(), config.default_ledger_path())

    def test_theme_name_is_stripped(self) -> None:
        self._write_config({"theme": "  ocean "})

        self.assertEqual(config.load_theme_name(), "ocean")

    def test_blank_theme_name_is_unset(self) -> None:
        self._write_config({"theme": "   "})

        self.assertIsNone(config.load_theme_name())

    def test_string_settings_are_read_and_stripped(self) -> None:
        self._write_config({"title": " Review ", "style": "friendly", "ledger_path": "~/reviews/ledger.json"})

        self.assertEqual(config.load_overlay_title(), "Review")
        self.assertEqual(config.load_syntax_style(), "friendly")
        self.assertEqual(config.load_ledger_path(), Path("~/reviews/ledger.json").expanduser())

    def test_non_string_values_are_ignored(self) -> None:
        self._write_config({"title": 3, "theme": ["ocean"], "ledger_path": ""})

        self.assertIsNone(config.load_overlay_title())
        self.assertIsNone(config.load_theme_name())
        self.assertEqual(config.load_ledger_path(), config.default_ledger_path())

    def test_malformed_config_logs_and_falls_back(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("{not json", encoding="utf-8")

        with self.assertLogs("lazydiff.runtime.config", level="WARNING") as logs:
            self.assertEqual(config.load_config(), {})
        self.assertIn("malformed", logs.output[0])

    def test_non_object_config_is_ignored(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("[1, 2]", encoding="utf-8")

        with self.assertLogs("lazydiff.runtime.config", level="WARNING"):
            self.assertEqual(config.load_config(), {})

    def test_default_ledger_path_is_in_user_state_dir(self) -> None:
        self.assertEqual(config.default_ledger_path().name, "ledger.json")
        self.assertIn("lazydiff", str(config.default_ledger_path()))


if __name__ == "__main__":
    unittest.main()
