from __future__ import annotations

import unittest

from lazydiff.ui_theme import (
    DEFAULT_THEME,
    OCEAN_THEME,
    PLAIN_THEME,
    available_theme_names,
    normalize_theme_name,
    resolve_theme,
)


class UiThemeTests(unittest.TestCase):
    def test_theme_names(self) -> None:
        self.assertEqual(available_theme_names(), ("default", "ocean"))
        self.assertEqual(normalize_theme_name(" Ocean "), "ocean")
        self.assertEqual(normalize_theme_name("missing"), "default")
        self.assertEqual(normalize_theme_name(None), "default")

    def test_resolve_theme(self) -> None:
        self.assertIs(resolve_theme("ocean"), OCEAN_THEME)
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)

    def test_fg_wraps_known_roles_only(self) -> None:
        self.assertEqual(DEFAULT_THEME.fg("success", "ok"), f"{DEFAULT_THEME.success}ok\x1b[0m")
        self.assertEqual(DEFAULT_THEME.fg("reset", "ok"), "ok")
        self.assertEqual(DEFAULT_THEME.fg("accent", ""), "")

    def test_plain_theme_is_identity(self) -> None:
        self.assertEqual(PLAIN_THEME.fg("accent", "x"), "x")
        self.assertEqual(PLAIN_THEME.bold("x"), "x")
        self.assertEqual(DEFAULT_THEME.bold("x"), "\x1b[1mx\x1b[0m")


if __name__ == "__main__":
    unittest.main()
