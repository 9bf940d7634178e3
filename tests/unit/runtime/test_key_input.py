"""Raw-key decoding: escape timing, arrows, control tokens, UTF-8."""

import os
import time
import unittest

from lazydiff.runtime import input as input_mod
from lazydiff.runtime.input import TerminalKeys


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()
        os.close(self.read_fd)
        os.close(self.write_fd)

    def _keys(self, payload: bytes, count: int) -> list[str]:
        os.write(self.write_fd, payload)
        return [input_mod.read_key(self.read_fd, timeout_ms=20) for _ in range(count)]

    def test_single_escape_returns_without_second_keypress(self) -> None:
        os.write(self.write_fd, b"\x1b")
        started = time.monotonic()
        key = input_mod.read_key(self.read_fd, timeout_ms=20)
        elapsed = time.monotonic() - started

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_escape_does_not_swallow_following_key(self) -> None:
        self.assertEqual(self._keys(b"\x1bj", 2), ["ESC", "j"])

    def test_arrow_sequences(self) -> None:
        self.assertEqual(self._keys(b"\x1b[A\x1b[B\x1bOA", 3), ["UP", "DOWN", "UP"])

    def test_unknown_escape_sequences_are_drained_as_one_neutral_token(self) -> None:
        keys = self._keys(b"\x1b[5~n\x1b[Zj\x1bOHk", 6)

        self.assertEqual(keys, ["UNKNOWN", "n", "UNKNOWN", "j", "UNKNOWN", "k"])
        self.assertNotIn(TerminalKeys.escape, keys)

    def test_control_tokens(self) -> None:
        self.assertEqual(self._keys(b"\t\r\x04\x15\x03", 5), ["TAB", "ENTER", "CTRL_D", "CTRL_U", "CTRL_C"])

    def test_multibyte_character_is_one_token(self) -> None:
        self.assertEqual(self._keys("é".encode("utf-8") + b"V", 2), ["é", "V"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(input_mod.read_key(self.read_fd, timeout_ms=10), "")


class TerminalKeysTests(unittest.TestCase):
    def test_key_identities_match_read_key_tokens(self) -> None:
        keys = TerminalKeys()

        self.assertTrue(keys.matches_key("CTRL_D", keys.ctrl("d")))
        self.assertTrue(keys.matches_key("ESC", keys.escape))
        self.assertFalse(keys.matches_key("UP", keys.down))

    def test_truncate_to_width_clips_visible_columns(self) -> None:
        self.assertEqual(TerminalKeys().truncate_to_width("\x1b[1mabcdef", 3), "\x1b[1mabc")


if __name__ == "__main__":
    unittest.main()
