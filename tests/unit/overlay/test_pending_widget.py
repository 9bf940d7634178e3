from __future__ import annotations

import unittest

from lazydiff.ansi import strip_ansi
from lazydiff.diff import SnapshotLedger
from lazydiff.overlay import pending_summary_lines
from lazydiff.ui_theme import DEFAULT_THEME, PLAIN_THEME


class PendingSummaryTests(unittest.TestCase):
    def test_nothing_pending_gives_no_lines(self) -> None:
        ledger = SnapshotLedger()
        ledger.track("same.py", "x\n", "x\n")

        self.assertEqual(pending_summary_lines(ledger, PLAIN_THEME), [])

    def test_lists_files_with_stats_and_new_tag(self) -> None:
        ledger = SnapshotLedger()
        ledger.track("a.py", "x\n", "y\nz\n")
        ledger.track("new.py", "", "n\n")

        lines = pending_summary_lines(ledger, PLAIN_THEME)

        self.assertEqual(lines, ["2 files changed", "  a.py +2/-1", "  new.py +1/-0 [new]"])

    def test_caps_rows_and_counts_the_rest(self) -> None:
        ledger = SnapshotLedger()
        for n in range(8):
            ledger.track(f"f{n}.py", "", "x\n")

        lines = [strip_ansi(line) for line in pending_summary_lines(ledger, DEFAULT_THEME)]

        self.assertEqual(lines[0], "8 files changed")
        self.assertEqual(len(lines), 7)
        self.assertEqual(lines[-1], "  … and 3 more")

    def test_singular_heading(self) -> None:
        ledger = SnapshotLedger()
        ledger.track("one.py", "a\n", "b\n")

        self.assertEqual(pending_summary_lines(ledger, PLAIN_THEME, max_files=0), ["1 file changed", "  … and 1 more"])


if __name__ == "__main__":
    unittest.main()
