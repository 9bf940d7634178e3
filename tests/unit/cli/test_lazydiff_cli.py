"""CLI entrypoint: pair tracking, ledger persistence, and output modes."""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydiff import cli
from lazydiff.runtime.loop import ReviewLoopResult


class _TtyStringIO(io.StringIO):
    def isatty(self) -> bool:
        return True

    def fileno(self) -> int:
        return 1


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.default_ledger = self.root / "state" / "ledger.json"
        for name, value in (
            ("load_theme_name", None),
            ("load_overlay_title", None),
            ("load_syntax_style", None),
            ("load_ledger_path", self.default_ledger),
        ):
            patcher = mock.patch(f"lazydiff.cli.{name}", return_value=value)
            patcher.start()
            self.addCleanup(patcher.stop)

    def _write(self, name: str, text: str) -> Path:
        path = self.root / name
        path.write_text(text, encoding="utf-8")
        return path

    def _run(self, argv: list[str]) -> str:
        with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
            cli.main(argv)
        return stdout.getvalue()

    def test_render_pair_prints_one_frame(self) -> None:
        base = self._write("base.txt", "a\nb\n")
        cur = self._write("cur.txt", "a\nc\n")

        output = self._run(
            [str(base), str(cur), "--path", "demo.txt", "--render", "--no-color", "--width", "60", "--height", "30"]
        )

        rows = output.splitlines()
        self.assertEqual(len(rows), 22)
        self.assertNotIn("\x1b", output)
        self.assertIn("[1/1] demo.txt +1/-1", output)
        self.assertIn("2 - b", output)
        self.assertIn("2 + c", output)

    def test_missing_baseline_tracks_new_file(self) -> None:
        cur = self._write("cur.py", "one\ntwo\n")

        output = self._run([str(self.root / "absent.py"), str(cur), "--path", "new.py", "--status", "--no-color"])

        self.assertEqual(output, "1 file changed\n  new.py +2/-0 [new]\n")

    def test_pair_is_saved_into_explicit_ledger(self) -> None:
        base = self._write("base.txt", "a\n")
        cur = self._write("cur.txt", "b\n")
        ledger_path = self.root / "review.json"

        self._run([str(base), str(cur), "--path", "x.txt", "--ledger", str(ledger_path), "--status"])
        output = self._run(["--ledger", str(ledger_path), "--status", "--no-color"])

        saved = json.loads(ledger_path.read_text(encoding="utf-8"))
        self.assertEqual(saved["files"][0]["path"], "x.txt")
        self.assertEqual(saved["files"][0]["baselineContent"], "a\n")
        self.assertIn("x.txt +1/-1", output)

    def test_pair_without_ledger_is_not_persisted(self) -> None:
        base = self._write("base.txt", "a\n")
        cur = self._write("cur.txt", "b\n")

        self._run([str(base), str(cur), "--status"])

        self.assertFalse(self.default_ledger.exists())

    def test_configured_ledger_is_reviewed_without_pair(self) -> None:
        self.assertEqual(self._run(["--status"]), "No pending changes\n")

    def test_render_off_tty_without_flag(self) -> None:
        cur = self._write("cur.txt", "x\n")

        output = self._run([str(self.root / "none"), str(cur), "--no-color", "--height", "40"])

        self.assertEqual(len(output.splitlines()), 30)
        self.assertIn("Diff Review", output)

    def test_title_option(self) -> None:
        output = self._run(["--render", "--no-color", "--title", "Agent Changes"])

        self.assertIn("Agent Changes", output.splitlines()[0])
        self.assertIn("No files to review", output)

    def test_user_errors_exit_with_message(self) -> None:
        cur = self._write("cur.txt", "x\n")
        bad_ledger = self._write("bad.json", "{oops")
        cases = [
            ([str(cur)], "BASELINE and CURRENT"),
            ([str(cur), str(self.root / "missing.txt")], "Path not found"),
            (["--ledger", str(bad_ledger), "--status"], "Cannot load ledger"),
            (["--theme", "neon", "--status"], "Unknown theme"),
            (["--render", "--status"], "Cannot combine"),
        ]
        for argv, message in cases:
            with self.subTest(argv=argv):
                with self.assertRaises(SystemExit) as ctx:
                    self._run(argv)
                self.assertIn(message, str(ctx.exception))

    def test_interactive_run_prints_yanks_and_saves_dismissals(self) -> None:
        ledger_path = self.root / "review.json"
        base = self._write("base.txt", "a\n")
        cur = self._write("cur.txt", "b\n")
        self._run([str(base), str(cur), "--path", "x.txt", "--ledger", str(ledger_path), "--status"])

        def fake_review(session, **kwargs):
            session.dismiss_selected()
            return ReviewLoopResult(pasted=["x.txt:1"], dismissed=1)

        stdin = mock.Mock()
        stdin.isatty.return_value = True
        stdin.fileno.return_value = 0
        with mock.patch("lazydiff.cli.run_review", side_effect=fake_review) as run_review, mock.patch(
            "sys.stdin", stdin
        ), mock.patch("sys.stdout", new_callable=_TtyStringIO) as stdout:
            cli.main(["--ledger", str(ledger_path)])

        run_review.assert_called_once()
        self.assertEqual(run_review.call_args.kwargs["stdin_fd"], 0)
        self.assertEqual(stdout.getvalue(), "x.txt:1\n")
        saved = json.loads(ledger_path.read_text(encoding="utf-8"))
        self.assertEqual(saved["files"][0]["baselineContent"], "b\n")


if __name__ == "__main__":
    unittest.main()
