"""Command-line front door for lazydiff.

Parses CLI options, loads the ledger (and optionally tracks a file pair),
then prints a status block, prints one overlay frame, or runs the
interactive review loop.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .ansi import strip_ansi
from .diff.ledger import LedgerFormatError, SnapshotLedger
from .highlight import PygmentsHighlighter, plain_highlight
from .overlay.host import HighlightProvider, OverlayTheme, StaticTui
from .overlay.review import DEFAULT_TITLE, ReviewOverlay
from .overlay.widget import pending_summary_lines
from .review.session import ReviewSession
from .runtime.config import load_ledger_path, load_overlay_title, load_syntax_style, load_theme_name
from .runtime.input import TerminalKeys
from .runtime.loop import overlay_width, run_review
from .runtime.store import load_ledger, save_ledger
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
NO_PENDING_TEXT = "No pending changes"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def render_review_frame(
    session: ReviewSession,
    theme: OverlayTheme,
    highlight: HighlightProvider,
    *,
    width: int,
    height: int,
    title: str = DEFAULT_TITLE,
) -> list[str]:
    """Render one overlay frame without a terminal, as for ``--render``."""
    overlay = ReviewOverlay(
        session,
        StaticTui(height=height),
        theme,
        TerminalKeys(),
        highlight,
        lambda: None,
        title=title,
    )
    return overlay.render(width)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazydiff",
        description="Review tracked file changes as syntax-highlighted inline diffs.",
    )
    parser.add_argument("baseline", nargs="?", default=None, help="Baseline file (missing means a new file).")
    parser.add_argument("current", nargs="?", default=None, help="Current file.")
    parser.add_argument("--path", default=None, help="Label to track the pair under (default: CURRENT).")
    parser.add_argument("--ledger", type=Path, default=None, help="Ledger file to load and update.")
    parser.add_argument("--render", action="store_true", help="Print one overlay frame and exit.")
    parser.add_argument("--status", action="store_true", help="Print the pending-changes summary and exit.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Frame width (default: terminal).")
    parser.add_argument("--height", type=_positive_int, default=None, help="Terminal height used for --render.")
    parser.add_argument("--title", default=None, help="Overlay title.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Diagnostics written to stderr (default: WARNING).",
    )
    return parser


def _load_ledger_or_exit(path: Path) -> SnapshotLedger:
    try:
        return load_ledger(path)
    except (LedgerFormatError, OSError) as exc:
        raise SystemExit(f"Cannot load ledger {path}: {exc}") from exc


def _save_ledger_or_exit(ledger: SnapshotLedger, path: Path) -> None:
    try:
        save_ledger(ledger, path)
    except OSError as exc:
        raise SystemExit(f"Cannot save ledger {path}: {exc}") from exc


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and review pending changes.

    With a BASELINE/CURRENT pair the pair is tracked (into ``--ledger`` when
    given, otherwise into a throwaway ledger). Without a pair the persisted
    ledger is reviewed.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if (args.baseline is None) != (args.current is None):
        raise SystemExit("Pass both BASELINE and CURRENT, or neither.")
    if args.theme is not None and args.theme.strip().lower() not in available_theme_names():
        raise SystemExit(f"Unknown theme: {args.theme}")
    if args.render and args.status:
        raise SystemExit("Cannot combine --render with --status.")

    has_pair = args.current is not None
    ledger_path: Path | None = args.ledger
    if ledger_path is None and not has_pair:
        ledger_path = load_ledger_path()
    ledger = _load_ledger_or_exit(ledger_path) if ledger_path is not None else SnapshotLedger()

    if has_pair:
        current_path = Path(args.current)
        if not current_path.is_file():
            raise SystemExit(f"Path not found: {current_path}")
        baseline_path = Path(args.baseline)
        baseline = read_text(baseline_path) if baseline_path.is_file() else ""
        label = args.path or str(current_path)
        ledger.track(label, baseline, read_text(current_path))
        if ledger_path is not None:
            _save_ledger_or_exit(ledger, ledger_path)

    theme = resolve_theme(args.theme or load_theme_name(), no_color=args.no_color)
    highlight: HighlightProvider = (
        plain_highlight if args.no_color else PygmentsHighlighter(args.style or load_syntax_style())
    )
    title = args.title or load_overlay_title() or DEFAULT_TITLE

    if args.status:
        lines = pending_summary_lines(ledger, theme)
        sys.stdout.write("\n".join(lines or [NO_PENDING_TEXT]) + "\n")
        return

    session = ReviewSession(ledger)
    interactive = sys.stdout.isatty() and sys.stdin.isatty()
    if args.render or not interactive:
        term = shutil.get_terminal_size((80, 24))
        width = args.width if args.width is not None else overlay_width(term.columns)
        height = args.height if args.height is not None else term.lines
        rows = render_review_frame(session, theme, highlight, width=width, height=height, title=title)
        if args.no_color:
            rows = [strip_ansi(row) for row in rows]
        sys.stdout.write("\n".join(rows) + "\n")
        return

    result = run_review(
        session,
        theme=theme,
        highlight=highlight,
        stdin_fd=sys.stdin.fileno(),
        stdout_fd=sys.stdout.fileno(),
        title=title,
        strip_color=args.no_color,
    )
    if result.dismissed and ledger_path is not None:
        _save_ledger_or_exit(ledger, ledger_path)
    for text in result.pasted:
        sys.stdout.write(text + "\n")
    sys.stdout.flush()
    logger.debug("review closed: %d dismissed, %d yanked", result.dismissed, len(result.pasted))


if __name__ == "__main__":
    main()
