"""Interactive event loop hosting the review overlay in a real terminal.

Single-threaded: draw when the overlay asked for a render (or the terminal
was resized), read one key, dispatch it, repeat until the overlay calls
``done``. Input is polled with a short timeout only so resizes are noticed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..ansi import strip_ansi
from ..overlay.host import HighlightProvider, OverlayCallbacks, OverlayTheme
from ..overlay.review import DEFAULT_TITLE, ReviewOverlay
from ..review.session import ReviewSession
from .input import TerminalKeys, read_key
from .terminal import TerminalController

logger = logging.getLogger(__name__)

INPUT_POLL_MS = 200
OVERLAY_WIDTH_FRACTION = 0.9
MIN_OVERLAY_WIDTH = 20


def overlay_width(columns: int) -> int:
    """Return overlay width for a terminal ``columns`` wide."""
    return min(columns, max(MIN_OVERLAY_WIDTH, int(columns * OVERLAY_WIDTH_FRACTION)))


class TerminalHost:
    """Overlay host capability backed by a live terminal."""

    def __init__(self, terminal: TerminalController) -> None:
        self.terminal = terminal
        self.dirty = True

    @property
    def height(self) -> int:
        return self.terminal.size().lines

    def request_render(self) -> None:
        self.dirty = True


@dataclass
class ReviewLoopResult:
    """Outcome of one interactive session."""

    pasted: list[str] = field(default_factory=list)
    dismissed: int = 0


def run_review(
    session: ReviewSession,
    *,
    theme: OverlayTheme,
    highlight: HighlightProvider,
    stdin_fd: int,
    stdout_fd: int,
    title: str = DEFAULT_TITLE,
    strip_color: bool = False,
) -> ReviewLoopResult:
    """Run the overlay until it closes; returns yanked text and dismissal count."""
    terminal = TerminalController(stdin_fd, stdout_fd)
    host = TerminalHost(terminal)
    result = ReviewLoopResult()
    finished = False

    def done() -> None:
        nonlocal finished
        finished = True

    def dismissed() -> None:
        result.dismissed += 1

    overlay = ReviewOverlay(
        session,
        host,
        theme,
        TerminalKeys(),
        highlight,
        done,
        OverlayCallbacks(on_dismiss=dismissed, on_paste_to_editor=result.pasted.append),
        title=title,
    )

    last_size = None
    with terminal.raw_mode():
        while not finished:
            size = terminal.size()
            if size != last_size:
                last_size = size
                host.dirty = True
            if host.dirty:
                host.dirty = False
                width = overlay_width(size.columns)
                rows = overlay.render(width)
                if strip_color:
                    rows = [strip_ansi(row) for row in rows]
                terminal.draw(rows[: size.lines], left_margin=(size.columns - width) // 2)

            key = read_key(stdin_fd, timeout_ms=INPUT_POLL_MS)
            if not key:
                continue
            if key == "CTRL_C":
                logger.debug("review interrupted")
                break
            overlay.handle_input(key)

    return result


__all__ = [
    "ReviewLoopResult",
    "TerminalHost",
    "overlay_width",
    "run_review",
]
