"""Bordered, fixed-height frame shared by the review overlay and list picker."""

from __future__ import annotations

from ..ansi import RESET, visible_width
from .host import DEFAULT_TERMINAL_HEIGHT, OverlayKeyUtils, OverlayTheme, OverlayTui

MIN_OVERLAY_HEIGHT = 20
OVERLAY_HEIGHT_FRACTION = 0.75
FRAME_PADDING = 4


def target_height(tui: OverlayTui) -> int:
    """Return block height: ``max(20, floor(terminal_height * 0.75))``."""
    term_height = tui.height if tui.height is not None else DEFAULT_TERMINAL_HEIGHT
    return max(MIN_OVERLAY_HEIGHT, int(term_height * OVERLAY_HEIGHT_FRACTION))


class Frame:
    """Helpers producing border rows for one ``render(width)`` call."""

    def __init__(self, width: int, theme: OverlayTheme, keys: OverlayKeyUtils, title_role: str) -> None:
        self.width = width
        self.inner_width = max(0, width - FRAME_PADDING)
        self.theme = theme
        self.keys = keys
        self.title_role = title_role
        self._border = theme.fg("border", "│")

    def pad_line(self, line: str) -> str:
        truncated = self.keys.truncate_to_width(line, self.inner_width)
        right_pad = max(0, self.inner_width - visible_width(truncated))
        if "\x1b" in truncated:
            # Clipping can drop the row's closing reset.
            truncated += RESET
        return f"{self._border} {truncated}{' ' * right_pad} {self._border}"

    def empty_line(self) -> str:
        return f"{self._border}{' ' * max(0, self.width - 2)}{self._border}"

    def top_border(self, title: str) -> str:
        title_text = f" {title} "
        left = "╭─"
        right = "─" * max(0, self.width - len(left) - len(title_text) - 1) + "╮"
        return (
            self.theme.fg("border", left)
            + self.theme.fg(self.title_role, self.theme.bold(title_text))
            + self.theme.fg("border", right)
        )

    def bottom_border(self) -> str:
        return self.theme.fg("border", f"╰{'─' * max(0, self.width - 2)}╯")


__all__ = [
    "FRAME_PADDING",
    "Frame",
    "MIN_OVERLAY_HEIGHT",
    "OVERLAY_HEIGHT_FRACTION",
    "target_height",
]
