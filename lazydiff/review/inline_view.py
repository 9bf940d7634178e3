"""Scrollable, cursor-addressable inline rendering of one file diff.

``InlineDiffView`` converts a :class:`FileDiffResult` into styled rows,
inserting a dim separator wherever consecutive records skip line numbers. It
owns cursor, scroll offset, and visual-selection anchor, and renders a fixed
window of rows truncated to the requested width. Every index operation
clamps; nothing here raises.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from ..ansi import RESET, truncate_styled_row
from ..diff.types import FileDiffResult, LineRecord
from ..highlight import sanitize_terminal_text

HighlightFn = Callable[[str, str], str]

HIGHLIGHT_BG = "\x1b[48;5;236m"
HIGHLIGHT_BG_OFF = "\x1b[49m"
SEPARATOR_MARKER = "···"

_SGR_RE = re.compile(r"\x1b\[([0-9;]*)m")

_KIND_STYLE = {
    "added": ("+", "\x1b[32m"),
    "removed": ("-", "\x1b[31m"),
    "context": (" ", "\x1b[2m"),
}


@dataclass(frozen=True)
class LineRow:
    """Rendered row backed by one diff line record."""

    record: LineRecord
    styled: str
    raw: str


@dataclass(frozen=True)
class SeparatorRow:
    """Gap marker between non-contiguous hunks."""

    styled: str = f"\x1b[2m{SEPARATOR_MARKER}{RESET}"
    raw: str = SEPARATOR_MARKER


RenderRow = Union[LineRow, SeparatorRow]

_SEPARATOR = SeparatorRow()


def _clears_background(match: re.Match[str]) -> bool:
    return any(part in {"", "0", "00", "49"} for part in match.group(1).split(";"))


def _apply_row_highlight(styled: str) -> str:
    """Wrap a styled row in the cursor/selection background.

    Highlighters reset after each token (Pygments emits ``39;49;00``), so the
    background is re-applied after every SGR that clears it.
    """
    if styled.endswith(RESET):
        styled = styled[: -len(RESET)]
    body = _SGR_RE.sub(lambda m: m.group(0) + HIGHLIGHT_BG if _clears_background(m) else m.group(0), styled)
    return HIGHLIGHT_BG + body + HIGHLIGHT_BG_OFF + RESET


class InlineDiffView:
    """Render sequencer for one file diff."""

    def __init__(self, diff: FileDiffResult, highlight: HighlightFn | None = None) -> None:
        self._highlight = highlight
        self._diff = diff
        self._rows: list[RenderRow] = []
        self._cursor_row = 0
        self._scroll_offset = 0
        self._visual_mode = False
        self._visual_anchor = 0
        self.load(diff)

    @property
    def diff(self) -> FileDiffResult:
        return self._diff

    @property
    def rows(self) -> tuple[RenderRow, ...]:
        return tuple(self._rows)

    @property
    def total_rows(self) -> int:
        return len(self._rows)

    @property
    def cursor_row(self) -> int:
        return self._cursor_row

    @property
    def scroll_offset(self) -> int:
        return self._scroll_offset

    @property
    def is_visual_mode(self) -> bool:
        return self._visual_mode

    @property
    def visual_anchor(self) -> int:
        return self._visual_anchor

    def load(self, diff: FileDiffResult) -> None:
        """Rebuild rows for ``diff`` and reset cursor, scroll, and visual state."""
        self._diff = diff
        self._cursor_row = 0
        self._scroll_offset = 0
        self._visual_mode = False
        self._visual_anchor = 0
        self._rows = self._build_rows()

    def _build_rows(self) -> list[RenderRow]:
        rows: list[RenderRow] = []
        number_width = len(str(self.max_line_number()))
        previous_anchor: int | None = None

        for record in self._diff.lines:
            anchor = record.anchor_line_number
            if previous_anchor is not None and anchor is not None and anchor > previous_anchor + 1:
                rows.append(_SEPARATOR)
            rows.append(self._line_row(record, number_width))
            if anchor is not None:
                previous_anchor = anchor
        return rows

    def _line_row(self, record: LineRecord, number_width: int) -> LineRow:
        marker, color = _KIND_STYLE[record.kind]
        number = str(record.anchor_line_number or 0).rjust(number_width)
        text = sanitize_terminal_text(record.text)
        if record.kind == "context" and self._highlight is not None:
            text = self._highlight(text, self._diff.path)
        return LineRow(
            record=record,
            styled=f"{color}{number} {marker} {text}{RESET}",
            raw=f"{number} {marker} {record.text}",
        )

    def max_line_number(self) -> int:
        """Return the widest line number across records; 0 for an empty diff."""
        return max((record.anchor_line_number or 0 for record in self._diff.lines), default=0)

    def is_separator(self, index: int) -> bool:
        if not 0 <= index < len(self._rows):
            return False
        return isinstance(self._rows[index], SeparatorRow)

    def cursor_line_record(self) -> LineRecord | None:
        """Return the record under the cursor, or ``None`` on a separator/empty view."""
        if not self._rows:
            return None
        row = self._rows[self._cursor_row]
        if isinstance(row, LineRow):
            return row.record
        return None

    def set_cursor(self, row: int) -> None:
        # Scroll follows the cursor lazily in render(), which knows the height.
        max_row = max(0, len(self._rows) - 1)
        self._cursor_row = max(0, min(row, max_row))

    def move_cursor(self, delta: int) -> None:
        self.set_cursor(self._cursor_row + delta)

    def scroll_and_move(self, delta: int) -> None:
        """Scroll by ``delta`` rows and move the cursor by the same amount."""
        self._scroll_offset = max(0, min(self._scroll_offset + delta, len(self._rows)))
        self.move_cursor(delta)

    def scroll_up(self, lines: int = 1) -> None:
        self.scroll_and_move(-lines)

    def scroll_down(self, lines: int = 1) -> None:
        self.scroll_and_move(lines)

    def scroll_to_top(self) -> None:
        self._scroll_offset = 0
        self._cursor_row = 0

    def scroll_to_bottom(self) -> None:
        self._scroll_offset = len(self._rows)
        self._cursor_row = max(0, len(self._rows) - 1)

    def enter_visual_mode(self) -> None:
        self._visual_mode = True
        self._visual_anchor = self._cursor_row

    def exit_visual_mode(self) -> None:
        self._visual_mode = False

    def visual_range(self) -> tuple[int, int]:
        """Return the inclusive ``(min, max)`` row range spanned by anchor and cursor."""
        return (
            min(self._visual_anchor, self._cursor_row),
            max(self._visual_anchor, self._cursor_row),
        )

    def _selected_rows(self) -> list[RenderRow]:
        start, end = self.visual_range()
        return self._rows[max(0, start) : end + 1]

    def selected_raw_lines(self) -> list[str]:
        return [row.raw for row in self._selected_rows()]

    def selected_line_records(self) -> list[LineRecord]:
        return [row.record for row in self._selected_rows() if isinstance(row, LineRow)]

    def render(self, width: int, height: int) -> list[str]:
        """Return at most ``height`` styled rows, each cut to ``width`` visible chars.

        Adjusts the scroll offset first so the cursor stays on screen, then
        clamps it so the window is filled whenever enough rows exist.
        """
        height = max(0, height)
        if self._cursor_row >= self._scroll_offset + height:
            self._scroll_offset = self._cursor_row - height + 1
        if self._cursor_row < self._scroll_offset:
            self._scroll_offset = self._cursor_row
        max_offset = max(0, len(self._rows) - height)
        self._scroll_offset = max(0, min(self._scroll_offset, max_offset))

        offset = self._scroll_offset
        visible = self._rows[offset : offset + height]
        selection = self.visual_range() if self._visual_mode else None

        out: list[str] = []
        for index, row in enumerate(visible, start=offset):
            styled = row.styled
            selected = selection is not None and selection[0] <= index <= selection[1]
            if selected or index == self._cursor_row:
                styled = _apply_row_highlight(styled)
            out.append(truncate_styled_row(styled, width))
        return out


__all__ = [
    "HIGHLIGHT_BG",
    "HIGHLIGHT_BG_OFF",
    "HighlightFn",
    "InlineDiffView",
    "LineRow",
    "RenderRow",
    "SEPARATOR_MARKER",
    "SeparatorRow",
]
