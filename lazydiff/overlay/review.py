"""Diff review overlay: bordered multi-file diff browser with yank support.

Turns :class:`ReviewSession` and the selected file's :class:`InlineDiffView`
into a fixed-height block of rows and maps input tokens to session/view
transitions. The overlay is host-agnostic: terminal height, re-render
requests, key matching, and styling all come from injected capabilities.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..review.inline_view import InlineDiffView
from ..review.session import NavigatorEntry, ReviewSession
from .chrome import Frame, target_height
from .host import HighlightProvider, OverlayCallbacks, OverlayKeyUtils, OverlayTheme, OverlayTui

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Diff Review"
LINE_SCROLL = 1
PAGE_SCROLL = 10
MIN_DIFF_ROWS = 5
# top/bottom border, header, rule, scroll indicator, help row, two spare rows
DIFF_CHROME_ROWS = 8
# top/bottom border, heading, two blank rows, hint row
PICKER_CHROME_ROWS = 6
VISUAL_INDICATOR = "VISUAL LINE"
HELP_TEXT = "n/p files  d dismiss  Tab list  Ctrl+D/U scroll  y yank  V visual  Esc close"
PICKER_HINT = "↑↓ navigate  Enter select  Esc cancel"


def format_line_reference(path: str, line_number: int) -> str:
    """Return the single-line yank payload ``path:line``."""
    return f"{path}:{line_number}"


def format_fenced_snippet(path: str, first_line: int, last_line: int, lines: list[str]) -> str:
    """Return the visual-range yank payload: a backticked header and a fenced body."""
    range_text = f"{first_line}" if first_line == last_line else f"{first_line}-{last_line}"
    body = "\n".join(lines)
    return f"`{path}:{range_text}`\n```\n{body}\n```"


class ReviewOverlay:
    """Render/input handler for the diff review overlay."""

    def __init__(
        self,
        session: ReviewSession,
        tui: OverlayTui,
        theme: OverlayTheme,
        keys: OverlayKeyUtils,
        highlight: HighlightProvider,
        done: Callable[[], None],
        callbacks: OverlayCallbacks | None = None,
        *,
        title: str = DEFAULT_TITLE,
    ) -> None:
        self.session = session
        self.tui = tui
        self.theme = theme
        self.keys = keys
        self.highlight = highlight
        self.done = done
        self.callbacks = callbacks if callbacks is not None else OverlayCallbacks()
        self.title = title
        self.view: InlineDiffView | None = None
        self._build_view()

    def _build_view(self) -> None:
        diff = self.session.selected_diff()
        self.view = InlineDiffView(diff, self.highlight) if diff is not None else None

    # Rendering

    def render(self, width: int) -> list[str]:
        height = target_height(self.tui)
        frame = Frame(width, self.theme, self.keys, title_role="accent")
        files = self.session.files

        if not files:
            content = [
                self.theme.fg("muted", "No files to review"),
                "",
                self.theme.fg("dim", "Press Escape to close"),
            ]
        elif self.session.is_picker_open:
            content = self._picker_content(files, height)
        else:
            content = self._diff_content(files, frame.inner_width, height)

        output = [frame.top_border(self.title)]
        output.extend(frame.pad_line(line) for line in content[: max(0, height - 2)])
        while len(output) < height - 1:
            output.append(frame.empty_line())
        if files and not self.session.is_picker_open:
            output[-1] = frame.pad_line(self.theme.fg("dim", HELP_TEXT))
        output.append(frame.bottom_border())
        return output

    def _picker_content(self, files: tuple[NavigatorEntry, ...], height: int) -> list[str]:
        content = [self.theme.fg("accent", self.theme.bold("File Picker")), ""]
        visible = max(1, height - PICKER_CHROME_ROWS)
        picker_index = self.session.picker_index
        start = 0 if picker_index < visible else picker_index - visible + 1

        for index in range(start, min(len(files), start + visible)):
            entry = files[index]
            selected = index == picker_index
            prefix = "▸ " if selected else "  "
            name = self.theme.fg("accent" if selected else "text", entry.path)
            stats = self.theme.fg("muted", f" +{entry.additions}/-{entry.deletions}")
            tag = self.theme.fg("success", " [new]") if entry.is_new_file else ""
            content.append(f"{prefix}{name}{stats}{tag}")

        content.append("")
        content.append(self.theme.fg("dim", PICKER_HINT))
        return content

    def _diff_content(self, files: tuple[NavigatorEntry, ...], inner_width: int, height: int) -> list[str]:
        entry = files[self.session.selected_index]
        file_counter = f"[{self.session.selected_index + 1}/{len(files)}]"
        stats = f" +{entry.additions}/-{entry.deletions}"
        indicator = VISUAL_INDICATOR if self.view is not None and self.view.is_visual_mode else ""

        left = f"{file_counter} {self.theme.fg('accent', entry.path)}{self.theme.fg('muted', stats)}"
        left_plain_width = len(f"{file_counter} {entry.path}{stats}")
        gap = max(1, inner_width - left_plain_width - len(indicator))
        content = [
            left + " " * gap + self.theme.fg("accent", indicator),
            self.theme.fg("border", "─" * inner_width),
        ]

        if self.view is not None:
            available = max(MIN_DIFF_ROWS, height - DIFF_CHROME_ROWS)
            content.extend(self.view.render(inner_width, available))
            total = self.view.total_rows
            if total > available:
                percent = int((self.view.scroll_offset + available) / total * 100 + 0.5)
                content.append(self.theme.fg("dim", f"── {min(percent, 100)}% ──"))
        return content

    # Input

    def handle_input(self, data: str) -> None:
        if self.session.is_picker_open:
            self._handle_picker_input(data)
            return

        keys = self.keys
        if keys.matches_key(data, keys.escape):
            self.done()
            return

        if data == "n":
            self.session.select_next()
            self._build_view()
            self.tui.request_render()
            return
        if data == "p":
            self.session.select_previous()
            self._build_view()
            self.tui.request_render()
            return

        if keys.matches_key(data, keys.up) or data == "k":
            self._scroll(-LINE_SCROLL)
            return
        if keys.matches_key(data, keys.down) or data == "j":
            self._scroll(LINE_SCROLL)
            return
        if keys.matches_key(data, keys.ctrl("u")):
            self._scroll(-PAGE_SCROLL)
            return
        if keys.matches_key(data, keys.ctrl("d")):
            self._scroll(PAGE_SCROLL)
            return

        if data == "g" or data == "G":
            if self.view is not None:
                if data == "g":
                    self.view.scroll_to_top()
                else:
                    self.view.scroll_to_bottom()
            self.tui.request_render()
            return

        if keys.matches_key(data, keys.tab):
            self.session.open_picker()
            self.tui.request_render()
            return

        if data == "V":
            if self.view is not None:
                if self.view.is_visual_mode:
                    self.view.exit_visual_mode()
                else:
                    self.view.enter_visual_mode()
                self.tui.request_render()
            return

        if data == "d":
            self._dismiss_selected()
            return

        if data == "y":
            self._yank()

    def _handle_picker_input(self, data: str) -> None:
        keys = self.keys
        if keys.matches_key(data, keys.escape):
            self.session.close_picker()
        elif keys.matches_key(data, keys.up) or data == "k":
            self.session.picker_previous()
        elif keys.matches_key(data, keys.down) or data == "j":
            self.session.picker_next()
        elif keys.matches_key(data, keys.enter):
            self.session.confirm_picker_selection()
            self._build_view()
        else:
            return
        self.tui.request_render()

    def _scroll(self, delta: int) -> None:
        if self.view is not None:
            self.view.scroll_and_move(delta)
        self.tui.request_render()

    def _dismiss_selected(self) -> None:
        dismissed_path = self.session.selected_path
        self.session.dismiss_selected()
        logger.debug("dismissed %s from review overlay", dismissed_path)
        if self.callbacks.on_dismiss is not None:
            self.callbacks.on_dismiss()
        self._build_view()
        self.tui.request_render()
        if not self.session.files:
            self.done()

    def _paste(self, text: str) -> None:
        if self.callbacks.on_paste_to_editor is not None:
            self.callbacks.on_paste_to_editor(text)

    def _yank(self) -> None:
        view = self.view
        if view is None:
            return
        path = self.session.selected_path or ""

        if view.is_visual_mode:
            records = view.selected_line_records()
            numbers = [n for n in (record.anchor_line_number for record in records) if n is not None]
            if not numbers:
                return
            self._paste(format_fenced_snippet(path, min(numbers), max(numbers), [r.text for r in records]))
            view.exit_visual_mode()
            self.done()
            return

        record = view.cursor_line_record()
        if record is None or record.anchor_line_number is None:
            return
        self._paste(format_line_reference(path, record.anchor_line_number))
        self.done()

    def invalidate(self) -> None:
        """Drop cached render state; rows are rebuilt on every render."""


__all__ = [
    "DEFAULT_TITLE",
    "HELP_TEXT",
    "ReviewOverlay",
    "format_fenced_snippet",
    "format_line_reference",
]
