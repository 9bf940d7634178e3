"""Generic list-picker overlay over caller-supplied items.

Independent of the diff domain: the host passes items and callbacks, the
picker owns cursor and scroll state and reports selection, cancellation, and
optional per-item dismissal back through the callbacks.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..ansi import visible_width
from .chrome import Frame, target_height
from .host import OverlayKeyUtils, OverlayTheme, OverlayTui

DEFAULT_PICKER_TITLE = "Select"
# top border, title, blank, help row, bottom border
_PICKER_CHROME_ROWS = 5


@dataclass(frozen=True)
class PickerItem:
    """One selectable entry; ``meta`` is right-aligned (e.g. ``3 files, +45/-12``)."""

    id: str
    label: str
    description: str | None = None
    meta: str | None = None


@dataclass(frozen=True)
class PickerCallbacks:
    """Selection hooks; ``on_dismiss`` returns whether the item was removed."""

    on_select: Callable[[PickerItem], None]
    on_cancel: Callable[[], None]
    on_dismiss: Callable[[PickerItem], bool] | None = None


class ListPicker:
    """Render/input handler for a scrollable selection list."""

    def __init__(
        self,
        items: Iterable[PickerItem],
        tui: OverlayTui,
        theme: OverlayTheme,
        keys: OverlayKeyUtils,
        callbacks: PickerCallbacks,
        *,
        title: str = DEFAULT_PICKER_TITLE,
    ) -> None:
        self._items = list(items)
        self.tui = tui
        self.theme = theme
        self.keys = keys
        self.callbacks = callbacks
        self.title = title
        self.cursor_index = 0
        self.scroll_offset = 0

    @property
    def items(self) -> tuple[PickerItem, ...]:
        return tuple(self._items)

    def _window_size(self, height: int) -> int:
        rows_per_item = 2 if any(item.description for item in self._items) else 1
        return max(1, (height - _PICKER_CHROME_ROWS) // rows_per_item)

    def _scroll_to_cursor(self, window: int) -> None:
        if self.cursor_index < self.scroll_offset:
            self.scroll_offset = self.cursor_index
        elif self.cursor_index >= self.scroll_offset + window:
            self.scroll_offset = self.cursor_index - window + 1
        self.scroll_offset = max(0, min(self.scroll_offset, max(0, len(self._items) - window)))

    def _item_lines(self, item: PickerItem, selected: bool, inner_width: int) -> list[str]:
        cursor_and_label = f"{'>' if selected else ' '} {item.label}"
        label_part = self.theme.bold(cursor_and_label) if selected else cursor_and_label
        if item.meta:
            padding = max(1, inner_width - visible_width(label_part) - visible_width(item.meta))
            line = label_part + " " * padding + item.meta
        else:
            line = label_part
        lines = [line]
        if item.description:
            lines.append(f"  {self.theme.fg('dim', item.description)}")
        return lines

    def render(self, width: int) -> list[str]:
        height = target_height(self.tui)
        frame = Frame(width, self.theme, self.keys, title_role="title")
        content = [self.theme.fg("title", self.theme.bold(self.title)), ""]

        if not self._items:
            content.append(self.theme.fg("muted", "No items"))
        else:
            window = self._window_size(height)
            self._scroll_to_cursor(window)
            end = min(self.scroll_offset + window, len(self._items))
            for index in range(self.scroll_offset, end):
                selected = index == self.cursor_index
                content.extend(self._item_lines(self._items[index], selected, frame.inner_width))

        output = [frame.top_border(self.title)]
        output.extend(frame.pad_line(line) for line in content[: max(0, height - 3)])
        while len(output) < height - 2:
            output.append(frame.empty_line())

        if self._items:
            dismiss_hint = "  d dismiss" if self.callbacks.on_dismiss is not None else ""
            output.append(frame.pad_line(self.theme.fg("dim", f"↑↓ navigate  Enter select{dismiss_hint}  Esc close")))
        else:
            output.append(frame.empty_line())
        output.append(frame.bottom_border())
        return output

    def _is_cancel(self, data: str) -> bool:
        return data == "q" or self.keys.matches_key(data, self.keys.escape)

    def handle_input(self, data: str) -> bool:
        """Apply one input token; return whether the picker consumed it."""
        keys = self.keys
        if not self._items:
            if self._is_cancel(data):
                self.callbacks.on_cancel()
                return True
            return False

        if data == "j" or keys.matches_key(data, keys.down):
            if self.cursor_index < len(self._items) - 1:
                self.cursor_index += 1
            self.tui.request_render()
            return True

        if data == "k" or keys.matches_key(data, keys.up):
            if self.cursor_index > 0:
                self.cursor_index -= 1
            self.tui.request_render()
            return True

        if keys.matches_key(data, keys.enter):
            self.callbacks.on_select(self._items[self.cursor_index])
            return True

        if data == "d" and self.callbacks.on_dismiss is not None:
            if self.callbacks.on_dismiss(self._items[self.cursor_index]):
                del self._items[self.cursor_index]
                if not self._items:
                    self.callbacks.on_cancel()
                    return True
                self.cursor_index = min(self.cursor_index, len(self._items) - 1)
                self.tui.request_render()
            return True

        if self._is_cancel(data):
            self.callbacks.on_cancel()
            return True

        return False

    def invalidate(self) -> None:
        """Drop cached render state; rows are rebuilt on every render."""


__all__ = [
    "DEFAULT_PICKER_TITLE",
    "ListPicker",
    "PickerCallbacks",
    "PickerItem",
]
