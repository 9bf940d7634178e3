"""Presentation shells: review overlay, list picker, and pending widget."""

from __future__ import annotations

from .host import OverlayCallbacks, OverlayKeyUtils, OverlayTheme, OverlayTui, StaticTui
from .picker import ListPicker, PickerCallbacks, PickerItem
from .review import ReviewOverlay, format_fenced_snippet, format_line_reference
from .widget import pending_summary_lines

__all__ = [
    "ListPicker",
    "OverlayCallbacks",
    "OverlayKeyUtils",
    "OverlayTheme",
    "OverlayTui",
    "PickerCallbacks",
    "PickerItem",
    "ReviewOverlay",
    "StaticTui",
    "format_fenced_snippet",
    "format_line_reference",
    "pending_summary_lines",
]
